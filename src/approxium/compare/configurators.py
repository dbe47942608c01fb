"""
approxium.compare.configurators
===============================

`Relative` and `Ulps` hold the tolerances for one comparison strategy.

They are immutable value objects: every builder call returns a new
configurator with one field replaced, so calls chain in any order::

    Relative.default().eq(1.0, 1.0)
    Relative.default().epsilon(1e-12).max_relative(1e-9).eq(x, y)
    Ulps.default().max_ulps(8).epsilon(0.0).ne(x, y)

A field left as ``None`` is filled in from the operand type's defaults when
the comparison runs. ``Relative.default(np.float32)`` fills them in eagerly
from a given type instead.
"""

from __future__ import annotations

from numbers import Integral
from typing import Any, Optional, Tuple

from approxium.core.registry import DEFAULT_REGISTRY
from approxium.exceptions import ToleranceError

_U32_MAX = 2**32 - 1


def _check_max_ulps(max_ulps: Any) -> Optional[int]:
    if max_ulps is None:
        return None
    if isinstance(max_ulps, bool) or not isinstance(max_ulps, Integral):
        raise ToleranceError(f"max_ulps must be an integer, got {type(max_ulps).__name__}")
    if not 0 <= max_ulps <= _U32_MAX:
        raise ToleranceError(f"max_ulps must be within [0, {_U32_MAX}], got {max_ulps}")
    return int(max_ulps)


class Relative:
    """Parameters for a relative-difference comparison."""

    __slots__ = ("_epsilon", "_max_relative")

    def __init__(self, epsilon: Any = None, max_relative: Any = None) -> None:
        self._epsilon = epsilon
        self._max_relative = max_relative

    @classmethod
    def default(cls, kind: Optional[type] = None) -> Relative:
        """Configurator with both tolerances taken from ``kind``'s defaults.

        Without ``kind`` the defaults are taken from the operands at comparison time.
        """
        if kind is None:
            return cls()
        source = DEFAULT_REGISTRY.for_type(kind)
        return cls(source.default_epsilon(), source.default_max_relative())

    # --- builder ---
    def epsilon(self, epsilon: Any) -> Relative:
        """Replace the epsilon value with the one specified."""
        return Relative(epsilon, self._max_relative)

    def max_relative(self, max_relative: Any) -> Relative:
        """Replace the maximum relative value with the one specified."""
        return Relative(self._epsilon, max_relative)

    # --- terminal ---
    def tolerances(self, lhs: Any, rhs: Any) -> Tuple[Any, Any]:
        """Return ``(epsilon, max_relative)`` with unset fields filled in for these operands."""
        epsilon, max_relative = self._epsilon, self._max_relative
        if epsilon is None or max_relative is None:
            source = DEFAULT_REGISTRY.resolve(lhs, rhs).defaults_source(lhs, rhs)
            if epsilon is None:
                epsilon = source.default_epsilon()
            if max_relative is None:
                max_relative = source.default_max_relative()
        return epsilon, max_relative

    def eq(self, lhs: Any, rhs: Any) -> bool:
        """Perform the equality comparison."""
        epsilon, max_relative = self.tolerances(lhs, rhs)
        return DEFAULT_REGISTRY.resolve(lhs, rhs).relative_eq(lhs, rhs, epsilon, max_relative)

    def ne(self, lhs: Any, rhs: Any) -> bool:
        """Perform the inequality comparison."""
        epsilon, max_relative = self.tolerances(lhs, rhs)
        return DEFAULT_REGISTRY.resolve(lhs, rhs).relative_ne(lhs, rhs, epsilon, max_relative)

    # --- value object ---
    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Relative):
            return NotImplemented
        return (self._epsilon, self._max_relative) == (other._epsilon, other._max_relative)

    def __hash__(self) -> int:
        return hash((Relative, self._epsilon, self._max_relative))

    def __repr__(self) -> str:
        return f"Relative(epsilon={self._epsilon!r}, max_relative={self._max_relative!r})"


class Ulps:
    """Parameters for a units-in-the-last-place comparison."""

    __slots__ = ("_epsilon", "_max_ulps")

    def __init__(self, epsilon: Any = None, max_ulps: Optional[int] = None) -> None:
        self._epsilon = epsilon
        self._max_ulps = _check_max_ulps(max_ulps)

    @classmethod
    def default(cls, kind: Optional[type] = None) -> Ulps:
        """Configurator with both tolerances taken from ``kind``'s defaults.

        Without ``kind`` the defaults are taken from the operands at comparison time.
        """
        if kind is None:
            return cls()
        source = DEFAULT_REGISTRY.for_type(kind)
        return cls(source.default_epsilon(), source.default_max_ulps())

    def epsilon(self, epsilon: Any) -> Ulps:
        """Replace the epsilon value with the one specified."""
        return Ulps(epsilon, self._max_ulps)

    def max_ulps(self, max_ulps: int) -> Ulps:
        """Replace the max ulps value with the one specified."""
        return Ulps(self._epsilon, max_ulps)

    def tolerances(self, lhs: Any, rhs: Any) -> Tuple[Any, int]:
        """Return ``(epsilon, max_ulps)`` with unset fields filled in for these operands."""
        epsilon, max_ulps = self._epsilon, self._max_ulps
        if epsilon is None or max_ulps is None:
            source = DEFAULT_REGISTRY.resolve(lhs, rhs).defaults_source(lhs, rhs)
            if epsilon is None:
                epsilon = source.default_epsilon()
            if max_ulps is None:
                max_ulps = source.default_max_ulps()
        return epsilon, max_ulps

    def eq(self, lhs: Any, rhs: Any) -> bool:
        """Perform the equality comparison."""
        epsilon, max_ulps = self.tolerances(lhs, rhs)
        return DEFAULT_REGISTRY.resolve(lhs, rhs).ulps_eq(lhs, rhs, epsilon, max_ulps)

    def ne(self, lhs: Any, rhs: Any) -> bool:
        """Perform the inequality comparison."""
        epsilon, max_ulps = self.tolerances(lhs, rhs)
        return DEFAULT_REGISTRY.resolve(lhs, rhs).ulps_ne(lhs, rhs, epsilon, max_ulps)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Ulps):
            return NotImplemented
        return (self._epsilon, self._max_ulps) == (other._epsilon, other._max_ulps)

    def __hash__(self) -> int:
        return hash((Ulps, self._epsilon, self._max_ulps))

    def __repr__(self) -> str:
        return f"Ulps(epsilon={self._epsilon!r}, max_ulps={self._max_ulps!r})"


__all__ = ["Relative", "Ulps"]
