"""
approxium.core.registry
=======================

Maps Python types to the `ApproxEqImpl` that compares them, and decides which
implementation applies to a pair of operands.

- Thread-safe: registration and lookup share one re-entrant lock.
- Lookup follows the MRO, so subclasses of a registered type are covered.
- Operands implementing `ApproxEq` never need registering; they are always
  handled by forwarding to their own methods.
- Mixed float widths follow numpy's promotion: a plain Python scalar adopts
  the width of the other operand, two numpy widths promote to the wider one.
"""

from __future__ import annotations

import logging
import threading
from typing import Any, Dict, Mapping, Optional

import numpy as np

from approxium.core.composites import ARRAY, COMPLEX64, COMPLEX128, SEQUENCE, ComplexApproxEq
from approxium.core.contract import FORWARDING, ApproxEq, ApproxEqImpl
from approxium.core.floats import FLOAT32, FLOAT64, FloatApproxEq
from approxium.exceptions import UnsupportedTypeError

logger = logging.getLogger(__name__)

# Python scalars carry no width of their own.
_PYTHON_SCALARS = (bool, int, float, complex)


def _leaf_bits(impl: ApproxEqImpl) -> Optional[int]:
    if isinstance(impl, ComplexApproxEq):
        return impl.leaf.bits
    if isinstance(impl, FloatApproxEq):
        return impl.bits
    return None


class ApproxRegistry:
    """Thread-safe registry of approximate-equality implementations keyed by type."""

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._impls: Dict[type, ApproxEqImpl] = {}

    def __contains__(self, kind: type) -> bool:
        try:
            self.lookup(kind)
            return True
        except UnsupportedTypeError:
            return False

    # -------------------------- public API ---------------------------------
    def register(self, kind: type, impl: ApproxEqImpl, replace: bool = False) -> None:
        """Register ``impl`` for ``kind`` (and, through the MRO, its subclasses).

        Raises `ValueError` if ``kind`` already has an implementation, unless
        ``replace`` is True.
        """
        if not isinstance(kind, type):
            raise TypeError(f"Expected a type, got {kind!r}")
        if not isinstance(impl, ApproxEqImpl):
            raise TypeError(f"Expected an ApproxEqImpl, got {type(impl).__name__}")

        with self._lock:
            if not replace and kind in self._impls:
                raise ValueError(
                    f"Cannot register {kind.__name__}: "
                    f"already handled by {self._impls[kind]!r}."
                )
            self._impls[kind] = impl
        logger.debug("registered %r for %s", impl, kind.__name__)

    def unregister(self, kind: type) -> None:
        with self._lock:
            if self._impls.pop(kind, None) is None:
                raise KeyError(kind)

    def lookup(self, kind: type) -> ApproxEqImpl:
        """Return the implementation for ``kind``, walking its MRO.

        Raises `UnsupportedTypeError` if no base class is registered.
        """
        with self._lock:
            for klass in kind.__mro__:
                impl = self._impls.get(klass)
                if impl is not None:
                    return impl
        raise UnsupportedTypeError(
            f"No approximate equality is defined for type {kind.__name__}"
        )

    def for_type(self, kind: type) -> Any:
        """Return an object whose ``default_*`` callables give ``kind``'s defaults."""
        if isinstance(kind, type) and issubclass(kind, ApproxEq):
            return kind
        return self.lookup(kind)

    def resolve(self, lhs: Any, rhs: Any) -> ApproxEqImpl:
        """Pick the implementation that compares ``lhs`` with ``rhs``."""
        if isinstance(lhs, ApproxEq) or isinstance(rhs, ApproxEq):
            return FORWARDING

        left = self.lookup(type(lhs))
        right = self.lookup(type(rhs))
        if left is right:
            return left

        lhs_weak = type(lhs) in _PYTHON_SCALARS
        rhs_weak = type(rhs) in _PYTHON_SCALARS

        if isinstance(left, FloatApproxEq) and isinstance(right, FloatApproxEq):
            if rhs_weak:
                return left
            if lhs_weak:
                return right
            return left if left.bits >= right.bits else right

        if rhs_weak or lhs_weak:
            weak, other = (rhs, left) if rhs_weak else (lhs, right)
            # a Python complex meeting a real width takes the complex type of that width
            if isinstance(weak, complex) and isinstance(other, FloatApproxEq):
                return COMPLEX128 if other.bits > FLOAT32.bits else COMPLEX64
            return other

        # numpy real and complex scalars meet at the complex type of the wider width
        if isinstance(left, ComplexApproxEq) or isinstance(right, ComplexApproxEq):
            bits = (_leaf_bits(left), _leaf_bits(right))
            if None not in bits:
                return COMPLEX128 if max(bits) > FLOAT32.bits else COMPLEX64

        if left is ARRAY or right is ARRAY:
            return ARRAY

        raise UnsupportedTypeError(
            f"Cannot compare {type(lhs).__name__} with {type(rhs).__name__}"
        )

    def all(self) -> Mapping[type, ApproxEqImpl]:
        with self._lock:
            return dict(self._impls)


def _bootstrap_default_registry() -> ApproxRegistry:
    reg = ApproxRegistry()

    # 64-bit: Python floats/ints and their numpy counterparts
    reg.register(float, FLOAT64)
    reg.register(int, FLOAT64)
    reg.register(np.float64, FLOAT64)
    reg.register(np.integer, FLOAT64)
    reg.register(np.bool_, FLOAT64)

    # 32-bit
    reg.register(np.float32, FLOAT32)

    reg.register(complex, COMPLEX128)
    reg.register(np.complex128, COMPLEX128)
    reg.register(np.complex64, COMPLEX64)

    reg.register(tuple, SEQUENCE)
    reg.register(list, SEQUENCE)
    reg.register(np.ndarray, ARRAY)

    return reg


# Public, shared default registry
DEFAULT_REGISTRY: ApproxRegistry = _bootstrap_default_registry()


def register(kind: type, impl: ApproxEqImpl, replace: bool = False) -> None:
    """Register ``impl`` for ``kind`` on the default registry."""
    DEFAULT_REGISTRY.register(kind, impl, replace=replace)


__all__ = [
    "ApproxRegistry",
    "DEFAULT_REGISTRY",
    "register",
]
