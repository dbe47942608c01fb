"""
approxium.core.contract
=======================

The capability contract shared by everything that can be compared
approximately.

Two shapes of the same six operations exist:

- `ApproxEq` is a protocol for user types. The operations are methods on the
  left-hand operand, and the defaults are classmethods.
- `ApproxEqImpl` is a base class for implementations that live outside the
  compared type (Python floats, numpy scalars, sequences, ...). The operations
  take both operands explicitly.

`ForwardingApproxEq` bridges the two: it is the implementation the registry
hands out whenever an operand is an `ApproxEq`, and it forwards every query
to that operand.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Optional, Protocol, runtime_checkable


@runtime_checkable
class ApproxEq(Protocol):
    """Equality comparisons based on floating-point tolerances.

    Subclass this explicitly and implement the defaults and the two ``*_eq``
    predicates. A composite type typically forwards the tolerances unchanged
    to each of its floating-point fields and combines the results with
    ``and``::

        class Complex(ApproxEq):
            def __init__(self, x: float, i: float) -> None:
                self.x, self.i = x, i

            @classmethod
            def default_epsilon(cls) -> float:
                return FLOAT64.default_epsilon()

            @classmethod
            def default_max_relative(cls) -> float:
                return FLOAT64.default_max_relative()

            @classmethod
            def default_max_ulps(cls) -> int:
                return FLOAT64.default_max_ulps()

            def relative_eq(self, other, epsilon, max_relative) -> bool:
                return (FLOAT64.relative_eq(self.x, other.x, epsilon, max_relative)
                        and FLOAT64.relative_eq(self.i, other.i, epsilon, max_relative))

            def ulps_eq(self, other, epsilon, max_ulps) -> bool:
                return (FLOAT64.ulps_eq(self.x, other.x, epsilon, max_ulps)
                        and FLOAT64.ulps_eq(self.i, other.i, epsilon, max_ulps))
    """

    # The tolerance to use when testing values that are close together.
    @classmethod
    def default_epsilon(cls) -> Any: ...

    # The relative tolerance for testing values that are far apart.
    @classmethod
    def default_max_relative(cls) -> Any: ...

    # The ULPs to tolerate when testing values that are far apart.
    @classmethod
    def default_max_ulps(cls) -> int: ...

    def relative_eq(self, other: Any, epsilon: Any, max_relative: Any) -> bool: ...

    def relative_ne(self, other: Any, epsilon: Any, max_relative: Any) -> bool:
        """The inverse of `relative_eq`."""
        return not self.relative_eq(other, epsilon, max_relative)

    def ulps_eq(self, other: Any, epsilon: Any, max_ulps: int) -> bool: ...

    def ulps_ne(self, other: Any, epsilon: Any, max_ulps: int) -> bool:
        """The inverse of `ulps_eq`."""
        return not self.ulps_eq(other, epsilon, max_ulps)


class ApproxEqImpl(ABC):
    """Approximate equality for a type that cannot implement `ApproxEq` itself."""

    name: str = "approx"

    @abstractmethod
    def default_epsilon(self) -> Any: ...

    @abstractmethod
    def default_max_relative(self) -> Any: ...

    @abstractmethod
    def default_max_ulps(self) -> int: ...

    @abstractmethod
    def relative_eq(self, lhs: Any, rhs: Any, epsilon: Any, max_relative: Any) -> bool:
        """A test for equality that uses a relative comparison if the values are far apart."""

    def relative_ne(self, lhs: Any, rhs: Any, epsilon: Any, max_relative: Any) -> bool:
        return not self.relative_eq(lhs, rhs, epsilon, max_relative)

    @abstractmethod
    def ulps_eq(self, lhs: Any, rhs: Any, epsilon: Any, max_ulps: int) -> bool:
        """A test for equality that uses units in the last place if the values are far apart."""

    def ulps_ne(self, lhs: Any, rhs: Any, epsilon: Any, max_ulps: int) -> bool:
        return not self.ulps_eq(lhs, rhs, epsilon, max_ulps)

    def defaults_source(self, lhs: Any, rhs: Any) -> Any:
        """Object whose ``default_*`` callables apply to this pair of operands."""
        return self

    def abs_diff(self, lhs: Any, rhs: Any) -> Optional[Any]:
        """Magnitude of ``lhs - rhs`` for diagnostics, or None if there is no such scalar."""
        return None

    def ulps_distance(self, lhs: Any, rhs: Any) -> Optional[int]:
        """ULP distance for diagnostics, or None where it is not defined."""
        return None

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.name}>"


class ForwardingApproxEq(ApproxEqImpl):
    """Delegate every query to whichever operand implements `ApproxEq`.

    Adds no numeric logic. If only the right-hand operand is an `ApproxEq`,
    the call is made on it with the operands swapped; the predicates are
    symmetric so the answer is the same.
    """

    name = "forwarding"

    def defaults_source(self, lhs: Any, rhs: Any) -> Any:
        return type(lhs) if isinstance(lhs, ApproxEq) else type(rhs)

    @staticmethod
    def _receiver(lhs: Any, rhs: Any) -> tuple[Any, Any]:
        if isinstance(lhs, ApproxEq):
            return lhs, rhs
        return rhs, lhs

    # Defaults need a type; see `defaults_source`. Without operands there is
    # nothing to forward to.
    def default_epsilon(self) -> Any:
        raise TypeError("forwarding defaults require an ApproxEq operand")

    def default_max_relative(self) -> Any:
        raise TypeError("forwarding defaults require an ApproxEq operand")

    def default_max_ulps(self) -> int:
        raise TypeError("forwarding defaults require an ApproxEq operand")

    def relative_eq(self, lhs: Any, rhs: Any, epsilon: Any, max_relative: Any) -> bool:
        receiver, other = self._receiver(lhs, rhs)
        return bool(receiver.relative_eq(other, epsilon, max_relative))

    def relative_ne(self, lhs: Any, rhs: Any, epsilon: Any, max_relative: Any) -> bool:
        receiver, other = self._receiver(lhs, rhs)
        return bool(receiver.relative_ne(other, epsilon, max_relative))

    def ulps_eq(self, lhs: Any, rhs: Any, epsilon: Any, max_ulps: int) -> bool:
        receiver, other = self._receiver(lhs, rhs)
        return bool(receiver.ulps_eq(other, epsilon, max_ulps))

    def ulps_ne(self, lhs: Any, rhs: Any, epsilon: Any, max_ulps: int) -> bool:
        receiver, other = self._receiver(lhs, rhs)
        return bool(receiver.ulps_ne(other, epsilon, max_ulps))


FORWARDING = ForwardingApproxEq()


__all__ = ["ApproxEq", "ApproxEqImpl", "ForwardingApproxEq", "FORWARDING"]
