"""
approxium.core.composites
=========================

Ready-made implementations for values built out of floating-point leaves:
complex numbers, tuples/lists and numpy arrays.

Each one follows the same rule a hand-written `ApproxEq` composite would:
the tolerances are passed unchanged to every leaf comparison and the results
are combined with ``and``.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any, Iterator, Optional, Tuple

import numpy as np

from approxium.core.contract import ApproxEqImpl
from approxium.core.floats import FLOAT32, FLOAT64, FloatApproxEq
from approxium.exceptions import UnsupportedTypeError


class ComplexApproxEq(ApproxEqImpl):
    """Compare the real and imaginary parts with the leaf float width."""

    def __init__(self, name: str, leaf: FloatApproxEq) -> None:
        self.name = name
        self.leaf = leaf

    def default_epsilon(self) -> Any:
        return self.leaf.default_epsilon()

    def default_max_relative(self) -> Any:
        return self.leaf.default_max_relative()

    def default_max_ulps(self) -> int:
        return self.leaf.default_max_ulps()

    def relative_eq(self, lhs: Any, rhs: Any, epsilon: Any, max_relative: Any) -> bool:
        return (
            self.leaf.relative_eq(lhs.real, rhs.real, epsilon, max_relative)
            and self.leaf.relative_eq(lhs.imag, rhs.imag, epsilon, max_relative)
        )

    def ulps_eq(self, lhs: Any, rhs: Any, epsilon: Any, max_ulps: int) -> bool:
        return (
            self.leaf.ulps_eq(lhs.real, rhs.real, epsilon, max_ulps)
            and self.leaf.ulps_eq(lhs.imag, rhs.imag, epsilon, max_ulps)
        )

    def abs_diff(self, lhs: Any, rhs: Any) -> Optional[Any]:
        with np.errstate(over="ignore", invalid="ignore"):
            return abs(complex(lhs) - complex(rhs))


def _largest(diffs: Iterator[Optional[Any]]) -> Optional[Any]:
    """Largest of the element differences; NaN wins, None if any is undefined."""
    largest: Optional[Any] = None
    for d in diffs:
        if d is None:
            return None
        if d != d:  # NaN
            return d
        if largest is None or d > largest:
            largest = d
    return largest


class SequenceApproxEq(ApproxEqImpl):
    """Element-wise comparison of tuples and lists of equal length."""

    name = "sequence"

    @staticmethod
    def _check(value: Any) -> Sequence:
        if not isinstance(value, Sequence) or isinstance(value, (str, bytes)):
            raise UnsupportedTypeError(
                f"Cannot compare a sequence with type {type(value).__name__}"
            )
        return value

    def _pairs(self, lhs: Any, rhs: Any) -> Optional[Iterator[Tuple[ApproxEqImpl, Any, Any]]]:
        from approxium.core.registry import DEFAULT_REGISTRY

        left, right = self._check(lhs), self._check(rhs)
        if len(left) != len(right):
            return None
        return ((DEFAULT_REGISTRY.resolve(a, b), a, b) for a, b in zip(left, right))

    def defaults_source(self, lhs: Any, rhs: Any) -> Any:
        from approxium.core.registry import DEFAULT_REGISTRY

        left, right = self._check(lhs), self._check(rhs)
        if not left or not right:
            return FLOAT64
        impl = DEFAULT_REGISTRY.resolve(left[0], right[0])
        return impl.defaults_source(left[0], right[0])

    # Without operands the leaf type is unknown; sequences of Python floats are the common case.
    def default_epsilon(self) -> Any:
        return FLOAT64.default_epsilon()

    def default_max_relative(self) -> Any:
        return FLOAT64.default_max_relative()

    def default_max_ulps(self) -> int:
        return FLOAT64.default_max_ulps()

    def relative_eq(self, lhs: Any, rhs: Any, epsilon: Any, max_relative: Any) -> bool:
        pairs = self._pairs(lhs, rhs)
        if pairs is None:
            return False
        return all(impl.relative_eq(a, b, epsilon, max_relative) for impl, a, b in pairs)

    def ulps_eq(self, lhs: Any, rhs: Any, epsilon: Any, max_ulps: int) -> bool:
        pairs = self._pairs(lhs, rhs)
        if pairs is None:
            return False
        return all(impl.ulps_eq(a, b, epsilon, max_ulps) for impl, a, b in pairs)

    def abs_diff(self, lhs: Any, rhs: Any) -> Optional[Any]:
        pairs = self._pairs(lhs, rhs)
        if pairs is None:
            return None
        return _largest(impl.abs_diff(a, b) for impl, a, b in pairs)

    def ulps_distance(self, lhs: Any, rhs: Any) -> Optional[int]:
        pairs = self._pairs(lhs, rhs)
        if pairs is None:
            return None
        return _largest(impl.ulps_distance(a, b) for impl, a, b in pairs)


class ArrayApproxEq(SequenceApproxEq):
    """Element-wise comparison of numpy arrays with identical shapes."""

    name = "ndarray"

    @staticmethod
    def _check(value: Any) -> np.ndarray:
        return np.asarray(value)

    def _pairs(self, lhs: Any, rhs: Any) -> Optional[Iterator[Tuple[ApproxEqImpl, Any, Any]]]:
        from approxium.core.registry import DEFAULT_REGISTRY

        left, right = self._check(lhs), self._check(rhs)
        if left.shape != right.shape:
            return None
        return (
            (DEFAULT_REGISTRY.resolve(a, b), a, b)
            for a, b in zip(left.ravel(), right.ravel())
        )

    def defaults_source(self, lhs: Any, rhs: Any) -> Any:
        from approxium.core.registry import DEFAULT_REGISTRY

        left, right = self._check(lhs), self._check(rhs)
        dtype = np.result_type(left.dtype, right.dtype)
        return DEFAULT_REGISTRY.for_type(dtype.type).defaults_source(lhs, rhs)


COMPLEX64 = ComplexApproxEq("complex64", FLOAT32)
COMPLEX128 = ComplexApproxEq("complex128", FLOAT64)
SEQUENCE = SequenceApproxEq()
ARRAY = ArrayApproxEq()


__all__ = [
    "ComplexApproxEq",
    "SequenceApproxEq",
    "ArrayApproxEq",
    "COMPLEX64",
    "COMPLEX128",
    "SEQUENCE",
    "ARRAY",
]
