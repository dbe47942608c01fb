"""
approxium.core.floats
=====================

Approximate equality for the two IEEE-754 binary widths.

`FLOAT32` works on ``numpy.float32`` and `FLOAT64` on ``float`` /
``numpy.float64``. Operands and tolerances are first coerced to the width, so
differences and products round the way they would in that width.

Implementation based on: Comparing Floating Point Numbers, 2012 Edition
(https://randomascii.wordpress.com/2012/02/25/comparing-floating-point-numbers-2012-edition/)
"""

from __future__ import annotations

from typing import Any, Optional, Type

import numpy as np

from approxium.core.contract import ApproxEqImpl

DEFAULT_MAX_ULPS = 4


class FloatApproxEq(ApproxEqImpl):
    """Relative and ULPs comparisons for one binary floating-point width."""

    def __init__(self, name: str, float_type: Type[np.floating], int_type: Type[np.signedinteger]) -> None:
        info = np.finfo(float_type)
        if np.dtype(int_type).itemsize != np.dtype(float_type).itemsize:
            raise ValueError(f"{int_type.__name__} does not match the width of {float_type.__name__}")
        self.name = name
        self.float_type = float_type
        self.int_type = int_type
        self.uint_type = np.dtype(f"u{np.dtype(float_type).itemsize}").type
        self.bits: int = info.bits
        # distance from 1.0 to the next representable value
        self.epsilon = float_type(info.eps)
        self._mask = (1 << self.bits) - 1

    # ------------------------------------------------------------------ defaults
    def default_epsilon(self) -> Any:
        return self.epsilon

    def default_max_relative(self) -> Any:
        return self.epsilon

    def default_max_ulps(self) -> int:
        return DEFAULT_MAX_ULPS

    # ------------------------------------------------------------------ bits
    def coerce(self, x: Any) -> Any:
        """Return ``x`` as a scalar of this width; out-of-range values become infinities."""
        try:
            with np.errstate(over="ignore"):
                return self.float_type(x)
        except OverflowError:
            # Python ints beyond the float range
            return self.float_type(np.inf if x > 0 else -np.inf)

    def to_bits(self, x: Any) -> int:
        """Reinterpret the storage of ``x`` as a signed integer of the same width."""
        return int(np.array([x], dtype=self.float_type).view(self.int_type)[0])

    def from_bits(self, bits: int) -> Any:
        """Build a float from a bit pattern; signed and unsigned patterns are both accepted."""
        return np.array([bits & self._mask], dtype=self.uint_type).view(self.float_type)[0]

    def next_up(self, x: Any) -> Any:
        return np.nextafter(self.coerce(x), self.float_type(np.inf))

    def next_down(self, x: Any) -> Any:
        return np.nextafter(self.coerce(x), self.float_type(-np.inf))

    # ------------------------------------------------------------------ predicates
    def relative_eq(self, lhs: Any, rhs: Any, epsilon: Any, max_relative: Any) -> bool:
        a, b = self.coerce(lhs), self.coerce(rhs)
        epsilon, max_relative = self.coerce(epsilon), self.coerce(max_relative)

        with np.errstate(over="ignore", invalid="ignore"):
            # Handle same infinities
            if a == b:
                return True

            abs_diff = abs(a - b)

            # For when the numbers are really close together
            if abs_diff <= epsilon:
                return True

            abs_a = abs(a)
            abs_b = abs(b)

            # Handle opposite infinities
            if abs_a == abs_b and abs_diff == abs_a:
                return False

            largest = abs_b if abs_b > abs_a else abs_a

            # Use a relative difference comparison
            return bool(abs_diff <= largest * max_relative)

    def ulps_eq(self, lhs: Any, rhs: Any, epsilon: Any, max_ulps: int) -> bool:
        a, b = self.coerce(lhs), self.coerce(rhs)
        epsilon = self.coerce(epsilon)

        # NaN has a sign bit and a bit pattern, but is never equal to anything
        if np.isnan(a) or np.isnan(b):
            return False

        # Same infinities (and ±0.0) regardless of the budget
        if a == b:
            return True

        with np.errstate(over="ignore", invalid="ignore"):
            if abs(a - b) <= epsilon:
                return True

        # Trivial negative sign check
        if np.signbit(a) != np.signbit(b):
            return False

        return abs(self.to_bits(a) - self.to_bits(b)) < max_ulps

    # ------------------------------------------------------------------ diagnostics
    def abs_diff(self, lhs: Any, rhs: Any) -> Optional[Any]:
        with np.errstate(over="ignore", invalid="ignore"):
            return float(abs(self.coerce(lhs) - self.coerce(rhs)))

    def ulps_distance(self, lhs: Any, rhs: Any) -> Optional[int]:
        """Number of representable steps between two same-sign, non-NaN values."""
        a, b = self.coerce(lhs), self.coerce(rhs)
        if np.isnan(a) or np.isnan(b) or np.signbit(a) != np.signbit(b):
            return None
        return abs(self.to_bits(a) - self.to_bits(b))


FLOAT32 = FloatApproxEq("float32", np.float32, np.int32)
FLOAT64 = FloatApproxEq("float64", np.float64, np.int64)


__all__ = ["DEFAULT_MAX_ULPS", "FloatApproxEq", "FLOAT32", "FLOAT64"]
