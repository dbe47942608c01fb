# tests/utils.py
from approxium import FLOAT64, ApproxEq


class Complex(ApproxEq):
    """A user composite built from two float64 leaves."""

    def __init__(self, x: float, i: float) -> None:
        self.x = x
        self.i = i

    def __repr__(self) -> str:
        return f"Complex(x={self.x!r}, i={self.i!r})"

    @classmethod
    def default_epsilon(cls):
        return FLOAT64.default_epsilon()

    @classmethod
    def default_max_relative(cls):
        return FLOAT64.default_max_relative()

    @classmethod
    def default_max_ulps(cls):
        return FLOAT64.default_max_ulps()

    def relative_eq(self, other, epsilon, max_relative):
        return (
            FLOAT64.relative_eq(self.x, other.x, epsilon, max_relative)
            and FLOAT64.relative_eq(self.i, other.i, epsilon, max_relative)
        )

    def ulps_eq(self, other, epsilon, max_ulps):
        return (
            FLOAT64.ulps_eq(self.x, other.x, epsilon, max_ulps)
            and FLOAT64.ulps_eq(self.i, other.i, epsilon, max_ulps)
        )


def ulps_away(x: float, n: int) -> float:
    """Return the float ``n`` representable steps above ``x`` (below if negative)."""
    return float(FLOAT64.from_bits(FLOAT64.to_bits(x) + n))
