"""Capability contract, float widths and type resolution."""

from approxium.core.contract import ApproxEq, ApproxEqImpl
from approxium.core.floats import FLOAT32, FLOAT64, FloatApproxEq
from approxium.core.registry import DEFAULT_REGISTRY, ApproxRegistry, register

__all__ = [
    "ApproxEq",
    "ApproxEqImpl",
    "FloatApproxEq",
    "FLOAT32",
    "FLOAT64",
    "ApproxRegistry",
    "DEFAULT_REGISTRY",
    "register",
]
