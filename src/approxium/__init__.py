"""
Approxium: approximate equality for floating-point values and the types built from them.

Two strategies are provided: a relative-difference test for values that may
differ in magnitude, and a units-in-the-last-place (ULPs) test that bounds the
number of representable floats between the operands. Both accept an absolute
``epsilon`` for values that are very close together.

    >>> from approxium import relative_eq, ulps_eq
    >>> relative_eq(0.1 + 0.2, 0.3)
    True
    >>> ulps_eq(1.0, 1.0 + 4 * 2.220446049250313e-16, epsilon=0.0)
    False
"""

from importlib import metadata as _metadata

from approxium.compare import (
    Relative,
    Ulps,
    assert_relative_eq,
    assert_relative_ne,
    assert_ulps_eq,
    assert_ulps_ne,
    relative_eq,
    relative_ne,
    ulps_eq,
    ulps_ne,
)
from approxium.core import (
    DEFAULT_REGISTRY,
    FLOAT32,
    FLOAT64,
    ApproxEq,
    ApproxEqImpl,
    register,
)
from approxium.exceptions import (
    ApproxAssertionError,
    ApproxiumError,
    ToleranceError,
    UnsupportedTypeError,
)

__author__ = "Parneet Sidhu"
__license__ = "MIT"

# Try to read the installed package version first; fall back to a default for local dev.
try:
    __version__ = _metadata.version("approxium")
except _metadata.PackageNotFoundError:
    import tomllib
    with open("pyproject.toml", "rb") as f:
        __version__ = tomllib.load(f)["project"]["version"]

# Public names exposed by the package. Keep this minimal and stable.
__all__ = [
    "__version__",
    "__author__",
    "__license__",
    "ApproxEq",
    "ApproxEqImpl",
    "FLOAT32",
    "FLOAT64",
    "DEFAULT_REGISTRY",
    "register",
    "Relative",
    "Ulps",
    "relative_eq",
    "relative_ne",
    "ulps_eq",
    "ulps_ne",
    "assert_relative_eq",
    "assert_relative_ne",
    "assert_ulps_eq",
    "assert_ulps_ne",
    "ApproxiumError",
    "ApproxAssertionError",
    "ToleranceError",
    "UnsupportedTypeError",
]
