"""
approxium.compare.predicates
============================

Short-form predicates and assertion helpers.

Tolerances are keyword-only, so each may be given at most once and in any
order; omitted ones default to the operand type's defaults::

    relative_eq(1.0, 1.0)
    relative_eq(1.0, 1.0, epsilon=sys.float_info.epsilon)
    relative_eq(1.0, 1.0, max_relative=1.0, epsilon=sys.float_info.epsilon)

    ulps_eq(1.0, 1.0, max_ulps=4)
    assert_ulps_eq(x, y, epsilon=0.0, max_ulps=8)

The ``assert_*`` helpers raise `ApproxAssertionError` (an `AssertionError`)
listing the operands, the tolerances actually used and the absolute
difference.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from approxium.compare.configurators import Relative, Ulps
from approxium.core.registry import DEFAULT_REGISTRY
from approxium.exceptions import ApproxAssertionError

logger = logging.getLogger(__name__)


def relative_eq(lhs: Any, rhs: Any, *, epsilon: Any = None, max_relative: Any = None) -> bool:
    """Whether ``lhs`` and ``rhs`` are equal under a relative-difference comparison."""
    return Relative(epsilon, max_relative).eq(lhs, rhs)


def relative_ne(lhs: Any, rhs: Any, *, epsilon: Any = None, max_relative: Any = None) -> bool:
    """The inverse of `relative_eq`."""
    return Relative(epsilon, max_relative).ne(lhs, rhs)


def ulps_eq(lhs: Any, rhs: Any, *, epsilon: Any = None, max_ulps: Optional[int] = None) -> bool:
    """Whether ``lhs`` and ``rhs`` are within ``max_ulps`` representable steps of each other."""
    return Ulps(epsilon, max_ulps).eq(lhs, rhs)


def ulps_ne(lhs: Any, rhs: Any, *, epsilon: Any = None, max_ulps: Optional[int] = None) -> bool:
    """The inverse of `ulps_eq`."""
    return Ulps(epsilon, max_ulps).ne(lhs, rhs)


def _fail(predicate: str, lhs: Any, rhs: Any, tolerances: dict, ulps: bool = False) -> None:
    impl = DEFAULT_REGISTRY.resolve(lhs, rhs)
    error = ApproxAssertionError(
        predicate,
        lhs,
        rhs,
        tolerances,
        abs_diff=impl.abs_diff(lhs, rhs),
        ulps_diff=impl.ulps_distance(lhs, rhs) if ulps else None,
    )
    logger.debug("%s", error)
    raise error


def assert_relative_eq(lhs: Any, rhs: Any, *, epsilon: Any = None, max_relative: Any = None) -> None:
    config = Relative(epsilon, max_relative)
    if not config.eq(lhs, rhs):
        eps, rel = config.tolerances(lhs, rhs)
        _fail("assert_relative_eq", lhs, rhs, {"epsilon": eps, "max_relative": rel})


def assert_relative_ne(lhs: Any, rhs: Any, *, epsilon: Any = None, max_relative: Any = None) -> None:
    config = Relative(epsilon, max_relative)
    if not config.ne(lhs, rhs):
        eps, rel = config.tolerances(lhs, rhs)
        _fail("assert_relative_ne", lhs, rhs, {"epsilon": eps, "max_relative": rel})


def assert_ulps_eq(lhs: Any, rhs: Any, *, epsilon: Any = None, max_ulps: Optional[int] = None) -> None:
    config = Ulps(epsilon, max_ulps)
    if not config.eq(lhs, rhs):
        eps, ulps = config.tolerances(lhs, rhs)
        _fail("assert_ulps_eq", lhs, rhs, {"epsilon": eps, "max_ulps": ulps}, ulps=True)


def assert_ulps_ne(lhs: Any, rhs: Any, *, epsilon: Any = None, max_ulps: Optional[int] = None) -> None:
    config = Ulps(epsilon, max_ulps)
    if not config.ne(lhs, rhs):
        eps, ulps = config.tolerances(lhs, rhs)
        _fail("assert_ulps_ne", lhs, rhs, {"epsilon": eps, "max_ulps": ulps}, ulps=True)


__all__ = [
    "relative_eq",
    "relative_ne",
    "ulps_eq",
    "ulps_ne",
    "assert_relative_eq",
    "assert_relative_ne",
    "assert_ulps_eq",
    "assert_ulps_ne",
]
