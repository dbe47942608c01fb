"""Configurators and the short-form / assertion entry points built on them."""

from approxium.compare.configurators import Relative, Ulps
from approxium.compare.predicates import (
    assert_relative_eq,
    assert_relative_ne,
    assert_ulps_eq,
    assert_ulps_ne,
    relative_eq,
    relative_ne,
    ulps_eq,
    ulps_ne,
)

__all__ = [
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
]
