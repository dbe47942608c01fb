"""
approxium.exceptions
====================

All exception types raised by approxium live here. Every exception derives
from `ApproxiumError`, and additionally from the builtin exception a caller
would naturally catch (`AssertionError`, `TypeError`, `ValueError`).
"""

from __future__ import annotations

from typing import Any, Dict, Optional


class ApproxiumError(Exception):
    """Base class for every approxium exception."""


class UnsupportedTypeError(ApproxiumError, TypeError):
    """No approximate-equality implementation is known for an operand type."""


class ToleranceError(ApproxiumError, ValueError):
    """A tolerance value is outside the range a comparison can accept."""


class ApproxAssertionError(ApproxiumError, AssertionError):
    """
    Raised by the ``assert_*`` helpers when the comparison does not hold.

    The formatted message lists the operands, the tolerances that were used
    and the absolute difference; the same data is kept on the instance so
    test tooling can inspect it without parsing the message.
    """

    def __init__(
        self,
        predicate: str,
        left: Any,
        right: Any,
        tolerances: Dict[str, Any],
        abs_diff: Optional[Any] = None,
        ulps_diff: Optional[int] = None,
    ) -> None:
        self.predicate = predicate
        self.left = left
        self.right = right
        self.tolerances = dict(tolerances)
        self.abs_diff = abs_diff
        self.ulps_diff = ulps_diff
        super().__init__(self._format())

    def _format(self) -> str:
        params = ", ".join(f"{k}={v!r}" for k, v in self.tolerances.items())
        lines = [
            f"{self.predicate}(left, right, {params}) failed",
            "",
            f"    left     = {self.left!r}",
            f"    right    = {self.right!r}",
            f"    abs_diff = {'n/a' if self.abs_diff is None else repr(self.abs_diff)}",
        ]
        if self.ulps_diff is not None:
            lines.append(f"    ulps_diff = {self.ulps_diff}")
        return "\n".join(lines)


__all__ = [
    "ApproxiumError",
    "UnsupportedTypeError",
    "ToleranceError",
    "ApproxAssertionError",
]
