"""Exceptions raised by the projection engines."""

from __future__ import annotations

from typing import List, Optional


class ProjectionError(ValueError):
    def __init__(self, errors: List[str]):
        super().__init__("; ".join(errors))
        self.errors = errors


class InvalidParameterError(ProjectionError):
    """A parameter was rejected before any projection work started."""

    def __init__(self, field: str, message: str):
        super().__init__([f"{field}: {message}"])
        self.field = field


class NonConvergenceError(ProjectionError):
    """The schedule cannot reach a zero balance.

    Raised when the payment no longer covers accruing interest, or when the
    iteration cap is hit first.
    """

    def __init__(self, message: str, periods: Optional[int] = None):
        super().__init__([message])
        self.periods = periods
