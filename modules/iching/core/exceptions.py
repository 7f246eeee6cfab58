"""Custom exceptions for the iching module."""

from typing import Optional


class IChingError(Exception):
    """Base exception for all errors in the iching module."""

    pass


class ValidationError(IChingError):
    """Raised when user input is rejected (e.g. an empty question)."""

    pass


class SequenceError(IChingError):
    """Raised when a transition is driven out of order.

    Casting past six lines, casting outside the CASTING phase or requesting an
    interpretation before the figure is complete all indicate a driver bug.
    """

    pass


class GatewayError(IChingError):
    """Raised when the interpretation oracle cannot produce a usable reading."""

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.message = message
        self.cause = cause


class JoinError(IChingError):
    """A locally cast position has no matching row in the oracle's chart.

    Collected by the assembler per row; never raised out of an assembly.
    """

    def __init__(self, position: int, chart: str = "primary"):
        super().__init__(f"No {chart} chart row for position {position}")
        self.position = position
        self.chart = chart
