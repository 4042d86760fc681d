"""Typed failures raised by the discrimination engine.

Every failure is local to one query: nothing here is cached, and a query that
raises never hands back a partial result.
"""

from typing import Optional


class DiscriminationError(Exception):
    """Base class for all engine failures."""

    def __init__(self, message: str, pattern_id: Optional[str] = None):
        super().__init__(message)
        self.pattern_id = pattern_id


class PatternNotFoundError(DiscriminationError, LookupError):
    """The reference store holds no samples for the pattern id."""


class MalformedPatternError(DiscriminationError, ValueError):
    """Fetched rows cannot be sorted into a valid sample set."""


class IncompleteDataError(DiscriminationError):
    """A value needed for interpolation is flagged as missing."""

    def __init__(self, message: str, pattern_id: Optional[str] = None,
                 column: Optional[str] = None, angle_deg: Optional[float] = None):
        super().__init__(message, pattern_id)
        self.column = column
        self.angle_deg = angle_deg


class InvalidAngleError(DiscriminationError, ValueError):
    """The requested off-axis angle is NaN or infinite."""
