"""Base exception types for fretmap.

The engine reports "nothing found" as an empty result, never as an
exception. The types here cover the two remaining cases: exhaustive
enum dispatch that falls through, and callers passing inputs that can
never be valid.
"""

from __future__ import annotations

from typing import Any


class MatchException(Exception):
    """Exception raised when pattern matching fails."""

    def __init__(self, value: Any) -> None:
        """Initialize a MatchException with the unmatched value.

        Args:
            value: The value that failed to match any pattern.
        """
        super().__init__(f"Failed to match value: {value}")


class PreconditionException(ValueError):
    """Exception raised when a caller passes a degenerate argument.

    Examples are a negative fret count or an empty tuning. These indicate
    a bug in the caller rather than a data condition, so they fail fast at
    the API boundary.
    """

    def __init__(self, name: str, value: Any, reason: str) -> None:
        """Initialize a PreconditionException.

        Args:
            name: The name of the offending argument.
            value: The value that was passed.
            reason: What the argument was required to satisfy.
        """
        super().__init__(f"Invalid {name} {value!r}: {reason}")
        self.name = name
        self.value = value


def require_max_fret(max_fret: int) -> None:
    """Check that a fret count is usable.

    Args:
        max_fret: The highest fret a generator may visit.

    Raises:
        PreconditionException: If the fret count is negative.
    """
    if max_fret < 0:
        raise PreconditionException("max_fret", max_fret, "must be non-negative")
