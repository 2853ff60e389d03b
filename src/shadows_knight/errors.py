"""Error taxonomy for search sessions.

Every error carries the process exit code the CLI reports it with.
"""

from __future__ import annotations


class ShadowsKnightError(Exception):
    """Base class for all session failures."""

    exit_code = 1


class InvalidArgumentError(ShadowsKnightError, ValueError):
    """Raised when bootstrap values are malformed or out of range."""

    exit_code = 2


class InvalidStateError(ShadowsKnightError, RuntimeError):
    """Raised when a component is used in a state that does not allow it."""

    exit_code = 3


class DataIntegrityError(ShadowsKnightError):
    """Raised when feedback contradicts what is already known about the target."""

    exit_code = 4


class SessionNotRunningError(InvalidStateError):
    """Raised when a turn is requested from a terminated session."""

    exit_code = 5


def check_argument(value: int, low: int, high: int, label: str) -> int:
    """Return ``value`` if it lies in ``[low, high]``, else raise InvalidArgumentError."""
    if not low <= value <= high:
        raise InvalidArgumentError(f"{label}: argument '{value}' is outside [{low}, {high}]")
    return value
