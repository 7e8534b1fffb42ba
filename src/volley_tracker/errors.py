"""Exceptions raised by the tracker's store, filters and taxonomy lookups."""

from typing import Any, Dict, Optional


class TrackerError(Exception):
    """Base class for recoverable, caller-facing tracker errors."""

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.context = context or {}

    def __str__(self) -> str:
        return self.message


class InvalidInput(TrackerError):
    """Malformed user-supplied value (player name/number, position, set)."""


class DuplicateNumber(TrackerError):
    """Jersey number already taken on the roster."""


class UnknownPlayer(TrackerError):
    """No player with the given id exists on either roster."""


class InvalidOutcome(TrackerError):
    """Outcome is not legal for the chosen shot type."""


class InvalidShotType(TrackerError):
    """Shot type is not one of the known types."""


class NotFound(TrackerError):
    """No shot with the given id exists."""
