"""Pydantic data models for the volleyball tracker."""

from .enums import Outcome, ResultCategory, Roster, ShotType
from .shots import CourtPosition, OutcomeValue, Player, Shot, new_id
from .stats import DetailedSummary, PlayerLine, PlayerSummary, ShotSummary, TeamSummary

__all__ = [
    # Enums
    "Outcome",
    "ResultCategory",
    "Roster",
    "ShotType",
    # Records
    "CourtPosition",
    "OutcomeValue",
    "Player",
    "Shot",
    "new_id",
    # Statistics
    "DetailedSummary",
    "PlayerLine",
    "PlayerSummary",
    "ShotSummary",
    "TeamSummary",
]
