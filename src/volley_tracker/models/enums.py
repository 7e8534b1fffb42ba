"""Enumerations for volleyball shot classification."""

from enum import Enum
from typing import Any, Optional


def _normalize(value: Any) -> Optional[str]:
    if isinstance(value, str):
        return value.strip().lower().replace("_", "-").replace(" ", "-")
    return None


class ShotType(str, Enum):
    """Kinds of recorded volleyball actions."""

    SERVE = "serve"
    SPIKE = "spike"
    BLOCK = "block"
    DIG = "dig"
    SET = "set"
    ATTACK = "attack"

    @classmethod
    def _missing_(cls, value: Any) -> Optional["ShotType"]:
        """Accept case and whitespace variations ("Serve ", "SPIKE")."""
        normalized = _normalize(value)
        for member in cls:
            if member.value == normalized:
                return member
        return None


class Outcome(str, Enum):
    """Result labels a shot can carry; each belongs to exactly one shot type."""

    # serve
    ACE = "ace"
    SERVICE_ERROR = "service-error"
    SERVICE_POINT = "service-point"
    SERVICE_RETURNED = "service-returned"
    # spike
    KILL = "kill"
    SPIKE_ERROR = "spike-error"
    SPIKE_BLOCKED = "spike-blocked"
    SPIKE_DUG = "spike-dug"
    # block
    BLOCK_KILL = "block-kill"
    BLOCK_ERROR = "block-error"
    BLOCK_TOUCH = "block-touch"
    BLOCK_MISS = "block-miss"
    # dig
    DIG_SUCCESS = "dig-success"
    DIG_ERROR = "dig-error"
    DIG_OUT = "dig-out"
    # set
    SET_ASSIST = "set-assist"
    SET_ERROR = "set-error"
    SET_OVER = "set-over"
    # attack
    ATTACK_KILL = "attack-kill"
    ATTACK_ERROR = "attack-error"
    ATTACK_BLOCKED = "attack-blocked"
    ATTACK_DUG = "attack-dug"

    @classmethod
    def _missing_(cls, value: Any) -> Optional["Outcome"]:
        """Accept "Spike Error", "SPIKE_ERROR" and similar spellings."""
        normalized = _normalize(value)
        for member in cls:
            if member.value == normalized:
                return member
        return None


class ResultCategory(str, Enum):
    """Filter buckets every outcome rolls up into."""

    SUCCESS = "success"
    ERROR = "error"
    BLOCKED = "blocked"
    OTHER = "other"


class Roster(str, Enum):
    """The two team rosters of a game."""

    HOME = "home"
    AWAY = "away"

    @classmethod
    def _missing_(cls, value: Any) -> Optional["Roster"]:
        normalized = _normalize(value)
        for member in cls:
            if member.value == normalized:
                return member
        return None

    @property
    def opponent(self) -> "Roster":
        return Roster.AWAY if self is Roster.HOME else Roster.HOME
