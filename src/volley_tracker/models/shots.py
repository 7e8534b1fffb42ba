"""Shot and player models.

Field aliases reproduce the stored document shape (``type``, ``result``,
``set``, ``timestamp``) so snapshots written by earlier tracker versions load
unchanged.
"""

import uuid
from datetime import UTC, datetime
from typing import List, Union

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, field_validator, model_validator
from typing_extensions import Annotated

from .enums import Outcome, ShotType

COURT_WIDTH = 200.0
COURT_LENGTH = 300.0


def new_id() -> str:
    """Opaque unique identifier for players and shots."""
    return uuid.uuid4().hex


def _known_outcome(value):
    if isinstance(value, str) and not isinstance(value, Outcome):
        try:
            return Outcome(value)
        except ValueError:
            return value
    return value


# An Outcome member, or the raw string of an unrecognized legacy outcome.
OutcomeValue = Annotated[
    Union[Outcome, str],
    Field(union_mode="left_to_right"),
    BeforeValidator(_known_outcome),
]


class CourtPosition(BaseModel):
    """Tap location in normalized court coordinates."""

    model_config = ConfigDict(frozen=True)

    x: float = Field(..., ge=0, le=COURT_WIDTH, description="Across the court, 0-200")
    y: float = Field(..., ge=0, le=COURT_LENGTH, description="Along the court, 0-300")


class Shot(BaseModel):
    """A single recorded action; never modified after creation."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str = Field(default_factory=new_id, min_length=1)
    shot_type: ShotType = Field(..., alias="type")
    outcome: OutcomeValue = Field(..., alias="result")
    position: CourtPosition
    set_number: int = Field(..., alias="set", ge=1, description="Set the shot belongs to")
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC), alias="timestamp")

    @model_validator(mode="after")
    def check_outcome_matches_type(self) -> "Shot":
        """Reject known outcomes that belong to a different shot type.

        Unrecognized outcome strings are kept as stored and counted as ``other``.
        """
        # Imported here to avoid a circular import through the models package
        from ..taxonomy import is_legal

        if isinstance(self.outcome, Outcome) and not is_legal(self.shot_type, self.outcome):
            raise ValueError(
                f"outcome {self.outcome.value!r} is not legal for shot type {self.shot_type.value!r}"
            )
        return self


class Player(BaseModel):
    """Roster entry owning an ordered list of shots."""

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(default_factory=new_id, min_length=1)
    number: int = Field(..., ge=0, le=99, description="Jersey number, unique per roster")
    name: str = Field(..., min_length=1)
    shots: List[Shot] = Field(default_factory=list)

    @field_validator('name', mode='before')
    @classmethod
    def strip_name(cls, v):
        """Trim surrounding whitespace before the emptiness check."""
        return v.strip() if isinstance(v, str) else v

    @field_validator('shots', mode='before')
    @classmethod
    def default_missing_shots(cls, v):
        """Older snapshots store ``null`` for players that never recorded a shot."""
        return [] if v is None else v

    @property
    def label(self) -> str:
        return f"#{self.number} - {self.name}"
