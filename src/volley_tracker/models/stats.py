"""Statistics output models produced by the aggregation transformers."""

from typing import Dict, List

from pydantic import BaseModel, Field

from .enums import ShotType
from .shots import OutcomeValue


class ShotSummary(BaseModel):
    """Counts over a group of shots."""

    total: int = Field(default=0, ge=0, description="Number of shots")
    kills: int = Field(default=0, ge=0, description="Aces and kills of any kind")
    errors: int = Field(default=0, ge=0, description="Outcomes counted as errors")
    successes: int = Field(default=0, ge=0, description="Outcomes counted as successes")
    success_rate: int = Field(default=0, ge=0, le=100, description="Rounded success percentage")


class PlayerSummary(BaseModel):
    """Compact per-player card shown in the roster view."""

    total: int = 0
    kills: int = 0
    errors: int = 0
    success_rate: int = 0


class DetailedSummary(ShotSummary):
    """Summary plus breakdowns by set, shot type and outcome.

    Breakdown keys are exactly the values present in the input.
    """

    by_set: Dict[int, ShotSummary] = Field(default_factory=dict)
    by_shot_type: Dict[ShotType, ShotSummary] = Field(default_factory=dict)
    by_result: Dict[OutcomeValue, int] = Field(default_factory=dict)


class PlayerLine(BaseModel):
    """One row of the team's player statistics table."""

    player_id: str
    name: str
    number: int
    total: int
    kills: int
    errors: int
    success_rate: int


class TeamSummary(DetailedSummary):
    """Roster-wide summary with one line per player who recorded a shot."""

    by_player: Dict[str, PlayerLine] = Field(default_factory=dict)

    def players_by_number(self) -> List[PlayerLine]:
        """Player lines ordered by jersey number."""
        return sorted(self.by_player.values(), key=lambda line: line.number)
