"""Persistence boundary: snapshot documents and the adapter protocol."""

from datetime import datetime
from typing import Any, Callable, Dict, List, Optional, Protocol, runtime_checkable

from pydantic import BaseModel, ConfigDict, Field

from ..models.shots import Player


class GameSnapshot(BaseModel):
    """Persisted shape of a game: both rosters plus a display name.

    Serialized with the document keys ``homePlayers``, ``awayPlayers``,
    ``gameName`` and ``lastUpdated``.
    """

    model_config = ConfigDict(populate_by_name=True)

    home_roster: List[Player] = Field(default_factory=list, alias="homePlayers")
    away_roster: List[Player] = Field(default_factory=list, alias="awayPlayers")
    game_name: str = Field(default="", alias="gameName")
    last_updated: Optional[datetime] = Field(default=None, alias="lastUpdated")

    def to_document(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)

    @classmethod
    def from_document(cls, document: Dict[str, Any]) -> "GameSnapshot":
        return cls.model_validate(document)


class RemoteSnapshot(BaseModel):
    """Inbound full-snapshot replacement pushed by a remote store.

    Rosters are only replaced when both are present; an empty ``game_name``
    leaves the local name alone.
    """

    model_config = ConfigDict(populate_by_name=True)

    home_roster: Optional[List[Player]] = Field(default=None, alias="homePlayers")
    away_roster: Optional[List[Player]] = Field(default=None, alias="awayPlayers")
    game_name: Optional[str] = Field(default=None, alias="gameName")

    @property
    def has_rosters(self) -> bool:
        return self.home_roster is not None and self.away_roster is not None


SnapshotCallback = Callable[[RemoteSnapshot], None]


@runtime_checkable
class PersistenceAdapter(Protocol):
    """Durable storage for game snapshots keyed by session id."""

    def load(self, session_id: str) -> Optional[GameSnapshot]:
        ...

    def save(self, session_id: str, snapshot: GameSnapshot) -> None:
        ...


@runtime_checkable
class RemoteUpdates(Protocol):
    """Adapters that can push snapshots written elsewhere."""

    def on_remote_update(self, session_id: str, callback: SnapshotCallback) -> Callable[[], None]:
        """Register ``callback``; returns a function that unsubscribes it."""
        ...
