"""Tracker session: the explicit context tying store, filters and persistence together.

A session is driven by one local actor. Every successful mutating command is
followed by a save to the local adapter and then to the remote adapter.
Persistence failures are logged and swallowed so the in-memory store stays
usable offline. Remote snapshots replace both rosters outright; a local edit
racing a remote push can be overwritten (last writer wins).
"""

import random
from typing import Callable, List, Optional, Tuple, Union

from .config import get_settings
from .filters import FilterState, VisibleShot, roster_for_filter_bar, visible_shots
from .models.enums import Outcome, Roster, ShotType
from .models.shots import OutcomeValue, Player, Shot
from .models.stats import DetailedSummary, PlayerSummary, TeamSummary
from .persistence.base import GameSnapshot, PersistenceAdapter, RemoteSnapshot, RemoteUpdates
from .store import PositionLike, ShotRecordStore, parse_roster
from .tracker_logging import bind_game_id, get_logger
from .transformers.aggregation import aggregate_team, detailed_summarize, player_summary, top_results

logger = get_logger(__name__)


def generate_game_id() -> str:
    """Random 6-digit game id used as the sync key."""
    return str(random.randint(100000, 999999))


class TrackerSession:
    """One game being tracked on this device."""

    def __init__(
        self,
        game_id: Optional[str] = None,
        local: Optional[PersistenceAdapter] = None,
        remote: Optional[PersistenceAdapter] = None,
        store: Optional[ShotRecordStore] = None,
        filter_state: Optional[FilterState] = None,
        game_name: str = "",
    ):
        settings = get_settings()
        self.game_id = game_id or settings.SESSION_ID or generate_game_id()
        self.game_name = game_name
        self.local = local
        self.remote = remote
        self.store = store or ShotRecordStore()
        self.filters = filter_state or FilterState(max_sets=settings.MAX_SETS)
        self.current_roster = Roster.HOME
        self._unsubscribe: Optional[Callable[[], None]] = None
        bind_game_id(self.game_id)

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def snapshot(self) -> GameSnapshot:
        return GameSnapshot(
            home_roster=self.store.players(Roster.HOME),
            away_roster=self.store.players(Roster.AWAY),
            game_name=self.game_name,
        )

    def load(self) -> bool:
        """Populate the store from the remote adapter, else the local one.

        Returns True when a stored snapshot was found. Any failure leaves two
        empty rosters.
        """
        for source, adapter in (("remote", self.remote), ("local", self.local)):
            if adapter is None:
                continue
            try:
                snapshot = adapter.load(self.game_id)
            except Exception as e:
                logger.error("snapshot.load_failed", source=source, error=str(e))
                continue
            if snapshot is None:
                continue

            self.store.replace(snapshot.home_roster, snapshot.away_roster)
            if snapshot.game_name:
                self.game_name = snapshot.game_name
            if source == "remote":
                self._save_to("local", self.local)
            logger.info("Snapshot loaded", source=source, shots=self.store.shot_count())
            return True

        self.store.replace([], [])
        return False

    def save(self) -> None:
        """Write the current snapshot locally, then remotely; never raises."""
        self._save_to("local", self.local)
        self._save_to("remote", self.remote)

    def _save_to(self, target: str, adapter: Optional[PersistenceAdapter]) -> None:
        if adapter is None:
            return
        try:
            adapter.save(self.game_id, self.snapshot())
        except Exception as e:
            logger.warning("snapshot.save_failed", target=target, error=str(e))

    def subscribe_remote(self) -> bool:
        """Apply remote pushes as they arrive, when the remote adapter supports it."""
        if self.remote is None or not isinstance(self.remote, RemoteUpdates):
            logger.info("Remote updates unavailable, running local-only")
            return False
        self.unsubscribe_remote()
        self._unsubscribe = self.remote.on_remote_update(self.game_id, self.apply_remote_snapshot)
        return True

    def unsubscribe_remote(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None

    def apply_remote_snapshot(self, snapshot: RemoteSnapshot) -> None:
        """Replace local state with a pushed snapshot (never merged)."""
        if snapshot.game_name:
            self.game_name = snapshot.game_name
        if snapshot.has_rosters:
            self.store.replace(snapshot.home_roster, snapshot.away_roster)
            if self.filters.player_filter is not None and self.store.find_player(self.filters.player_filter) is None:
                self.filters.reset_player()
        # Only the local copy is refreshed; echoing back would loop.
        self._save_to("local", self.local)
        logger.info("Synced from remote", replaced_rosters=snapshot.has_rosters)

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def switch_team(self) -> Roster:
        """Toggle the roster being viewed; the player filter resets."""
        self.current_roster = self.current_roster.opponent
        self.filters.reset_player()
        return self.current_roster

    def select_roster(self, roster: Union[Roster, str]) -> None:
        roster = parse_roster(roster)
        if roster is not self.current_roster:
            self.switch_team()

    def add_player(self, number: int, name: str) -> Player:
        player = self.store.add_player(self.current_roster, number, name)
        self.save()
        return player

    def record_shot(
        self,
        player_id: str,
        shot_type: Union[ShotType, str],
        outcome: Union[Outcome, str],
        position: PositionLike,
        set_number: Optional[int] = None,
    ) -> Shot:
        """Record a shot, attributed to the active set unless one is given."""
        shot = self.store.record_shot(
            player_id,
            shot_type,
            outcome,
            position,
            set_number if set_number is not None else self.filters.active_set,
        )
        self.save()
        return shot

    def delete_shot(self, shot_id: str) -> bool:
        removed = self.store.delete_shot(shot_id)
        if removed:
            self.save()
        return removed

    def clear_current_set(self) -> int:
        removed = self.store.clear_shots_for_set(self.current_roster, self.filters.active_set)
        self.save()
        return removed

    def rename_game(self, name: str) -> None:
        self.game_name = name.strip()
        self.save()

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def players(self, roster: Optional[Union[Roster, str]] = None) -> List[Player]:
        return self.store.players(roster or self.current_roster)

    def filter_bar(self) -> List[Player]:
        return roster_for_filter_bar(self.store, self.current_roster)

    def visible_shots(self) -> List[VisibleShot]:
        return list(visible_shots(self.store, self.filters, self.current_roster))

    def team_summary(self, roster: Optional[Union[Roster, str]] = None) -> TeamSummary:
        return aggregate_team(self.players(roster))

    def top_results(self, roster: Optional[Union[Roster, str]] = None) -> List[Tuple[OutcomeValue, int]]:
        summary = self.team_summary(roster)
        return top_results(summary.by_result, limit=get_settings().TOP_RESULTS_LIMIT)

    def player_summaries(self, roster: Optional[Union[Roster, str]] = None) -> List[Tuple[Player, PlayerSummary]]:
        return [(player, player_summary(player)) for player in self.players(roster)]

    def player_detail(self, player_id: str) -> DetailedSummary:
        return detailed_summarize(self.store.get_player(player_id).shots)

    def player_top_results(self, player_id: str) -> List[Tuple[OutcomeValue, int]]:
        """Most frequent outcomes of one player, capped shorter than the team list."""
        detail = self.player_detail(player_id)
        return top_results(detail.by_result, limit=get_settings().PLAYER_TOP_RESULTS_LIMIT)
