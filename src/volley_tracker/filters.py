"""Court view filter state and the visible-shot query."""

from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional, Union

from .errors import InvalidInput
from .models.enums import ResultCategory, Roster
from .models.shots import Player, Shot
from .store import ShotRecordStore
from .taxonomy import category_of

DEFAULT_MAX_SETS = 5


def _all_categories() -> Dict[ResultCategory, bool]:
    return {category: True for category in ResultCategory}


@dataclass
class VisibleShot:
    """A shot to draw, with the player whose number labels the marker."""

    player: Player
    shot: Shot


@dataclass
class FilterState:
    """Active set, player and result-category selections for the court view.

    Changing any selection never touches the store; ``visible_shots`` is
    recomputed from scratch on every call.
    """

    active_set: int = 1
    player_filter: Optional[str] = None
    category_filters: Dict[ResultCategory, bool] = field(default_factory=_all_categories)
    max_sets: int = DEFAULT_MAX_SETS

    def select_set(self, set_number: int) -> None:
        if isinstance(set_number, bool) or not isinstance(set_number, int) or not 1 <= set_number <= self.max_sets:
            raise InvalidInput(
                f"Set must be between 1 and {self.max_sets}",
                context={"set_number": set_number},
            )
        self.active_set = set_number

    def select_player(self, player_id: Optional[str]) -> None:
        """Show a single player's shots; None shows everyone."""
        self.player_filter = player_id

    def reset_player(self) -> None:
        self.player_filter = None

    def toggle_category(self, category: Union[ResultCategory, str], included: bool) -> None:
        try:
            category = ResultCategory(category)
        except ValueError:
            raise InvalidInput(f"Unknown result category: {category!r}", context={"category": category}) from None
        self.category_filters[category] = bool(included)

    def included_categories(self) -> List[ResultCategory]:
        return [c for c in ResultCategory if self.category_filters.get(c, True)]

    def admits(self, shot: Shot) -> bool:
        """Whether ``shot`` passes the set and category selections."""
        if shot.set_number != self.active_set:
            return False
        return self.category_filters.get(category_of(shot.outcome), True)


def visible_shots(
    store: ShotRecordStore,
    filter_state: FilterState,
    roster: Union[Roster, str],
) -> Iterator[VisibleShot]:
    """Shots of ``roster`` that pass every filter axis.

    Yields in roster order, then recording order within each player.
    """
    for player in store.players(roster):
        if filter_state.player_filter is not None and player.id != filter_state.player_filter:
            continue
        for shot in player.shots:
            if filter_state.admits(shot):
                yield VisibleShot(player=player, shot=shot)


def visible_shot_list(
    store: ShotRecordStore,
    filter_state: FilterState,
    roster: Union[Roster, str],
) -> List[Shot]:
    return [item.shot for item in visible_shots(store, filter_state, roster)]


def roster_for_filter_bar(store: ShotRecordStore, roster: Union[Roster, str]) -> List[Player]:
    """Players ordered by jersey number, as offered in the player filter bar."""
    return sorted(store.players(roster), key=lambda p: p.number)
