"""In-memory shot record store: the only place players and shots are mutated."""

from typing import Dict, Iterator, List, Mapping, Optional, Sequence, Tuple, Union

from pydantic import ValidationError

from .errors import DuplicateNumber, InvalidInput, InvalidOutcome, NotFound, UnknownPlayer
from .models.enums import Outcome, Roster, ShotType
from .models.shots import CourtPosition, Player, Shot
from .taxonomy import legal_outcomes, parse_shot_type
from .tracker_logging import get_logger

logger = get_logger(__name__)

PositionLike = Union[CourtPosition, Tuple[float, float], Mapping[str, float]]


def parse_roster(roster: Union[Roster, str]) -> Roster:
    """Coerce a roster name, raising ``InvalidInput`` for anything but home or away."""
    if isinstance(roster, Roster):
        return roster
    try:
        return Roster(roster)
    except ValueError:
        raise InvalidInput(
            f"Unknown roster: {roster!r}",
            context={"roster": roster, "expected": [r.value for r in Roster]},
        ) from None


def _coerce_position(position: PositionLike) -> CourtPosition:
    if isinstance(position, CourtPosition):
        return position
    try:
        if isinstance(position, Mapping):
            return CourtPosition(**position)
        x, y = position
        return CourtPosition(x=x, y=y)
    except (ValidationError, TypeError, ValueError) as e:
        raise InvalidInput(
            f"Invalid court position: {position!r}", context={"position": position, "error": str(e)}
        ) from None


class ShotRecordStore:
    """Owns the home and away rosters and every shot recorded for them.

    Player order within a roster is insertion order; shot order within a player
    is recording order. No locking: a single local actor drives all mutation.
    """

    def __init__(
        self,
        home: Optional[Sequence[Player]] = None,
        away: Optional[Sequence[Player]] = None,
    ):
        self._rosters: Dict[Roster, List[Player]] = {
            Roster.HOME: list(home or []),
            Roster.AWAY: list(away or []),
        }

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def players(self, roster: Union[Roster, str]) -> List[Player]:
        """Players of ``roster`` in insertion order (a copy of the list)."""
        return list(self._rosters[parse_roster(roster)])

    def iter_players(self) -> Iterator[Tuple[Roster, Player]]:
        for roster in Roster:
            for player in self._rosters[roster]:
                yield roster, player

    def find_player(self, player_id: str) -> Optional[Tuple[Roster, Player]]:
        for roster, player in self.iter_players():
            if player.id == player_id:
                return roster, player
        return None

    def get_player(self, player_id: str) -> Player:
        found = self.find_player(player_id)
        if found is None:
            raise UnknownPlayer(f"Unknown player: {player_id}", context={"player_id": player_id})
        return found[1]

    def find_shot(self, shot_id: str) -> Optional[Tuple[Player, Shot]]:
        for _, player in self.iter_players():
            for shot in player.shots:
                if shot.id == shot_id:
                    return player, shot
        return None

    def shot_count(self, roster: Optional[Union[Roster, str]] = None) -> int:
        rosters = [parse_roster(roster)] if roster is not None else list(Roster)
        return sum(len(p.shots) for r in rosters for p in self._rosters[r])

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def add_player(self, roster: Union[Roster, str], number: int, name: str) -> Player:
        """Append a new player to ``roster``.

        Raises:
            InvalidInput: empty name or number outside 0-99
            DuplicateNumber: number already used on this roster
        """
        roster = parse_roster(roster)
        if isinstance(number, bool) or not isinstance(number, int) or not 0 <= number <= 99:
            raise InvalidInput(
                "Player number must be an integer between 0 and 99",
                context={"number": number},
            )
        if not isinstance(name, str) or not name.strip():
            raise InvalidInput("Player name must not be empty", context={"name": name})

        if any(p.number == number for p in self._rosters[roster]):
            raise DuplicateNumber(
                f"Player number {number} already exists on the {roster.value} roster",
                context={"roster": roster.value, "number": number},
            )

        try:
            player = Player(number=number, name=name)
        except ValidationError as e:
            raise InvalidInput(f"Invalid player: {e}", context={"number": number, "name": name}) from None
        self._rosters[roster].append(player)
        logger.info("Player added", roster=roster.value, player_id=player.id, number=number)
        return player

    def record_shot(
        self,
        player_id: str,
        shot_type: Union[ShotType, str],
        outcome: Union[Outcome, str],
        position: PositionLike,
        set_number: int,
    ) -> Shot:
        """Create a shot and append it to the player's sequence.

        Raises:
            UnknownPlayer: no player with ``player_id``
            InvalidShotType: unknown shot type
            InvalidOutcome: outcome not legal for the shot type
            InvalidInput: bad position or set number
        """
        player = self.get_player(player_id)
        shot_type = parse_shot_type(shot_type)
        allowed = legal_outcomes(shot_type)
        try:
            parsed_outcome = Outcome(outcome)
        except ValueError:
            parsed_outcome = None
        if parsed_outcome not in allowed:
            raise InvalidOutcome(
                f"Outcome {outcome!r} is not legal for shot type {shot_type.value!r}",
                context={"shot_type": shot_type.value, "outcome": outcome, "allowed": [o.value for o in allowed]},
            )
        if isinstance(set_number, bool) or not isinstance(set_number, int) or set_number < 1:
            raise InvalidInput("Set number must be a positive integer", context={"set_number": set_number})

        position = _coerce_position(position)
        try:
            shot = Shot(shot_type=shot_type, outcome=parsed_outcome, position=position, set_number=set_number)
        except ValidationError as e:
            raise InvalidInput(f"Invalid shot: {e}", context={"player_id": player_id}) from None
        player.shots.append(shot)
        logger.debug(
            "shot.recorded",
            player_id=player.id,
            shot_id=shot.id,
            shot_type=shot_type.value,
            outcome=parsed_outcome.value,
            set_number=set_number,
        )
        return shot

    def delete_shot(self, shot_id: str, missing_ok: bool = True) -> bool:
        """Remove the shot with ``shot_id`` from whichever roster owns it.

        Returns True when a shot was removed. An absent id is a no-op unless
        ``missing_ok`` is False, in which case ``NotFound`` is raised.
        """
        found = self.find_shot(shot_id)
        if found is None:
            if not missing_ok:
                raise NotFound(f"Shot not found: {shot_id}", context={"shot_id": shot_id})
            logger.debug("Shot delete ignored, id not found", shot_id=shot_id)
            return False

        player, _ = found
        player.shots = [s for s in player.shots if s.id != shot_id]
        logger.debug("Shot deleted", player_id=player.id, shot_id=shot_id)
        return True

    def clear_shots_for_set(self, roster: Union[Roster, str], set_number: int) -> int:
        """Drop every shot of ``set_number`` on ``roster``; returns how many were removed."""
        roster = parse_roster(roster)
        removed = 0
        for player in self._rosters[roster]:
            kept = [s for s in player.shots if s.set_number != set_number]
            removed += len(player.shots) - len(kept)
            player.shots = kept
        logger.info("Set cleared", roster=roster.value, set_number=set_number, removed=removed)
        return removed

    def replace(self, home: Sequence[Player], away: Sequence[Player]) -> None:
        """Swap in both rosters wholesale (remote snapshot or load)."""
        self._rosters = {Roster.HOME: list(home), Roster.AWAY: list(away)}
