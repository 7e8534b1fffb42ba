"""Shot aggregation - pure, synchronous.

Success rates are rounded half-up on the percentage with integer arithmetic,
so 1/3 -> 33, 2/3 -> 67 and 1/8 -> 13 on every platform.
"""

from collections import Counter
from dataclasses import dataclass
from typing import Dict, Iterable, List, Mapping, Sequence, Tuple, TypeVar

from ..models.enums import ShotType
from ..models.shots import OutcomeValue, Player, Shot
from ..models.stats import DetailedSummary, PlayerLine, PlayerSummary, ShotSummary, TeamSummary
from ..taxonomy import is_error, is_kill, is_success

K = TypeVar("K")


def success_rate(successes: int, total: int) -> int:
    """Percentage of successes rounded half-up; 0 for an empty group."""
    if total <= 0:
        return 0
    return (200 * successes + total) // (2 * total)


@dataclass
class _Tally:
    """Mutable counters used while walking shots."""

    total: int = 0
    kills: int = 0
    errors: int = 0
    successes: int = 0

    def add(self, shot: Shot) -> None:
        self.total += 1
        if is_kill(shot.outcome):
            self.kills += 1
        if is_error(shot.outcome):
            self.errors += 1
        if is_success(shot.outcome):
            self.successes += 1

    def merge(self, summary: ShotSummary) -> None:
        self.total += summary.total
        self.kills += summary.kills
        self.errors += summary.errors
        self.successes += summary.successes

    def freeze(self) -> ShotSummary:
        return ShotSummary(
            total=self.total,
            kills=self.kills,
            errors=self.errors,
            successes=self.successes,
            success_rate=success_rate(self.successes, self.total),
        )


def summarize(shots: Iterable[Shot]) -> ShotSummary:
    """Totals, kills, errors, successes and success rate over ``shots``."""
    tally = _Tally()
    for shot in shots:
        tally.add(shot)
    return tally.freeze()


def merge_summaries(*summaries: ShotSummary) -> ShotSummary:
    """Add summaries together and recompute the rate from the summed counts."""
    tally = _Tally()
    for summary in summaries:
        tally.merge(summary)
    return tally.freeze()


def detailed_summarize(shots: Iterable[Shot]) -> DetailedSummary:
    """``summarize`` plus per-set, per-shot-type and per-outcome breakdowns.

    Breakdown maps only contain keys that occur in ``shots`` and keep
    first-appearance order.
    """
    overall = _Tally()
    by_set: Dict[int, _Tally] = {}
    by_shot_type: Dict[ShotType, _Tally] = {}
    by_result: Dict[OutcomeValue, int] = {}

    for shot in shots:
        overall.add(shot)
        by_set.setdefault(shot.set_number, _Tally()).add(shot)
        by_shot_type.setdefault(shot.shot_type, _Tally()).add(shot)
        by_result[shot.outcome] = by_result.get(shot.outcome, 0) + 1

    summary = overall.freeze()
    return DetailedSummary(
        **summary.model_dump(),
        by_set={k: t.freeze() for k, t in by_set.items()},
        by_shot_type={k: t.freeze() for k, t in by_shot_type.items()},
        by_result=by_result,
    )


def player_summary(player: Player) -> PlayerSummary:
    """Compact card for one player."""
    summary = summarize(player.shots)
    return PlayerSummary(
        total=summary.total,
        kills=summary.kills,
        errors=summary.errors,
        success_rate=summary.success_rate,
    )


def _merge_buckets(target: Dict[K, _Tally], buckets: Mapping[K, ShotSummary]) -> None:
    for key, bucket in buckets.items():
        target.setdefault(key, _Tally()).merge(bucket)


def aggregate_team(players: Sequence[Player]) -> TeamSummary:
    """Roll per-player detailed summaries into one roster-wide summary.

    Counts and breakdown buckets are summed key by key and every rate is
    recomputed from the summed counts, which makes the result identical to
    ``detailed_summarize`` over all of the roster's shots concatenated.
    Players without shots are left out of ``by_player``.
    """
    overall = _Tally()
    by_set: Dict[int, _Tally] = {}
    by_shot_type: Dict[ShotType, _Tally] = {}
    by_result: Counter = Counter()
    by_player: Dict[str, PlayerLine] = {}

    for player in players:
        if not player.shots:
            continue

        detail = detailed_summarize(player.shots)
        overall.merge(detail)
        _merge_buckets(by_set, detail.by_set)
        _merge_buckets(by_shot_type, detail.by_shot_type)
        by_result.update(detail.by_result)

        by_player[player.id] = PlayerLine(
            player_id=player.id,
            name=player.name,
            number=player.number,
            total=detail.total,
            kills=detail.kills,
            errors=detail.errors,
            success_rate=detail.success_rate,
        )

    summary = overall.freeze()
    return TeamSummary(
        **summary.model_dump(),
        by_set={k: t.freeze() for k, t in by_set.items()},
        by_shot_type={k: t.freeze() for k, t in by_shot_type.items()},
        by_result=dict(by_result),
        by_player=by_player,
    )


def top_results(by_result: Mapping[OutcomeValue, int], limit: int = 10) -> List[Tuple[OutcomeValue, int]]:
    """Outcome tallies ordered by count, highest first; ties keep input order."""
    ranked = sorted(by_result.items(), key=lambda item: item[1], reverse=True)
    return ranked[:limit]
