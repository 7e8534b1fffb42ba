"""Fixed classification tables for shot types, outcomes and result categories.

Every lookup here is pure. ``category_of`` and the ``is_*`` predicates accept
raw strings as well as ``Outcome`` members so that legacy or unknown values
coming back from storage are still counted (as ``other``) instead of
disappearing from statistics.
"""

from typing import Dict, Optional, Tuple, Union

from .errors import InvalidShotType
from .models.enums import Outcome, ResultCategory, ShotType

OutcomeLike = Union[Outcome, str]

SHOT_TYPE_OUTCOMES: Dict[ShotType, Tuple[Outcome, ...]] = {
    ShotType.SERVE: (Outcome.ACE, Outcome.SERVICE_ERROR, Outcome.SERVICE_POINT, Outcome.SERVICE_RETURNED),
    ShotType.SPIKE: (Outcome.KILL, Outcome.SPIKE_ERROR, Outcome.SPIKE_BLOCKED, Outcome.SPIKE_DUG),
    ShotType.BLOCK: (Outcome.BLOCK_KILL, Outcome.BLOCK_ERROR, Outcome.BLOCK_TOUCH, Outcome.BLOCK_MISS),
    ShotType.DIG: (Outcome.DIG_SUCCESS, Outcome.DIG_ERROR, Outcome.DIG_OUT),
    ShotType.SET: (Outcome.SET_ASSIST, Outcome.SET_ERROR, Outcome.SET_OVER),
    ShotType.ATTACK: (Outcome.ATTACK_KILL, Outcome.ATTACK_ERROR, Outcome.ATTACK_BLOCKED, Outcome.ATTACK_DUG),
}

OUTCOME_CATEGORIES: Dict[Outcome, ResultCategory] = {
    Outcome.ACE: ResultCategory.SUCCESS,
    Outcome.KILL: ResultCategory.SUCCESS,
    Outcome.BLOCK_KILL: ResultCategory.SUCCESS,
    Outcome.ATTACK_KILL: ResultCategory.SUCCESS,
    Outcome.SERVICE_POINT: ResultCategory.SUCCESS,
    Outcome.DIG_SUCCESS: ResultCategory.SUCCESS,
    Outcome.SET_ASSIST: ResultCategory.SUCCESS,
    Outcome.SERVICE_ERROR: ResultCategory.ERROR,
    Outcome.SPIKE_ERROR: ResultCategory.ERROR,
    Outcome.BLOCK_ERROR: ResultCategory.ERROR,
    Outcome.DIG_ERROR: ResultCategory.ERROR,
    Outcome.SET_ERROR: ResultCategory.ERROR,
    Outcome.ATTACK_ERROR: ResultCategory.ERROR,
    Outcome.BLOCK_MISS: ResultCategory.ERROR,
    Outcome.SPIKE_BLOCKED: ResultCategory.BLOCKED,
    Outcome.ATTACK_BLOCKED: ResultCategory.BLOCKED,
    Outcome.BLOCK_TOUCH: ResultCategory.BLOCKED,
    Outcome.SPIKE_DUG: ResultCategory.OTHER,
    Outcome.ATTACK_DUG: ResultCategory.OTHER,
    Outcome.DIG_OUT: ResultCategory.OTHER,
    Outcome.SET_OVER: ResultCategory.OTHER,
    Outcome.SERVICE_RETURNED: ResultCategory.OTHER,
}

KILL_OUTCOMES = frozenset({Outcome.ACE, Outcome.KILL, Outcome.BLOCK_KILL, Outcome.ATTACK_KILL})

SUCCESS_OUTCOMES = frozenset({
    Outcome.ACE,
    Outcome.KILL,
    Outcome.BLOCK_KILL,
    Outcome.ATTACK_KILL,
    Outcome.SERVICE_POINT,
    Outcome.DIG_SUCCESS,
    Outcome.SET_ASSIST,
})

CATEGORY_COLORS: Dict[ResultCategory, str] = {
    ResultCategory.SUCCESS: "#52C41A",
    ResultCategory.ERROR: "#FF4D4F",
    ResultCategory.BLOCKED: "#FAAD14",
    ResultCategory.OTHER: "#4169E1",
}

NEUTRAL_COLOR = "#7F8C8D"

# Returned serves are drawn grey rather than with the "other" color.
_COLOR_OVERRIDES: Dict[Outcome, str] = {Outcome.SERVICE_RETURNED: NEUTRAL_COLOR}

_OUTCOME_SHOT_TYPES: Dict[Outcome, ShotType] = {
    outcome: shot_type
    for shot_type, outcomes in SHOT_TYPE_OUTCOMES.items()
    for outcome in outcomes
}


def _as_outcome(outcome: OutcomeLike) -> Optional[Outcome]:
    if isinstance(outcome, Outcome):
        return outcome
    try:
        return Outcome(outcome)
    except ValueError:
        return None


def _outcome_text(outcome: OutcomeLike) -> str:
    parsed = _as_outcome(outcome)
    return parsed.value if parsed is not None else str(outcome)


def parse_shot_type(shot_type: Union[ShotType, str]) -> ShotType:
    """Coerce a shot type, raising ``InvalidShotType`` for unknown values."""
    if isinstance(shot_type, ShotType):
        return shot_type
    try:
        return ShotType(shot_type)
    except ValueError:
        raise InvalidShotType(
            f"Unknown shot type: {shot_type!r}",
            context={"shot_type": shot_type, "expected": [t.value for t in ShotType]},
        ) from None


def legal_outcomes(shot_type: Union[ShotType, str]) -> Tuple[Outcome, ...]:
    """Ordered outcomes a shot of ``shot_type`` may carry."""
    return SHOT_TYPE_OUTCOMES[parse_shot_type(shot_type)]


def is_legal(shot_type: Union[ShotType, str], outcome: OutcomeLike) -> bool:
    return _as_outcome(outcome) in legal_outcomes(shot_type)


def shot_type_of(outcome: OutcomeLike) -> Optional[ShotType]:
    """The single shot type owning ``outcome``, or None when unknown."""
    parsed = _as_outcome(outcome)
    return _OUTCOME_SHOT_TYPES.get(parsed) if parsed is not None else None


def all_outcomes() -> Tuple[Outcome, ...]:
    return tuple(outcome for outcomes in SHOT_TYPE_OUTCOMES.values() for outcome in outcomes)


def category_of(outcome: OutcomeLike) -> ResultCategory:
    """Result category of ``outcome``; unrecognized values fall back to ``other``."""
    parsed = _as_outcome(outcome)
    if parsed is None:
        return ResultCategory.OTHER
    return OUTCOME_CATEGORIES.get(parsed, ResultCategory.OTHER)


def outcomes_in_category(category: Union[ResultCategory, str]) -> Tuple[Outcome, ...]:
    category = ResultCategory(category)
    return tuple(o for o in all_outcomes() if OUTCOME_CATEGORIES[o] is category)


def is_kill(outcome: OutcomeLike) -> bool:
    return _as_outcome(outcome) in KILL_OUTCOMES


def is_error(outcome: OutcomeLike) -> bool:
    """Substring rule: any outcome containing "error", plus ``block-miss``.

    Future ``*-error`` outcomes are picked up without editing the tables, but an
    identifier that merely contains the substring would be counted too.
    """
    text = _outcome_text(outcome)
    return "error" in text or text == Outcome.BLOCK_MISS.value


def is_success(outcome: OutcomeLike) -> bool:
    return _as_outcome(outcome) in SUCCESS_OUTCOMES


def outcome_label(outcome: OutcomeLike) -> str:
    """Display label ("spike-error" -> "Spike Error"); unknown strings pass through."""
    parsed = _as_outcome(outcome)
    if parsed is None:
        return _outcome_text(outcome)
    return " ".join(word.capitalize() for word in parsed.value.split("-"))


def shot_type_label(shot_type: Union[ShotType, str]) -> str:
    return parse_shot_type(shot_type).value.capitalize()


def outcome_color(outcome: OutcomeLike) -> str:
    """Marker color for ``outcome``."""
    parsed = _as_outcome(outcome)
    if parsed is None:
        return NEUTRAL_COLOR
    if parsed in _COLOR_OVERRIDES:
        return _COLOR_OVERRIDES[parsed]
    return CATEGORY_COLORS[OUTCOME_CATEGORIES[parsed]]
