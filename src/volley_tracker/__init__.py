"""Volleyball shot tracker.

Records shot events tapped on a court diagram, filters them by set, player
and result category, and rolls them up into player and team statistics.
"""

from .version import __version__, __author__, __email__
from .config import AppSettings, get_settings
from .errors import (
    DuplicateNumber,
    InvalidInput,
    InvalidOutcome,
    InvalidShotType,
    NotFound,
    TrackerError,
    UnknownPlayer,
)
from .filters import FilterState, visible_shots
from .session import TrackerSession
from .store import ShotRecordStore

from . import models, persistence, transformers

__all__ = [
    "__version__",
    "__author__",
    "__email__",
    "AppSettings",
    "get_settings",
    "TrackerError",
    "InvalidInput",
    "DuplicateNumber",
    "UnknownPlayer",
    "InvalidOutcome",
    "InvalidShotType",
    "NotFound",
    "FilterState",
    "visible_shots",
    "ShotRecordStore",
    "TrackerSession",
    # Key subpackages
    "models",
    "persistence",
    "transformers",
]
