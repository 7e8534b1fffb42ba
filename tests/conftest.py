"""Test configuration and fixtures for the volleyball tracker test suite."""

import os
import sys
import pathlib

# Force test-safe defaults before any other imports
os.environ.setdefault('ENV', 'TEST')
os.environ.setdefault('DB_URI', 'sqlite:///:memory:')
os.environ.setdefault('LOG_LEVEL', 'WARNING')
os.environ.pop('SESSION_ID', None)

# Ensure tests can import from src/
ROOT = pathlib.Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

import pytest

from volley_tracker.models.enums import Outcome, Roster, ShotType
from volley_tracker.persistence.memory import InMemorySnapshotStore
from volley_tracker.session import TrackerSession
from volley_tracker.store import ShotRecordStore


@pytest.fixture
def store():
    """Empty shot record store."""
    return ShotRecordStore()


@pytest.fixture
def scenario_store(store):
    """Player #4 with three set-1 shots and one set-2 ace."""
    player = store.add_player(Roster.HOME, 4, "Alex")
    store.record_shot(player.id, ShotType.SPIKE, Outcome.KILL, (50, 60), 1)
    store.record_shot(player.id, ShotType.SPIKE, Outcome.SPIKE_ERROR, (70, 80), 1)
    store.record_shot(player.id, ShotType.SPIKE, Outcome.SPIKE_DUG, (90, 100), 1)
    store.record_shot(player.id, ShotType.SERVE, Outcome.ACE, (100, 250), 2)
    return store


@pytest.fixture
def local_store():
    return InMemorySnapshotStore()


@pytest.fixture
def remote_store():
    return InMemorySnapshotStore()


@pytest.fixture
def session(local_store, remote_store):
    """Session with in-memory local and remote adapters and a fixed game id."""
    return TrackerSession(game_id="123456", local=local_store, remote=remote_store)
