"""Snapshot persistence adapters."""

from .base import GameSnapshot, PersistenceAdapter, RemoteSnapshot, RemoteUpdates
from .memory import InMemorySnapshotStore
from .snapshots import SqliteSnapshotStore

__all__ = [
    "GameSnapshot",
    "InMemorySnapshotStore",
    "PersistenceAdapter",
    "RemoteSnapshot",
    "RemoteUpdates",
    "SqliteSnapshotStore",
]
