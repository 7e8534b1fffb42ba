"""Dict-backed snapshot store, used in tests and as a stand-in remote."""

from datetime import UTC, datetime
from typing import Any, Callable, Dict, List, Optional

from ..tracker_logging import get_logger
from .base import GameSnapshot, RemoteSnapshot, SnapshotCallback

logger = get_logger(__name__)


class InMemorySnapshotStore:
    """Keeps serialized snapshot documents per session id.

    Documents are stored in their serialized form so that every load goes
    through the same validation as a real backend.
    """

    def __init__(self):
        self._documents: Dict[str, Dict[str, Any]] = {}
        self._subscribers: Dict[str, List[SnapshotCallback]] = {}
        self.save_count = 0

    def load(self, session_id: str) -> Optional[GameSnapshot]:
        document = self._documents.get(session_id)
        if document is None:
            return None
        return GameSnapshot.from_document(document)

    def save(self, session_id: str, snapshot: GameSnapshot) -> None:
        stamped = snapshot.model_copy(update={"last_updated": datetime.now(UTC)})
        self._documents[session_id] = stamped.to_document()
        self.save_count += 1
        logger.debug("Snapshot stored in memory", session_id=session_id)

    def on_remote_update(self, session_id: str, callback: SnapshotCallback) -> Callable[[], None]:
        self._subscribers.setdefault(session_id, []).append(callback)

        def unsubscribe() -> None:
            callbacks = self._subscribers.get(session_id, [])
            if callback in callbacks:
                callbacks.remove(callback)

        return unsubscribe

    def push(self, session_id: str, document: Dict[str, Any]) -> int:
        """Simulate a write from another device: store it and notify subscribers.

        Returns the number of subscribers notified.
        """
        self._documents[session_id] = dict(document)
        message = RemoteSnapshot.model_validate(document)
        callbacks = list(self._subscribers.get(session_id, []))
        for callback in callbacks:
            callback(message)
        return len(callbacks)

    def document(self, session_id: str) -> Optional[Dict[str, Any]]:
        return self._documents.get(session_id)
