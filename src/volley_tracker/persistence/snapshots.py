"""Local snapshot store on SQLAlchemy Core (one row per game session)."""
from __future__ import annotations

from datetime import datetime, timezone
from typing import List, Optional, Tuple

from sqlalchemy import Column, DateTime, MetaData, String, Table, Text, create_engine, delete, insert, select, update
from sqlalchemy.engine import Engine

from ..config import get_settings
from ..tracker_logging import get_logger
from .base import GameSnapshot

logger = get_logger(__name__)

metadata = MetaData()
game_snapshots = Table(
    "game_snapshots", metadata,
    Column("session_id", String, primary_key=True),
    Column("document", Text, nullable=False),  # JSON snapshot with document keys
    Column("updated_at", DateTime, nullable=False),
)


class SqliteSnapshotStore:
    """Persist game snapshots in a SQL database (SQLite by default).

    Saving replaces the whole row: last writer wins.
    """

    def __init__(self, db_uri: Optional[str] = None, engine: Optional[Engine] = None):
        self.engine = engine if engine is not None else create_engine(db_uri or get_settings().DB_URI)
        self.ensure_tables()

    def ensure_tables(self) -> None:
        """Create the snapshot table if it doesn't exist (idempotent)."""
        metadata.create_all(self.engine, tables=[game_snapshots])

    def load(self, session_id: str) -> Optional[GameSnapshot]:
        with self.engine.connect() as conn:
            row = conn.execute(
                select(game_snapshots.c.document).where(game_snapshots.c.session_id == session_id)
            ).fetchone()
        if row is None:
            return None
        return GameSnapshot.model_validate_json(row[0])

    def save(self, session_id: str, snapshot: GameSnapshot) -> None:
        """Upsert the snapshot for ``session_id``."""
        now = datetime.now(timezone.utc)
        document = snapshot.model_copy(update={"last_updated": now}).model_dump_json(by_alias=True)
        with self.engine.begin() as conn:
            exists = conn.execute(
                select(game_snapshots.c.session_id).where(game_snapshots.c.session_id == session_id)
            ).fetchone()
            if exists is None:
                conn.execute(
                    insert(game_snapshots).values(session_id=session_id, document=document, updated_at=now)
                )
            else:
                conn.execute(
                    update(game_snapshots)
                    .where(game_snapshots.c.session_id == session_id)
                    .values(document=document, updated_at=now)
                )
        logger.debug("snapshot.saved", session_id=session_id, size=len(document))

    def list_sessions(self) -> List[Tuple[str, datetime]]:
        """Stored session ids with their last update time, newest first."""
        with self.engine.connect() as conn:
            rows = conn.execute(
                select(game_snapshots.c.session_id, game_snapshots.c.updated_at)
                .order_by(game_snapshots.c.updated_at.desc())
            ).fetchall()
        return [(row[0], row[1]) for row in rows]

    def delete(self, session_id: str) -> bool:
        with self.engine.begin() as conn:
            result = conn.execute(delete(game_snapshots).where(game_snapshots.c.session_id == session_id))
        return result.rowcount > 0
