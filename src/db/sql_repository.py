"""Implementation of (Snapshot)Repository using SQLAlchemy"""

from typing import Optional

from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from src.core.exceptions import RepositoryError
from src.core.logging import get_logger
from src.core.models import SnapshotModel
from src.db.schema import DBSnapshot

logger = get_logger(__name__)


class SQLSnapshotRepository:
    """Data stored using SQL / methods implemented using SQLAlchemy"""

    def __init__(self, db_session: Session) -> None:
        self.db = db_session

    def append_snapshot(self, snapshot: SnapshotModel) -> SnapshotModel:
        """Store a new snapshot and return the stored data."""
        snapshot_db = DBSnapshot(
            session_id=snapshot.session_id,
            player_id=snapshot.player_id,
            board=snapshot.board,
            timestamp=snapshot.timestamp,
        )
        try:
            self.db.add(snapshot_db)
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            raise RepositoryError(
                f"Could not store snapshot of session {snapshot.session_id!r}."
            ) from e
        self.db.refresh(snapshot_db)
        logger.debug(
            "snapshot stored", session_id=snapshot.session_id, record_id=snapshot_db.id
        )
        return self._to_model(snapshot_db)

    def latest_snapshot(self, player_id: str) -> SnapshotModel | None:
        """Most recently stored snapshot of this player, if any."""
        query = (
            select(DBSnapshot)
            .where(DBSnapshot.player_id == player_id)
            .order_by(DBSnapshot.id.desc())
            .limit(1)
        )
        snapshot_db = self.db.scalar(query)
        if snapshot_db:
            return self._to_model(snapshot_db)
        return None

    def list_snapshots(self, player_id: Optional[str] = None) -> list[SnapshotModel]:
        """All snapshots (of one player, or of everyone), oldest first."""
        query = select(DBSnapshot).order_by(DBSnapshot.id)
        if player_id is not None:
            query = query.where(DBSnapshot.player_id == player_id)
        return [self._to_model(snapshot_db) for snapshot_db in self.db.scalars(query)]

    def clear_history(self, player_id: str) -> int:
        """Remove a player's snapshots. Returns the number of records removed."""
        query = delete(DBSnapshot).where(DBSnapshot.player_id == player_id)
        result = self.db.execute(query)
        self.db.commit()
        return result.rowcount

    def _to_model(self, snapshot_db: DBSnapshot) -> SnapshotModel:
        """Convert SQLAlchemy model to data transfer model."""
        return SnapshotModel(
            session_id=snapshot_db.session_id,
            board=snapshot_db.board,
            timestamp=snapshot_db.timestamp,
            player_id=snapshot_db.player_id,
        )
