"""Protocol repository (can implement later for SQL Alchemy / simple JSON file etc.)"""

from typing import Optional, Protocol

from src.core.models import SnapshotModel


class SnapshotRepository(Protocol):
    """Persistence layer orchestration"""

    def append_snapshot(self, snapshot: SnapshotModel) -> SnapshotModel:
        """Store a new snapshot and return the stored data."""
        ...

    def latest_snapshot(self, player_id: str) -> SnapshotModel | None:
        """Most recently stored snapshot of this player, if any."""
        ...

    def list_snapshots(self, player_id: Optional[str] = None) -> list[SnapshotModel]:
        """All snapshots (of one player, or of everyone), oldest first."""
        ...

    def clear_history(self, player_id: str) -> int:
        """Remove a player's snapshots. Returns the number of records removed."""
        ...
