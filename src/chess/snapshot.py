"""Recording of the board after a completed move. Append-only: a snapshot is never changed once created."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional, Self

from src.chess.board import Board
from src.chess.pieces import Piece
from src.core.models import SnapshotModel

FrozenGrid = tuple[tuple[Optional[Piece], ...], ...]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class GameHistorySnapshot:
    session_id: str
    grid: FrozenGrid
    player_id: str
    timestamp: datetime = field(default_factory=utc_now)

    @classmethod
    def capture(cls, session_id: str, board: Board, player_id: str) -> Self:
        """Freeze the current board. Later moves on `board` do not leak into the snapshot."""
        grid = tuple(tuple(row) for row in board.grid)
        return cls(session_id=session_id, grid=grid, player_id=player_id)

    @property
    def board(self) -> Board:
        """A fresh (mutable) board in the recorded position."""
        return Board([list(row) for row in self.grid])

    def to_model(self) -> SnapshotModel:
        """Encode into the format the Service / persistence layer uses"""
        return SnapshotModel(
            session_id=self.session_id,
            board=self.board.to_grid(),
            timestamp=self.timestamp.isoformat(),
            player_id=self.player_id,
        )

    @classmethod
    def from_model(cls, model: SnapshotModel) -> Self:
        board = Board.from_grid(model.board)
        return cls(
            session_id=model.session_id,
            grid=tuple(tuple(row) for row in board.grid),
            player_id=model.player_id,
            timestamp=datetime.fromisoformat(model.timestamp),
        )
