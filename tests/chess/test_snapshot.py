"""Unit tests for /src/chess/snapshot.py"""

from dataclasses import FrozenInstanceError
from datetime import datetime, timezone

import pytest

from src.chess.board import Board
from src.chess.moves import Move
from src.chess.snapshot import GameHistorySnapshot
from src.core.models import SnapshotModel


def test_capture_is_not_affected_by_later_moves() -> None:
    board = Board.initial()
    snapshot = GameHistorySnapshot.capture("CHESS_game", board, "CHESS_player")
    board.move_piece(Move.from_uci("e2e4"))
    assert snapshot.board == Board.initial()


def test_snapshot_board_copies_are_independent() -> None:
    snapshot = GameHistorySnapshot.capture("CHESS_game", Board.initial(), "CHESS_player")
    snapshot.board.move_piece(Move.from_uci("e2e4"))
    assert snapshot.board == Board.initial()


def test_snapshot_is_frozen() -> None:
    snapshot = GameHistorySnapshot.capture("CHESS_game", Board.initial(), "CHESS_player")
    with pytest.raises(FrozenInstanceError):
        snapshot.session_id = "other"  # type: ignore[misc]


def test_timestamp_is_utc() -> None:
    snapshot = GameHistorySnapshot.capture("CHESS_game", Board.initial(), "CHESS_player")
    assert snapshot.timestamp.tzinfo == timezone.utc


def test_to_model() -> None:
    board = Board.initial()
    board.move_piece(Move.from_uci("e2e4"))
    timestamp = datetime(2024, 3, 1, 12, 30, tzinfo=timezone.utc)
    snapshot = GameHistorySnapshot(
        session_id="CHESS_game",
        grid=tuple(tuple(row) for row in board.grid),
        player_id="CHESS_player",
        timestamp=timestamp,
    )

    model = snapshot.to_model()
    assert isinstance(model, SnapshotModel)
    assert model.session_id == "CHESS_game"
    assert model.player_id == "CHESS_player"
    assert model.timestamp == "2024-03-01T12:30:00+00:00"
    assert model.board[4][4] == {"type": "pawn", "color": "white"}
    assert model.board[6][4] is None


def test_from_model() -> None:
    model = SnapshotModel(
        session_id="CHESS_game",
        board=Board.initial().to_grid(),
        timestamp="2024-03-01T12:30:00+00:00",
        player_id="CHESS_player",
    )
    snapshot = GameHistorySnapshot.from_model(model)
    assert snapshot.board == Board.initial()
    assert snapshot.timestamp == datetime(2024, 3, 1, 12, 30, tzinfo=timezone.utc)
    assert snapshot.to_model() == model
