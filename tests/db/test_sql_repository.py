"""Unit tests for src/db/sql_repository.py"""

from sqlalchemy.orm import Session

from src.chess.board import Board
from src.chess.moves import Move
from src.db.sql_repository import SnapshotModel, SQLSnapshotRepository


def make_snapshot(
    session_id: str = "CHESS_game",
    player_id: str = "CHESS_player",
    timestamp: str = "2024-03-01T12:30:00+00:00",
    board: Board | None = None,
) -> SnapshotModel:
    return SnapshotModel(
        session_id=session_id,
        board=(board or Board.initial()).to_grid(),
        timestamp=timestamp,
        player_id=player_id,
    )


def test_append_snapshot(db_session_repo: Session) -> None:
    """Conversion from a SnapshotModel to DBSnapshot for a new entry to the database."""
    model = make_snapshot()
    repo = SQLSnapshotRepository(db_session_repo)
    stored = repo.append_snapshot(model)
    assert isinstance(stored, SnapshotModel)
    assert stored == model


def test_board_survives_storage(db_session_repo: Session) -> None:
    """The JSON column gives back exactly the grid that went in (including the empty squares)"""
    board = Board.initial()
    board.move_piece(Move.from_uci("g1f3"))
    repo = SQLSnapshotRepository(db_session_repo)
    repo.append_snapshot(make_snapshot(board=board))

    latest = repo.latest_snapshot("CHESS_player")
    assert latest is not None
    assert Board.from_grid(latest.board) == board


def test_latest_snapshot(db_session_repo: Session) -> None:
    """Most recently appended wins"""
    repo = SQLSnapshotRepository(db_session_repo)
    repo.append_snapshot(make_snapshot(timestamp="2024-03-01T12:30:00+00:00"))
    repo.append_snapshot(make_snapshot(session_id="CHESS_second", timestamp="2024-03-01T12:31:00+00:00"))

    latest = repo.latest_snapshot("CHESS_player")
    assert latest is not None
    assert latest.session_id == "CHESS_second"


def test_latest_snapshot_is_per_player(db_session_repo: Session) -> None:
    repo = SQLSnapshotRepository(db_session_repo)
    repo.append_snapshot(make_snapshot(session_id="CHESS_mine"))
    repo.append_snapshot(make_snapshot(session_id="CHESS_theirs", player_id="CHESS_other"))

    latest = repo.latest_snapshot("CHESS_player")
    assert latest is not None
    assert latest.session_id == "CHESS_mine"


def test_latest_snapshot_unknown_player(db_session_repo: Session) -> None:
    """Should return None if nothing was recorded for the player"""
    repo = SQLSnapshotRepository(db_session_repo)
    assert repo.latest_snapshot("CHESS_nobody") is None

    repo.append_snapshot(make_snapshot())
    assert repo.latest_snapshot("CHESS_nobody") is None


def test_list_snapshots(db_session_repo: Session) -> None:
    """Oldest first, optionally filtered on player"""
    repo = SQLSnapshotRepository(db_session_repo)
    repo.append_snapshot(make_snapshot(session_id="CHESS_1"))
    repo.append_snapshot(make_snapshot(session_id="CHESS_2", player_id="CHESS_other"))
    repo.append_snapshot(make_snapshot(session_id="CHESS_3"))

    assert [s.session_id for s in repo.list_snapshots("CHESS_player")] == ["CHESS_1", "CHESS_3"]
    assert [s.session_id for s in repo.list_snapshots()] == ["CHESS_1", "CHESS_2", "CHESS_3"]
    assert repo.list_snapshots("CHESS_nobody") == []


def test_clear_history(db_session_repo: Session) -> None:
    repo = SQLSnapshotRepository(db_session_repo)
    repo.append_snapshot(make_snapshot())
    repo.append_snapshot(make_snapshot())
    repo.append_snapshot(make_snapshot(player_id="CHESS_other"))

    assert repo.clear_history("CHESS_player") == 2
    assert repo.latest_snapshot("CHESS_player") is None
    assert len(repo.list_snapshots()) == 1
