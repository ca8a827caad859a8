"""Unit tests for src/services/bootstrap.py"""

from sqlalchemy.orm import Session

from src.api.models import CreateSessionRequest, MoveRequest, PlayerRequest
from src.core.config import AppConfig
from src.services.bootstrap import build_service
from src.services.scheduler import ThreadingMoveScheduler


def test_build_service(db_session_repo: Session) -> None:
    config = AppConfig(database_url="sqlite:///:memory:", time_control_seconds=60)
    service = build_service(config, db_session=db_session_repo)
    assert isinstance(service.scheduler, ThreadingMoveScheduler)

    created = service.create_session(CreateSessionRequest(player_id="CHESS_player"))
    assert created.time_remaining == "1:00"
    assert service.make_move(
        MoveRequest(player_id="CHESS_player", from_square="e2", to_square="e4")
    ).accepted
    assert len(service.list_history(PlayerRequest(player_id="CHESS_player"))) == 1


def test_build_service_creates_database() -> None:
    service = build_service(AppConfig(database_url="sqlite:///:memory:"))
    service.create_session(CreateSessionRequest(player_id="CHESS_player"))
    assert service.list_history(PlayerRequest(player_id="CHESS_player")) == []
