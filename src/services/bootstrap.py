"""Wire the layers together for a host process (web server, desktop shell, ...)."""

from typing import Optional

from sqlalchemy.orm import Session

from src.core.config import AppConfig, load_config
from src.core.logging import get_logger, setup_logging
from src.db.database import create_session_factory
from src.db.sql_repository import SQLSnapshotRepository
from src.services.chess_service import ChessService
from src.services.scheduler import ThreadingMoveScheduler


def build_service(
    config: Optional[AppConfig] = None, db_session: Optional[Session] = None
) -> ChessService:
    """Logging, database, scheduler and service, configured from the environment unless a config is given."""
    config = config or load_config()
    setup_logging(config.log_level)

    if db_session is None:
        db_session = create_session_factory(config.database_url)()

    service = ChessService(
        SQLSnapshotRepository(db_session),
        scheduler=ThreadingMoveScheduler(),
        config=config,
    )
    get_logger(__name__).info("chess service ready", database_url=config.database_url)
    return service
