"""Unit tests for src/db/database.py"""

from sqlalchemy import inspect
from sqlalchemy.orm import Session

from src.db.database import create_session_factory, get_db


def test_tables_are_created() -> None:
    session_factory = create_session_factory("sqlite:///:memory:")
    db = session_factory()
    try:
        assert "snapshots" in inspect(db.get_bind()).get_table_names()
    finally:
        db.close()


def test_get_db_yields_session() -> None:
    session_factory = create_session_factory("sqlite:///:memory:")
    generator = get_db(session_factory)
    db = next(generator)
    assert isinstance(db, Session)
    generator.close()
