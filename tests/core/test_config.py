"""Unit tests for src/core/config.py and src/core/ids.py"""

import pytest

from src.core.config import AppConfig, load_config
from src.core.ids import generate_id


def test_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    for key in ["DATABASE_URL", "LOG_LEVEL", "TIME_CONTROL_SECONDS", "AUTOMATED_MOVE_DELAY"]:
        monkeypatch.delenv(f"CHESS_{key}", raising=False)
    assert load_config() == AppConfig()


def test_read_from_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CHESS_DATABASE_URL", "sqlite:///:memory:")
    monkeypatch.setenv("CHESS_LOG_LEVEL", "DEBUG")
    monkeypatch.setenv("CHESS_TIME_CONTROL_SECONDS", "300")
    monkeypatch.setenv("CHESS_AUTOMATED_MOVE_DELAY", "0.25")

    config = load_config()
    assert config.database_url == "sqlite:///:memory:"
    assert config.log_level == "DEBUG"
    assert config.time_control_seconds == 300
    assert config.automated_move_delay == 0.25


def test_unparsable_numbers_fall_back(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CHESS_TIME_CONTROL_SECONDS", "ten minutes")
    monkeypatch.setenv("CHESS_AUTOMATED_MOVE_DELAY", "soon")
    config = load_config()
    assert config.time_control_seconds == 600
    assert config.automated_move_delay == 1.0


def test_generated_ids_are_unique() -> None:
    ids = {generate_id() for _ in range(1000)}
    assert len(ids) == 1000
    assert all(i.startswith("CHESS_") for i in ids)
