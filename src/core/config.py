"""Runtime configuration, read from environment variables"""

import os
from dataclasses import dataclass

ENV_PREFIX = "CHESS_"


@dataclass(frozen=True)
class AppConfig:
    database_url: str = "sqlite:///chess_history.db"
    log_level: str = "INFO"
    # the game clock: 10 minutes for the whole game
    time_control_seconds: int = 600
    # delay before the automated opponent answers a move
    automated_move_delay: float = 1.0


def load_config(prefix: str = ENV_PREFIX) -> AppConfig:
    """Load application configuration. Missing or unparsable values fall back to the defaults."""
    defaults = AppConfig()

    def _get_env(key: str) -> str | None:
        return os.getenv(f"{prefix}{key}")

    def _parse_int(raw: str | None, fallback: int) -> int:
        try:
            return int(raw) if raw is not None else fallback
        except ValueError:
            return fallback

    def _parse_float(raw: str | None, fallback: float) -> float:
        try:
            return float(raw) if raw is not None else fallback
        except ValueError:
            return fallback

    return AppConfig(
        database_url=_get_env("DATABASE_URL") or defaults.database_url,
        log_level=_get_env("LOG_LEVEL") or defaults.log_level,
        time_control_seconds=_parse_int(
            _get_env("TIME_CONTROL_SECONDS"), defaults.time_control_seconds
        ),
        automated_move_delay=_parse_float(
            _get_env("AUTOMATED_MOVE_DELAY"), defaults.automated_move_delay
        ),
    )
