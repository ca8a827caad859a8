"""Database tables / schema"""

from datetime import datetime, timezone
from typing import Any, Optional

from sqlalchemy import JSON
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    pass


class DBSnapshot(Base):
    """One row per completed move. Rows are only ever appended (and removed when a player clears their history)."""

    __tablename__ = "snapshots"
    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    session_id: Mapped[str] = mapped_column(index=True)
    player_id: Mapped[str] = mapped_column(index=True)
    # 8x8 grid of {"type": ..., "color": ...} or null
    board: Mapped[list[list[Optional[dict[str, Any]]]]] = mapped_column(JSON)
    timestamp: Mapped[str]
    created_at: Mapped[datetime] = mapped_column(default=utc_now)
