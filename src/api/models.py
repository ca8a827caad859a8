"""Requests and Response models"""

from typing import Optional

from pydantic import BaseModel, field_validator

from src.chess.square import BOARD_DIMENSIONS
from src.core.exceptions import InvalidRequestError
from src.core.models import BoardGrid
from src.core.shared_types import Color


def _is_square_name(value: str) -> bool:
    """'a1' - 'h8'"""
    if len(value) != 2:
        return False

    file_character = value[0].lower()
    rank_character = value[1]
    if not (file_character.isalpha() and rank_character.isdecimal()):
        return False
    return (ord(file_character) - ord("a") < BOARD_DIMENSIONS[1]) and (
        1 <= int(rank_character) <= BOARD_DIMENSIONS[0]
    )


# --- REQUEST MODELS ---
class CreateSessionRequest(BaseModel):
    automated_opponent: bool = False
    player_id: Optional[str] = None


class PlayerRequest(BaseModel):
    """Any request that only needs to know whose session it is about (new game, load, history, clock tick)."""

    player_id: str


class ModeRequest(BaseModel):
    player_id: str
    automated_opponent: bool


class ClickRequest(BaseModel):
    player_id: str
    square: str

    @field_validator("square")
    @classmethod
    def validate_square(cls, value: str) -> str:
        if not _is_square_name(value):
            raise InvalidRequestError(
                f"Cannot interpret square: {value!r} as a valid square name."
            )
        return value


class MoveRequest(BaseModel):
    player_id: str
    from_square: str
    to_square: str

    @field_validator(*["from_square", "to_square"])
    @classmethod
    def validate_square(cls, value: str) -> str:
        if not _is_square_name(value):
            raise InvalidRequestError(
                f"Cannot interpret square: {value!r} as a valid square name."
            )
        return value


class LegalDestinationsRequest(BaseModel):
    player_id: str
    square: Optional[str] = None

    @field_validator("square")
    @classmethod
    def validate_square(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return value
        if not _is_square_name(value):
            raise InvalidRequestError(
                f"Cannot interpret square: {value!r} as a valid square name."
            )
        return value


# --- RESPONSE MODELS ---
class SessionResponse(BaseModel):
    session_id: str
    player_id: str
    active_color: Color
    board: BoardGrid
    selected_square: Optional[str]
    automated_opponent: bool
    time_remaining: str


class MoveResponse(BaseModel):
    accepted: bool
    session: SessionResponse


class LegalDestinationsResponse(BaseModel):
    player_id: str
    from_square: Optional[str]
    destinations: list[str]


class HistoryEntry(BaseModel):
    session_id: str
    timestamp: str
    player_id: str


class LoadResponse(BaseModel):
    found: bool
    session: SessionResponse


class ClearHistoryResponse(BaseModel):
    player_id: str
    deleted: int
