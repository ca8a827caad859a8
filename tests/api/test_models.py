"""Unit tests for src/api/models.py"""

import pytest

from src.api.models import (
    ClickRequest,
    CreateSessionRequest,
    LegalDestinationsRequest,
    MoveRequest,
)
from src.core.exceptions import InvalidRequestError


def test_create_session_defaults() -> None:
    request = CreateSessionRequest()
    assert not request.automated_opponent
    assert request.player_id is None


# -- Validation - MoveRequest --
def test_valid_square_names() -> None:
    """Test that MoveRequest accepts correctly written squares in algebraic notation."""
    request = MoveRequest(player_id="CHESS_player", from_square="e2", to_square="e4")
    assert request.from_square == "e2"
    assert request.to_square == "e4"


@pytest.mark.parametrize(
    "square",
    [
        "nonsense",  # anything more than two characters.
        "11",  # First character is not a letter
        "aa",  # second character is not a number
        "i4",  # off the board: files a-h
        "a9",  # off the board: ranks 1-8
        "a0",
        "",
    ],
)
def test_invalid_square(square: str) -> None:
    """Test that an exception is raised when using invalid square name."""
    with pytest.raises(InvalidRequestError):
        _ = MoveRequest(player_id="CHESS_player", from_square=square, to_square="e4")

    with pytest.raises(InvalidRequestError):
        _ = MoveRequest(player_id="CHESS_player", from_square="e2", to_square=square)

    with pytest.raises(InvalidRequestError):
        _ = ClickRequest(player_id="CHESS_player", square=square)


def test_click_request() -> None:
    request = ClickRequest(player_id="CHESS_player", square="h8")
    assert request.square == "h8"


def test_legal_destinations_square_is_optional() -> None:
    assert LegalDestinationsRequest(player_id="CHESS_player").square is None
    assert LegalDestinationsRequest(player_id="CHESS_player", square="b1").square == "b1"
    with pytest.raises(InvalidRequestError):
        _ = LegalDestinationsRequest(player_id="CHESS_player", square="z1")
