"""
Move selection for the automated opponent.

It simply picks any legal move, uniformly at random.
"""

import random
from typing import Optional, Protocol

from src.chess.moves import Board, Move, is_legal
from src.chess.pieces import Color
from src.chess.square import Square, all_squares


class BoardWithPieces(Board, Protocol):
    def locate_color(self, color: Color) -> list[Square]: ...


def legal_moves(board: BoardWithPieces, active_color: Color) -> list[Move]:
    """Every (own piece, any square) pair the validator accepts."""
    return [
        Move(from_square, to_square)
        for from_square in board.locate_color(active_color)
        for to_square in all_squares()
        if is_legal(board, active_color, from_square, to_square)
    ]


class RandomMoveSelector:
    """Pure given the board and color (apart from the random source, which can be seeded)."""

    def __init__(self, rng: Optional[random.Random] = None) -> None:
        self.rng = rng or random.Random()

    def select_move(
        self, board: BoardWithPieces, active_color: Color
    ) -> Optional[Move]:
        """
        NOTE no legal moves at all is not checkmate/stalemate for this game: the caller just does nothing.
        """
        candidates = legal_moves(board, active_color)
        if not candidates:
            return None
        return self.rng.choice(candidates)
