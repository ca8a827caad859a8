"""
Geometry/Base movement and capturing rules

Key idea: Use strategy pattern to define the movement rule for each piece type.

`is_legal()` is a pure function of the board and the move: no state, no exceptions.
An illegal move is a normal `False`, never an error.
"""

from dataclasses import dataclass
from typing import Callable, Optional, Protocol, Self

from src.chess.pieces import Color, Piece, PieceType
from src.chess.square import Square, all_squares


class Board(Protocol):
    """Just the parts the movement rules need"""

    def piece(self, square: Square) -> Optional[Piece]: ...
    def is_empty(self, square: Square) -> bool: ...


Vector = tuple[int, int]

# White pawns move up the board (towards row 0), Black pawns move down.
PAWN_DIRECTION: dict[Color, int] = {Color.WHITE: -1, Color.BLACK: 1}
PAWN_STARTING_ROW: dict[Color, int] = {Color.WHITE: 6, Color.BLACK: 1}


@dataclass(frozen=True)
class Move:
    """basic definition of a move to be made"""

    from_square: Square
    to_square: Square

    @classmethod
    def from_uci(cls, uci: str) -> Self:
        """
        Universal Chess Interface style: <from_square><to_square>

        examples:
        * "e2e4": move the piece that was on e2 to e4
        * "g8f6": (knight) moves from g8 to f6
        """
        from_sq = Square.from_algebraic(uci[:2])
        to_sq = Square.from_algebraic(uci[2:4])
        return cls(from_sq, to_sq)

    def to_uci(self) -> str:
        """Convert into UCI notation"""
        return f"{self.from_square.to_algebraic()}{self.to_square.to_algebraic()}"


def unit_direction(from_square: Square, to_square: Square) -> Vector:
    """Step of (-1, 0 or 1) along rows and columns pointing from one square towards the other."""

    def _sign(delta: int) -> int:
        return (delta > 0) - (delta < 0)

    return (
        _sign(to_square.row - from_square.row),
        _sign(to_square.col - from_square.col),
    )


def is_path_clear(board: Board, from_square: Square, to_square: Square) -> bool:
    """
    Line of sight for the sliding pieces (rook, bishop, queen).
    ---

    Walk one square at a time from `from_square` towards `to_square`.
    Any occupied square in between blocks the path. The end points themselves are not checked.

    Squares that do not share a row, column or diagonal have no path between them: False.
    """
    row_diff = abs(to_square.row - from_square.row)
    col_diff = abs(to_square.col - from_square.col)
    if not (row_diff == 0 or col_diff == 0 or row_diff == col_diff):
        return False

    d_row, d_col = unit_direction(from_square, to_square)
    square = from_square.offset(d_row, d_col)
    while square != to_square:
        if not board.is_empty(square):
            return False
        square = square.offset(d_row, d_col)
    return True


# --- MOVEMENT RULES ---
def pawn_rule(board: Board, piece: Piece, from_square: Square, to_square: Square) -> bool:
    """
    A pawn:
    - moves a single square forward onto an empty square
    - can move two squares forward from its starting row, if both squares are empty
    - takes diagonally (one square forward, one file sideways), but only when capturing

    NOTE: En passant and promotion are not part of this game.
    """
    direction = PAWN_DIRECTION[piece.color]
    row_step = to_square.row - from_square.row
    col_diff = abs(to_square.col - from_square.col)
    target = board.piece(to_square)

    if col_diff == 0:
        # pawns never capture straight ahead
        if target is not None:
            return False
        if row_step == direction:
            return True
        if row_step == 2 * direction and from_square.row == PAWN_STARTING_ROW[piece.color]:
            return board.is_empty(from_square.offset(direction, 0))
        return False

    is_capture = target is not None and target.color != piece.color
    return row_step == direction and col_diff == 1 and is_capture


def rook_rule(board: Board, piece: Piece, from_square: Square, to_square: Square) -> bool:
    """Rooks move either horizontally or vertically"""
    on_same_line = (from_square.row == to_square.row) or (from_square.col == to_square.col)
    return on_same_line and is_path_clear(board, from_square, to_square)


def knight_rule(board: Board, piece: Piece, from_square: Square, to_square: Square) -> bool:
    """Knights jump: (2, 1) or (1, 2). Nothing in between can block them."""
    row_diff = abs(to_square.row - from_square.row)
    col_diff = abs(to_square.col - from_square.col)
    return (row_diff, col_diff) in [(2, 1), (1, 2)]


def bishop_rule(board: Board, piece: Piece, from_square: Square, to_square: Square) -> bool:
    """Bishops move diagonally: |delta_row| = |delta_col|"""
    row_diff = abs(to_square.row - from_square.row)
    col_diff = abs(to_square.col - from_square.col)
    return row_diff == col_diff and row_diff > 0 and is_path_clear(board, from_square, to_square)


def queen_rule(board: Board, piece: Piece, from_square: Square, to_square: Square) -> bool:
    """
    The Queen combines the rook moves (horizontal + vertical movements) and bishop moves (diagonal movement)
    """
    return rook_rule(board, piece, from_square, to_square) or bishop_rule(
        board, piece, from_square, to_square
    )


def king_rule(board: Board, piece: Piece, from_square: Square, to_square: Square) -> bool:
    """The king can move by a single square at the time."""
    row_diff = abs(to_square.row - from_square.row)
    col_diff = abs(to_square.col - from_square.col)
    return row_diff <= 1 and col_diff <= 1


# -- STRATEGY PATTERN: MOVEMENT RULES ---
MovementRuleFn = Callable[[Board, Piece, Square, Square], bool]
MOVEMENT_RULES: dict[PieceType, MovementRuleFn] = {
    PieceType.PAWN: pawn_rule,
    PieceType.KNIGHT: knight_rule,
    PieceType.BISHOP: bishop_rule,
    PieceType.ROOK: rook_rule,
    PieceType.QUEEN: queen_rule,
    PieceType.KING: king_rule,
}


def is_legal(
    board: Board, active_color: Color, from_square: Square, to_square: Square
) -> bool:
    """
    Can the player with the `active_color` pieces move the piece on `from_square` to `to_square`?
    ----

    1. Both squares must be on the board, and `from_square` must hold one of your own pieces.
    2. Standing still is not a move (this includes the king).
    3. You cannot capture your own piece.
    4. The movement rule of the piece type decides the rest.
    """
    if not (from_square.is_within_bounds() and to_square.is_within_bounds()):
        return False

    piece = board.piece(from_square)
    if piece is None or piece.color != active_color:
        return False

    if from_square == to_square:
        return False

    target = board.piece(to_square)
    if target is not None and target.color == active_color:
        return False

    movement_rule = MOVEMENT_RULES.get(piece.type)
    if movement_rule is None:
        return False
    return movement_rule(board, piece, from_square, to_square)


def legal_destinations(
    board: Board, active_color: Color, from_square: Square
) -> list[Square]:
    """All squares the piece on `from_square` may move to. Used to highlight options to the player."""
    return [
        to_square
        for to_square in all_squares()
        if is_legal(board, active_color, from_square, to_square)
    ]
