"""The Game board: dumb storage of the `position` (which piece stands where). No rules are checked here."""

from dataclasses import dataclass
from typing import Optional, Self

from src.chess.moves import Move
from src.chess.pieces import Color, Piece, PieceType
from src.chess.square import BOARD_DIMENSIONS, Square, all_squares
from src.core.models import BoardGrid

Grid = list[list[Optional[Piece]]]

BACK_RANK: tuple[PieceType, ...] = (
    PieceType.ROOK,
    PieceType.KNIGHT,
    PieceType.BISHOP,
    PieceType.QUEEN,
    PieceType.KING,
    PieceType.BISHOP,
    PieceType.KNIGHT,
    PieceType.ROOK,
)

STARTING_POSITION_FEN = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR"


def _empty_grid() -> Grid:
    return [[None] * BOARD_DIMENSIONS[1] for _ in range(BOARD_DIMENSIONS[0])]


@dataclass
class Board:
    grid: Grid

    @classmethod
    def empty(cls) -> Self:
        return cls(_empty_grid())

    @classmethod
    def initial(cls) -> Self:
        """Standard starting layout: Black on rows 0-1, White on rows 6-7."""
        board = cls.empty()
        last_row = BOARD_DIMENSIONS[0] - 1
        for col, piece_type in enumerate(BACK_RANK):
            board.place(Square(0, col), Piece(piece_type, Color.BLACK))
            board.place(Square(1, col), Piece(PieceType.PAWN, Color.BLACK))
            board.place(Square(last_row - 1, col), Piece(PieceType.PAWN, Color.WHITE))
            board.place(Square(last_row, col), Piece(piece_type, Color.WHITE))
        return board

    @classmethod
    def from_fen(cls, fen_str: str) -> Self:
        """Construct a board using the piece placement part of a FEN string.

        ex. standard starting position:
        rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR
        means:
        * the first group is row 0 (black's back rank), read from the a-file to the h-file
        * a number denotes that many consecutive empty squares
        * capital letters are the white pieces
        """
        board = cls.empty()
        for row, fen_one_row in enumerate(fen_str.split("/")):
            col = 0
            for character in fen_one_row:
                if character.isalpha():
                    board.place(Square(row, col), Piece.from_fen(character))
                    col += 1
                else:
                    col += int(character)
        return board

    def to_fen(self) -> str:
        """Rows are separated by slashes in FEN string."""
        return "/".join(self._row_to_fen(row) for row in self.grid)

    @staticmethod
    def _row_to_fen(row: list[Optional[Piece]]) -> str:
        fen_characters: list[str] = []
        empty_count = 0
        for piece in row:
            if piece is None:
                empty_count += 1
                continue
            if empty_count > 0:
                fen_characters.append(str(empty_count))
                empty_count = 0
            fen_characters.append(piece.to_fen())

        # if the entire row is empty, then we still place this number in the string
        if empty_count > 0:
            fen_characters.append(str(empty_count))
        return "".join(fen_characters)

    @classmethod
    def from_grid(cls, grid: BoardGrid) -> Self:
        """Rebuild from the transport format: 8x8 of {"type", "color"} or None."""
        return cls(
            [
                [Piece.from_dict(cell) if cell is not None else None for cell in row]
                for row in grid
            ]
        )

    def to_grid(self) -> BoardGrid:
        return [
            [piece.to_dict() if piece is not None else None for piece in row]
            for row in self.grid
        ]

    def piece(self, square: Square) -> Optional[Piece]:
        """Bounds-checked lookup: anything off the board is simply empty."""
        if not square.is_within_bounds():
            return None
        return self.grid[square.row][square.col]

    def is_empty(self, square: Square) -> bool:
        return self.piece(square) is None

    def place(self, square: Square, piece: Optional[Piece]) -> None:
        self.grid[square.row][square.col] = piece

    def move_piece(self, move: Move) -> None:
        """Update the position on the board"""
        piece_that_moved = self.piece(move.from_square)
        self.place(move.from_square, None)
        self.place(move.to_square, piece_that_moved)

    def move_pieces(self, moves: list[Move]) -> None:
        """convenience method to apply multiple moves (if you quickly want to start a board in a given position reached after some moves)"""
        for move in moves:
            self.move_piece(move)

    def locate_color(self, color: Color) -> list[Square]:
        return [
            square
            for square in all_squares()
            if (piece := self.piece(square)) is not None and piece.color == color
        ]

    def copy(self) -> Self:
        # Pieces are immutable, copying the rows is enough
        return type(self)([list(row) for row in self.grid])
