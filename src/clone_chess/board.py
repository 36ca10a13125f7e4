"""The Game board owns the pieces and knows where each of them stands. No rules are implemented here."""

import logging
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Iterator, Optional, Self

from src.clone_chess.pieces import Piece, PieceKind, Side
from src.clone_chess.square import BOARD_DIMENSIONS, Square
from src.core.exceptions import BoardInvariantError

logger = logging.getLogger(__name__)

Grid = list[list[Optional[Piece]]]

# Back rank, in column order. Both sides use the same order (kings on column 5).
BACK_RANK: tuple[PieceKind, ...] = (
    PieceKind.ROOK,
    PieceKind.KNIGHT,
    PieceKind.CLONE,
    PieceKind.BISHOP,
    PieceKind.QUEEN,
    PieceKind.KING,
    PieceKind.BISHOP,
    PieceKind.CLONE,
    PieceKind.KNIGHT,
    PieceKind.ROOK,
)

STARTING_ROWS: dict[Side, tuple[int, int]] = {
    # (back rank row, pawn row)
    Side.WHITE: (0, 1),
    Side.BLACK: (9, 8),
}

EMPTY_SYMBOL = "."


def _empty_grid() -> Grid:
    return [[None] * BOARD_DIMENSIONS[1] for _ in range(BOARD_DIMENSIONS[0])]


@dataclass
class Board:
    grid: Grid

    @classmethod
    def empty(cls) -> Self:
        return cls(_empty_grid())

    @classmethod
    def starting_position(cls) -> Self:
        """
        Pawns on rows 1 (White) and 8 (Black), the other pieces behind them on rows 0 and 9.
        Every piece starts with has_moved = False.
        """
        board = cls.empty()
        for side, (back_row, pawn_row) in STARTING_ROWS.items():
            for column, kind in enumerate(BACK_RANK):
                square = Square(back_row, column)
                board.place_piece(Piece(kind, side, square), square)
            for column in range(BOARD_DIMENSIONS[1]):
                square = Square(pawn_row, column)
                board.place_piece(Piece(PieceKind.PAWN, side, square), square)
        return board

    @classmethod
    def from_diagram(cls, diagram: str) -> Self:
        """Construct a board from a text diagram.

        One line per row, the top line is row 9 and the bottom line is row 0 (White's side).
        Inside a line the first character is column 0. Spaces are ignored.
        ex) a white king on (0, 5) and a black rook on (9, 0):

            r.........
            ..........
            (7 more empty rows)
            .....K....

        '.' is an empty square, k q r b n c p denote the piece kinds (c = Clone). Upper case for White.
        """
        lines = [line.replace(" ", "") for line in diagram.strip().splitlines()]
        lines = [line for line in lines if line]
        if len(lines) != BOARD_DIMENSIONS[0]:
            raise ValueError(
                f"Diagram must have {BOARD_DIMENSIONS[0]} rows, got {len(lines)}."
            )

        board = cls.empty()
        for line_idx, line in enumerate(lines):
            # diagram is read from the top row down
            row = BOARD_DIMENSIONS[0] - 1 - line_idx
            if len(line) != BOARD_DIMENSIONS[1]:
                raise ValueError(
                    f"Row {row} must have {BOARD_DIMENSIONS[1]} squares, got {line!r}."
                )
            for column, character in enumerate(line):
                if character == EMPTY_SYMBOL:
                    continue
                square = Square(row, column)
                board.place_piece(Piece.from_symbol(character, square), square)
        return board

    def to_diagram(self) -> str:
        """Inverse of from_diagram. Handy in debug logs."""
        return "\n".join(
            "".join(
                piece.to_symbol() if piece else EMPTY_SYMBOL
                for piece in self.grid[row]
            )
            for row in range(BOARD_DIMENSIONS[0] - 1, -1, -1)
        )

    # -- QUERIES --
    def piece(self, square: Square) -> Optional[Piece]:
        return self.grid[square.row][square.column]

    def is_empty(self, square: Square) -> bool:
        return self.piece(square) is None

    def pieces(self, side: Optional[Side] = None) -> list[Piece]:
        """All pieces on the board (row by row), optionally only those of one side."""
        return [
            piece
            for row in self.grid
            for piece in row
            if piece is not None and (side is None or piece.side == side)
        ]

    def find_king(self, side: Side) -> Piece:
        """
        Every side has exactly one king, and it never leaves the board.
        Not finding it means the board is corrupt: never fall back to some default square.
        """
        for piece in self.pieces(side):
            if piece.is_king():
                return piece
        logger.error("No %s king on the board:\n%s", side.name, self.to_diagram())
        raise BoardInvariantError(f"No king of side {side.name} found on the board.")

    # -- UPDATES --
    def place_piece(self, piece: Piece, square: Square) -> None:
        """Put a piece on a square (overwrites whatever stood there)"""
        self.grid[square.row][square.column] = piece
        piece.position = square

    def remove_piece(self, square: Square) -> Optional[Piece]:
        piece = self.piece(square)
        self.grid[square.row][square.column] = None
        return piece

    def relocate(self, piece: Piece, target: Square) -> Optional[Piece]:
        """Move the piece for real. Returns the piece that got overwritten on the target square (if any)."""
        self._assert_resident(piece)
        taken = self.piece(target)
        self.grid[piece.position.row][piece.position.column] = None
        self.place_piece(piece, target)
        return taken

    @contextmanager
    def simulate_move(self, piece: Piece, target: Square) -> Iterator[Optional[Piece]]:
        """
        Provisionally move the piece to the target, yield the piece standing on the target (if any),
        and put both slots + the piece's position back on exit.

        The board is only inconsistent with respect to the real game inside the with-block.
        """
        self._assert_resident(piece)
        origin = piece.position
        taken = self.piece(target)

        self.grid[origin.row][origin.column] = None
        self.grid[target.row][target.column] = piece
        piece.position = target
        try:
            yield taken
        finally:
            self.grid[target.row][target.column] = taken
            self.grid[origin.row][origin.column] = piece
            piece.position = origin

    def _assert_resident(self, piece: Piece) -> None:
        """A piece's position must match the slot holding it."""
        if self.piece(piece.position) is not piece:
            raise BoardInvariantError(
                f"{piece.side.name} {piece.kind.name} claims {piece.position} but is not on that square."
            )
