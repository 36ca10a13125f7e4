"""Helpers for implementing Castling rules: where the king and rook start from / end up in."""

from dataclasses import dataclass
from typing import Self

from src.clone_chess.square import BOARD_DIMENSIONS, Square

# The king always travels two squares when castling
KING_CASTLING_DISTANCE = 2


@dataclass(frozen=True)
class CastlingSquares:
    """
    Store the squares where king/rook start from/end up in by castling towards one side of the board.
    NOTE: Nothing here checks the board. Whether the rook is really there (and unmoved) is up to the RulesEngine.
    """

    king_from: Square
    king_to: Square
    rook_from: Square
    rook_to: Square
    direction: int

    @classmethod
    def for_king(cls, king_square: Square, target: Square) -> Self:
        """
        Castling towards the target's side: towards column 9 if the target lies to the right of the king,
        towards column 0 otherwise. The rook ends up right next to the king, on the side the king came from.
        """
        direction = 1 if target.column > king_square.column else -1
        rook_column = BOARD_DIMENSIONS[1] - 1 if direction > 0 else 0
        king_to = king_square.offset(0, KING_CASTLING_DISTANCE * direction)
        return cls(
            king_from=king_square,
            king_to=king_to,
            rook_from=Square(king_square.row, rook_column),
            rook_to=king_to.offset(0, -direction),
            direction=direction,
        )

    def between(self) -> list[Square]:
        """Squares strictly in between the king and the rook. These must all be empty."""
        return [
            Square(self.king_from.row, column)
            for column in range(
                self.king_from.column + self.direction,
                self.rook_from.column,
                self.direction,
            )
        ]

    def king_path(self) -> list[Square]:
        """The squares the king passes through (landing square included). None of them may be attacked."""
        return [
            self.king_from.offset(0, step * self.direction)
            for step in range(1, KING_CASTLING_DISTANCE + 1)
        ]
