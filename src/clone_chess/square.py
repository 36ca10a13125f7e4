"""
A square on the board

(placed in its own module as multiple other modules need to import it)
"""

from __future__ import annotations

from dataclasses import dataclass

# The variant is played on a 10x10 board: (rows, columns)
BOARD_DIMENSIONS = (10, 10)


@dataclass(frozen=True)
class Square:
    row: int
    column: int

    def is_within_bounds(self) -> bool:
        return (0 <= self.row < BOARD_DIMENSIONS[0]) and (
            0 <= self.column < BOARD_DIMENSIONS[1]
        )

    def offset(self, d_row: int, d_column: int) -> Square:
        """The square reached by stepping (d_row, d_column) away. May be off the board."""
        return Square(self.row + d_row, self.column + d_column)


def all_squares() -> list[Square]:
    """Every square of the board, row by row (row 0 first)."""
    return [
        Square(row, column)
        for row in range(BOARD_DIMENSIONS[0])
        for column in range(BOARD_DIMENSIONS[1])
    ]
