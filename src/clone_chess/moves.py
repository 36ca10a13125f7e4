"""
Geometry/Base movement rules

Key idea: Use strategy pattern to define the movement rule of each piece kind.
A rule only answers "can this piece reach the target, given how it moves and what is in its way?"

Bounds, same-side occupation, castling and check-safety are checked later by the RulesEngine.
"""

from typing import Callable, Protocol

from src.clone_chess.pieces import Piece, PieceKind, Side
from src.clone_chess.square import Square


class Board(Protocol):
    """Just the parts the movement strategies need"""

    def is_empty(self, square: Square) -> bool: ...


Vector = tuple[int, int]

# White moves UP the board (increasing row), Black moves DOWN.
PAWN_DIRECTIONS: dict[Side, int] = {
    Side.WHITE: 1,
    Side.BLACK: -1,
}

# Rows from which a pawn may advance two squares.
# NOTE: Black pawns start on row 8: they can only double step after two single steps brought them to row 6.
PAWN_HOME_ROWS: dict[Side, int] = {
    Side.WHITE: 1,
    Side.BLACK: 6,
}

KNIGHT_JUMPS: set[Vector] = {(2, 1), (1, 2)}


def _sign(value: int) -> int:
    return (value > 0) - (value < 0)


def unit_step(start: Square, target: Square) -> Vector:
    """Direction to walk from start towards target: 0, +1 or -1 along each axis"""
    return _sign(target.row - start.row), _sign(target.column - start.column)


def is_path_clear(start: Square, target: Square, board: Board) -> bool:
    """
    Walk one square at a time from start towards target.
    ---

    All squares strictly in between must be empty. The target itself is not inspected
    (it may hold a piece to capture). Only meaningful for straight lines and diagonals.
    """
    d_row, d_column = unit_step(start, target)
    square = start.offset(d_row, d_column)
    while square != target:
        if not board.is_empty(square):
            return False
        square = square.offset(d_row, d_column)
    return True


# --- MOVEMENT RULES ---
def is_pawn_move(piece: Piece, target: Square, board: Board) -> bool:
    """
    A pawn:
    - moves by a single square forward, onto an empty square.
    - may move by two from its home row, when both squares are empty.
    - takes diagonally forward (the target must be occupied).

    NOTE: the double step is derived from the row the pawn stands on, not from has_moved.
    """
    direction = PAWN_DIRECTIONS[piece.side]
    start = piece.position
    d_row = target.row - start.row
    d_column = target.column - start.column

    if d_column == 0:
        if d_row == direction:
            return board.is_empty(target)
        if d_row == 2 * direction and start.row == PAWN_HOME_ROWS[piece.side]:
            return board.is_empty(start.offset(direction, 0)) and board.is_empty(
                target
            )
        return False

    if abs(d_column) == 1 and d_row == direction:
        return not board.is_empty(target)
    return False


def is_rook_move(piece: Piece, target: Square, board: Board) -> bool:
    """Rooks move either horizontally or vertically, and cannot jump"""
    start = piece.position
    if start.row != target.row and start.column != target.column:
        return False
    return is_path_clear(start, target, board)


def is_knight_move(piece: Piece, target: Square, board: Board) -> bool:
    """Knights jump: (|d_row|, |d_column|) is (2, 1) or (1, 2). Nothing can block them."""
    jump = (
        abs(target.row - piece.position.row),
        abs(target.column - piece.position.column),
    )
    return jump in KNIGHT_JUMPS


def is_bishop_move(piece: Piece, target: Square, board: Board) -> bool:
    """Bishops move diagonally: |d_row| = |d_column|"""
    d_row = abs(target.row - piece.position.row)
    d_column = abs(target.column - piece.position.column)
    if d_row != d_column or d_row == 0:
        return False
    return is_path_clear(piece.position, target, board)


def is_queen_move(piece: Piece, target: Square, board: Board) -> bool:
    """The Queen combines the rook moves and the bishop moves"""
    return is_rook_move(piece, target, board) or is_bishop_move(piece, target, board)


def is_king_move(piece: Piece, target: Square, board: Board) -> bool:
    """
    The king can move by a single square at the time.

    Castling is a special king move (handled by the RulesEngine).
    """
    d_row = abs(target.row - piece.position.row)
    d_column = abs(target.column - piece.position.column)
    return d_row <= 1 and d_column <= 1 and (d_row, d_column) != (0, 0)


def is_clone_move(piece: Piece, target: Square, board: Board) -> bool:
    """The Clone moves like a bishop or jumps like a knight"""
    return is_bishop_move(piece, target, board) or is_knight_move(
        piece, target, board
    )


# -- STRATEGY PATTERN: MOVEMENT RULES ---
MovementRuleFn = Callable[[Piece, Square, Board], bool]
MOVEMENT_RULES: dict[PieceKind, MovementRuleFn] = {
    PieceKind.PAWN: is_pawn_move,
    PieceKind.ROOK: is_rook_move,
    PieceKind.KNIGHT: is_knight_move,
    PieceKind.BISHOP: is_bishop_move,
    PieceKind.QUEEN: is_queen_move,
    PieceKind.KING: is_king_move,
    PieceKind.CLONE: is_clone_move,
}
