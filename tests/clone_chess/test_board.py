"""Unit tests for /src/clone_chess/board.py"""

from collections import Counter
from typing import Callable

import pytest

from src.clone_chess.board import BACK_RANK, Board
from src.clone_chess.pieces import Piece, PieceKind, Side
from src.clone_chess.square import Square
from src.core.exceptions import BoardInvariantError

STARTING_DIAGRAM = """
rncbqkbcnr
pppppppppp
..........
..........
..........
..........
..........
..........
PPPPPPPPPP
RNCBQKBCNR
"""


# -- CREATION LOGIC ---
def test_creating_board_in_starting_position() -> None:
    """Back ranks on rows 0 and 9, pawns on rows 1 and 8, nothing in between"""
    board = Board.starting_position()

    for column, kind in enumerate(BACK_RANK):
        white_piece = board.piece(Square(0, column))
        black_piece = board.piece(Square(9, column))
        assert white_piece is not None and black_piece is not None
        assert (white_piece.kind, white_piece.side) == (kind, Side.WHITE)
        assert (black_piece.kind, black_piece.side) == (kind, Side.BLACK)

    for column in range(10):
        white_pawn = board.piece(Square(1, column))
        black_pawn = board.piece(Square(8, column))
        assert white_pawn is not None and white_pawn.kind == PieceKind.PAWN
        assert black_pawn is not None and black_pawn.kind == PieceKind.PAWN

    for row in range(2, 8):
        for column in range(10):
            assert board.is_empty(Square(row, column))


def test_starting_position_piece_counts() -> None:
    board = Board.starting_position()
    for side in Side:
        counts = Counter(piece.kind for piece in board.pieces(side))
        assert counts == {
            PieceKind.PAWN: 10,
            PieceKind.ROOK: 2,
            PieceKind.KNIGHT: 2,
            PieceKind.CLONE: 2,
            PieceKind.BISHOP: 2,
            PieceKind.QUEEN: 1,
            PieceKind.KING: 1,
        }


def test_pieces_know_their_squares() -> None:
    """Invariant: the position of every piece matches the slot holding it, and nothing has moved yet"""
    board = Board.starting_position()
    for piece in board.pieces():
        assert board.piece(piece.position) is piece
        assert not piece.has_moved


def test_board_from_diagram_matches_starting_position() -> None:
    assert Board.from_diagram(STARTING_DIAGRAM).to_diagram() == (
        Board.starting_position().to_diagram()
    )


def test_diagram_roundtrip() -> None:
    diagram = STARTING_DIAGRAM.strip()
    assert Board.from_diagram(diagram).to_diagram() == diagram


def test_diagram_orientation(board_with_pieces: Callable[..., Board]) -> None:
    """Bottom line is row 0, first character is column 0"""
    board = board_with_pieces({(0, 0): "K", (9, 9): "k", (3, 7): "c"})
    white_king = board.piece(Square(0, 0))
    clone = board.piece(Square(3, 7))
    assert white_king is not None and white_king.kind == PieceKind.KING
    assert white_king.side == Side.WHITE
    assert clone is not None and clone.kind == PieceKind.CLONE
    assert clone.side == Side.BLACK


@pytest.mark.parametrize(
    "diagram",
    [
        "\n".join(["." * 10] * 9),  # too few rows
        "\n".join(["." * 10] * 11),  # too many rows
        "\n".join(["." * 10] * 9 + ["." * 9]),  # short row
        "\n".join(["." * 10] * 9 + ["....x....."]),  # unknown piece symbol
    ],
)
def test_invalid_diagram(diagram: str) -> None:
    with pytest.raises(ValueError):
        Board.from_diagram(diagram)


# -- QUERIES ---
def test_pieces_by_side(board_with_pieces: Callable[..., Board]) -> None:
    board = board_with_pieces({(0, 5): "K", (9, 5): "k", (4, 4): "Q", (5, 5): "p"})
    assert {piece.kind for piece in board.pieces(Side.WHITE)} == {
        PieceKind.KING,
        PieceKind.QUEEN,
    }
    assert {piece.kind for piece in board.pieces(Side.BLACK)} == {
        PieceKind.KING,
        PieceKind.PAWN,
    }
    assert len(board.pieces()) == 4


@pytest.mark.parametrize("side", list(Side))
def test_find_king(side: Side) -> None:
    board = Board.starting_position()
    king = board.find_king(side)
    assert king.kind == PieceKind.KING
    assert king.side == side
    assert king.position == Square(0 if side == Side.WHITE else 9, 5)


def test_missing_king_is_an_invariant_violation(
    board_with_pieces: Callable[..., Board],
) -> None:
    """Never silently fall back on some default square"""
    board = board_with_pieces({(0, 5): "K"})
    with pytest.raises(BoardInvariantError):
        board.find_king(Side.BLACK)


# -- UPDATES ---
def test_relocate_moves_the_piece(board_with_pieces: Callable[..., Board]) -> None:
    board = board_with_pieces({(0, 0): "R", (5, 0): "n"})
    rook = board.piece(Square(0, 0))
    knight = board.piece(Square(5, 0))
    assert rook is not None

    taken = board.relocate(rook, Square(5, 0))

    assert taken is knight
    assert board.is_empty(Square(0, 0))
    assert board.piece(Square(5, 0)) is rook
    assert rook.position == Square(5, 0)


def test_relocate_piece_not_on_the_board() -> None:
    board = Board.empty()
    stray = Piece(PieceKind.QUEEN, Side.WHITE, Square(4, 4))
    with pytest.raises(BoardInvariantError):
        board.relocate(stray, Square(5, 5))


def test_place_and_remove_piece() -> None:
    board = Board.empty()
    piece = Piece(PieceKind.BISHOP, Side.BLACK, Square(0, 0))
    board.place_piece(piece, Square(7, 2))
    assert piece.position == Square(7, 2)
    assert board.piece(Square(7, 2)) is piece

    assert board.remove_piece(Square(7, 2)) is piece
    assert board.is_empty(Square(7, 2))
    assert board.remove_piece(Square(7, 2)) is None


def test_simulated_move_is_undone(board_with_pieces: Callable[..., Board]) -> None:
    board = board_with_pieces({(2, 2): "C", (4, 4): "p"})
    clone = board.piece(Square(2, 2))
    pawn = board.piece(Square(4, 4))
    assert clone is not None

    with board.simulate_move(clone, Square(4, 4)) as taken:
        assert taken is pawn
        assert board.piece(Square(4, 4)) is clone
        assert board.is_empty(Square(2, 2))
        assert clone.position == Square(4, 4)

    assert board.piece(Square(2, 2)) is clone
    assert board.piece(Square(4, 4)) is pawn
    assert clone.position == Square(2, 2)
    assert pawn is not None and pawn.position == Square(4, 4)


def test_simulated_move_is_undone_when_something_raises(
    board_with_pieces: Callable[..., Board],
) -> None:
    board = board_with_pieces({(2, 2): "C"})
    clone = board.piece(Square(2, 2))
    assert clone is not None

    with pytest.raises(RuntimeError):
        with board.simulate_move(clone, Square(3, 4)):
            raise RuntimeError("boom")

    assert board.piece(Square(2, 2)) is clone
    assert board.is_empty(Square(3, 4))
    assert clone.position == Square(2, 2)
