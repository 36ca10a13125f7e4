"""
Pytest will auto-discover / import this file called 'conftest.py'.
This file defines fixtures required for testing multiple layers.
"""

from typing import Callable, Generator

import pytest

from src.clone_chess.board import Board
from src.clone_chess.engine import RulesEngine
from src.clone_chess.pieces import Side
from src.clone_chess.square import BOARD_DIMENSIONS
from src.storage.memory_repository import InMemoryGameRepository

# {(row, column): symbol}, symbols as in board diagrams (upper case: White)
Placement = dict[tuple[int, int], str]


def diagram_from_placement(placement: Placement) -> str:
    """Turn a handful of pieces into a full board diagram (top line is row 9)."""
    rows = [["."] * BOARD_DIMENSIONS[1] for _ in range(BOARD_DIMENSIONS[0])]
    for (row, column), symbol in placement.items():
        rows[row][column] = symbol
    return "\n".join(
        "".join(rows[row]) for row in range(BOARD_DIMENSIONS[0] - 1, -1, -1)
    )


@pytest.fixture
def board_with_pieces() -> Callable[[Placement], Board]:
    """Call the inner function that will be returned with the desired pieces on their squares"""

    def _create_board(placement: Placement) -> Board:
        return Board.from_diagram(diagram_from_placement(placement))

    return _create_board


@pytest.fixture
def engine_with_pieces() -> Callable[..., RulesEngine]:
    """
    Call the inner function with the desired pieces (and optionally, the side to move).
    NOTE: both kings must be part of the placement, the engine computes the game state right away.
    """

    def _create_engine(
        placement: Placement,
        turn: Side = Side.WHITE,
        halt_on_terminal_state: bool = True,
    ) -> RulesEngine:
        return RulesEngine.from_diagram(
            diagram_from_placement(placement),
            turn=turn,
            halt_on_terminal_state=halt_on_terminal_state,
        )

    return _create_engine


@pytest.fixture
def repository() -> Generator[InMemoryGameRepository, None, None]:
    """Fresh registry of games for every test"""
    repo = InMemoryGameRepository()
    try:
        yield repo
    finally:
        repo.clear()
