"""
Boundary layer data model(s).

The RulesEngine hands out a snapshot in this shape, so the layers above never get hold of live Piece objects
they could mutate by accident. (Decouples the domain objects from what the Service / API layers need to know)
"""

from dataclasses import dataclass

# Type aliases to make the models easier to read
PieceColor = str
PieceName = str


@dataclass(frozen=True)
class PieceModel:
    """A piece as seen from outside: what it is, whose it is, and where it stands."""

    kind: PieceName
    side: PieceColor
    row: int
    column: int
    has_moved: bool


@dataclass
class GameModel:
    """Transport-safe representation of a game used between the engine, the Service, and the API layer."""

    pieces: list[PieceModel]
    turn: PieceColor
    status: str
    captured: list[PieceModel]
