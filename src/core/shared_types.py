"""
Type definitions used across layers
"""

from enum import StrEnum

# --- The domain layer (src/clone_chess) has its own Enum versions of these (Side, PieceKind, GameState).
# --- NOTE These StrEnums are what crosses the boundary: the values are what the presentation layer gets to see.
# --- Same member names on both sides, so converting is just Enum[other.name]


class GameStatus(StrEnum):
    ONGOING = "ongoing"
    CHECK = "check"
    CHECKMATE = "checkmate"
    STALEMATE = "stalemate"


class Color(StrEnum):
    WHITE = "white"
    BLACK = "black"


class PieceType(StrEnum):
    KING = "king"
    QUEEN = "queen"
    ROOK = "rook"
    BISHOP = "bishop"
    KNIGHT = "knight"
    CLONE = "clone"
    PAWN = "pawn"
