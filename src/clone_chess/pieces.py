"""Defines the types of pieces of the 10x10 variant"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Self

from src.clone_chess.square import Square


class PieceKind(Enum):
    KING = auto()
    QUEEN = auto()
    ROOK = auto()
    BISHOP = auto()
    KNIGHT = auto()
    CLONE = auto()
    PAWN = auto()


class Side(Enum):
    WHITE = auto()
    BLACK = auto()

    @property
    def opponent(self) -> Side:
        return Side.BLACK if self == Side.WHITE else Side.WHITE


# Characters used in board diagrams. Lower case here, upper case for white pieces.
SYMBOL_TO_KIND: dict[str, PieceKind] = {
    "k": PieceKind.KING,
    "q": PieceKind.QUEEN,
    "r": PieceKind.ROOK,
    "b": PieceKind.BISHOP,
    "n": PieceKind.KNIGHT,
    "c": PieceKind.CLONE,
    "p": PieceKind.PAWN,
}

KIND_TO_SYMBOL: dict[PieceKind, str] = {
    value: key for key, value in SYMBOL_TO_KIND.items()
}


@dataclass(eq=False)
class Piece:
    """
    A piece lives on the board for the whole game: its position and has_moved flag get updated in place.

    NOTE: eq=False on purpose. Two pieces are only "the same" if they are the same object,
    a selected piece must stay distinguishable from an identical piece standing elsewhere.
    """

    kind: PieceKind
    side: Side
    position: Square
    has_moved: bool = False

    @classmethod
    def from_symbol(cls, character: str, position: Square) -> Self:
        # upper case: White pieces, lower case: Black pieces
        side = Side.WHITE if character.isupper() else Side.BLACK
        try:
            kind = SYMBOL_TO_KIND[character.lower()]
        except KeyError as e:
            raise ValueError(f"Unknown piece symbol {character!r}") from e
        return cls(kind, side, position)

    def to_symbol(self) -> str:
        symbol = KIND_TO_SYMBOL[self.kind]
        return symbol.upper() if self.side == Side.WHITE else symbol

    def is_king(self) -> bool:
        return self.kind == PieceKind.KING
