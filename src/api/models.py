"""Requests and Response models"""

from uuid import UUID

from pydantic import BaseModel, field_validator

from src.clone_chess.square import BOARD_DIMENSIONS
from src.core.exceptions import InvalidRequestError
from src.core.shared_types import Color, GameStatus, PieceType


class SquareModel(BaseModel):
    """
    A square as (row, column).
    NOTE: Any integers are accepted here. Moving to a square off the board is a request the engine answers with "not applied".
    """

    row: int
    column: int

    def is_within_bounds(self) -> bool:
        return (0 <= self.row < BOARD_DIMENSIONS[0]) and (
            0 <= self.column < BOARD_DIMENSIONS[1]
        )


def _validate_selected_square(value: SquareModel) -> SquareModel:
    """The square of the selected piece must at least be on the board"""
    if not value.is_within_bounds():
        raise InvalidRequestError(
            f"Cannot select a piece on ({value.row}, {value.column}): not a square of the board."
        )
    return value


# --- REQUEST MODELS ---
class CreateGameRequest(BaseModel):
    halt_on_terminal_state: bool = True


class GetGameRequest(BaseModel):
    game_id: UUID


class LegalTargetsRequest(BaseModel):
    game_id: UUID
    square: SquareModel

    @field_validator("square")
    @classmethod
    def validate_square(cls, value: SquareModel) -> SquareModel:
        return _validate_selected_square(value)


class MoveRequest(BaseModel):
    game_id: UUID
    from_square: SquareModel
    to_square: SquareModel

    @field_validator("from_square")
    @classmethod
    def validate_from_square(cls, value: SquareModel) -> SquareModel:
        return _validate_selected_square(value)


class DeleteGameRequest(BaseModel):
    game_id: UUID


# --- RESPONSE MODELS ---
class PieceResponse(BaseModel):
    type: PieceType
    color: Color
    square: SquareModel
    has_moved: bool


class GameResponse(BaseModel):
    game_id: UUID
    turn: Color
    status: GameStatus
    pieces: list[PieceResponse]
    captured: list[PieceResponse]


class MoveResponse(BaseModel):
    applied: bool
    game: GameResponse


class LegalTargetsResponse(BaseModel):
    game_id: UUID
    square: SquareModel
    targets: list[SquareModel]
