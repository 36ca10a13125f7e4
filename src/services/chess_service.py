"""Orchestration of communication from the presentation layer to the rules engine (and the reverse direction)."""

import logging
from uuid import UUID

from src.api.models import (
    CreateGameRequest,
    DeleteGameRequest,
    GameResponse,
    GetGameRequest,
    LegalTargetsRequest,
    LegalTargetsResponse,
    MoveRequest,
    MoveResponse,
    PieceResponse,
    SquareModel,
)
from src.clone_chess.engine import RulesEngine
from src.clone_chess.pieces import Piece
from src.clone_chess.square import Square
from src.core.exceptions import (
    InvalidRequestError,
    NotYourTurnError,
    RepositoryError,
)
from src.core.models import GameModel, PieceModel
from src.core.shared_types import Color, GameStatus, PieceType
from src.storage.repository import GameRepository

logger = logging.getLogger(__name__)


class ChessService:
    """Orchestration of layers for the 10x10 variant."""

    def __init__(self, repository: GameRepository) -> None:
        self.repo = repository

    # -- Presentation layer logic ---
    def create_new_game(self, request: CreateGameRequest) -> GameResponse:
        """Set up a new game in the starting position."""
        new_game = RulesEngine.new_game(
            halt_on_terminal_state=request.halt_on_terminal_state
        )
        game_id = self.repo.create_game(new_game)
        with self.repo.lock(game_id):
            return self._create_game_response(game_id, new_game.to_model())

    def get_game_state(self, request: GetGameRequest) -> GameResponse:
        """
        Retrieve current game state.
        ----
        Everything needed to draw the board: the pieces, whose turn it is, and the game status.
        """
        with self.repo.lock(request.game_id):
            game = self._fetch_game(request.game_id)
            return self._create_game_response(request.game_id, game.to_model())

    def legal_targets(self, request: LegalTargetsRequest) -> LegalTargetsResponse:
        """Squares the piece on the requested square can move to (to highlight the selected piece)."""
        with self.repo.lock(request.game_id):
            game = self._fetch_game(request.game_id)
            piece = self._select_piece(game, request.square)
            targets = game.legal_targets(piece)
        return LegalTargetsResponse(
            game_id=request.game_id,
            square=request.square,
            targets=[_to_square_model(square) for square in targets],
        )

    def make_move(self, request: MoveRequest) -> MoveResponse:
        """
        Make a move attempt.
        ----

        The piece on from_square must belong to the side to move. An illegal move is not an error:
        the response just says it was not applied.
        """
        with self.repo.lock(request.game_id):
            game = self._fetch_game(request.game_id)
            piece = self._select_piece(game, request.from_square)
            self._assert_your_turn(game, piece)

            target = Square(request.to_square.row, request.to_square.column)
            applied = game.attempt_move(piece, target)
            return MoveResponse(
                applied=applied,
                game=self._create_game_response(request.game_id, game.to_model()),
            )

    def delete_game(self, request: DeleteGameRequest) -> None:
        """Handle a request to delete a game."""
        with self.repo.lock(request.game_id):
            self.repo.delete_game(request.game_id)

    # -- Internal helpers --
    def _fetch_game(self, game_id: UUID) -> RulesEngine:
        """Attempt to find the game in the repository and raise error if it fails."""
        game = self.repo.get_game(game_id)
        if game is None:
            raise RepositoryError(f"Game with {game_id=} not found.")
        return game

    def _select_piece(self, game: RulesEngine, square: SquareModel) -> Piece:
        piece = game.piece_at(Square(square.row, square.column))
        if piece is None:
            raise InvalidRequestError(
                f"There is no piece on ({square.row}, {square.column}) to select."
            )
        return piece

    def _assert_your_turn(self, game: RulesEngine, piece: Piece) -> None:
        """Only the side to move may move its pieces."""
        if piece.side != game.turn:
            logger.debug(
                "Rejected %s move while %s is to move.", piece.side.name, game.turn.name
            )
            raise NotYourTurnError(
                f"It is not your turn. Waiting for {game.turn.name.lower()} to make a move first."
            )

    def _create_game_response(self, game_id: UUID, model: GameModel) -> GameResponse:
        """Convert info in GameModel to a GameResponse (for game with given ID.)"""
        return GameResponse(
            game_id=game_id,
            turn=Color(model.turn),
            status=GameStatus(model.status),
            pieces=[_to_piece_response(piece) for piece in model.pieces],
            captured=[_to_piece_response(piece) for piece in model.captured],
        )


def _to_square_model(square: Square) -> SquareModel:
    return SquareModel(row=square.row, column=square.column)


def _to_piece_response(piece: PieceModel) -> PieceResponse:
    return PieceResponse(
        type=PieceType(piece.kind),
        color=Color(piece.side),
        square=SquareModel(row=piece.row, column=piece.column),
        has_moved=piece.has_moved,
    )
