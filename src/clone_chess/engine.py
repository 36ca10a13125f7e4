"""
The RulesEngine is the entrypoint into the domain layer for the service layer (and for any presentation layer).
It owns the board, whose turn it is and the state of the game, and decides whether a move may be played.

Illegal moves are not errors here: they are simply not applied (the caller gets False back).
"""

import logging
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Optional, Self

from src.clone_chess.board import Board
from src.clone_chess.castling import KING_CASTLING_DISTANCE, CastlingSquares
from src.clone_chess.moves import MOVEMENT_RULES, MovementRuleFn
from src.clone_chess.pieces import Piece, PieceKind, Side
from src.clone_chess.square import Square, all_squares
from src.core.exceptions import GameStateError, IllegalMoveError
from src.core.models import GameModel, PieceModel

logger = logging.getLogger(__name__)


class GameState(Enum):
    ONGOING = auto()
    CHECK = auto()
    CHECKMATE = auto()
    STALEMATE = auto()


TERMINAL_STATES: frozenset[GameState] = frozenset(
    {GameState.CHECKMATE, GameState.STALEMATE}
)


@dataclass
class RulesEngine:
    # --- DOMAIN LAYER API CALLED BY SERVICE / PRESENTATION LAYER ---

    board: Board
    turn: Side = Side.WHITE
    state: GameState = GameState.ONGOING
    halt_on_terminal_state: bool = True
    captured: list[Piece] = field(default_factory=list)

    @classmethod
    def new_game(cls, halt_on_terminal_state: bool = True) -> Self:
        """Standard starting layout, White to move."""
        return cls(
            board=Board.starting_position(),
            turn=Side.WHITE,
            state=GameState.ONGOING,
            halt_on_terminal_state=halt_on_terminal_state,
        )

    @classmethod
    def from_diagram(
        cls,
        diagram: str,
        turn: Side = Side.WHITE,
        halt_on_terminal_state: bool = True,
    ) -> Self:
        """Start from an arbitrary position (see Board.from_diagram). The state is computed for the side to move."""
        engine = cls(
            board=Board.from_diagram(diagram),
            turn=turn,
            halt_on_terminal_state=halt_on_terminal_state,
        )
        engine.refresh_state()
        return engine

    @property
    def is_terminal(self) -> bool:
        return self.state in TERMINAL_STATES

    def piece_at(self, square: Square) -> Optional[Piece]:
        """Read-only query for the presentation layer. Off-board squares simply hold nothing."""
        if not square.is_within_bounds():
            return None
        return self.board.piece(square)

    def to_model(self) -> GameModel:
        """Encode into a format the Service layer uses"""
        return GameModel(
            pieces=[_to_piece_model(piece) for piece in self.board.pieces()],
            turn=self.turn.name.lower(),
            status=self.state.name.lower(),
            captured=[_to_piece_model(piece) for piece in self.captured],
        )

    # --- MOVE VALIDATION ---
    def is_move_valid(self, piece: Piece, target: Square) -> bool:
        """
        Can the piece legally move to the target square?
        ----

        1. The target must be on the board.
        2. The target must not hold a piece of the same side.
        3. An unmoved king may castle (castling does its own check-safety test, so it returns right away).
        4. The piece must be able to reach the target according to its movement rule.
        5. Play the move on the board, see if it leaves your own king in check, and take it back.

        NOTE: a move onto the opposing king's square skips step 5. is_in_check() only ever asks
        "can this piece take the king?", which then never needs another simulation.
        Such a move is never applied: move_piece() refuses it.
        """
        if not target.is_within_bounds():
            return False

        occupant = self.board.piece(target)
        if occupant is not None and occupant.side == piece.side:
            return False

        if piece.is_king() and not piece.has_moved:
            if self.is_castling_valid(piece, target):
                return True

        movement_rule: MovementRuleFn = MOVEMENT_RULES[piece.kind]
        if not movement_rule(piece, target, self.board):
            return False

        if occupant is not None and occupant.is_king():
            return True

        return not self._is_putting_yourself_in_check(piece, target)

    def is_castling_valid(self, king: Piece, target: Square) -> bool:
        """
        Castling towards the side of the target square
        ---

        **you are allowed to castle if**

        * Neither the king nor the rook in that corner has moved.
        * The target is the square two steps from the king, towards that rook.
        * All squares between the king and the rook are empty.
        * Neither of the two squares the king passes through is attacked.

        NOTE: being in check right now does not forbid castling by itself. Only the squares along the way are tested.
        """
        if not king.is_king() or king.has_moved:
            return False

        castling = CastlingSquares.for_king(king.position, target)
        if target != castling.king_to:
            return False

        rook = self.board.piece(castling.rook_from)
        if rook is None or rook.kind != PieceKind.ROOK:
            return False
        if rook.side != king.side or rook.has_moved:
            return False

        between = castling.between()
        if any(not self.board.is_empty(square) for square in between):
            return False

        # the king must land strictly in between (never on top of its own rook)
        king_path = castling.king_path()
        if any(square not in between for square in king_path):
            return False

        for square in king_path:
            if self._is_in_check_if_king_stood_on(king, square):
                logger.debug(
                    "Castling %s -> %s refused: %s is attacked.",
                    king.position,
                    target,
                    square,
                )
                return False
        return True

    def legal_targets(self, piece: Piece) -> list[Square]:
        """All squares the piece can legally move to (used to highlight a selected piece)."""
        return [
            square
            for square in all_squares()
            if self.is_move_valid(piece, square) and not self._is_king_capture(square)
        ]

    def has_legal_move(self, side: Side) -> bool:
        return any(
            self.is_move_valid(piece, square)
            for piece in self.board.pieces(side)
            for square in all_squares()
        )

    # --- CHECKS FOR ENDING THE GAME ---
    def is_in_check(self, side: Side) -> bool:
        """Could any of the opponent's pieces take the king of this side right now?"""
        king_square = self.board.find_king(side).position
        return any(
            self.is_move_valid(attacker, king_square)
            for attacker in self.board.pieces(side.opponent)
        )

    def compute_terminal_state(self, side: Side) -> GameState:
        """
        State of the game for the side that is about to move.
        ----

        Try every piece of that side on every square of the board. Every valid move is played on the board,
        we look if the side is still in check, and the move is taken back.
        Finding one move that ends up out of check is enough: the side can still play.

        * no such move, and in check --> checkmate
        * no such move, not in check --> stalemate
        * otherwise check / ongoing depending on whether the king is attacked right now.

        NOTE: O(pieces x squares x cost of is_move_valid). Fine for 10x10, would need move generation if scaled up.
        """
        in_check = self.is_in_check(side)
        can_escape = any(
            self._is_escape(piece, square)
            for piece in self.board.pieces(side)
            for square in all_squares()
        )

        if not can_escape:
            return GameState.CHECKMATE if in_check else GameState.STALEMATE
        return GameState.CHECK if in_check else GameState.ONGOING

    def refresh_state(self) -> GameState:
        """Recompute the state for the side whose turn it is."""
        self._change_state(self.compute_terminal_state(self.turn))
        return self.state

    # --- MAKING MOVES ---
    def attempt_move(self, piece: Piece, target: Square) -> bool:
        """
        The single entry point for the presentation layer: try to move the selected piece to the target square.
        Returns whether the move got applied.
        """
        if self.board.piece(piece.position) is not piece:
            # a stale selection (ex. the piece got taken in the meantime)
            logger.warning(
                "Ignoring move of %s %s: it is no longer on %s.",
                piece.side.name,
                piece.kind.name,
                piece.position,
            )
            return False
        return self.move_piece(piece, target)

    def move_piece(self, piece: Piece, target: Square) -> bool:
        """
        Apply the move if it is valid. Otherwise nothing happens (no error).
        -----

        1. refuse to play on once the game reached checkmate / stalemate (if halt_on_terminal_state)
        2. validate the move
        3. refuse to take a king (only reachable when a caller ignores the turn order)
        4. update the board (NOTE: if castling, move the king and the rook)
        5. update the game state for the side that moves next
        6. flip the turn
        """
        if self.halt_on_terminal_state and self.is_terminal:
            logger.warning(
                "Game is over (%s). Move %s -> %s not played.",
                self.state.name.lower(),
                piece.position,
                target,
            )
            return False

        if not self.is_move_valid(piece, target):
            logger.debug(
                "Illegal move: %s %s %s -> %s",
                piece.side.name,
                piece.kind.name,
                piece.position,
                target,
            )
            return False

        if self._is_king_capture(target):
            logger.debug(
                "Refused move %s -> %s: a king is never taken off the board.",
                piece.position,
                target,
            )
            return False

        if self._is_castling_move(piece, target):
            self._castle(piece, target)
        else:
            self._update_board(piece, target)

        self._update_game_state()
        self._flip_turn()
        return True

    def move_or_raise(self, piece: Piece, target: Square) -> None:
        """Same as move_piece, for callers that prefer an exception over a boolean."""
        if self.halt_on_terminal_state and self.is_terminal:
            raise GameStateError(
                f"The game is over ({self.state.name.lower()}), no more moves are played."
            )
        origin = piece.position
        if not self.move_piece(piece, target):
            raise IllegalMoveError(
                f"Move not allowed: {piece.side.name} {piece.kind.name} {origin} -> {target}"
            )

    # -- PRIVATE HELPERS ---
    def _is_putting_yourself_in_check(self, piece: Piece, target: Square) -> bool:
        """Return True if the move puts (or leaves) you in check

        plan:
        1. make the candidate move on the board
        2. determine if your king is in check
        3. take the move back (always, also if something raises)
        """
        with self.board.simulate_move(piece, target):
            return self.is_in_check(piece.side)

    def _is_in_check_if_king_stood_on(self, king: Piece, square: Square) -> bool:
        with self.board.simulate_move(king, square):
            return self.is_in_check(king.side)

    def _is_escape(self, piece: Piece, target: Square) -> bool:
        """A valid move, after which the side of the piece is not in check."""
        if not self.is_move_valid(piece, target):
            return False
        with self.board.simulate_move(piece, target):
            return not self.is_in_check(piece.side)

    def _is_king_capture(self, target: Square) -> bool:
        """Attacking the king is what check means, actually taking it is never a move."""
        occupant = self.board.piece(target)
        return occupant is not None and occupant.is_king()

    def _is_castling_move(self, piece: Piece, target: Square) -> bool:
        """A king never moves two columns, unless it castles"""
        return (
            piece.is_king()
            and abs(target.column - piece.position.column) == KING_CASTLING_DISTANCE
        )

    def _castle(self, king: Piece, target: Square) -> None:
        """Move both the King and the Rook: the rook jumps over the king and lands right next to it."""
        castling = CastlingSquares.for_king(king.position, target)
        rook = self.board.piece(castling.rook_from)
        # for the typechecker: is_castling_valid() made sure the rook is there
        assert rook is not None

        self.board.relocate(king, castling.king_to)
        self.board.relocate(rook, castling.rook_to)
        king.has_moved = True
        rook.has_moved = True
        logger.info(
            "%s castles: king %s -> %s, rook %s -> %s",
            king.side.name,
            castling.king_from,
            castling.king_to,
            castling.rook_from,
            castling.rook_to,
        )

    def _update_board(self, piece: Piece, target: Square) -> None:
        """Plain move. Whatever stood on the target is taken."""
        origin = piece.position
        taken = self.board.relocate(piece, target)
        piece.has_moved = True
        if taken is not None:
            self.captured.append(taken)
        logger.info(
            "%s %s %s -> %s%s",
            piece.side.name,
            piece.kind.name,
            origin,
            target,
            f" takes {taken.kind.name}" if taken else "",
        )

    def _update_game_state(self) -> None:
        """
        NOTE the turn has not been flipped yet.
        The state is computed for the opponent of the side to move now: the side whose turn is about to begin.
        """
        next_side = self.turn.opponent
        self._change_state(self.compute_terminal_state(next_side))

    def _change_state(self, new_state: GameState) -> None:
        if new_state != self.state:
            logger.info("Game state: %s -> %s", self.state.name, new_state.name)
        self.state = new_state

    def _flip_turn(self) -> None:
        self.turn = self.turn.opponent


def _to_piece_model(piece: Piece) -> PieceModel:
    return PieceModel(
        kind=piece.kind.name.lower(),
        side=piece.side.name.lower(),
        row=piece.position.row,
        column=piece.position.column,
        has_moved=piece.has_moved,
    )
