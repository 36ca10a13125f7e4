"""
Custom exceptions shared by all layers.

NOTE: an illegal move is NOT an exception in the rules engine (it simply is not applied).
These errors are for broken invariants and for misuse at the service boundary.
"""


class GameError(Exception):
    """Base class, so callers can catch everything raised by this package in one go."""


class BoardInvariantError(GameError):
    """The board got into a state that should be impossible (ex. a side without a king). Fatal."""


class GameStateError(GameError):
    """Operation not allowed in the current state of the game."""


class IllegalMoveError(GameError):
    """Raised only by callers that explicitly ask for an exception instead of a boolean."""


class NotYourTurnError(GameError):
    """A player tried to move a piece while it is the other side's turn."""


class RepositoryError(GameError):
    """Game record could not be found."""


class InvalidRequestError(GameError):
    """Request data could not be interpreted. (NOT a ValueError: pydantic should let it propagate as is)"""
