"""Protocol repository (the service only needs these operations, whatever keeps the games around)"""

from contextlib import AbstractContextManager
from typing import Protocol
from uuid import UUID

from src.clone_chess.engine import RulesEngine


class GameRepository(Protocol):
    """Keeps running games around for the lifetime of the host process"""

    def get_game(self, game_id: UUID) -> RulesEngine | None:
        """Get game by ID, if it exists."""
        ...

    def create_game(self, game: RulesEngine) -> UUID:
        """Store new game and return the newly created game ID."""
        ...

    def delete_game(self, game_id: UUID) -> RulesEngine | None:
        """Remove a game."""
        ...

    def lock(self, game_id: UUID) -> AbstractContextManager[object]:
        """Exclusive access to one game: hold it for the whole of a public call into its engine."""
        ...
