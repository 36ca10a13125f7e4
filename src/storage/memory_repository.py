"""Implementation of (Game)Repository keeping the engines in memory. Nothing is persisted."""

import logging
import threading
from uuid import UUID, uuid4

from src.clone_chess.engine import RulesEngine
from src.core.exceptions import RepositoryError

logger = logging.getLogger(__name__)


class InMemoryGameRepository:
    """
    Thread-safe registry of running games.

    The registry itself is guarded by one lock, every game has its own lock on top of that.
    A simulated (try-then-take-back) move inside the engine is then never visible to another thread,
    as long as callers only touch an engine while holding its lock.
    """

    def __init__(self) -> None:
        self._registry_lock = threading.RLock()
        self._games: dict[UUID, RulesEngine] = {}
        self._game_locks: dict[UUID, threading.Lock] = {}

    def get_game(self, game_id: UUID) -> RulesEngine | None:
        with self._registry_lock:
            return self._games.get(game_id)

    def create_game(self, game: RulesEngine) -> UUID:
        new_id = uuid4()
        with self._registry_lock:
            self._games[new_id] = game
            self._game_locks[new_id] = threading.Lock()
        logger.info("Created game %s", new_id)
        return new_id

    def delete_game(self, game_id: UUID) -> RulesEngine | None:
        with self._registry_lock:
            self._game_locks.pop(game_id, None)
            game = self._games.pop(game_id, None)
        if game is not None:
            logger.info("Deleted game %s", game_id)
        return game

    def lock(self, game_id: UUID) -> threading.Lock:
        with self._registry_lock:
            game_lock = self._game_locks.get(game_id)
        if game_lock is None:
            raise RepositoryError(f"Game with {game_id=} not found.")
        return game_lock

    def clear(self) -> None:
        with self._registry_lock:
            self._games.clear()
            self._game_locks.clear()
