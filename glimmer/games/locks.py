"""Per-game locks serializing move application."""

from __future__ import annotations

import asyncio
from typing import Dict


class GameLocks:
    """Map of game id to ``asyncio.Lock``.

    Only touched from the event loop thread, so the dict itself needs no
    guarding.
    """

    def __init__(self) -> None:
        self._locks: Dict[str, asyncio.Lock] = {}

    def lock_for(self, game_id: str) -> asyncio.Lock:
        lock = self._locks.get(game_id)
        if lock is None:
            lock = asyncio.Lock()
            self._locks[game_id] = lock
        return lock

    def discard(self, game_id: str) -> None:
        """Forget the lock of a finished game unless a move is still waiting on it."""
        lock = self._locks.get(game_id)
        if lock is not None and not lock.locked():
            del self._locks[game_id]

    def __len__(self) -> int:
        return len(self._locks)


_game_locks: GameLocks | None = None


def get_game_locks() -> GameLocks:
    """Return the process-wide lock map."""
    global _game_locks
    if _game_locks is None:
        _game_locks = GameLocks()
    return _game_locks
