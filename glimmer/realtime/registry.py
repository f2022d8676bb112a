"""
WebSocket connection registry.

Maps each online user to their single open socket. Delivery is best-effort:
a message is sent only if the user is connected right now; nothing is queued
for offline users and failed sends are not retried.
"""

from __future__ import annotations

import asyncio
from typing import Any, Dict, Iterable, List, Optional, Protocol, Set

from glimmer.core.logging_config import get_logger

logger = get_logger(__name__)


class SocketLike(Protocol):
    """The part of a WebSocket the registry needs."""

    async def send_json(self, data: Any, mode: str = "text") -> None: ...

    async def close(self, code: int = 1000, reason: Optional[str] = None) -> None: ...


class ConnectionRegistry:
    """Single-process map from user id to that user's open socket."""

    def __init__(self) -> None:
        self._connections: Dict[str, SocketLike] = {}
        self._lock = asyncio.Lock()

    async def connect(self, user_id: str, socket: SocketLike) -> None:
        """Register ``socket`` for ``user_id``, closing any socket it replaces."""
        async with self._lock:
            previous = self._connections.get(user_id)
            self._connections[user_id] = socket
        if previous is not None and previous is not socket:
            logger.info(f"Replacing existing connection for user {user_id}")
            await self._close_quietly(previous, reason="Replaced by a newer connection")
        logger.debug(f"User {user_id} connected ({len(self._connections)} online)")

    async def disconnect(self, user_id: str, socket: SocketLike) -> bool:
        """Remove the entry for ``user_id`` only if it still maps to ``socket``.

        Returns:
            True if the entry was removed.
        """
        async with self._lock:
            if self._connections.get(user_id) is not socket:
                return False
            del self._connections[user_id]
        logger.debug(f"User {user_id} disconnected ({len(self._connections)} online)")
        return True

    def connection_for(self, user_id: str) -> Optional[SocketLike]:
        return self._connections.get(user_id)

    def is_online(self, user_id: str) -> bool:
        return user_id in self._connections

    def online_users(self) -> List[str]:
        return list(self._connections)

    async def send_to(self, user_id: str, message: Dict[str, Any]) -> bool:
        """Deliver ``message`` to ``user_id`` if currently connected.

        A socket that fails to send is dropped from the registry. Never raises.

        Returns:
            True if the message was handed to the socket.
        """
        socket = self._connections.get(user_id)
        if socket is None:
            return False
        try:
            await socket.send_json(message)
            return True
        except Exception as e:
            logger.warning(f"Dropping connection for user {user_id} after failed send: {e}")
            await self.disconnect(user_id, socket)
            await self._close_quietly(socket, reason="Send failed")
            return False

    async def broadcast(self, user_ids: Iterable[str], message: Dict[str, Any]) -> Set[str]:
        """Fan ``message`` out to every connected user in ``user_ids``.

        Returns:
            The ids the message was delivered to.
        """
        targets = list(dict.fromkeys(user_ids))
        results = await asyncio.gather(*(self.send_to(user_id, message) for user_id in targets))
        return {user_id for user_id, delivered in zip(targets, results) if delivered}

    @staticmethod
    async def _close_quietly(socket: SocketLike, reason: str) -> None:
        try:
            await socket.close(code=1000, reason=reason)
        except Exception as e:
            logger.debug(f"Ignoring error while closing socket: {e}")

    def __len__(self) -> int:
        return len(self._connections)


_registry: ConnectionRegistry | None = None


def get_registry() -> ConnectionRegistry:
    """
    Returns the global singleton instance of ConnectionRegistry.

    Creates it on first call.
    """
    global _registry
    if _registry is None:
        _registry = ConnectionRegistry()
    return _registry
