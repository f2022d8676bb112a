"""
WebSocket relay.

Runs one loop per connected socket: parses inbound frames, enforces the
``auth``-first rule, and delegates chat and game moves to the services. Each
inbound message gets its own database session. The sender of a chat message
or game move is always the user bound to the socket, never a field of the
message.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from typing import Any, Dict, Optional

from fastapi import WebSocket, WebSocketDisconnect
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import async_sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession

from glimmer.core.database.repositories import RepoBundle, build_repos
from glimmer.core.logging_config import get_logger
from glimmer.core.monitoring import log_error, log_realtime_event
from glimmer.errors import AuthenticationError, GlimmerError
from glimmer.games import GameLocks
from glimmer.server.services.chat import ChatService
from glimmer.server.services.friends import FriendService
from glimmer.server.services.games import GameService
from glimmer.server.services.users import UserService

from .protocol import (
    AuthMessage,
    AuthOk,
    ChatAck,
    ChatInbound,
    ErrorOut,
    GameMoveInbound,
    PingInbound,
    Pong,
    Presence,
    ProtocolError,
    TypingInbound,
    TypingOut,
    parse_inbound,
)
from .registry import ConnectionRegistry

logger = get_logger(__name__)

# Close code sent when the auth message names an unknown user
CLOSE_AUTH_FAILED = 4401


@dataclass
class _Connection:
    websocket: WebSocket
    user_id: Optional[str] = None
    closed: bool = False

    async def send(self, message: Dict[str, Any]) -> None:
        await self.websocket.send_json(message)


class RealtimeRelay:
    """Serves the ``/ws`` endpoint for one application."""

    def __init__(
        self,
        registry: ConnectionRegistry,
        session_factory: async_sessionmaker[AsyncSession],
        locks: GameLocks,
        streak_window_hours: int = 48,
    ) -> None:
        self.registry = registry
        self.session_factory = session_factory
        self.locks = locks
        self.streak_window_hours = streak_window_hours

    async def serve(self, websocket: WebSocket) -> None:
        """Accept ``websocket`` and process its frames until it disconnects."""
        await websocket.accept()
        connection = _Connection(websocket)
        log_realtime_event("connected")
        try:
            while not connection.closed:
                raw = await websocket.receive_text()
                await self.handle_frame(connection, raw)
        except WebSocketDisconnect:
            logger.debug(f"Socket closed by client (user={connection.user_id})")
        except Exception as e:
            replaced = (
                connection.user_id is not None
                and self.registry.connection_for(connection.user_id) is not websocket
            )
            if replaced:
                logger.debug(f"Replaced socket for user {connection.user_id} stopped: {e}")
            else:
                logger.error(f"WebSocket loop failed for user {connection.user_id}: {e}", exc_info=True)
        finally:
            await self._release(connection)

    async def handle_frame(self, connection: _Connection, raw: str) -> None:
        """Handle one inbound frame; domain and database errors are answered with ``error``."""
        try:
            message = parse_inbound(raw)
        except ProtocolError as e:
            await connection.send(ErrorOut(code=e.code, detail=e.detail).to_wire())
            return

        if isinstance(message, PingInbound):
            await connection.send(Pong().to_wire())
            return
        if isinstance(message, AuthMessage):
            try:
                await self._authenticate(connection, message)
            except SQLAlchemyError as e:
                await self._report_database_failure(connection, message.type, e)
            return
        if connection.user_id is None:
            await connection.send(
                ErrorOut(code="not_authenticated", detail="Send an auth message first").to_wire()
            )
            return

        log_realtime_event(message.type, connection.user_id)
        try:
            async with self.session_factory() as session:
                repos = build_repos(session)
                sender = await UserService(repos).authenticate(connection.user_id)
                if isinstance(message, ChatInbound):
                    chat = ChatService(repos, self.registry, self._friends(repos))
                    sent = await chat.send(sender, message.content, message.receiver_id, message.room_id)
                    await connection.send(ChatAck(message=sent.model_dump(mode="json")).to_wire())
                elif isinstance(message, GameMoveInbound):
                    games = GameService(repos, self.registry, self._friends(repos), self.locks)
                    await games.apply_move(sender, message.game_id, message.move)
                elif isinstance(message, TypingInbound):
                    await self.registry.send_to(message.receiver_id, TypingOut(user_id=sender.id).to_wire())
        except GlimmerError as e:
            logger.debug(f"Rejected {message.type} from {connection.user_id}: {e.code} {e.detail}")
            await connection.send(ErrorOut(code=e.code, detail=e.detail).to_wire())
        except SQLAlchemyError as e:
            await self._report_database_failure(connection, message.type, e)

    async def _report_database_failure(self, connection: _Connection, message_type: str, exc: SQLAlchemyError) -> None:
        """Log a failed database call under an error id and tell the client, keeping the socket open."""
        error_id = uuid.uuid4().hex[:12]
        error_type = type(exc).__name__
        logger.error(
            f"Database failure [{error_id}] handling {message_type} from {connection.user_id}: {exc}",
            exc_info=exc,
            extra={"error_id": error_id, "message_type": message_type, "error_type": error_type},
        )
        log_error(error_type, str(exc), {"error_id": error_id, "message_type": message_type})
        await connection.send(
            ErrorOut(code="internal_error", detail=f"Internal server error (error id {error_id})").to_wire()
        )

    async def _authenticate(self, connection: _Connection, message: AuthMessage) -> None:
        async with self.session_factory() as session:
            repos = build_repos(session)
            try:
                user = await UserService(repos).authenticate(message.user_id)
            except AuthenticationError as e:
                await connection.send(ErrorOut(code=e.code, detail=e.detail).to_wire())
                await connection.websocket.close(code=CLOSE_AUTH_FAILED, reason="Authentication failed")
                connection.closed = True
                return
            await repos.users.touch(user.id)
            await repos.commit()
            friend_ids = await repos.friends.accepted_friend_ids(user.id)

        if connection.user_id is not None and connection.user_id != user.id:
            await self._release(connection)

        connection.user_id = user.id
        await self.registry.connect(user.id, connection.websocket)
        online_friends = [friend_id for friend_id in friend_ids if self.registry.is_online(friend_id)]
        await connection.send(AuthOk(user_id=user.id, online_friends=online_friends).to_wire())
        await self.registry.broadcast(online_friends, Presence(user_id=user.id, online=True).to_wire())
        logger.info(f"User {user.id} authenticated on WebSocket")
        log_realtime_event("authenticated", user.id)

    async def _release(self, connection: _Connection) -> None:
        """Unregister the socket and tell online friends the user went offline."""
        user_id = connection.user_id
        if user_id is None:
            return
        connection.user_id = None
        if not await self.registry.disconnect(user_id, connection.websocket):
            # A newer connection for the same user took over; they are still online
            return
        async with self.session_factory() as session:
            friend_ids = await build_repos(session).friends.accepted_friend_ids(user_id)
        await self.registry.broadcast(friend_ids, Presence(user_id=user_id, online=False).to_wire())
        log_realtime_event("disconnected", user_id)

    def _friends(self, repos: RepoBundle) -> FriendService:
        return FriendService(repos, self.registry, self.streak_window_hours)
