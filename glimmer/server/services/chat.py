"""
Chat service.

Persists direct and room messages. Direct messages are pushed to the receiver
when they are online and bump the friendship streak; room messages are only
stored and read back through the room history.
"""

from __future__ import annotations

from typing import List, Optional

from glimmer.core.database.entities import ChatMessage, User
from glimmer.core.database.repositories import RepoBundle
from glimmer.core.logging_config import get_logger
from glimmer.core.models.domain.enums import ChatMessageType
from glimmer.core.models.io import ChatMessageRead
from glimmer.errors import NotFoundError, ValidationError
from glimmer.realtime.protocol import ChatOut
from glimmer.realtime.registry import ConnectionRegistry

from .friends import FriendService

logger = get_logger(__name__)


class ChatService:
    """Business rules for chat messages."""

    def __init__(self, repos: RepoBundle, registry: ConnectionRegistry, friends: FriendService) -> None:
        self.repos = repos
        self.registry = registry
        self.friends = friends

    async def send_direct(
        self,
        sender: User,
        receiver_id: str,
        content: str,
        type: ChatMessageType = ChatMessageType.text,
    ) -> ChatMessageRead:
        """Store a direct message, deliver it if the receiver is online and bump the streak.

        Raises:
            ValidationError: Messaging yourself.
            NotFoundError: No such receiver.
        """
        if receiver_id == sender.id:
            raise ValidationError("You cannot message yourself")
        receiver = await self.repos.users.get_by_id(receiver_id)
        if receiver is None:
            raise NotFoundError("User", receiver_id)

        message = await self.repos.chat.create(
            ChatMessage(sender_id=sender.id, receiver_id=receiver.id, content=content, type=type.value)
        )
        await self.friends.record_interaction(sender.id, receiver.id)
        await self.repos.users.touch(sender.id)
        await self.repos.commit()

        message_read = ChatMessageRead.model_validate(message)
        delivered = await self.registry.send_to(
            receiver.id, ChatOut(message=message_read.model_dump(mode="json")).to_wire()
        )
        logger.debug(f"Chat {message.id} {sender.id} -> {receiver.id} (delivered={delivered})")
        return message_read

    async def send_room(self, sender: User, room_id: str, content: str) -> ChatMessageRead:
        """Store a group-room message."""
        message = await self.repos.chat.create(
            ChatMessage(sender_id=sender.id, room_id=room_id, content=content, type=ChatMessageType.text.value)
        )
        await self.repos.users.touch(sender.id)
        await self.repos.commit()
        return ChatMessageRead.model_validate(message)

    async def send(
        self, sender: User, content: str, receiver_id: Optional[str] = None, room_id: Optional[str] = None
    ) -> ChatMessageRead:
        """Route a message to a receiver or a room; a receiver takes precedence."""
        if receiver_id is not None:
            return await self.send_direct(sender, receiver_id, content)
        if room_id is not None:
            return await self.send_room(sender, room_id, content)
        raise ValidationError("A message needs a receiver or a room")

    async def history(
        self, user: User, friend_id: str, limit: Optional[int] = 50, offset: Optional[int] = 0
    ) -> List[ChatMessageRead]:
        """Direct messages between the user and ``friend_id``, oldest first.

        Raises:
            NotFoundError: No such user.
        """
        if await self.repos.users.get_by_id(friend_id) is None:
            raise NotFoundError("User", friend_id)
        messages = await self.repos.chat.list_direct(user.id, friend_id, limit, offset)
        return [ChatMessageRead.model_validate(m) for m in messages]

    async def room_history(
        self, room_id: str, limit: Optional[int] = 50, offset: Optional[int] = 0
    ) -> List[ChatMessageRead]:
        messages = await self.repos.chat.list_room(room_id, limit, offset)
        return [ChatMessageRead.model_validate(m) for m in messages]
