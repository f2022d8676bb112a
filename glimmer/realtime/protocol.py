"""
WebSocket message protocol.

Every frame is a JSON object discriminated by ``type``. Inbound messages are
parsed into pydantic models; outbound messages are built as models and sent
with :meth:`OutboundMessage.to_wire`. Inbound field names are snake_case, and
the camelCase names older clients send (``userId``, ``receiverId``,
``gameId``, ``roomId``) are accepted too.
"""

from __future__ import annotations

import json
from typing import Annotated, Any, Dict, List, Literal, Optional, Union

from pydantic import AliasChoices, BaseModel, Field, TypeAdapter, model_validator
from pydantic import ValidationError as PydanticValidationError

from glimmer.errors import GlimmerError

# =====================================================================
# Inbound (client -> server)
# =====================================================================


class InboundMessage(BaseModel):
    """Base for client-originated messages."""


class AuthMessage(InboundMessage):
    type: Literal["auth"]
    user_id: str = Field(min_length=1, validation_alias=AliasChoices("user_id", "userId"))


class ChatInbound(InboundMessage):
    type: Literal["chat"]
    receiver_id: Optional[str] = Field(default=None, validation_alias=AliasChoices("receiver_id", "receiverId"))
    room_id: Optional[str] = Field(default=None, validation_alias=AliasChoices("room_id", "roomId"))
    content: str = Field(min_length=1, max_length=4000)

    @model_validator(mode="after")
    def _needs_destination(self) -> "ChatInbound":
        if self.receiver_id is None and self.room_id is None:
            raise ValueError("chat needs a receiver_id or a room_id")
        return self


class GameMoveInbound(InboundMessage):
    type: Literal["game_move"]
    game_id: str = Field(validation_alias=AliasChoices("game_id", "gameId"))
    move: Dict[str, Any]


class TypingInbound(InboundMessage):
    type: Literal["typing"]
    receiver_id: str = Field(validation_alias=AliasChoices("receiver_id", "receiverId"))


class PingInbound(InboundMessage):
    type: Literal["ping"]


AnyInbound = Annotated[
    Union[AuthMessage, ChatInbound, GameMoveInbound, TypingInbound, PingInbound],
    Field(discriminator="type"),
]

_inbound_adapter: TypeAdapter[AnyInbound] = TypeAdapter(AnyInbound)


class ProtocolError(GlimmerError):
    """Raised when a frame is not valid JSON or not a known message."""

    code = "invalid_message"


def parse_inbound(raw: str | bytes) -> AnyInbound:
    """Parse one frame into an inbound message model.

    Raises:
        ProtocolError: The frame is not JSON, has an unknown ``type`` or
            is missing required fields.
    """
    try:
        data = json.loads(raw)
    except (TypeError, ValueError) as e:
        raise ProtocolError(f"Malformed JSON: {e}") from e
    if not isinstance(data, dict):
        raise ProtocolError("Message must be a JSON object")
    try:
        return _inbound_adapter.validate_python(data)
    except PydanticValidationError as e:
        first = e.errors()[0] if e.errors() else {}
        raise ProtocolError(f"Invalid '{data.get('type')}' message: {first.get('msg', 'validation failed')}") from e


# =====================================================================
# Outbound (server -> client)
# =====================================================================


class OutboundMessage(BaseModel):
    """Base for server-originated messages."""

    type: str

    def to_wire(self) -> Dict[str, Any]:
        return self.model_dump(mode="json")


class AuthOk(OutboundMessage):
    type: Literal["auth_ok"] = "auth_ok"
    user_id: str
    online_friends: List[str] = Field(default_factory=list)


class ChatOut(OutboundMessage):
    type: Literal["chat"] = "chat"
    message: Dict[str, Any]


class ChatAck(OutboundMessage):
    type: Literal["chat_ack"] = "chat_ack"
    message: Dict[str, Any]


class GameUpdate(OutboundMessage):
    type: Literal["game_update"] = "game_update"
    game: Dict[str, Any]


class GameInvite(OutboundMessage):
    type: Literal["game_invite"] = "game_invite"
    game: Dict[str, Any]
    from_user: Dict[str, Any]


class Presence(OutboundMessage):
    type: Literal["presence"] = "presence"
    user_id: str
    online: bool


class FriendRequest(OutboundMessage):
    type: Literal["friend_request"] = "friend_request"
    friendship_id: str
    from_user: Dict[str, Any]


class FriendAccepted(OutboundMessage):
    type: Literal["friend_accepted"] = "friend_accepted"
    friendship_id: str
    friend: Dict[str, Any]


class PetUpdate(OutboundMessage):
    type: Literal["pet_update"] = "pet_update"
    pet: Dict[str, Any]
    action: Optional[str] = None
    by_user_id: str


class TypingOut(OutboundMessage):
    type: Literal["typing"] = "typing"
    user_id: str


class Pong(OutboundMessage):
    type: Literal["pong"] = "pong"


class ErrorOut(OutboundMessage):
    type: Literal["error"] = "error"
    code: str
    detail: str
