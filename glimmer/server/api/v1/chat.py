"""
Chat Endpoints.

Message history and a REST fallback for sending direct messages. Live
delivery happens over the WebSocket endpoint.
"""

from typing import List

from fastapi import APIRouter, Query, status

from glimmer.core.models.io import ChatMessageCreate, ChatMessageRead
from glimmer.server.services.deps import ChatServiceDep, CurrentUserDep

router = APIRouter()


@router.get(
    "/rooms/{room_id}",
    response_model=List[ChatMessageRead],
    summary="Room History",
    description="Messages posted to a group room, oldest first.",
)
async def room_history(
    room_id: str,
    _: CurrentUserDep,
    chat: ChatServiceDep,
    limit: int = Query(50, ge=1, le=200, description="Maximum number of messages"),
    offset: int = Query(0, ge=0, description="Number of messages to skip"),
) -> List[ChatMessageRead]:
    return await chat.room_history(room_id, limit, offset)


@router.get(
    "/{friend_id}",
    response_model=List[ChatMessageRead],
    summary="Direct History",
    description="Direct messages exchanged with another user, oldest first.",
    responses={404: {"description": "User not found"}},
)
async def direct_history(
    friend_id: str,
    user: CurrentUserDep,
    chat: ChatServiceDep,
    limit: int = Query(50, ge=1, le=200, description="Maximum number of messages"),
    offset: int = Query(0, ge=0, description="Number of messages to skip"),
) -> List[ChatMessageRead]:
    """
    Get conversation history.

    Pagination runs over the conversation in chronological order.
    """
    return await chat.history(user, friend_id, limit, offset)


@router.post(
    "/{friend_id}",
    response_model=ChatMessageRead,
    status_code=status.HTTP_201_CREATED,
    summary="Send Direct Message",
    description="Send a direct message without a WebSocket connection.",
    responses={
        400: {"description": "Messaging yourself"},
        404: {"description": "User not found"},
    },
)
async def send_direct(
    friend_id: str, data: ChatMessageCreate, user: CurrentUserDep, chat: ChatServiceDep
) -> ChatMessageRead:
    """
    Send a direct message.

    Behaves like a WebSocket ``chat`` message: the message is stored, pushed
    to the receiver when online and counts towards the friendship streak.
    """
    return await chat.send_direct(user, friend_id, data.content, data.type)
