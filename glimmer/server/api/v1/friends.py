"""
Friend Endpoints.

Friend requests, acceptance and the conversation list. The other user is
notified over WebSocket when they are online.
"""

from typing import List

from fastapi import APIRouter, status

from glimmer.core.models.io import ConversationRead, FriendRequestCreate, FriendshipRead, FriendshipUpdate
from glimmer.server.services.deps import CurrentUserDep, FriendServiceDep, ReposDep
from glimmer.server.services.friends import friendship_view

router = APIRouter()


@router.get(
    "",
    response_model=List[FriendshipRead],
    summary="List Friendships",
    description="List every friendship involving the user, with the other user's details.",
)
async def list_friends(user: CurrentUserDep, friends: FriendServiceDep) -> List[FriendshipRead]:
    return await friends.list_friendships(user)


@router.get(
    "/conversations",
    response_model=List[ConversationRead],
    summary="Conversations",
    description="Accepted friends with the last message exchanged and their online status.",
)
async def list_conversations(user: CurrentUserDep, friends: FriendServiceDep) -> List[ConversationRead]:
    return await friends.conversations(user)


@router.post(
    "",
    response_model=FriendshipRead,
    status_code=status.HTTP_201_CREATED,
    summary="Send Friend Request",
    description="Send a friend request to a user named by id or username.",
    responses={
        400: {"description": "Befriending yourself, or a friendship already exists"},
        404: {"description": "User not found"},
    },
)
async def send_friend_request(
    data: FriendRequestCreate, user: CurrentUserDep, friends: FriendServiceDep, repos: ReposDep
) -> FriendshipRead:
    """
    Send a friend request.

    Creates a ``pending`` friendship and sends ``friend_request`` to the addressee if online.
    """
    friendship = await friends.send_request(user, data.friend_id)
    addressee = await repos.users.get_by_id(friendship.friend_id)
    return friendship_view(friendship, user.id, addressee)


@router.patch(
    "/{friendship_id}",
    response_model=FriendshipRead,
    summary="Update Friendship",
    description="Accept or block a friendship. Only the addressee may accept.",
    responses={
        403: {"description": "Not a participant, or accepting your own request"},
        404: {"description": "Friendship not found"},
    },
)
async def update_friendship(
    friendship_id: str,
    data: FriendshipUpdate,
    user: CurrentUserDep,
    friends: FriendServiceDep,
    repos: ReposDep,
) -> FriendshipRead:
    """
    Update a friendship's status.

    Accepting increments both users' friend counts, logs ``friend_added`` and
    sends ``friend_accepted`` to the requester.
    """
    friendship = await friends.update_status(user, friendship_id, data.status)
    other = await repos.users.get_by_id(friendship.other_id(user.id))
    return friendship_view(friendship, user.id, other)
