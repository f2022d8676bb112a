"""
Friendship service.

Friend requests, acceptance, conversation lists and friendship streaks.
Notifications to the other user go through the connection registry and are
sent only after the change is committed.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import List, Optional

from sqlalchemy.exc import IntegrityError

from glimmer.core.database.base import utc_now
from glimmer.core.database.entities import Friendship, User
from glimmer.core.database.repositories import RepoBundle
from glimmer.core.logging_config import get_logger
from glimmer.core.models.domain.enums import ActivityType, FriendshipStatus
from glimmer.core.models.io import ChatMessageRead, ConversationRead, FriendshipRead, UserSummary
from glimmer.errors import NotFoundError, PermissionDeniedError, ValidationError
from glimmer.realtime.protocol import FriendAccepted, FriendRequest
from glimmer.realtime.registry import ConnectionRegistry

from .activities import ActivityService

logger = get_logger(__name__)


def next_streak(current: int, last_interaction: Optional[datetime], now: datetime, window: timedelta) -> int:
    """Streak count after an interaction at ``now``.

    Another interaction on the same UTC day leaves the streak unchanged; one
    within ``window`` of the previous interaction extends it; a longer gap (or
    no previous interaction) starts over at 1.
    """
    if last_interaction is None:
        return 1
    if last_interaction.date() == now.date():
        return max(current, 1)
    if now - last_interaction <= window:
        return current + 1
    return 1


def friendship_view(friendship: Friendship, viewer_id: str, other: User) -> FriendshipRead:
    """The friendship as seen by ``viewer_id``, with the other user's details."""
    return FriendshipRead(
        id=friendship.id,
        status=FriendshipStatus(friendship.status),
        streak_count=friendship.streak_count,
        last_interaction=friendship.last_interaction,
        created_at=friendship.created_at,
        is_requester=friendship.user_id == viewer_id,
        friend=UserSummary.model_validate(other),
    )


class FriendService:
    """Business rules for friendships and streaks."""

    def __init__(self, repos: RepoBundle, registry: ConnectionRegistry, streak_window_hours: int = 48) -> None:
        self.repos = repos
        self.registry = registry
        self.streak_window = timedelta(hours=streak_window_hours)
        self.activities = ActivityService(repos)

    async def list_friendships(self, user: User) -> List[FriendshipRead]:
        """All friendships involving the user, each with the other user's details."""
        friendships = await self.repos.friends.list_for_user(user.id)
        others = {u.id: u for u in await self.repos.users.get_many(f.other_id(user.id) for f in friendships)}
        return [
            friendship_view(f, user.id, others[f.other_id(user.id)])
            for f in friendships
            if f.other_id(user.id) in others
        ]

    async def conversations(self, user: User) -> List[ConversationRead]:
        """Accepted friends with the last message exchanged, most recent chats first."""
        friendships = await self.repos.friends.list_for_user(user.id, FriendshipStatus.accepted)
        others = {u.id: u for u in await self.repos.users.get_many(f.other_id(user.id) for f in friendships)}
        conversations = []
        for friendship in friendships:
            friend = others.get(friendship.other_id(user.id))
            if friend is None:
                continue
            last_message = await self.repos.chat.last_direct(user.id, friend.id)
            conversations.append(
                ConversationRead(
                    friendship_id=friendship.id,
                    friend=UserSummary.model_validate(friend),
                    streak_count=friendship.streak_count,
                    online=self.registry.is_online(friend.id),
                    last_message=ChatMessageRead.model_validate(last_message) if last_message else None,
                )
            )
        conversations.sort(
            key=lambda c: c.last_message.created_at if c.last_message else datetime.min.replace(tzinfo=timezone.utc),
            reverse=True,
        )
        return conversations

    async def _resolve_user(self, reference: str) -> User:
        user = await self.repos.users.get_by_id(reference)
        if user is None:
            user = await self.repos.users.get_by_username(reference)
        if user is None:
            raise NotFoundError("User", reference)
        return user

    async def send_request(self, user: User, friend_reference: str) -> Friendship:
        """Send a friend request to a user named by id or username.

        Raises:
            ValidationError: Befriending yourself, or a friendship already exists.
            NotFoundError: No such user.
        """
        friend = await self._resolve_user(friend_reference)
        if friend.id == user.id:
            raise ValidationError("You cannot befriend yourself")
        if await self.repos.friends.get_between(user.id, friend.id) is not None:
            raise ValidationError("A friendship with this user already exists", code="friendship_exists")

        try:
            friendship = await self.repos.friends.create(
                Friendship(user_id=user.id, friend_id=friend.id, status=FriendshipStatus.pending.value)
            )
            await self.repos.commit()
        except IntegrityError as e:
            await self.repos.rollback()
            raise ValidationError("A friendship with this user already exists", code="friendship_exists") from e

        logger.info(f"Friend request {friendship.id}: {user.id} -> {friend.id}")
        await self.registry.send_to(
            friend.id,
            FriendRequest(
                friendship_id=friendship.id,
                from_user=UserSummary.model_validate(user).model_dump(mode="json"),
            ).to_wire(),
        )
        return friendship

    async def update_status(self, user: User, friendship_id: str, status: FriendshipStatus) -> Friendship:
        """Accept or block a friendship.

        Only participants may change a friendship, and only the addressee may
        accept it. Accepting bumps both users' friend counters and logs
        ``friend_added`` for both; blocking an accepted friendship reverses the
        counters.

        Raises:
            NotFoundError: No such friendship.
            PermissionDeniedError: Not a participant, or accepting your own request.
            ValidationError: Unsupported status transition.
        """
        friendship = await self.repos.friends.get_by_id(friendship_id)
        if friendship is None:
            raise NotFoundError("Friendship", friendship_id)
        if user.id not in (friendship.user_id, friendship.friend_id):
            raise PermissionDeniedError("You are not part of this friendship")

        previous = FriendshipStatus(friendship.status)
        if status == previous:
            return friendship

        pair = [friendship.user_id, friendship.friend_id]
        if status == FriendshipStatus.accepted:
            if previous != FriendshipStatus.pending:
                raise ValidationError(f"Cannot accept a {previous.value} friendship")
            if user.id != friendship.friend_id:
                raise PermissionDeniedError("Only the addressee can accept a friend request")
            friendship.status = status.value
            await self.repos.friends.update(friendship)
            await self.repos.users.adjust_friends_count(pair, 1)
            requester = await self.repos.users.get_by_id(friendship.user_id)
            requester_name = requester.display_name if requester else "a friend"
            await self.activities.log(
                friendship.friend_id,
                ActivityType.friend_added,
                f"Became friends with {requester_name}",
                {"friendship_id": friendship.id, "friend_id": friendship.user_id},
            )
            await self.activities.log(
                friendship.user_id,
                ActivityType.friend_added,
                f"Became friends with {user.display_name}",
                {"friendship_id": friendship.id, "friend_id": friendship.friend_id},
            )
        elif status == FriendshipStatus.blocked:
            friendship.status = status.value
            await self.repos.friends.update(friendship)
            if previous == FriendshipStatus.accepted:
                await self.repos.users.adjust_friends_count(pair, -1)
        else:
            raise ValidationError(f"Cannot move a friendship back to {status.value}")

        await self.repos.commit()
        logger.info(f"Friendship {friendship.id} {previous.value} -> {status.value} by {user.id}")

        if status == FriendshipStatus.accepted:
            await self.registry.send_to(
                friendship.user_id,
                FriendAccepted(
                    friendship_id=friendship.id,
                    friend=UserSummary.model_validate(user).model_dump(mode="json"),
                ).to_wire(),
            )
        return friendship

    async def record_interaction(self, user_a: str, user_b: str, now: Optional[datetime] = None) -> Optional[int]:
        """Advance the streak of an accepted friendship after an interaction.

        Stages the change without committing. Updates both users'
        ``current_streak`` (the best live streak among their friendships) and
        ``longest_streak``.

        Returns:
            The new streak count, or None when the users are not accepted friends.
        """
        friendship = await self.repos.friends.get_between(user_a, user_b)
        if friendship is None or friendship.status != FriendshipStatus.accepted.value:
            return None

        now = now or utc_now()
        friendship.streak_count = next_streak(friendship.streak_count, friendship.last_interaction, now, self.streak_window)
        friendship.last_interaction = now
        await self.repos.friends.update(friendship)

        for user_id in (user_a, user_b):
            await self.repos.users.set_streaks(user_id, await self._best_live_streak(user_id, now))
        return friendship.streak_count

    async def _best_live_streak(self, user_id: str, now: datetime) -> int:
        friendships = await self.repos.friends.list_for_user(user_id, FriendshipStatus.accepted)
        live = [
            f.streak_count
            for f in friendships
            if f.last_interaction is not None and now - f.last_interaction <= self.streak_window
        ]
        return max(live, default=0)

    async def require_friends(self, user_id: str, other_id: str, action: str) -> None:
        """Raise unless the two users are accepted friends.

        Raises:
            PermissionDeniedError: They are not accepted friends.
        """
        if not await self.repos.friends.are_friends(user_id, other_id):
            raise PermissionDeniedError(f"You can only {action} with an accepted friend", code="not_friends")
