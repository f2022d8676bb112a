"""
Repository bundle for dependency injection.

This module provides a convenience bundle of all repository instances
sharing one session, so a service can touch several tables in one unit of work.
"""

from __future__ import annotations

from dataclasses import dataclass

from sqlmodel.ext.asyncio.session import AsyncSession

from .activities import ActivityRepository
from .chat_messages import ChatMessageRepository
from .friends import FriendshipRepository
from .games import GameRepository
from .memories import MemoryRepository
from .pets import PetRepository
from .users import UserRepository


@dataclass(frozen=True)
class RepoBundle:
    """Convenience bundle of all SQL repositories bound to one session."""

    session: AsyncSession
    users: UserRepository
    memories: MemoryRepository
    friends: FriendshipRepository
    pets: PetRepository
    chat: ChatMessageRepository
    games: GameRepository
    activities: ActivityRepository

    async def commit(self) -> None:
        await self.session.commit()

    async def rollback(self) -> None:
        await self.session.rollback()


def build_repos(session: AsyncSession) -> RepoBundle:
    """Build a RepoBundle from an existing session.

    Args:
        session: Existing async session

    Returns:
        Bundle containing all repository instances
    """
    return RepoBundle(
        session=session,
        users=UserRepository(session),
        memories=MemoryRepository(session),
        friends=FriendshipRepository(session),
        pets=PetRepository(session),
        chat=ChatMessageRepository(session),
        games=GameRepository(session),
        activities=ActivityRepository(session),
    )
