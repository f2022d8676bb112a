"""
Service Dependencies.

FastAPI dependencies wiring sessions, the acting user, the connection
registry, the AI assistant and the services built on them.
"""

from typing import Annotated, Optional

from fastapi import Depends, Header
from sqlmodel.ext.asyncio.session import AsyncSession

from glimmer.ai.assistant import CosmicAssistant, get_assistant
from glimmer.core.database.entities import User
from glimmer.core.database.repositories import RepoBundle, build_repos
from glimmer.core.database.session import get_session
from glimmer.games import GameLocks, get_game_locks
from glimmer.realtime.registry import ConnectionRegistry, get_registry
from glimmer.server.core.config import settings
from glimmer.server.core.constant import USER_ID_HEADER

from .activities import ActivityService
from .chat import ChatService
from .friends import FriendService
from .games import GameService
from .memories import MemoryService
from .pets import PetService
from .users import UserService

SessionDep = Annotated[AsyncSession, Depends(get_session)]
RegistryDep = Annotated[ConnectionRegistry, Depends(get_registry)]
AssistantDep = Annotated[CosmicAssistant, Depends(get_assistant)]
GameLocksDep = Annotated[GameLocks, Depends(get_game_locks)]


def get_repos(session: SessionDep) -> RepoBundle:
    return build_repos(session)


ReposDep = Annotated[RepoBundle, Depends(get_repos)]


def get_user_service(repos: ReposDep) -> UserService:
    return UserService(repos)


UserServiceDep = Annotated[UserService, Depends(get_user_service)]


async def get_current_user(
    users: UserServiceDep,
    x_user_id: Annotated[Optional[str], Header(alias=USER_ID_HEADER)] = None,
) -> User:
    """
    Resolve the acting user from the ``X-User-Id`` header.

    Raises:
        AuthenticationError: Header missing or naming an unknown user (401).
    """
    return await users.authenticate(x_user_id)


CurrentUserDep = Annotated[User, Depends(get_current_user)]


def get_friend_service(repos: ReposDep, registry: RegistryDep) -> FriendService:
    return FriendService(repos, registry, settings.friend_streak_window_hours)


FriendServiceDep = Annotated[FriendService, Depends(get_friend_service)]


def get_activity_service(repos: ReposDep) -> ActivityService:
    return ActivityService(repos)


ActivityServiceDep = Annotated[ActivityService, Depends(get_activity_service)]


def get_memory_service(repos: ReposDep, assistant: AssistantDep) -> MemoryService:
    return MemoryService(repos, assistant)


MemoryServiceDep = Annotated[MemoryService, Depends(get_memory_service)]


def get_pet_service(
    repos: ReposDep, registry: RegistryDep, assistant: AssistantDep, friends: FriendServiceDep
) -> PetService:
    return PetService(repos, registry, assistant, friends)


PetServiceDep = Annotated[PetService, Depends(get_pet_service)]


def get_chat_service(repos: ReposDep, registry: RegistryDep, friends: FriendServiceDep) -> ChatService:
    return ChatService(repos, registry, friends)


ChatServiceDep = Annotated[ChatService, Depends(get_chat_service)]


def get_game_service(
    repos: ReposDep, registry: RegistryDep, friends: FriendServiceDep, locks: GameLocksDep
) -> GameService:
    return GameService(repos, registry, friends, locks)


GameServiceDep = Annotated[GameService, Depends(get_game_service)]
