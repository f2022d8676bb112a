"""
Data access layer.

One repository per table, plus a bundle that shares a single session across
all of them.
"""

from .activities import ActivityRepository
from .base import AsyncBaseRepository, QueryBuilder
from .bundle import RepoBundle, build_repos
from .chat_messages import ChatMessageRepository
from .friends import FriendshipRepository
from .games import GameRepository
from .memories import MemoryRepository
from .pets import PetRepository
from .users import UserRepository

__all__ = [
    "ActivityRepository",
    "AsyncBaseRepository",
    "ChatMessageRepository",
    "FriendshipRepository",
    "GameRepository",
    "MemoryRepository",
    "PetRepository",
    "QueryBuilder",
    "RepoBundle",
    "UserRepository",
    "build_repos",
]
