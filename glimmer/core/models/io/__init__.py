"""
I/O models for API requests and responses.

These Pydantic schemas define the contract between API endpoints (and the
WebSocket relay) and clients. They are separate from database entities to
allow independent evolution of API contracts.
"""

from .activities import ActivityRead, ChatbotRequest, ChatbotResponse, DashboardRead
from .chat import ChatMessageCreate, ChatMessageRead
from .friends import ConversationRead, FriendRequestCreate, FriendshipRead, FriendshipUpdate
from .games import GameCreate, GameMoveRequest, GameRead
from .memories import MemoryCreate, MemoryInsight, MemoryRead, StarPosition
from .pets import CoCareRequest, PetActionRequest, PetActionResult, PetRead
from .users import UserCreate, UserRead, UserSummary

__all__ = [
    "ActivityRead",
    "ChatMessageCreate",
    "ChatMessageRead",
    "ChatbotRequest",
    "ChatbotResponse",
    "CoCareRequest",
    "ConversationRead",
    "DashboardRead",
    "FriendRequestCreate",
    "FriendshipRead",
    "FriendshipUpdate",
    "GameCreate",
    "GameMoveRequest",
    "GameRead",
    "MemoryCreate",
    "MemoryInsight",
    "MemoryRead",
    "PetActionRequest",
    "PetActionResult",
    "PetRead",
    "StarPosition",
    "UserCreate",
    "UserRead",
    "UserSummary",
]
