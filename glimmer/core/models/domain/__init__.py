"""Domain enums shared by entities, services, engines and the API."""

from .enums import (
    ActivityType,
    ChatMessageType,
    FriendshipStatus,
    GameStatus,
    GameType,
    MemoryType,
    PetAction,
    PetMood,
)

__all__ = [
    "ActivityType",
    "ChatMessageType",
    "FriendshipStatus",
    "GameStatus",
    "GameType",
    "MemoryType",
    "PetAction",
    "PetMood",
]
