"""Domain enums for Glimmer models."""

from __future__ import annotations

from enum import Enum


class MemoryType(str, Enum):
    """Kind of content a memory holds."""

    text = "text"
    image = "image"
    video = "video"


class FriendshipStatus(str, Enum):
    """Lifecycle status of a friendship row."""

    pending = "pending"
    accepted = "accepted"
    blocked = "blocked"


class PetAction(str, Enum):
    """Care actions a pet owner or co-carer can perform."""

    feed = "feed"
    play = "play"
    sleep = "sleep"
    exercise = "exercise"


class PetMood(str, Enum):
    """Moods a pet can be in."""

    neutral = "Neutral"
    content = "Content"
    joyful = "Joyful"
    lonely = "Lonely"
    sleepy = "Sleepy"
    rested = "Rested"


class ChatMessageType(str, Enum):
    """Kind of chat message."""

    text = "text"
    image = "image"
    game_invite = "game_invite"


class GameType(str, Enum):
    """Available mini-games."""

    tic_tac_toe = "tic-tac-toe"
    rock_paper_scissors = "rock-paper-scissors"
    cosmic_cards = "cosmic-cards"


class GameStatus(str, Enum):
    """Lifecycle status of a game."""

    active = "active"
    finished = "finished"
    abandoned = "abandoned"


class ActivityType(str, Enum):
    """
    Types of entries in the activity feed.

    Activities are appended by services and never edited.
    """

    memory_shared = "memory_shared"
    memory_deleted = "memory_deleted"
    friend_added = "friend_added"
    pet_interaction = "pet_interaction"
    co_carer_added = "co_carer_added"
    game_started = "game_started"
    game_played = "game_played"
