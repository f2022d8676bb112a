"""
Database entity models.

One module per table:
- users: registered users and their counters
- memories: memories rendered as stars
- friends: friend requests and friendships with streaks
- pets: cosmic pets and their co-carers
- chat_messages: direct and room chat messages
- games: turn-based mini-games
- activities: append-only activity feed
"""

from .activities import Activity
from .chat_messages import ChatMessage
from .friends import Friendship
from .games import Game
from .memories import Memory
from .pets import Pet
from .users import User

__all__ = [
    "Activity",
    "ChatMessage",
    "Friendship",
    "Game",
    "Memory",
    "Pet",
    "User",
]
