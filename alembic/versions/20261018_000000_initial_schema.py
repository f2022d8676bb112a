"""Initial schema for Glimmer

Revision ID: 20261018_000000
Revises: None
Create Date: 2026-10-18 00:00:00.000000

Creates the seven application tables:
- users (with denormalized streak, memory, friend and pet counters)
- memories, friends, pets, chat_messages, games, activities

Revision format: YYYYMMDD_HHMMSS_description

"""

from typing import Sequence, Union

import sqlalchemy as sa

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "20261018_000000"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create all tables."""

    # Create users table
    op.create_table(
        "users",
        sa.Column("id", sa.String(36), nullable=False),
        sa.Column("username", sa.String(64), nullable=False),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("display_name", sa.String(128), nullable=False),
        sa.Column("current_streak", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("longest_streak", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("memories_count", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("friends_count", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("pet_level", sa.Integer(), nullable=False, server_default="1"),
        sa.Column("last_active", sa.DateTime(timezone=True), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("email"),
    )
    op.create_index("ix_users_username", "users", ["username"], unique=True)

    # Create memories table
    op.create_table(
        "memories",
        sa.Column("id", sa.String(36), nullable=False),
        sa.Column("user_id", sa.String(36), nullable=False),
        sa.Column("title", sa.String(200), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("type", sa.String(16), nullable=False, server_default="text"),
        sa.Column("star_position", sa.JSON(), nullable=False),
        sa.Column("is_public", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"]),
    )
    op.create_index("ix_memories_user_id", "memories", ["user_id"])
    op.create_index("ix_memories_created_at", "memories", ["created_at"])

    # Create friends table
    op.create_table(
        "friends",
        sa.Column("id", sa.String(36), nullable=False),
        sa.Column("user_id", sa.String(36), nullable=False),
        sa.Column("friend_id", sa.String(36), nullable=False),
        sa.Column("pair_key", sa.String(73), nullable=False),
        sa.Column("status", sa.String(16), nullable=False, server_default="pending"),
        sa.Column("streak_count", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("last_interaction", sa.DateTime(timezone=True), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"]),
        sa.ForeignKeyConstraint(["friend_id"], ["users.id"]),
        sa.UniqueConstraint("pair_key", name="uq_friends_pair"),
    )
    op.create_index("ix_friends_user_id", "friends", ["user_id"])
    op.create_index("ix_friends_friend_id", "friends", ["friend_id"])

    # Create pets table
    op.create_table(
        "pets",
        sa.Column("id", sa.String(36), nullable=False),
        sa.Column("user_id", sa.String(36), nullable=False),
        sa.Column("name", sa.String(64), nullable=False, server_default="Stardust"),
        sa.Column("species", sa.String(64), nullable=False, server_default="Cosmic Fairy"),
        sa.Column("level", sa.Integer(), nullable=False, server_default="1"),
        sa.Column("happiness", sa.Integer(), nullable=False, server_default="50"),
        sa.Column("energy", sa.Integer(), nullable=False, server_default="50"),
        sa.Column("bond", sa.Integer(), nullable=False, server_default="30"),
        sa.Column("experience", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("mood", sa.String(32), nullable=False, server_default="Neutral"),
        sa.Column("co_carer_id", sa.String(36), nullable=True),
        sa.Column("last_fed", sa.DateTime(timezone=True), nullable=True),
        sa.Column("last_played", sa.DateTime(timezone=True), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"]),
        sa.ForeignKeyConstraint(["co_carer_id"], ["users.id"]),
    )
    op.create_index("ix_pets_user_id", "pets", ["user_id"])
    op.create_index("ix_pets_co_carer_id", "pets", ["co_carer_id"])

    # Create chat_messages table
    op.create_table(
        "chat_messages",
        sa.Column("id", sa.String(36), nullable=False),
        sa.Column("sender_id", sa.String(36), nullable=False),
        sa.Column("receiver_id", sa.String(36), nullable=True),
        sa.Column("room_id", sa.String(64), nullable=True),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("type", sa.String(16), nullable=False, server_default="text"),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["sender_id"], ["users.id"]),
        sa.ForeignKeyConstraint(["receiver_id"], ["users.id"]),
    )
    op.create_index("ix_chat_messages_sender_id", "chat_messages", ["sender_id"])
    op.create_index("ix_chat_messages_receiver_id", "chat_messages", ["receiver_id"])
    op.create_index("ix_chat_messages_room_id", "chat_messages", ["room_id"])
    op.create_index("ix_chat_messages_created_at", "chat_messages", ["created_at"])

    # Create games table
    op.create_table(
        "games",
        sa.Column("id", sa.String(36), nullable=False),
        sa.Column("player1_id", sa.String(36), nullable=False),
        sa.Column("player2_id", sa.String(36), nullable=False),
        sa.Column("game_type", sa.String(32), nullable=False),
        sa.Column("game_state", sa.JSON(), nullable=False),
        sa.Column("status", sa.String(16), nullable=False, server_default="active"),
        sa.Column("winner_id", sa.String(36), nullable=True),
        sa.Column("current_turn", sa.String(36), nullable=True),
        sa.Column("move_count", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["player1_id"], ["users.id"]),
        sa.ForeignKeyConstraint(["player2_id"], ["users.id"]),
        sa.ForeignKeyConstraint(["winner_id"], ["users.id"]),
    )
    op.create_index("ix_games_player1_id", "games", ["player1_id"])
    op.create_index("ix_games_player2_id", "games", ["player2_id"])
    op.create_index("ix_games_status", "games", ["status"])

    # Create activities table
    op.create_table(
        "activities",
        sa.Column("id", sa.String(36), nullable=False),
        sa.Column("user_id", sa.String(36), nullable=False),
        sa.Column("type", sa.String(32), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("data", sa.JSON(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"]),
    )
    op.create_index("ix_activities_user_id", "activities", ["user_id"])
    op.create_index("ix_activities_created_at", "activities", ["created_at"])


def downgrade() -> None:
    """Drop all tables."""
    op.drop_table("activities")
    op.drop_table("games")
    op.drop_table("chat_messages")
    op.drop_table("pets")
    op.drop_table("friends")
    op.drop_table("memories")
    op.drop_table("users")
