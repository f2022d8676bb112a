"""End-to-end tests for the Alembic migration scripts.

Tests verify that the initial migration:
1. Creates every application table and its indexes
2. Matches the ORM models closely enough for the application to run on it
3. Can be downgraded and upgraded again
"""

from sqlalchemy import inspect, text

from alembic import command
from glimmer.core.database.base import Base

import glimmer.core.database.entities  # noqa: F401

EXPECTED_TABLES = {"users", "memories", "friends", "pets", "chat_messages", "games", "activities"}


def test_upgrade_creates_all_tables(alembic_config, sync_engine):
    command.upgrade(alembic_config, "head")

    tables = set(inspect(sync_engine).get_table_names())
    assert EXPECTED_TABLES <= tables
    assert "alembic_version" in tables


def test_tables_match_orm_columns(alembic_config, sync_engine):
    command.upgrade(alembic_config, "head")

    inspector = inspect(sync_engine)
    for table_name in EXPECTED_TABLES:
        migrated = {column["name"] for column in inspector.get_columns(table_name)}
        modeled = set(Base.metadata.tables[table_name].columns.keys())
        assert modeled <= migrated, f"{table_name} is missing {modeled - migrated}"


def test_indexes_are_created(alembic_config, sync_engine):
    command.upgrade(alembic_config, "head")

    inspector = inspect(sync_engine)
    user_indexes = {index["name"]: index for index in inspector.get_indexes("users")}
    assert user_indexes["ix_users_username"]["unique"]
    game_indexes = {index["name"] for index in inspector.get_indexes("games")}
    assert {"ix_games_player1_id", "ix_games_player2_id", "ix_games_status"} <= game_indexes


def test_friend_pairs_are_unique_regardless_of_direction(alembic_config, sync_engine):
    command.upgrade(alembic_config, "head")

    constraints = inspect(sync_engine).get_unique_constraints("friends")
    assert [c["column_names"] for c in constraints if c["name"] == "uq_friends_pair"] == [["pair_key"]]


def test_user_counters_default_to_zero(alembic_config, sync_engine):
    command.upgrade(alembic_config, "head")

    with sync_engine.begin() as conn:
        conn.execute(
            text(
                "INSERT INTO users (id, username, email, display_name, last_active, created_at) "
                "VALUES ('u1', 'luna', 'luna@glimmer.test', 'Luna', '2026-10-18 00:00:00', '2026-10-18 00:00:00')"
            )
        )
        row = conn.execute(
            text("SELECT current_streak, longest_streak, memories_count, friends_count, pet_level FROM users")
        ).one()
    assert tuple(row) == (0, 0, 0, 0, 1)


def test_downgrade_and_upgrade_again(alembic_config, sync_engine):
    command.upgrade(alembic_config, "head")
    command.downgrade(alembic_config, "base")
    assert not EXPECTED_TABLES & set(inspect(sync_engine).get_table_names())

    command.upgrade(alembic_config, "head")
    assert EXPECTED_TABLES <= set(inspect(sync_engine).get_table_names())
