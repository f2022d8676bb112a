"""Test configuration for database unit tests.

Provides an in-memory SQLite engine per test, a session on it and the
repository bundle bound to that session.
"""

from __future__ import annotations

from typing import AsyncGenerator

import pytest
from sqlalchemy.ext.asyncio import AsyncEngine
from sqlmodel.ext.asyncio.session import AsyncSession

from glimmer.core.database import create_all, create_engine, create_sessionmaker
from glimmer.core.database.entities import User
from glimmer.core.database.repositories import RepoBundle, build_repos


@pytest.fixture(scope="function")
async def in_memory_engine() -> AsyncGenerator[AsyncEngine, None]:
    """Create in-memory SQLite engine for testing."""
    engine = create_engine("sqlite+aiosqlite:///:memory:")
    await create_all(engine)
    try:
        yield engine
    finally:
        await engine.dispose()


@pytest.fixture(scope="function")
async def in_memory_session(in_memory_engine) -> AsyncGenerator[AsyncSession, None]:
    """Create in-memory SQLite session for testing."""
    async with create_sessionmaker(in_memory_engine)() as session:
        yield session


@pytest.fixture(scope="function")
def repos(in_memory_session) -> RepoBundle:
    return build_repos(in_memory_session)


@pytest.fixture(scope="function")
def make_user(repos):
    """Factory creating and committing a user."""

    async def _make(username: str) -> User:
        user = await repos.users.create(
            User(username=username, email=f"{username}@glimmer.test", display_name=username.title())
        )
        await repos.commit()
        return user

    return _make
