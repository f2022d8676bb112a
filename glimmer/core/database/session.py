"""
Global database session and engine management.

This module manages the global AsyncEngine and async_sessionmaker instances
that are used throughout the application for database access. HTTP handlers
receive a session per request; the WebSocket relay asks the factory for a
fresh session per inbound message.
"""

from __future__ import annotations

from typing import AsyncGenerator

from fastapi import Depends
from sqlalchemy.ext.asyncio import async_sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession

from glimmer.server.core.config import settings

from .utils import create_all, create_engine, create_sessionmaker

# Create global engine and session factory
engine = create_engine(settings.database_url)
async_session_maker = create_sessionmaker(engine)


def get_session_factory() -> async_sessionmaker[AsyncSession]:
    """
    Dependency returning the global session factory.

    Tests override this to point the whole application at another engine.
    """
    return async_session_maker


async def get_session(
    session_factory: async_sessionmaker[AsyncSession] = Depends(get_session_factory),
) -> AsyncGenerator[AsyncSession, None]:
    """
    Dependency generator for database sessions.

    Yields:
        AsyncSession: An asynchronous SQLModel session.
    """
    async with session_factory() as session:
        yield session


async def init_db() -> None:
    """
    Initialize the database.

    Creates all tables from the ORM metadata when they do not exist yet.
    NOTE: In production, Alembic migrations should be used instead of this function.
    """
    await create_all(engine)
