"""
Centralized database layer for Glimmer.

Structure:
- entities/: Database entity models, one module per table
- repositories/: Data access layer, one repository per table
- session.py: Global engine and session factory management
- utils.py: Database utility functions (engine, session factory, create_all)
"""

from .base import Base, UTCDateTime, new_id, utc_now
from .session import (
    async_session_maker,
    engine,
    get_session,
    get_session_factory,
    init_db,
)
from .utils import (
    create_all,
    create_engine,
    create_sessionmaker,
)

__all__ = [
    "Base",
    "async_session_maker",
    "create_all",
    "create_engine",
    "create_sessionmaker",
    "engine",
    "get_session",
    "get_session_factory",
    "init_db",
    "new_id",
    "UTCDateTime",
    "utc_now",
]
