"""Fixtures for Alembic migration tests."""

from pathlib import Path

import pytest
from sqlalchemy import create_engine

from alembic.config import Config

PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent.parent


@pytest.fixture
def database_file(tmp_path: Path) -> Path:
    """SQLite database file the migrations run against."""
    return tmp_path / "glimmer_migration.db"


@pytest.fixture
def alembic_config(database_file: Path) -> Config:
    """Alembic config pointing at the project's migrations and the temporary database."""
    config = Config(str(PROJECT_ROOT / "alembic.ini"))
    config.set_main_option("script_location", str(PROJECT_ROOT / "alembic"))
    config.set_main_option("sqlalchemy.url", f"sqlite+aiosqlite:///{database_file}")
    return config


@pytest.fixture
def sync_engine(database_file: Path):
    """Plain SQLite engine used to inspect the migrated schema."""
    engine = create_engine(f"sqlite:///{database_file}")
    yield engine
    engine.dispose()
