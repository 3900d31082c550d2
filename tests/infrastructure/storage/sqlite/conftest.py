"""Pytest fixtures for SQLite storage tests."""

from collections.abc import AsyncGenerator
from pathlib import Path

import pytest

from stockledger.infrastructure.storage.sqlite import (
    ConnectionPool,
    SQLiteMovementStore,
    run_migrations,
)


@pytest.fixture
def temp_db_path(tmp_path: Path) -> Path:
    """Create a temporary database path."""
    return tmp_path / "test.db"


@pytest.fixture
async def pool(temp_db_path: Path) -> AsyncGenerator[ConnectionPool, None]:
    """Migrated database behind a small pool."""
    await run_migrations(temp_db_path)
    pool = ConnectionPool(temp_db_path, pool_size=2)
    await pool.initialize()
    yield pool
    await pool.close()


@pytest.fixture
def movement_store(pool: ConnectionPool) -> SQLiteMovementStore:
    return SQLiteMovementStore(pool)
