"""SQLite storage implementations."""

from stockledger.infrastructure.storage.sqlite.connection import ConnectionPool
from stockledger.infrastructure.storage.sqlite.migrations.migrator import run_migrations
from stockledger.infrastructure.storage.sqlite.movement_store import SQLiteMovementStore

__all__ = [
    "ConnectionPool",
    "SQLiteMovementStore",
    "run_migrations",
]
