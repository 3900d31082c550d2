"""
Versioned schema migrations for the ledger database.

Migration files are named ``vNNN_description.sql`` and run in numeric
version order. Each applied version is recorded in ``schema_migrations``
with a checksum of its file; an applied file that has since been edited
stops the run instead of silently diverging.

Before an existing database is migrated, a copy is taken with SQLite's
online backup API and restored if any migration fails.
"""

import hashlib
import re
import time
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path

import aiosqlite

from stockledger.config import get_logger
from stockledger.core.exceptions import ConfigurationError

logger = get_logger(__name__)

MIGRATIONS_DIR = Path(__file__).parent

_FILENAME = re.compile(r"v(?P<version>\d+)_(?P<name>\w+)\.sql")

_TRACKING_DDL = """
CREATE TABLE IF NOT EXISTS schema_migrations (
    version TEXT PRIMARY KEY,
    name TEXT NOT NULL,
    checksum TEXT NOT NULL,
    applied_at TEXT NOT NULL DEFAULT (datetime('now')),
    execution_time_ms INTEGER
)
"""


@dataclass(frozen=True)
class MigrationInfo:
    """A migration file on disk."""

    version: str
    name: str
    path: Path
    checksum: str

    @classmethod
    def from_file(cls, path: Path) -> "MigrationInfo":
        match = _FILENAME.fullmatch(path.name)
        if match is None:
            raise ValueError(f"Invalid migration filename: {path.name}")
        return cls(
            version=match["version"],
            name=match["name"],
            path=path,
            checksum=hashlib.sha256(path.read_bytes()).hexdigest()[:16],
        )


@dataclass
class MigrationResult:
    """Outcome of applying one migration."""

    version: str
    name: str
    success: bool
    execution_time_ms: int
    error: str | None = None


def _elapsed_ms(started: float) -> int:
    return int((time.perf_counter() - started) * 1000)


def discover_migrations(directory: Path = MIGRATIONS_DIR) -> list[MigrationInfo]:
    """Migration files in ``directory``, lowest version first."""
    found = []
    for path in directory.glob("v*.sql"):
        try:
            found.append(MigrationInfo.from_file(path))
        except ValueError as e:
            logger.warning("skipping_invalid_migration", path=str(path), error=str(e))
    return sorted(found, key=lambda m: int(m.version))


async def get_applied_migrations(conn: aiosqlite.Connection) -> dict[str, str]:
    """Applied versions mapped to the checksum recorded when they ran."""
    try:
        cursor = await conn.execute("SELECT version, checksum FROM schema_migrations")
        return {version: checksum for version, checksum in await cursor.fetchall()}
    except aiosqlite.OperationalError:
        # No tracking table yet
        return {}


def _ensure_unchanged(migrations: list[MigrationInfo], applied: dict[str, str]) -> None:
    edited = [
        m.version
        for m in migrations
        if m.version in applied and applied[m.version] != m.checksum
    ]
    if edited:
        logger.error("applied_migration_modified", versions=edited)
        raise ConfigurationError(
            f"Applied migrations were modified: {', '.join(edited)}",
            details={"versions": edited},
        )


async def apply_migration(
    conn: aiosqlite.Connection,
    migration: MigrationInfo,
) -> MigrationResult:
    """Run one migration script and record it. Failures are returned, not raised."""
    logger.info("applying_migration", version=migration.version, name=migration.name)
    started = time.perf_counter()

    try:
        await conn.executescript(migration.path.read_text(encoding="utf-8"))
        elapsed = _elapsed_ms(started)
        await conn.execute(
            "INSERT INTO schema_migrations (version, name, checksum, execution_time_ms) "
            "VALUES (?, ?, ?, ?)",
            (migration.version, migration.name, migration.checksum, elapsed),
        )
        await conn.commit()
    except aiosqlite.Error as e:
        await conn.rollback()
        logger.error("migration_failed", version=migration.version, error=str(e))
        return MigrationResult(
            version=migration.version,
            name=migration.name,
            success=False,
            execution_time_ms=_elapsed_ms(started),
            error=str(e),
        )

    logger.info("migration_applied", version=migration.version, execution_time_ms=elapsed)
    return MigrationResult(
        version=migration.version,
        name=migration.name,
        success=True,
        execution_time_ms=elapsed,
    )


async def _copy_database(source_path: Path, target_path: Path) -> None:
    # The backup runs on the source connection's thread
    async with (
        aiosqlite.connect(source_path) as source,
        aiosqlite.connect(target_path, check_same_thread=False) as target,
    ):
        await source.backup(target)


async def create_backup(db_path: Path) -> Path:
    """Snapshot the database into a timestamped file beside it."""
    backup_path = db_path.with_name(
        f"{db_path.stem}.backup_{datetime.now():%Y%m%d_%H%M%S}{db_path.suffix}"
    )
    await _copy_database(db_path, backup_path)
    logger.info("database_backup_created", backup_path=str(backup_path))
    return backup_path


async def restore_backup(db_path: Path, backup_path: Path) -> None:
    """Overwrite the database with a snapshot taken by ``create_backup``."""
    await _copy_database(backup_path, db_path)
    logger.warning("database_restored_from_backup", backup_path=str(backup_path))


async def run_migrations(
    db_path: Path,
    create_backup_before: bool = True,
    migrations_dir: Path = MIGRATIONS_DIR,
) -> list[MigrationResult]:
    """
    Bring the database at ``db_path`` up to the latest schema.

    Returns:
        One result per migration applied in this run; empty when the
        schema was already current.

    Raises:
        ConfigurationError: If an applied migration file was edited.
        RuntimeError: If a migration fails. The backup, when one was taken,
            is restored and kept on disk.
    """
    db_path.parent.mkdir(parents=True, exist_ok=True)
    migrations = discover_migrations(migrations_dir)

    async with aiosqlite.connect(db_path) as conn:
        await conn.execute("PRAGMA journal_mode=WAL")
        await conn.execute(_TRACKING_DDL)
        await conn.commit()
        applied = await get_applied_migrations(conn)

    _ensure_unchanged(migrations, applied)
    pending = [m for m in migrations if m.version not in applied]
    if not pending:
        logger.info("schema_up_to_date", db_path=str(db_path), applied=len(applied))
        return []

    # A database with no applied migrations holds nothing worth saving
    backup_path = await create_backup(db_path) if create_backup_before and applied else None

    results: list[MigrationResult] = []
    async with aiosqlite.connect(db_path) as conn:
        for migration in pending:
            result = await apply_migration(conn, migration)
            results.append(result)
            if not result.success:
                break

    failed = results[-1]
    if not failed.success:
        if backup_path is not None:
            await restore_backup(db_path, backup_path)
        raise RuntimeError(f"Migration {failed.version} failed: {failed.error}")

    if backup_path is not None:
        backup_path.unlink()
    logger.info(
        "database_migrated",
        db_path=str(db_path),
        versions=[r.version for r in results],
    )
    return results
