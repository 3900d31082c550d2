"""
Async SQLite connection pool with aiosqlite.

Connections are opened on demand, up to ``pool_size``. SQLite admits a
single writer, so write transactions are also serialized in-process and
start with ``BEGIN IMMEDIATE`` to take the database write lock up front.
"""

import asyncio
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from pathlib import Path

import aiosqlite

from stockledger.config import StorageSettings, get_logger

logger = get_logger(__name__)

_PRAGMAS = (
    "journal_mode=WAL",
    "synchronous=NORMAL",
)


class ConnectionPool:
    """Bounded pool of autocommit connections to one database file."""

    def __init__(
        self,
        db_path: Path,
        pool_size: int = 5,
        busy_timeout: int = 30000,
    ):
        self.db_path = db_path
        self.pool_size = pool_size
        self.busy_timeout = busy_timeout

        self._idle: asyncio.Queue[aiosqlite.Connection] = asyncio.Queue()
        self._opened: list[aiosqlite.Connection] = []
        self._slots = asyncio.Semaphore(pool_size)
        self._open_lock = asyncio.Lock()
        self._write_lock = asyncio.Lock()

    @classmethod
    def from_settings(cls, settings: StorageSettings) -> "ConnectionPool":
        return cls(
            db_path=settings.db_path,
            pool_size=settings.pool_size,
            busy_timeout=settings.busy_timeout,
        )

    @property
    def size(self) -> int:
        """Connections currently open, idle or checked out."""
        return len(self._opened)

    async def initialize(self) -> None:
        """Open a first connection so a bad path fails at startup."""
        if self._opened:
            return
        async with self.acquire():
            pass
        logger.info(
            "connection_pool_initialized",
            db_path=str(self.db_path),
            pool_size=self.pool_size,
        )

    async def _open(self) -> aiosqlite.Connection:
        async with self._open_lock:
            self.db_path.parent.mkdir(parents=True, exist_ok=True)
            # isolation_level=None: transactions are begun explicitly below
            conn = await aiosqlite.connect(self.db_path, isolation_level=None)
            for pragma in (*_PRAGMAS, f"busy_timeout={self.busy_timeout}"):
                await conn.execute(f"PRAGMA {pragma}")
            conn.row_factory = aiosqlite.Row
            self._opened.append(conn)

        logger.debug("connection_opened", open_connections=len(self._opened))
        return conn

    async def _checkout(self) -> aiosqlite.Connection:
        await self._slots.acquire()
        try:
            if self._idle.empty():
                return await self._open()
            return self._idle.get_nowait()
        except BaseException:
            self._slots.release()
            raise

    def _checkin(self, conn: aiosqlite.Connection) -> None:
        if conn in self._opened:
            self._idle.put_nowait(conn)
        self._slots.release()

    @asynccontextmanager
    async def acquire(self) -> AsyncIterator[aiosqlite.Connection]:
        """
        Borrow a connection for reads.

        Usage:
            async with pool.acquire() as conn:
                cursor = await conn.execute(...)
        """
        conn = await self._checkout()
        try:
            yield conn
        finally:
            self._checkin(conn)

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[aiosqlite.Connection]:
        """
        Borrow a connection inside a write transaction.

        Commits when the block exits normally, rolls back otherwise.
        """
        async with self._write_lock, self.acquire() as conn:
            await conn.execute("BEGIN IMMEDIATE")
            try:
                yield conn
            except BaseException:
                await conn.rollback()
                raise
            await conn.commit()

    async def close(self) -> None:
        """Close every open connection. The pool can be reused afterwards."""
        async with self._open_lock:
            closed = len(self._opened)
            for conn in self._opened:
                await conn.close()
            self._opened.clear()
            self._idle = asyncio.Queue()
        logger.info("connection_pool_closed", connections=closed)
