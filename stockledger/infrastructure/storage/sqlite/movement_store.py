"""SQLite implementation of the movement ledger."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import UTC, datetime

import aiosqlite

from stockledger.config import get_logger
from stockledger.core.entities.movement import Movement, MovementType, UnreconciledMovement
from stockledger.core.exceptions import StorageFailureError
from stockledger.core.interfaces.movement_store import IMovementStore
from stockledger.infrastructure.storage.sqlite.connection import ConnectionPool

logger = get_logger(__name__)


@asynccontextmanager
async def _storage_errors(operation: str) -> AsyncIterator[None]:
    """Re-raise driver errors as StorageFailureError."""
    try:
        yield
    except aiosqlite.Error as e:
        logger.error("movement_store_failure", operation=operation, error=str(e))
        raise StorageFailureError(operation, str(e)) from e


class SQLiteMovementStore(IMovementStore):
    """Append-only movement log in the ``stock_movements`` table."""

    def __init__(self, pool: ConnectionPool):
        self._pool = pool

    async def append(self, movement: Movement) -> Movement:
        """Add one movement to the end of the log."""
        async with _storage_errors("append"), self._pool.transaction() as conn:
            await conn.execute(
                """
                INSERT INTO stock_movements (
                    id, product_id, product_name, movement_type, quantity,
                    movement_date, reference, supplier, reason, receiver,
                    user_name, purpose, notes, created_by
                ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    movement.id,
                    movement.product_id,
                    movement.product_name,
                    movement.type.value,
                    movement.quantity,
                    movement.date.isoformat(),
                    movement.reference,
                    movement.supplier,
                    movement.reason,
                    movement.receiver,
                    movement.user,
                    movement.purpose,
                    movement.notes,
                    movement.created_by,
                ),
            )
        logger.info(
            "stock_movement_stored",
            movement_id=movement.id,
            type=movement.type.value,
            qty=movement.quantity,
        )
        return movement

    async def all(self) -> list[Movement]:
        """Return every movement in insertion order."""
        async with _storage_errors("all"), self._pool.acquire() as conn:
            cursor = await conn.execute("SELECT * FROM stock_movements ORDER BY seq")
            rows = await cursor.fetchall()
        return [self._row_to_movement(row) for row in rows]

    async def delete_by_id(self, movement_id: str) -> bool:
        """Remove a movement if present; absent ids are not an error."""
        async with _storage_errors("delete_by_id"), self._pool.transaction() as conn:
            cursor = await conn.execute(
                "DELETE FROM stock_movements WHERE id = ?", (movement_id,)
            )
            deleted = cursor.rowcount > 0
            await conn.execute(
                "DELETE FROM unreconciled_movements WHERE movement_id = ?",
                (movement_id,),
            )
        logger.info("stock_movement_deleted", movement_id=movement_id, deleted=deleted)
        return deleted

    async def clear(self) -> None:
        """Empty the log and any pending review flags."""
        async with _storage_errors("clear"), self._pool.transaction() as conn:
            await conn.execute("DELETE FROM stock_movements")
            await conn.execute("DELETE FROM unreconciled_movements")
        logger.warning("stock_movements_cleared")

    async def mark_unreconciled(self, movement_id: str, reason: str) -> None:
        """Flag a movement for manual review."""
        async with _storage_errors("mark_unreconciled"), self._pool.transaction() as conn:
            await conn.execute(
                """
                INSERT OR REPLACE INTO unreconciled_movements (movement_id, reason, flagged_at)
                VALUES (?, ?, ?)
                """,
                (movement_id, reason, datetime.now(UTC).isoformat()),
            )
        logger.warning("stock_movement_flagged", movement_id=movement_id, reason=reason)

    async def list_unreconciled(self) -> list[UnreconciledMovement]:
        """List flagged movements, oldest flag first."""
        async with _storage_errors("list_unreconciled"), self._pool.acquire() as conn:
            cursor = await conn.execute(
                "SELECT * FROM unreconciled_movements ORDER BY flagged_at, movement_id"
            )
            rows = await cursor.fetchall()
        return [
            UnreconciledMovement(
                movement_id=row["movement_id"],
                reason=row["reason"],
                flagged_at=datetime.fromisoformat(row["flagged_at"]),
            )
            for row in rows
        ]

    async def resolve_unreconciled(self, movement_id: str) -> bool:
        """Drop a review flag."""
        async with _storage_errors("resolve_unreconciled"), self._pool.transaction() as conn:
            cursor = await conn.execute(
                "DELETE FROM unreconciled_movements WHERE movement_id = ?",
                (movement_id,),
            )
            resolved = cursor.rowcount > 0
        logger.info("stock_movement_resolved", movement_id=movement_id, resolved=resolved)
        return resolved

    @staticmethod
    def _row_to_movement(row: aiosqlite.Row) -> Movement:
        """Convert a database row to a Movement entity."""
        return Movement(
            id=row["id"],
            product_id=row["product_id"],
            product_name=row["product_name"],
            type=MovementType(row["movement_type"]),
            quantity=row["quantity"],
            date=datetime.fromisoformat(row["movement_date"]),
            reference=row["reference"],
            supplier=row["supplier"],
            reason=row["reason"],
            receiver=row["receiver"],
            user=row["user_name"],
            purpose=row["purpose"],
            notes=row["notes"],
            created_by=row["created_by"],
        )
