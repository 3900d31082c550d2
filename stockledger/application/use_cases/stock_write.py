"""
Two-step stock write: append to the ledger, then update the catalog.

The two stores cannot share a transaction, so the catalog update is the
second step of a saga. When it fails, the configured reconciliation
policy decides the compensating action:

- ``rollback``: delete the movement that was just appended.
- ``flag``: keep it and record it as unreconciled for manual review.

Either way the caller gets a ``ReconciliationError``. A write cancelled
while the catalog update is in flight is compensated the same way before
the cancellation propagates. Nothing is retried.
"""

import asyncio
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Literal

from stockledger.application.dto.responses import MovementResponse, StockWriteResponse
from stockledger.config import get_logger
from stockledger.core.entities.movement import Movement, MovementDraft
from stockledger.core.exceptions import CatalogError, ReconciliationError, StorageError
from stockledger.core.interfaces.catalog_gateway import ICatalogGateway
from stockledger.core.interfaces.movement_store import IMovementStore
from stockledger.core.services.movement_recorder import MovementRecorder, RecordedMovement

logger = get_logger(__name__)

ReconciliationPolicy = Literal["rollback", "flag"]


@dataclass
class StockWriteResult:
    """A movement that reached both the ledger and the catalog."""

    movement: Movement
    previous_quantity: int
    new_quantity: int


class StockWriteUseCase(ABC):
    """Shared saga for entries and exits. Subclasses pick the direction."""

    def __init__(
        self,
        recorder: MovementRecorder,
        store: IMovementStore,
        gateway: ICatalogGateway,
        policy: ReconciliationPolicy = "rollback",
    ):
        self._recorder = recorder
        self._store = store
        self._gateway = gateway
        self._policy = policy

    @abstractmethod
    async def _record(self, draft: MovementDraft) -> RecordedMovement:
        """Validate and append the movement."""
        pass

    @abstractmethod
    def _new_quantity(self, current: int, delta: int) -> int:
        """Catalog quantity after applying the movement."""
        pass

    async def execute(self, draft: MovementDraft) -> StockWriteResult:
        """Record the movement and push the new quantity to the catalog."""
        recorded = await self._record(draft)
        movement = recorded.movement
        previous = recorded.product.quantity
        new_quantity = self._new_quantity(previous, movement.quantity)

        try:
            await self._gateway.update_product_quantity(movement.product_id, new_quantity)
        except CatalogError as e:
            action = await self._compensate(movement, e.message)
            raise ReconciliationError(movement.id, action, e.message) from e
        except Exception as e:
            reason = str(e) or type(e).__name__
            action = await self._compensate(movement, reason)
            raise ReconciliationError(movement.id, action, reason) from e
        except asyncio.CancelledError:
            await self._compensate(movement, "request cancelled")
            raise

        logger.info(
            "stock_write_complete",
            movement_id=movement.id,
            type=movement.type.value,
            product_id=movement.product_id,
            previous_qty=previous,
            new_qty=new_quantity,
        )
        return StockWriteResult(
            movement=movement,
            previous_quantity=previous,
            new_quantity=new_quantity,
        )

    async def _compensate(self, movement: Movement, reason: str) -> str:
        """Apply the reconciliation policy and return the action taken."""
        if self._policy == "flag":
            try:
                await self._store.mark_unreconciled(movement.id, reason)
                action = "flagged"
            except StorageError as e:
                logger.error("flag_unreconciled_failed", movement_id=movement.id, error=str(e))
                action = "flag_failed"
        else:
            try:
                await self._store.delete_by_id(movement.id)
                action = "rolled_back"
            except StorageError as e:
                logger.error("rollback_failed", movement_id=movement.id, error=str(e))
                action = "rollback_failed"

        logger.warning(
            "stock_write_not_reconciled",
            movement_id=movement.id,
            product_id=movement.product_id,
            action=action,
            reason=reason,
        )
        return action

    @staticmethod
    def to_response(result: StockWriteResult) -> StockWriteResponse:
        """Convert result to API response."""
        return StockWriteResponse(
            movement=MovementResponse.from_entity(result.movement),
            previous_quantity=result.previous_quantity,
            new_quantity=result.new_quantity,
        )
