"""Receive Stock Use Case - ENTRY movement that raises catalog quantity."""

from stockledger.application.use_cases.stock_write import StockWriteUseCase
from stockledger.core.entities.movement import MovementDraft
from stockledger.core.services.movement_recorder import RecordedMovement


class ReceiveStockUseCase(StockWriteUseCase):
    """Record an entry and add its quantity to the catalog."""

    async def _record(self, draft: MovementDraft) -> RecordedMovement:
        return await self._recorder.record_entry(draft)

    def _new_quantity(self, current: int, delta: int) -> int:
        return current + delta
