"""Issue Stock Use Case - EXIT movement with balance check."""

from stockledger.application.use_cases.stock_write import StockWriteUseCase
from stockledger.core.entities.movement import MovementDraft
from stockledger.core.services.movement_recorder import RecordedMovement


class IssueStockUseCase(StockWriteUseCase):
    """Record an exit and subtract its quantity from the catalog.

    The recorder rejects exits larger than the quantity on hand, so the
    new catalog quantity is never negative.
    """

    async def _record(self, draft: MovementDraft) -> RecordedMovement:
        return await self._recorder.record_exit(draft)

    def _new_quantity(self, current: int, delta: int) -> int:
        return current - delta
