"""
Movement Recorder.

Validates stock entries and exits against the catalog, snapshots the
product name and appends the movement to the ledger. Catalog quantity is
never touched here; the stock write use cases do that as a separate step.
"""

import uuid
from dataclasses import dataclass
from datetime import tzinfo

from stockledger.config import get_logger
from stockledger.core.entities.movement import Movement, MovementDraft, MovementType
from stockledger.core.entities.product import Product
from stockledger.core.exceptions import (
    InsufficientStockError,
    ProductNotFoundError,
    ValidationError,
)
from stockledger.core.interfaces.catalog_gateway import ICatalogGateway
from stockledger.core.interfaces.movement_store import IMovementStore
from stockledger.core.services.calendar import ensure_aware, now

logger = get_logger(__name__)


@dataclass
class RecordedMovement:
    """A freshly appended movement and the product as it was at check time."""

    movement: Movement
    product: Product


def new_movement_id() -> str:
    """Opaque, never-reused movement id."""
    return uuid.uuid4().hex


class MovementRecorder:
    """Creates ENTRY and EXIT movements."""

    def __init__(
        self,
        store: IMovementStore,
        gateway: ICatalogGateway,
        tz: tzinfo | None = None,
    ) -> None:
        self._store = store
        self._gateway = gateway
        self._tz = tz

    async def record_entry(self, draft: MovementDraft) -> RecordedMovement:
        """Record stock arriving."""
        self._validate(draft)
        product = await self._load_product(draft.product_id)  # type: ignore[arg-type]
        return await self._append(draft, product, MovementType.ENTRY)

    async def record_exit(self, draft: MovementDraft) -> RecordedMovement:
        """
        Record stock leaving.

        Raises:
            InsufficientStockError: If more units are requested than the
                catalog reports on hand. Nothing is appended.
        """
        self._validate(draft)
        product = await self._load_product(draft.product_id)  # type: ignore[arg-type]

        if draft.quantity > product.quantity:
            logger.warning(
                "exit_rejected_insufficient_stock",
                product_id=product.id,
                requested=draft.quantity,
                available=product.quantity,
            )
            raise InsufficientStockError(
                product_id=product.id,
                requested=draft.quantity,
                available=product.quantity,
            )

        return await self._append(draft, product, MovementType.EXIT)

    @staticmethod
    def _validate(draft: MovementDraft) -> None:
        if draft.product_id is None or draft.product_id <= 0:
            raise ValidationError("product_id", "a product must be selected", draft.product_id)
        if draft.quantity <= 0:
            raise ValidationError("quantity", "must be greater than zero", draft.quantity)

    async def _load_product(self, product_id: int) -> Product:
        product = await self._gateway.get_product(product_id)
        if product is None:
            raise ProductNotFoundError(product_id)
        return product

    async def _append(
        self,
        draft: MovementDraft,
        product: Product,
        movement_type: MovementType,
    ) -> RecordedMovement:
        movement_date = ensure_aware(draft.date, self._tz) if draft.date else now(self._tz)

        movement = Movement(
            id=new_movement_id(),
            product_id=product.id,
            product_name=product.name,
            type=movement_type,
            quantity=draft.quantity,
            date=movement_date,
            reference=draft.reference,
            supplier=draft.supplier,
            reason=draft.reason,
            receiver=draft.receiver,
            user=draft.user,
            purpose=draft.purpose,
            notes=draft.notes,
            created_by=draft.created_by,
        )
        await self._store.append(movement)

        logger.info(
            "movement_recorded",
            movement_id=movement.id,
            type=movement.type.value,
            product_id=movement.product_id,
            qty=movement.quantity,
        )
        return RecordedMovement(movement=movement, product=product)
