"""Tests for MovementRecorder."""

from datetime import UTC, datetime

import pytest

from stockledger.core.entities import MovementDraft, MovementType
from stockledger.core.exceptions import (
    InsufficientStockError,
    ProductNotFoundError,
    ValidationError,
)
from stockledger.core.services.movement_recorder import MovementRecorder


@pytest.fixture
def recorder(mock_store, mock_gateway):
    return MovementRecorder(mock_store, mock_gateway, tz=UTC)


class TestRecordEntry:
    async def test_appends_entry_with_name_snapshot(self, recorder, mock_store, mock_gateway, make_product):
        mock_gateway.get_product.return_value = make_product(quantity=5)
        when = datetime(2024, 3, 1, 9, 0, tzinfo=UTC)

        result = await recorder.record_entry(
            MovementDraft(product_id=7, quantity=50, date=when, supplier="Acme")
        )

        stored = mock_store.append.call_args[0][0]
        assert stored is result.movement
        assert stored.type == MovementType.ENTRY
        assert stored.product_name == "Bolt"
        assert stored.quantity == 50
        assert stored.date == when
        assert stored.supplier == "Acme"
        assert result.product.quantity == 5

    async def test_date_defaults_to_now(self, recorder, mock_gateway, make_product):
        mock_gateway.get_product.return_value = make_product()
        before = datetime.now(UTC)

        result = await recorder.record_entry(MovementDraft(product_id=7, quantity=1))

        assert before <= result.movement.date <= datetime.now(UTC)

    async def test_naive_date_read_in_configured_zone(self, recorder, mock_gateway, make_product):
        mock_gateway.get_product.return_value = make_product()
        result = await recorder.record_entry(
            MovementDraft(product_id=7, quantity=1, date=datetime(2024, 3, 1, 9, 0))
        )
        assert result.movement.date == datetime(2024, 3, 1, 9, 0, tzinfo=UTC)

    async def test_ids_are_unique(self, recorder, mock_gateway, make_product):
        mock_gateway.get_product.return_value = make_product()
        draft = MovementDraft(product_id=7, quantity=1)
        first = await recorder.record_entry(draft)
        second = await recorder.record_entry(draft)
        assert first.movement.id != second.movement.id

    async def test_never_touches_catalog_quantity(self, recorder, mock_gateway, make_product):
        mock_gateway.get_product.return_value = make_product()
        await recorder.record_entry(MovementDraft(product_id=7, quantity=3))
        mock_gateway.update_product_quantity.assert_not_called()

    @pytest.mark.parametrize(
        "draft",
        [
            MovementDraft(quantity=5),
            MovementDraft(product_id=0, quantity=5),
            MovementDraft(product_id=7, quantity=0),
            MovementDraft(product_id=7, quantity=-1),
        ],
    )
    async def test_validation(self, recorder, mock_store, mock_gateway, draft):
        with pytest.raises(ValidationError):
            await recorder.record_entry(draft)
        mock_gateway.get_product.assert_not_called()
        mock_store.append.assert_not_called()

    async def test_unknown_product(self, recorder, mock_store, mock_gateway):
        mock_gateway.get_product.return_value = None
        with pytest.raises(ProductNotFoundError):
            await recorder.record_entry(MovementDraft(product_id=99, quantity=1))
        mock_store.append.assert_not_called()


class TestRecordExit:
    async def test_appends_exit(self, recorder, mock_store, mock_gateway, make_product):
        mock_gateway.get_product.return_value = make_product(quantity=5)

        result = await recorder.record_exit(
            MovementDraft(product_id=7, quantity=5, receiver="Kitchen", purpose="Batch 12")
        )

        assert result.movement.type == MovementType.EXIT
        assert result.movement.receiver == "Kitchen"
        mock_store.append.assert_awaited_once()

    async def test_insufficient_stock(self, recorder, mock_store, mock_gateway, make_product):
        mock_gateway.get_product.return_value = make_product(quantity=5)

        with pytest.raises(InsufficientStockError) as exc_info:
            await recorder.record_exit(MovementDraft(product_id=7, quantity=100))

        assert exc_info.value.details["requested"] == 100
        assert exc_info.value.details["available"] == 5
        mock_store.append.assert_not_called()
