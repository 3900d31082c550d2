"""Tests for GenerateReportUseCase."""

from datetime import UTC, date, datetime
from unittest.mock import MagicMock

import pytest

from stockledger.application.use_cases.generate_report import GenerateReportUseCase
from stockledger.core.entities import MovementFilter, MovementType
from stockledger.core.services import AlertClassifier, MovementAggregator
from stockledger.infrastructure.pdf import IReportRenderer


@pytest.fixture
def renderer():
    mock = MagicMock(spec=IReportRenderer)
    for name in (
        "render_daily_entries",
        "render_daily_exits",
        "render_weekly",
        "render_history",
        "render_low_stock",
        "render_inventory",
    ):
        getattr(mock, name).return_value = b"%PDF-1.4 fake"
    return mock


@pytest.fixture
def use_case(mock_store, mock_gateway, renderer):
    return GenerateReportUseCase(
        store=mock_store,
        gateway=mock_gateway,
        aggregator=MovementAggregator(mock_store, tz=UTC),
        classifier=AlertClassifier(mock_gateway),
        renderer=renderer,
        tz=UTC,
    )


class TestGenerateReportUseCase:
    async def test_daily_entries(self, use_case, renderer, mock_store, make_movement):
        mock_store.all.return_value = [make_movement(quantity=50)]

        result = await use_case.daily_entries(date(2024, 3, 1))

        assert result.filename == "daily_entry_report_2024-03-01.pdf"
        assert result.pdf_bytes.startswith(b"%PDF")
        summary = renderer.render_daily_entries.call_args[0][0]
        assert summary.total_entries_quantity == 50

    async def test_daily_exits(self, use_case):
        result = await use_case.daily_exits(date(2024, 3, 1))
        assert result.filename == "daily_exit_report_2024-03-01.pdf"

    async def test_weekly_named_after_monday(self, use_case):
        result = await use_case.weekly(date(2024, 3, 7))
        assert result.filename == "weekly_stock_report_2024-03-04.pdf"

    async def test_history_passes_filtered_movements(self, use_case, renderer, mock_store, make_movement):
        mock_store.all.return_value = [
            make_movement(id="in"),
            make_movement(id="out", type=MovementType.EXIT),
        ]

        result = await use_case.history(MovementFilter(type=MovementType.EXIT))

        movements, label = renderer.render_history.call_args[0]
        assert [m.id for m in movements] == ["out"]
        assert label == "OUT"
        assert result.filename.startswith("movement_history_")

    async def test_low_stock_uses_live_alerts(self, use_case, renderer, mock_gateway, make_product):
        mock_gateway.list_products.return_value = [make_product(quantity=0)]

        result = await use_case.low_stock()

        alerts = renderer.render_low_stock.call_args[0][0]
        assert len(alerts) == 1
        assert result.filename == f"low_stock_report_{datetime.now(UTC):%Y%m%d}.pdf"

    async def test_inventory(self, use_case, renderer, mock_gateway, make_product):
        mock_gateway.list_products.return_value = [make_product()]

        result = await use_case.inventory()

        products, threshold = renderer.render_inventory.call_args[0]
        assert len(products) == 1
        assert threshold == 10
        assert result.file_size == len(b"%PDF-1.4 fake")
