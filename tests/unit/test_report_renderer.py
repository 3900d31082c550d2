"""Tests for the fpdf2 stock report renderer."""

import zlib
from datetime import UTC, date, datetime

import pytest

from stockledger.config.settings import PdfSettings
from stockledger.core.entities import (
    DailySummary,
    DayBreakdown,
    MovementType,
    TypeProduct,
    WeeklySummary,
)
from stockledger.core.services.alert_classifier import build_alerts
from stockledger.infrastructure.pdf.report_renderer import Fpdf2ReportRenderer


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _extract_pdf_text(pdf_bytes: bytes) -> str:
    """Decompress FlateDecode streams in *pdf_bytes* and return all text.

    fpdf2 compresses page content with zlib, so each
    ``stream ... endstream`` block is inflated where possible.
    """
    texts = [pdf_bytes.decode("latin-1")]

    start_marker = b"stream\n"
    end_marker = b"\nendstream"
    idx = 0
    while True:
        s = pdf_bytes.find(start_marker, idx)
        if s == -1:
            break
        s += len(start_marker)
        e = pdf_bytes.find(end_marker, s)
        if e == -1:
            break
        try:
            texts.append(zlib.decompress(pdf_bytes[s:e]).decode("latin-1"))
        except zlib.error:
            pass
        idx = e + len(end_marker)

    return "\n".join(texts)


@pytest.fixture
def renderer() -> Fpdf2ReportRenderer:
    return Fpdf2ReportRenderer(
        PdfSettings(company_name="VIRUNGA", subtitle="Stock", footer_text="Ledger"),
        tz=UTC,
    )


# ---------------------------------------------------------------------------
# Tests
# ---------------------------------------------------------------------------


class TestDailyReports:
    def test_entries_report(self, renderer, make_movement):
        summary = DailySummary(
            date=date(2024, 3, 1),
            entries=[make_movement(quantity=50, supplier="Acme", reference="PO-77")],
            total_entries_quantity=50,
        )

        pdf = renderer.render_daily_entries(summary)

        assert pdf.startswith(b"%PDF")
        text = _extract_pdf_text(pdf)
        assert "VIRUNGA" in text
        assert "Daily Stock Entry Report" in text
        assert "Acme" in text
        assert "PO-77" in text

    def test_exits_report_falls_back_to_user(self, renderer, make_movement):
        summary = DailySummary(
            date=date(2024, 3, 1),
            exits=[make_movement(type=MovementType.EXIT, user="Marie")],
            total_exits_quantity=10,
        )
        text = _extract_pdf_text(renderer.render_daily_exits(summary))
        assert "Marie" in text

    def test_empty_day(self, renderer):
        text = _extract_pdf_text(renderer.render_daily_entries(DailySummary(date=date(2024, 3, 1))))
        assert "No entries recorded for this day." in text


class TestWeeklyReport:
    def test_breakdown_rows(self, renderer):
        summary = WeeklySummary(
            week_start=date(2024, 3, 4),
            week_end=date(2024, 3, 10),
            daily_breakdown=[
                DayBreakdown(date=date(2024, 3, 4 + i), entries_quantity=i) for i in range(7)
            ],
        )
        text = _extract_pdf_text(renderer.render_weekly(summary))
        assert "Mon 04/03" in text
        assert "Sun 10/03" in text


class TestOtherReports:
    def test_history_with_filter_label(self, renderer, make_movement):
        movements = [
            make_movement(date=datetime(2024, 3, 1, 9, 30, tzinfo=UTC), reason="Restock"),
            make_movement(type=MovementType.EXIT, receiver="Kitchen", purpose="Batch"),
        ]
        text = _extract_pdf_text(renderer.render_history(movements, "product #7"))
        assert "Filters: product #7" in text
        assert "01/03/2024 09:30" in text
        assert "Kitchen" in text

    def test_low_stock(self, renderer, make_product):
        alerts = build_alerts(
            [
                make_product(id=1, name="Sugar", quantity=0),
                make_product(id=2, name="Milk", quantity=2),
                make_product(id=3, name="Salt", quantity=8),
            ]
        )
        text = _extract_pdf_text(renderer.render_low_stock(alerts))
        assert "URGENT" in text
        assert "REORDER SOON" in text
        assert "Sugar" in text

    def test_inventory_status_column(self, renderer, make_product):
        products = [
            make_product(id=1, name="Cocoa", quantity=100, type_product=TypeProduct.CONSUMABLE),
            make_product(id=2, name="Moulds", quantity=0),
        ]
        text = _extract_pdf_text(renderer.render_inventory(products))
        assert "CONSUMABLE" in text
        assert "Cocoa" in text
        assert "OUT" in text

    def test_non_latin_text_does_not_fail(self, renderer, make_product):
        pdf = renderer.render_inventory([make_product(name="Cacao ☕ م")])
        assert pdf.startswith(b"%PDF")
