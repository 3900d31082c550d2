"""
Stock report PDF renderer using fpdf2.

Every report shares the same header (company name, subtitle, report
title and generation time) and a page-numbered footer. Tables use a dark
header row and alternating row shading.
"""

from abc import ABC, abstractmethod
from collections.abc import Sequence
from datetime import datetime, tzinfo

from fpdf import FPDF
from fpdf.enums import XPos, YPos

from stockledger.config import PdfSettings, get_settings
from stockledger.core.entities.alert import AlertSeverity, StockAlert
from stockledger.core.entities.movement import Movement
from stockledger.core.entities.product import Product
from stockledger.core.entities.summary import DailySummary, WeeklySummary
from stockledger.core.services.alert_classifier import DEFAULT_THRESHOLD, summarize_alerts
from stockledger.core.services.calendar import ensure_aware


def _latin1(text: str | None) -> str:
    """Replace characters the core Helvetica font cannot encode."""
    if not text:
        return ""
    return text.encode("latin-1", errors="replace").decode("latin-1")


def _clip(text: str | None, width: int) -> str:
    text = _latin1(text)
    return text if len(text) <= width else text[: width - 3] + "..."


_SEVERITY_LABELS = {
    AlertSeverity.OUT_OF_STOCK: "URGENT",
    AlertSeverity.CRITICAL: "CRITICAL",
    AlertSeverity.LOW: "REORDER SOON",
}


# ---------------------------------------------------------------------------
# Interface
# ---------------------------------------------------------------------------


class IReportRenderer(ABC):
    """Interface for stock report rendering implementations."""

    @abstractmethod
    def render_daily_entries(self, summary: DailySummary) -> bytes: ...

    @abstractmethod
    def render_daily_exits(self, summary: DailySummary) -> bytes: ...

    @abstractmethod
    def render_weekly(self, summary: WeeklySummary) -> bytes: ...

    @abstractmethod
    def render_history(self, movements: Sequence[Movement], filter_label: str = "") -> bytes: ...

    @abstractmethod
    def render_low_stock(self, alerts: Sequence[StockAlert]) -> bytes: ...

    @abstractmethod
    def render_inventory(
        self,
        products: Sequence[Product],
        default_threshold: int = DEFAULT_THRESHOLD,
    ) -> bytes: ...


# ---------------------------------------------------------------------------
# Custom FPDF subclass with page-number footer
# ---------------------------------------------------------------------------


class _ReportPdf(FPDF):
    """FPDF subclass that renders a footer on every page."""

    def __init__(self, pdf_settings: PdfSettings) -> None:
        super().__init__()
        self._pdf_settings = pdf_settings

    def footer(self) -> None:
        self.set_y(-15)
        self.set_font("Helvetica", "I", 8)
        self.set_text_color(128, 128, 128)
        self.cell(0, 5, _latin1(self._pdf_settings.footer_text), align="L")
        self.set_x(-40)
        self.cell(0, 5, f"Page {self.page_no()} of {{nb}}", align="R")
        self.set_text_color(0, 0, 0)


# ---------------------------------------------------------------------------
# Concrete renderer
# ---------------------------------------------------------------------------


class Fpdf2ReportRenderer(IReportRenderer):
    """Renders stock reports with fpdf2."""

    def __init__(
        self,
        pdf_settings: PdfSettings | None = None,
        tz: tzinfo | None = None,
    ) -> None:
        if pdf_settings is None:
            pdf_settings = get_settings().pdf
        self._settings = pdf_settings
        self._tz = tz

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def render_daily_entries(self, summary: DailySummary) -> bytes:
        pdf = self._new_document(f"Daily Stock Entry Report - {summary.date:%d/%m/%Y}")

        self._render_totals(
            pdf,
            [
                ("Total entries", str(len(summary.entries))),
                ("Total quantity received", str(summary.total_entries_quantity)),
            ],
        )
        self._render_table(
            pdf,
            ["Time", "Product", "Quantity", "Supplier", "Reference", "Reason"],
            [18, 50, 20, 36, 30, 36],
            [
                [
                    self._time(m.date),
                    _clip(m.product_name, 28),
                    str(m.quantity),
                    _clip(m.supplier or "-", 20),
                    _clip(m.reference or "-", 16),
                    _clip(m.reason or "-", 20),
                ]
                for m in summary.entries
            ],
            empty_text="No entries recorded for this day.",
        )
        return bytes(pdf.output())

    def render_daily_exits(self, summary: DailySummary) -> bytes:
        pdf = self._new_document(f"Daily Stock Exit Report - {summary.date:%d/%m/%Y}")

        self._render_totals(
            pdf,
            [
                ("Total exits", str(len(summary.exits))),
                ("Total quantity issued", str(summary.total_exits_quantity)),
            ],
        )
        self._render_table(
            pdf,
            ["Time", "Product", "Quantity", "Receiver", "Purpose"],
            [18, 56, 20, 44, 52],
            [
                [
                    self._time(m.date),
                    _clip(m.product_name, 32),
                    str(m.quantity),
                    _clip(m.receiver or m.user or "-", 24),
                    _clip(m.purpose or "-", 30),
                ]
                for m in summary.exits
            ],
            empty_text="No exits recorded for this day.",
        )
        return bytes(pdf.output())

    def render_weekly(self, summary: WeeklySummary) -> bytes:
        pdf = self._new_document(
            f"Weekly Stock Report - {summary.week_start:%d/%m/%Y} "
            f"to {summary.week_end:%d/%m/%Y}"
        )

        self._render_totals(
            pdf,
            [
                ("Total entries", f"{len(summary.entries)} ({summary.total_entries_quantity} units)"),
                ("Total exits", f"{len(summary.exits)} ({summary.total_exits_quantity} units)"),
                ("Net change", f"{summary.net_change:+d}"),
            ],
        )
        self._render_table(
            pdf,
            ["Date", "Entries", "Exits", "Entry Qty", "Exit Qty", "Net"],
            [40, 28, 28, 32, 32, 30],
            [
                [
                    f"{day.date:%a %d/%m}",
                    str(day.entries_count),
                    str(day.exits_count),
                    str(day.entries_quantity),
                    str(day.exits_quantity),
                    f"{day.net_change:+d}",
                ]
                for day in summary.daily_breakdown
            ],
        )
        return bytes(pdf.output())

    def render_history(
        self,
        movements: Sequence[Movement],
        filter_label: str = "",
    ) -> bytes:
        pdf = self._new_document("Stock Movement History")

        if filter_label:
            pdf.set_font("Helvetica", "I", 9)
            pdf.cell(
                0, 6, f"Filters: {_latin1(filter_label)}",
                new_x=XPos.LMARGIN, new_y=YPos.NEXT,
            )
        pdf.set_font("Helvetica", "", 9)
        pdf.cell(
            0, 6, f"Total movements: {len(movements)}",
            new_x=XPos.LMARGIN, new_y=YPos.NEXT,
        )
        pdf.ln(2)

        self._render_table(
            pdf,
            ["Date", "Type", "Product", "Quantity", "User/Receiver", "Notes"],
            [30, 14, 48, 20, 36, 42],
            [
                [
                    self._stamp(m.date),
                    "IN" if m.is_entry else "OUT",
                    _clip(m.product_name, 26),
                    str(m.quantity),
                    _clip(m.receiver or m.user or m.supplier or "-", 20),
                    _clip(m.reason or m.purpose or m.reference or "-", 24),
                ]
                for m in movements
            ],
            empty_text="No movements match the selected filters.",
        )
        return bytes(pdf.output())

    def render_low_stock(self, alerts: Sequence[StockAlert]) -> bytes:
        pdf = self._new_document("Low Stock Alert Report")

        counts = summarize_alerts(alerts)
        self._render_totals(
            pdf,
            [
                ("Out of stock", str(counts.out_of_stock)),
                ("Critical", str(counts.critical)),
                ("Low", str(counts.low)),
            ],
        )
        self._render_table(
            pdf,
            ["Severity", "Product", "Current Qty", "Threshold", "Status"],
            [32, 62, 26, 24, 46],
            [
                [
                    alert.severity.value.replace("_", " "),
                    _clip(alert.product.name, 36),
                    str(alert.product.quantity),
                    str(alert.product.stock_alert_threshold),
                    _SEVERITY_LABELS[alert.severity],
                ]
                for alert in alerts
            ],
            empty_text="All products are above their alert thresholds.",
        )
        return bytes(pdf.output())

    def render_inventory(
        self,
        products: Sequence[Product],
        default_threshold: int = DEFAULT_THRESHOLD,
    ) -> bytes:
        pdf = self._new_document("Inventory Report")

        self._render_totals(
            pdf,
            [
                ("Products", str(len(products))),
                ("Total units on hand", str(sum(p.quantity for p in products))),
            ],
        )

        rows = []
        for product in products:
            threshold = product.effective_threshold(default_threshold)
            if product.quantity <= 0:
                status = "OUT"
            elif product.quantity <= threshold:
                status = "LOW"
            else:
                status = "OK"
            rows.append(
                [
                    _clip(product.name, 40),
                    product.type_product.value if product.type_product else "-",
                    str(product.quantity),
                    str(threshold),
                    status,
                ]
            )

        self._render_table(
            pdf,
            ["Name", "Type", "Quantity", "Threshold", "Status"],
            [70, 40, 26, 26, 28],
            rows,
            empty_text="The catalog has no products.",
        )
        return bytes(pdf.output())

    # ------------------------------------------------------------------
    # Sections
    # ------------------------------------------------------------------

    def _new_document(self, title: str) -> _ReportPdf:
        pdf = _ReportPdf(self._settings)
        pdf.alias_nb_pages()
        pdf.set_auto_page_break(auto=True, margin=20)
        pdf.add_page()
        self._render_header(pdf, title)
        return pdf

    def _render_header(self, pdf: FPDF, title: str) -> None:
        """Company block, report title and generation time."""
        pdf.set_font("Helvetica", "B", 16)
        pdf.cell(
            0, 9, _latin1(self._settings.company_name), align="C",
            new_x=XPos.LMARGIN, new_y=YPos.NEXT,
        )
        pdf.set_font("Helvetica", "", 10)
        pdf.cell(
            0, 6, _latin1(self._settings.subtitle), align="C",
            new_x=XPos.LMARGIN, new_y=YPos.NEXT,
        )
        pdf.ln(3)

        pdf.set_font("Helvetica", "B", 13)
        pdf.cell(
            0, 8, _latin1(title), align="C",
            new_x=XPos.LMARGIN, new_y=YPos.NEXT,
        )
        pdf.set_font("Helvetica", "", 9)
        generated = datetime.now(self._tz) if self._tz else datetime.now()
        pdf.cell(
            0, 5, f"Generated: {generated:%d/%m/%Y %H:%M}", align="C",
            new_x=XPos.LMARGIN, new_y=YPos.NEXT,
        )
        pdf.ln(2)

        y = pdf.get_y()
        pdf.set_draw_color(100, 100, 100)
        pdf.line(10, y, 200, y)
        pdf.set_draw_color(0, 0, 0)
        pdf.ln(4)

    @staticmethod
    def _render_totals(pdf: FPDF, lines: list[tuple[str, str]]) -> None:
        pdf.set_font("Helvetica", "B", 11)
        pdf.cell(0, 7, "Summary", new_x=XPos.LMARGIN, new_y=YPos.NEXT)
        pdf.set_font("Helvetica", "", 10)
        for label, value in lines:
            pdf.cell(60, 6, f"{label}:")
            pdf.cell(0, 6, value, new_x=XPos.LMARGIN, new_y=YPos.NEXT)
        pdf.ln(4)

    @staticmethod
    def _render_table(
        pdf: FPDF,
        headers: list[str],
        col_widths: list[int],
        rows: list[list[str]],
        empty_text: str = "No data.",
    ) -> None:
        """Bordered table with a dark header row and alternating shading."""
        if not rows:
            pdf.set_font("Helvetica", "I", 10)
            pdf.cell(0, 8, empty_text, new_x=XPos.LMARGIN, new_y=YPos.NEXT)
            return

        pdf.set_font("Helvetica", "B", 9)
        pdf.set_fill_color(70, 70, 70)
        pdf.set_text_color(255, 255, 255)
        for width, header in zip(col_widths, headers):
            pdf.cell(width, 7, header, border=1, fill=True, align="C")
        pdf.ln()
        pdf.set_text_color(0, 0, 0)

        pdf.set_font("Helvetica", "", 8)
        for idx, row in enumerate(rows, 1):
            fill = idx % 2 == 0
            if fill:
                pdf.set_fill_color(240, 240, 240)
            for width, value in zip(col_widths, row):
                pdf.cell(width, 6, value, border=1, fill=fill)
            pdf.ln()
        pdf.ln(3)

    def _time(self, value: datetime) -> str:
        return f"{ensure_aware(value, self._tz).astimezone(self._tz):%H:%M}"

    def _stamp(self, value: datetime) -> str:
        return f"{ensure_aware(value, self._tz).astimezone(self._tz):%d/%m/%Y %H:%M}"
