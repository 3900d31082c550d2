"""PDF report rendering."""

from stockledger.infrastructure.pdf.report_renderer import (
    Fpdf2ReportRenderer,
    IReportRenderer,
)

__all__ = ["Fpdf2ReportRenderer", "IReportRenderer"]
