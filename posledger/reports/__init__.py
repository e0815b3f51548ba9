"""Mini README: Report exporters for the POS ledger.

Exposes the PDF exporter that turns a ``DailySummary`` into a printable
document. Future formats (CSV, spreadsheets) can live alongside it.
"""

from .pdf_report import (
    RenderedReport,
    SummaryPdfReport,
    filter_label,
    format_currency,
    metric_lines,
    report_filename,
)

__all__ = [
    "RenderedReport",
    "SummaryPdfReport",
    "filter_label",
    "format_currency",
    "metric_lines",
    "report_filename",
]
