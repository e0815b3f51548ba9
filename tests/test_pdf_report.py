"""Mini README: Tests for the PDF summary exporter.

Structure:
    * formatting helpers - currency, filter labels and file names.
    * render - documents are written, numbered and paginated.
    * fonts - the naira sign survives into the document text.
    * page layout - table rows stop above the page number footer.
"""

from __future__ import annotations

from datetime import datetime, timedelta
from decimal import Decimal
from pathlib import Path

import pytest
from pypdf import PdfReader
from reportlab.lib.pagesizes import A4
from reportlab.pdfgen import canvas

from posledger.ledger import summarize
from posledger.reports import SummaryPdfReport, filter_label, format_currency, metric_lines, report_filename
from posledger.reports import pdf_report
from posledger.reports.pdf_report import FOOTER_HEIGHT_MM, ROW_HEIGHT_MM, PageWriter, find_unicode_font

from helpers import make_transaction


def _busy_day(count: int):
    start = datetime(2024, 5, 1, 6, 0)
    return [
        make_transaction(f"t{index:03d}", "deposit" if index % 2 else "withdrawal", "100", start + timedelta(minutes=index), charge="5")
        for index in range(count)
    ]


def test_formatting_helpers() -> None:
    summary = summarize([], "2024-05-01")

    assert format_currency(Decimal("950"), "₦") == "₦950.00"
    assert format_currency(Decimal("-12.5"), "$") == "$-12.50"
    assert filter_label("all") == "All Transactions"
    assert filter_label(None) == "All Transactions"
    assert filter_label("deposit") == "Deposits"
    assert filter_label("withdrawal") == "Withdrawals"
    assert report_filename(summary, None) == "pos_summary_2024-05-01_all.pdf"
    assert report_filename(summary, "withdrawal") == "pos_summary_2024-05-01_withdrawal.pdf"


def test_metric_lines_cover_all_aggregates() -> None:
    summary = summarize(
        [make_transaction("d1", "deposit", "1000", datetime(2024, 5, 1, 9, 0), charge="50")],
        "2024-05-01",
    )

    lines = [content for content, _, _ in metric_lines(summary, "NGN ")]

    assert len(lines) == 9
    assert lines[0] == "Total Transactions: 1"
    assert "Total Deposit Amount: NGN 1000.00" in lines
    assert "Earnings Cash: NGN 50.00" in lines


def test_render_empty_summary_single_page(tmp_path) -> None:
    summary = summarize([], "2024-05-01")

    rendered = SummaryPdfReport(currency_symbol="NGN ").render(summary, "deposit", tmp_path)

    assert rendered.path == tmp_path / "pos_summary_2024-05-01_deposit.pdf"
    assert rendered.page_count == 1
    assert rendered.path.read_bytes().startswith(b"%PDF")


def test_render_long_listing_breaks_pages(tmp_path) -> None:
    summary = summarize(_busy_day(90), "2024-05-01")

    rendered = SummaryPdfReport(currency_symbol="NGN ").render(summary, "all", tmp_path)

    assert summary.total_transactions == 90
    assert rendered.page_count >= 3
    assert rendered.path.stat().st_size > 0


def test_render_defaults_to_configured_directory(isolated_settings) -> None:
    summary = summarize(_busy_day(3), "2024-05-01")

    rendered = SummaryPdfReport().render(summary)

    assert rendered.path.parent == isolated_settings.reports_path
    assert rendered.path.name == "pos_summary_2024-05-01_all.pdf"


def _document_text(path: Path) -> str:
    return "\n".join(page.extract_text() for page in PdfReader(str(path)).pages)


@pytest.mark.skipif(find_unicode_font() is None, reason="no DejaVu Sans font installed")
def test_render_draws_naira_symbol(tmp_path) -> None:
    summary = summarize(
        [make_transaction("d1", "deposit", "1000", datetime(2024, 5, 1, 9, 0), charge="50")],
        "2024-05-01",
    )

    report = SummaryPdfReport(currency_symbol="₦")
    rendered = report.render(summary, "all", tmp_path)
    text = _document_text(rendered.path)

    assert report.fonts.regular != "Helvetica"
    assert "₦1000.00" in text
    assert "₦50.00" in text
    assert "■" not in text


def test_missing_fonts_fall_back_to_helvetica(tmp_path, monkeypatch) -> None:
    monkeypatch.setattr(pdf_report, "FONT_CANDIDATES", ())

    assert find_unicode_font(tmp_path / "missing.ttf") is None
    report = SummaryPdfReport(currency_symbol="NGN ", font_path=tmp_path / "missing.ttf")
    rendered = report.render(summarize([], "2024-05-01"), None, tmp_path)

    assert report.fonts.regular == "Helvetica"
    assert "Page 1" in _document_text(rendered.path)


def test_rows_stop_above_page_number_footer(tmp_path) -> None:
    pdf = canvas.Canvas(str(tmp_path / "layout.pdf"), pagesize=A4)
    writer = PageWriter(pdf, A4, 10.0)
    lowest_baseline = writer.height_mm - writer.margin_mm - FOOTER_HEIGHT_MM

    writer.y_mm = lowest_baseline - ROW_HEIGHT_MM
    writer.ensure_space(ROW_HEIGHT_MM)
    assert writer.page_number == 1

    writer.y_mm = lowest_baseline - ROW_HEIGHT_MM + 1
    writer.ensure_space(ROW_HEIGHT_MM)
    assert writer.page_number == 2
    assert writer.y_mm == writer.margin_mm
