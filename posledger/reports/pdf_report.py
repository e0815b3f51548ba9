"""Mini README: Render daily summaries to paginated PDF documents.

Structure:
    * RenderedReport - path and page count of a generated document.
    * format_currency / filter_label / report_filename - formatting helpers.
    * metric_lines - the nine summary figures as printable lines.
    * find_unicode_font / register_fonts - pick the fonts used for drawing.
    * PageWriter - vertical cursor, page breaks and "Page N" stamps.
    * SummaryPdfReport - draws header, metrics and the transaction table.

Layout is measured in millimetres from the top of an A4 page. Before every
line the writer checks the remaining height and starts a new page when the
line would run into the footer above the bottom margin; each page is numbered
as it is closed.

The standard Helvetica fonts only cover Latin-1, so symbols such as the naira
sign need a TrueType font. ``report_font_path`` selects one explicitly;
otherwise the first DejaVu Sans found in the usual system locations is
registered, and Helvetica is used only when none is installed.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from functools import lru_cache
from pathlib import Path
from typing import List, Optional, Tuple

from reportlab.lib.pagesizes import A4
from reportlab.lib.units import mm
from reportlab.pdfbase import pdfmetrics
from reportlab.pdfbase.ttfonts import TTFont
from reportlab.pdfgen import canvas

from ..configuration import get_settings
from ..ledger.models import DailySummary, TypeFilter, parse_type_filter, type_filter_name
from ..logging_utils import get_logger

LOGGER = get_logger(__name__)

ROW_HEIGHT_MM = 7.0
FOOTER_HEIGHT_MM = 8.0
BASE_FONTS = ("Helvetica", "Helvetica-Bold")
FONT_CANDIDATES: Tuple[Path, ...] = (
    Path("/usr/share/fonts/truetype/dejavu/DejaVuSans.ttf"),
    Path("/usr/share/fonts/TTF/DejaVuSans.ttf"),
    Path("/usr/share/fonts/dejavu/DejaVuSans.ttf"),
    Path("/usr/share/fonts/dejavu-sans-fonts/DejaVuSans.ttf"),
    Path("/usr/local/share/fonts/DejaVuSans.ttf"),
    Path("/Library/Fonts/DejaVuSans.ttf"),
)
TABLE_COLUMNS: Tuple[Tuple[str, float], ...] = (
    ("Type", 5.0),
    ("Amount", 40.0),
    ("Charge", 75.0),
    ("Mode", 110.0),
    ("Time", 150.0),
)


@dataclass(slots=True)
class RenderedReport:
    """Location and size of a generated PDF."""

    path: Path
    page_count: int


@dataclass(frozen=True, slots=True)
class ReportFonts:
    """Registered font names for body text and headings."""

    regular: str
    bold: str


def find_unicode_font(configured: Optional[Path] = None) -> Optional[Path]:
    """Return the configured TrueType font, else the first system DejaVu Sans."""

    if configured is not None:
        path = Path(configured).expanduser()
        if path.is_file():
            return path
        LOGGER.warning("Report font %s not found; searching system fonts", path)
    for candidate in FONT_CANDIDATES:
        if candidate.is_file():
            return candidate
    return None


@lru_cache(maxsize=None)
def register_fonts(font_path: Optional[Path]) -> ReportFonts:
    """Register ``font_path`` (and its ``-Bold`` sibling) with reportlab."""

    if font_path is None:
        return ReportFonts(*BASE_FONTS)
    regular = f"PosLedger-{font_path.stem}"
    pdfmetrics.registerFont(TTFont(regular, str(font_path)))
    bold = regular
    bold_path = font_path.with_name(f"{font_path.stem}-Bold{font_path.suffix}")
    if bold_path.is_file():
        bold = f"PosLedger-{bold_path.stem}"
        pdfmetrics.registerFont(TTFont(bold, str(bold_path)))
    LOGGER.debug("Registered report fonts %s / %s from %s", regular, bold, font_path.parent)
    return ReportFonts(regular, bold)


def format_currency(amount: Decimal, symbol: str) -> str:
    """Format ``amount`` with two decimals behind the currency symbol."""

    return f"{symbol}{Decimal(amount):.2f}"


def filter_label(type_filter: TypeFilter) -> str:
    """Human readable name of a type filter."""

    selected = parse_type_filter(type_filter)
    if selected is None:
        return "All Transactions"
    return f"{selected.label}s"


def report_filename(summary: DailySummary, type_filter: TypeFilter) -> str:
    """File name for a summary export, e.g. ``pos_summary_2024-05-01_all.pdf``."""

    return f"pos_summary_{summary.summary_date.date().isoformat()}_{type_filter_name(type_filter)}.pdf"


def metric_lines(summary: DailySummary, symbol: str) -> List[Tuple[str, float, float]]:
    """Return ``(text, indent_mm, spacing_after_mm)`` for each summary figure."""

    def money(value: Decimal) -> str:
        return format_currency(value, symbol)

    return [
        (f"Total Transactions: {summary.total_transactions}", 5.0, 7.0),
        (f"Deposits: {summary.total_deposits}", 10.0, 7.0),
        (f"Withdrawals: {summary.total_withdrawals}", 10.0, 10.0),
        (f"Total Amount Processed: {money(summary.total_amount_processed)}", 5.0, 7.0),
        (f"Total Deposit Amount: {money(summary.total_deposit_amount)}", 10.0, 7.0),
        (f"Total Withdrawal Amount: {money(summary.total_withdrawal_amount)}", 10.0, 10.0),
        (f"Total Earnings: {money(summary.total_earnings)}", 5.0, 7.0),
        (f"Earnings From Account: {money(summary.earnings_from_account)}", 10.0, 7.0),
        (f"Earnings Cash: {money(summary.earnings_cash)}", 10.0, 15.0),
    ]


def _standard_font_can_draw(text: str) -> bool:
    try:
        text.encode("cp1252")
    except UnicodeEncodeError:
        return False
    return True


class PageWriter:
    """Tracks the vertical cursor and page numbering on a reportlab canvas."""

    def __init__(
        self,
        pdf: canvas.Canvas,
        page_size: Tuple[float, float],
        margin_mm: float,
        fonts: ReportFonts = ReportFonts(*BASE_FONTS),
    ) -> None:
        self.pdf = pdf
        self.width_mm = page_size[0] / mm
        self.height_mm = page_size[1] / mm
        self.margin_mm = margin_mm
        self.y_mm = 15.0
        self.page_number = 1
        self.fonts = fonts
        self._font = (fonts.regular, 12.0)

    def set_font(self, size: float, *, bold: bool = False) -> None:
        self._font = (self.fonts.bold if bold else self.fonts.regular, size)
        self.pdf.setFont(*self._font)

    def ensure_space(self, required_mm: float) -> None:
        if self.y_mm + required_mm <= self.height_mm - self.margin_mm - FOOTER_HEIGHT_MM:
            return
        self.stamp_page_number()
        self.pdf.showPage()
        self.page_number += 1
        self.y_mm = self.margin_mm
        # showPage resets the graphics state, fonts included.
        self.pdf.setFont(*self._font)

    def text(self, x_mm: float, content: str) -> None:
        self.pdf.drawString(x_mm * mm, (self.height_mm - self.y_mm) * mm, content)

    def rule(self) -> None:
        y = (self.height_mm - self.y_mm) * mm
        self.pdf.line(self.margin_mm * mm, y, (self.width_mm - self.margin_mm) * mm, y)

    def stamp_page_number(self) -> None:
        font = self._font
        self.pdf.setFont(self.fonts.regular, 10)
        self.pdf.drawRightString(
            (self.width_mm - self.margin_mm) * mm,
            self.margin_mm * mm,
            f"Page {self.page_number}",
        )
        self.pdf.setFont(*font)


class SummaryPdfReport:
    """Write a ``DailySummary`` to a PDF file."""

    def __init__(
        self,
        *,
        currency_symbol: Optional[str] = None,
        page_size: Tuple[float, float] = A4,
        margin_mm: float = 10.0,
        font_path: Optional[Path] = None,
    ) -> None:
        settings = get_settings()
        self.currency_symbol = currency_symbol if currency_symbol is not None else settings.currency_symbol
        self.page_size = page_size
        self.margin_mm = margin_mm
        self.fonts = register_fonts(find_unicode_font(font_path or settings.report_font_path))
        if self.fonts == ReportFonts(*BASE_FONTS) and not _standard_font_can_draw(self.currency_symbol):
            LOGGER.warning(
                "No TrueType font available; currency symbol %r will not render. Set POSLEDGER_REPORT_FONT_PATH.",
                self.currency_symbol,
            )

    def render(
        self,
        summary: DailySummary,
        type_filter: TypeFilter = None,
        output_directory: Optional[Path] = None,
    ) -> RenderedReport:
        """Render the summary and return where it was written."""

        directory = Path(output_directory) if output_directory is not None else get_settings().reports_path
        directory.mkdir(parents=True, exist_ok=True)
        destination = directory / report_filename(summary, type_filter)

        pdf = canvas.Canvas(str(destination), pagesize=self.page_size)
        pdf.setTitle("POS Daily Summary")
        writer = PageWriter(pdf, self.page_size, self.margin_mm, self.fonts)
        self._draw_header(writer, summary, type_filter)
        self._draw_metrics(writer, summary)
        self._draw_transactions(writer, summary)
        writer.stamp_page_number()
        pdf.save()

        LOGGER.info(
            "Exported summary for %s (%s transactions) to %s across %s page(s)",
            summary.summary_date.date().isoformat(),
            summary.total_transactions,
            destination,
            writer.page_number,
        )
        return RenderedReport(path=destination, page_count=writer.page_number)

    def _draw_header(self, writer: PageWriter, summary: DailySummary, type_filter: TypeFilter) -> None:
        margin = self.margin_mm
        writer.set_font(24)
        writer.ensure_space(15)
        writer.text(margin, "POS Daily Summary")
        writer.y_mm += 15

        writer.set_font(12)
        writer.ensure_space(7)
        writer.text(margin, f"Date: {summary.summary_date.date().isoformat()}")
        writer.y_mm += 7
        writer.ensure_space(7)
        writer.text(margin, f"Filter Type: {filter_label(type_filter)}")
        writer.y_mm += 15

    def _draw_metrics(self, writer: PageWriter, summary: DailySummary) -> None:
        writer.set_font(18)
        writer.ensure_space(10)
        writer.text(self.margin_mm, "Summary Metrics")
        writer.y_mm += 10

        writer.set_font(12)
        for content, indent, spacing in metric_lines(summary, self.currency_symbol):
            writer.ensure_space(spacing)
            writer.text(self.margin_mm + indent, content)
            writer.y_mm += spacing

    def _draw_transactions(self, writer: PageWriter, summary: DailySummary) -> None:
        margin = self.margin_mm
        writer.set_font(18)
        writer.ensure_space(10)
        writer.text(margin, "All Filtered Transactions")
        writer.y_mm += 10

        if not summary.all_filtered_transactions:
            writer.set_font(12)
            writer.ensure_space(7)
            writer.text(margin + 5, "No transactions recorded for this filter yet.")
            return

        writer.set_font(10, bold=True)
        writer.ensure_space(ROW_HEIGHT_MM * 2)
        for heading, offset in TABLE_COLUMNS:
            writer.text(margin + offset, heading)
        writer.y_mm += ROW_HEIGHT_MM - 2
        writer.rule()
        writer.y_mm += ROW_HEIGHT_MM

        writer.set_font(10)
        offsets = [offset for _, offset in TABLE_COLUMNS]
        for transaction in summary.all_filtered_transactions:
            writer.ensure_space(ROW_HEIGHT_MM)
            cells = (
                transaction.type.label,
                format_currency(transaction.amount, self.currency_symbol),
                format_currency(transaction.charge, self.currency_symbol),
                transaction.charge_mode.label,
                transaction.timestamp.strftime("%Y-%m-%d %H:%M"),
            )
            for offset, cell in zip(offsets, cells):
                writer.text(margin + offset, cell)
            writer.y_mm += ROW_HEIGHT_MM
