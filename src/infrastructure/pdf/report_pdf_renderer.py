"""
Tabular stock report PDF renderer using fpdf2.

Renders a title, a "Generated on" subtitle and a bordered table with
alternating row shading. Every page carries a footer with page numbers.
"""

from datetime import UTC, datetime

from fpdf import FPDF
from fpdf.enums import XPos, YPos

from src.config.settings import ReportSettings, get_settings
from src.core.services.report_exporter import IReportPdfRenderer, TabularReport

# Relative widths for known headers; anything else gets weight 1.0
_COLUMN_WEIGHTS = {
    "Date": 1.0,
    "Type": 0.9,
    "Item": 2.0,
    "Item Name": 2.0,
    "Quantity": 1.1,
    "Location": 1.3,
    "Person": 1.5,
    "Notes": 1.8,
}


def _latin1(text: str) -> str:
    """Core PDF fonts only cover Latin-1; replace anything else with '?'."""
    return text.encode("latin-1", errors="replace").decode("latin-1")


class _ReportPdf(FPDF):
    """FPDF subclass that renders a footer on every page."""

    def __init__(self, report_settings: ReportSettings) -> None:
        super().__init__()
        self._report_settings = report_settings
        self._generation_date = datetime.now(UTC).strftime("%Y-%m-%d %H:%M UTC")

    def footer(self) -> None:
        self.set_y(-15)
        self.set_font("Helvetica", "I", 8)
        self.cell(0, 5, _latin1(self._report_settings.footer_text), align="L")
        self.set_x(-60)
        self.cell(
            0,
            5,
            f"Page {self.page_no()} of {{nb}} | {self._generation_date}",
            align="R",
        )


class Fpdf2ReportRenderer(IReportPdfRenderer):
    """Renders TabularReport objects with fpdf2."""

    def __init__(self, report_settings: ReportSettings | None = None) -> None:
        if report_settings is None:
            report_settings = get_settings().report
        self._settings = report_settings

    def render(self, report: TabularReport) -> bytes:
        """Render a TabularReport into PDF bytes."""
        pdf = _ReportPdf(self._settings)
        pdf.alias_nb_pages()
        pdf.set_auto_page_break(auto=True, margin=20)
        pdf.add_page()

        self._render_header(pdf, report)
        widths = self._column_widths(pdf, report.headers)
        self._render_table_header(pdf, report.headers, widths)
        self._render_rows(pdf, report, widths)

        return bytes(pdf.output())

    @staticmethod
    def _render_header(pdf: FPDF, report: TabularReport) -> None:
        pdf.set_font("Helvetica", "B", 16)
        pdf.cell(
            0, 10, _latin1(report.title),
            new_x=XPos.LMARGIN, new_y=YPos.NEXT,
        )
        if report.subtitle:
            pdf.set_font("Helvetica", "", 10)
            pdf.set_text_color(90, 90, 90)
            pdf.cell(
                0, 6, _latin1(report.subtitle),
                new_x=XPos.LMARGIN, new_y=YPos.NEXT,
            )
            pdf.set_text_color(0, 0, 0)
        pdf.ln(4)

    @staticmethod
    def _column_widths(pdf: FPDF, headers: list[str]) -> list[float]:
        weights = [_COLUMN_WEIGHTS.get(h, 1.0) for h in headers]
        total = sum(weights) or 1.0
        return [pdf.epw * w / total for w in weights]

    def _render_table_header(
        self, pdf: FPDF, headers: list[str], widths: list[float]
    ) -> None:
        pdf.set_font("Helvetica", "B", self._settings.font_size)
        pdf.set_fill_color(70, 70, 70)
        pdf.set_text_color(255, 255, 255)
        for header, width in zip(headers, widths):
            pdf.cell(width, 7, _latin1(header), border=1, fill=True, align="C")
        pdf.ln()
        pdf.set_text_color(0, 0, 0)

    def _render_rows(
        self, pdf: FPDF, report: TabularReport, widths: list[float]
    ) -> None:
        if not report.rows:
            pdf.set_font("Helvetica", "I", self._settings.font_size)
            pdf.cell(
                sum(widths), 7, "No transactions found", border=1, align="C",
                new_x=XPos.LMARGIN, new_y=YPos.NEXT,
            )
            return

        pdf.set_font("Helvetica", "", self._settings.font_size)
        for idx, row in enumerate(report.rows, 1):
            # Header row again after a page break
            if pdf.will_page_break(6):
                pdf.add_page()
                self._render_table_header(pdf, report.headers, widths)
                pdf.set_font("Helvetica", "", self._settings.font_size)

            fill = idx % 2 == 0
            if fill:
                pdf.set_fill_color(240, 240, 240)
            for text, width in zip(row, widths):
                pdf.cell(width, 6, self._fit(pdf, _latin1(text), width), border=1, fill=fill)
            pdf.ln()

    @staticmethod
    def _fit(pdf: FPDF, text: str, width: float) -> str:
        """Truncate text with an ellipsis so it fits the cell."""
        limit = width - 2 * pdf.c_margin
        if pdf.get_string_width(text) <= limit:
            return text
        while text and pdf.get_string_width(text + "...") > limit:
            text = text[:-1]
        return text + "..."
