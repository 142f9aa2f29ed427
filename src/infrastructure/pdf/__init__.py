"""PDF generation infrastructure."""

from src.infrastructure.pdf.report_pdf_renderer import Fpdf2ReportRenderer

__all__ = ["Fpdf2ReportRenderer"]
