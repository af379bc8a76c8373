"""Report generators for FOP Tax Assistant."""

from fop_tax.infrastructure.reports.html_preview import (
    render_declaration_preview,
    render_esv_preview,
)
from fop_tax.infrastructure.reports.pdf_generator import (
    REPORTLAB_AVAILABLE,
    PDFReportGenerator,
    generate_pdf_report,
)

__all__ = [
    "PDFReportGenerator",
    "REPORTLAB_AVAILABLE",
    "generate_pdf_report",
    "render_declaration_preview",
    "render_esv_preview",
]
