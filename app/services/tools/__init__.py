"""Report rendering and export tools for the interview prep guide."""
from .report_generator import BlockKind, RenderedReport, ReportBlock, ReportGenerator
from .pdf_export import export_filename, export_report_to_pdf, render_pdf_bytes

__all__ = [
    "BlockKind",
    "RenderedReport",
    "ReportBlock",
    "ReportGenerator",
    "export_filename",
    "export_report_to_pdf",
    "render_pdf_bytes",
]
