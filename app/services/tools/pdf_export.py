from __future__ import annotations

import io
import logging
import re
from pathlib import Path
from typing import BinaryIO, List, Union

from reportlab.lib.pagesizes import A4
from reportlab.lib.units import mm
from reportlab.pdfbase import pdfmetrics
from reportlab.pdfgen import canvas

from app.core.exceptions import ExportError
from app.services.tools.report_generator import BlockKind, RenderedReport

logger = logging.getLogger(__name__)

_WHITESPACE_RUN = re.compile(r"\s+")

BODY_FONT = "Helvetica"
BOLD_FONT = "Helvetica-Bold"
CODE_FONT = "Courier"

# (font, size, space before) per block kind
_STYLES = {
    BlockKind.TITLE: (BOLD_FONT, 18, 0),
    BlockKind.HEADING: (BOLD_FONT, 14, 14),
    BlockKind.SUBHEADING: (BOLD_FONT, 11, 8),
    BlockKind.PARAGRAPH: (BODY_FONT, 10, 2),
    BlockKind.BULLET: (BODY_FONT, 10, 4),
    BlockKind.LABELLED: (BODY_FONT, 10, 4),
    BlockKind.CODE: (CODE_FONT, 8, 4),
    BlockKind.NOTE: (BODY_FONT, 9, 1),
}


def export_filename(company_name: str, extension: str = "pdf") -> str:
    """'Goldman Sachs' -> 'Goldman_Sachs_Interview_Prep.pdf'"""
    return f"{_WHITESPACE_RUN.sub('_', company_name)}_Interview_Prep.{extension}"


def _pdf_safe(text: str) -> str:
    """The standard PDF fonts only cover cp1252; swap out what they cannot draw."""
    text = text.replace("₹", "Rs. ").replace("\t", "    ")
    return text.encode("cp1252", "replace").decode("cp1252")


def _wrap_words(text: str, font: str, size: int, max_width: float) -> List[str]:
    """Word-wrap a paragraph to fit max_width using the given font."""
    lines: List[str] = []
    for paragraph in text.split("\n"):
        current = ""
        for word in paragraph.split():
            trial = f"{current} {word}".strip()
            if pdfmetrics.stringWidth(trial, font, size) <= max_width:
                current = trial
                continue
            if current:
                lines.append(current)
            current = word
            # A single word wider than the line is hard-split
            while pdfmetrics.stringWidth(current, font, size) > max_width and len(current) > 1:
                cut = len(current) - 1
                while cut > 1 and pdfmetrics.stringWidth(current[:cut], font, size) > max_width:
                    cut -= 1
                lines.append(current[:cut])
                current = current[cut:]
        lines.append(current)
    return lines or [""]


def _wrap_code(text: str, size: int, max_width: float) -> List[str]:
    """Keep indentation; hard-wrap long lines at the monospace column limit."""
    columns = max(int(max_width // pdfmetrics.stringWidth("M", CODE_FONT, size)), 1)
    lines: List[str] = []
    for line in text.splitlines() or [""]:
        while len(line) > columns:
            lines.append(line[:columns])
            line = line[columns:]
        lines.append(line)
    return lines


def _write_pdf(report: RenderedReport, target: Union[str, BinaryIO]) -> None:
    c = canvas.Canvas(target, pagesize=A4)
    c.setTitle(f"{report.company_name} Interview Prep")
    width, height = A4

    margin = 18 * mm
    max_width = width - 2 * margin
    line_gap = 3
    y = height - margin

    def ensure_room(size: int):
        nonlocal y
        if y - size < margin:
            c.showPage()
            y = height - margin

    def draw(text: str, font: str, size: int, indent: float = 0):
        nonlocal y
        ensure_room(size)
        c.setFont(font, size)
        c.drawString(margin + indent, y - size, text)
        y -= size + line_gap

    for block in report.blocks:
        font, size, space_before = _STYLES.get(block.kind, (BODY_FONT, 10, 2))
        text = _pdf_safe(block.text)
        y -= space_before

        if block.kind is BlockKind.CODE:
            draw(_pdf_safe(block.label), BOLD_FONT, 9)
            for line in _wrap_code(text, size, max_width - 8):
                draw(line, font, size, indent=8)
        elif block.kind is BlockKind.BULLET:
            wrapped = _wrap_words(text, font, size, max_width - 12)
            draw(f"- {wrapped[0]}", font, size)
            for cont in wrapped[1:]:
                draw(cont, font, size, indent=12)
        elif block.kind is BlockKind.LABELLED:
            draw(_pdf_safe(block.label), BOLD_FONT, size)
            for line in _wrap_words(text, font, size, max_width - 12):
                draw(line, font, size, indent=12)
        elif block.kind is BlockKind.NOTE:
            for line in _wrap_words(text, "Helvetica-Oblique", size, max_width - 12):
                draw(line, "Helvetica-Oblique", size, indent=12)
        else:
            for line in _wrap_words(text, font, size, max_width):
                draw(line, font, size)

        if block.kind is BlockKind.TITLE:
            draw(f"Generated on: {report.generated_at.strftime('%Y-%m-%d %H:%M')}", "Helvetica-Oblique", 9)

    c.save()


def export_report_to_pdf(report: RenderedReport, output: Union[str, Path, BinaryIO]) -> Union[str, BinaryIO]:
    """
    Paginate a rendered report into an A4 PDF.

    Args:
        report: Output of ReportGenerator.render.
        output: File path or writable binary stream.

    Returns:
        The path written (as str) or the stream passed in.

    Raises:
        ExportError: If the document cannot be produced. The report itself is untouched.
    """
    try:
        if isinstance(output, (str, Path)):
            out = Path(output)
            out.parent.mkdir(parents=True, exist_ok=True)
            _write_pdf(report, str(out))
            result = str(out)
        else:
            _write_pdf(report, output)
            result = output
    except Exception as e:
        logger.error(f"PDF export failed for '{report.company_name}': {e}", exc_info=True)
        raise ExportError("Could not generate PDF. Please try again.") from e

    logger.info(f"Exported PDF for '{report.company_name}'")
    return result


def render_pdf_bytes(report: RenderedReport) -> bytes:
    """Export to an in-memory PDF document."""
    buffer = io.BytesIO()
    export_report_to_pdf(report, buffer)
    return buffer.getvalue()
