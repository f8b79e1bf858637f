"""PDF export for screenplays using reportlab."""

from __future__ import annotations

from pathlib import Path

from reportlab.pdfgen import canvas

from scriptline.config import get_logger
from scriptline.exceptions import ExportError
from scriptline.layout.pdf_layout import (
    FONT,
    PAGE,
    PdfLayout,
    PositionedText,
    plan_pdf_layout,
)
from scriptline.models import Script

logger = get_logger(__name__)

# Courier ascender height as a fraction of the font size
COURIER_ASCENT = 0.629


def _draw(pdf: canvas.Canvas, item: PositionedText) -> None:
    pdf.setFont(FONT.family, item.font_size)
    # Layout y runs down from the top edge; reportlab baselines run up
    baseline = PAGE.height - item.y - item.font_size * COURIER_ASCENT
    if item.align == "right":
        pdf.drawRightString(item.x + item.width, baseline, item.text)
    elif item.align == "center":
        pdf.drawCentredString(item.x + item.width / 2, baseline, item.text)
    else:
        pdf.drawString(item.x, baseline, item.text)


def export_pdf(
    script: Script,
    output_path: Path,
    include_title_page: bool = True,
    include_page_numbers: bool = True,
) -> PdfLayout:
    """Export a script to a PDF file.

    Args:
        script: Script to export
        output_path: Destination file
        include_title_page: Put a title page before the body
        include_page_numbers: Number body pages

    Returns:
        The layout that was drawn

    Raises:
        ExportError: If the file cannot be written
    """
    layout = plan_pdf_layout(
        script,
        include_title_page=include_title_page,
        include_page_numbers=include_page_numbers,
    )

    pdf = canvas.Canvas(str(output_path), pagesize=(PAGE.width, PAGE.height))
    pdf.setTitle(script.title)
    if script.author:
        pdf.setAuthor(script.author)

    for items in layout.pages:
        for item in items:
            _draw(pdf, item)
        pdf.showPage()

    try:
        pdf.save()
    except OSError as e:
        raise ExportError(
            message=f"Failed to write PDF: {output_path}",
            hint="Check that the destination directory exists and is writable.",
            details={"file": str(output_path), "reason": str(e)},
        ) from e

    logger.info(
        "Exported PDF",
        path=str(output_path),
        pages=layout.page_count,
        title=script.title,
    )
    return layout
