"""Fixed-format screenplay page layout.

Positions every printed row of a script on US Letter pages in Courier 12pt
using the industry margin table. The result is a list of positioned text
items that any PDF backend can draw; ``pdf_export`` draws them with
reportlab.
"""

from __future__ import annotations

import textwrap
from collections.abc import Sequence
from dataclasses import dataclass, field

from scriptline.models import Line, LineType, Script


@dataclass(frozen=True)
class PageGeometry:
    """Page size and margins in points (72pt = 1 inch)."""

    width: float = 612
    height: float = 792
    margin_top: float = 72
    margin_bottom: float = 72
    margin_left: float = 108
    margin_right: float = 72

    @property
    def text_width(self) -> float:
        return self.width - self.margin_left - self.margin_right

    @property
    def bottom_limit(self) -> float:
        return self.height - self.margin_bottom


@dataclass(frozen=True)
class FontSpec:
    """Fixed-pitch screenplay font."""

    family: str = "Courier"
    size: float = 12
    line_height: float = 12
    # Courier advance width is 600/1000 em for every glyph
    char_width_ratio: float = 0.6

    def char_width(self, size: float | None = None) -> float:
        return (size or self.size) * self.char_width_ratio


@dataclass(frozen=True)
class ElementMargins:
    """Offsets from the text area edges for one element type."""

    left: float
    right: float
    caps: bool = False


PAGE = PageGeometry()
FONT = FontSpec()

ELEMENT_MARGINS: dict[LineType, ElementMargins] = {
    LineType.SCENE: ElementMargins(left=0, right=0, caps=True),
    LineType.ACTION: ElementMargins(left=0, right=0),
    LineType.CHARACTER: ElementMargins(left=168, right=0, caps=True),
    LineType.PARENTHETICAL: ElementMargins(left=120, right=144),
    LineType.DIALOGUE: ElementMargins(left=72, right=144),
    LineType.TRANSITION: ElementMargins(left=288, right=0, caps=True),
}

TITLE_FONT_SIZE = 24
LOGLINE_FONT_SIZE = 10
PAGE_NUMBER_WIDTH = 50
PAGE_NUMBER_OFFSET = 24


@dataclass(frozen=True)
class PositionedText:
    """One row of text placed on a page, y measured down from the top edge."""

    page: int
    x: float
    y: float
    text: str
    width: float
    align: str = "left"
    font_size: float = FONT.size


@dataclass
class PdfLayout:
    """Positioned text grouped by page, title page first when present."""

    pages: list[list[PositionedText]] = field(default_factory=list)
    has_title_page: bool = False

    @property
    def page_count(self) -> int:
        return len(self.pages)

    @property
    def body_page_count(self) -> int:
        return self.page_count - (1 if self.has_title_page else 0)


def column_width(line_type: LineType) -> float:
    """Printable width for an element type."""
    margins = ELEMENT_MARGINS[line_type]
    return PAGE.text_width - margins.left - margins.right


def chars_per_row(width: float, font_size: float = FONT.size) -> int:
    """Characters that fit on one row of the given width."""
    return max(1, int(width / FONT.char_width(font_size)))


def wrap_rows(text: str, width: float, font_size: float = FONT.size) -> list[str]:
    """Wrap text into printed rows; blank text yields no rows."""
    if not text.strip():
        return []
    return textwrap.wrap(text, chars_per_row(width, font_size)) or [text]


def display_text(line: Line) -> str:
    """Text as printed, uppercased for caps elements."""
    return line.text.upper() if ELEMENT_MARGINS[line.type].caps else line.text


def spacing_after(current: LineType, next_type: LineType | None = None) -> float:
    """Vertical space after an element, in points."""
    if current in (LineType.SCENE, LineType.TRANSITION):
        return FONT.line_height * 2
    if current in (LineType.CHARACTER, LineType.PARENTHETICAL):
        return 0
    if current is LineType.DIALOGUE:
        if next_type in (LineType.DIALOGUE, LineType.PARENTHETICAL):
            return 0
        return FONT.line_height
    return FONT.line_height


def element_height(line: Line) -> float:
    """Space an element needs, including its trailing spacing."""
    rows = wrap_rows(display_text(line), column_width(line.type))
    if not rows:
        return 0
    return len(rows) * FONT.line_height + spacing_after(line.type)


def _title_page(script: Script) -> list[PositionedText]:
    items: list[PositionedText] = []
    x = PAGE.margin_left
    width = PAGE.text_width
    y = PAGE.height / 3

    for row in wrap_rows(script.title.upper(), width, TITLE_FONT_SIZE):
        items.append(PositionedText(0, x, y, row, width, "center", TITLE_FONT_SIZE))
        y += TITLE_FONT_SIZE

    y += FONT.line_height * 2
    items.append(PositionedText(0, x, y, "written by", width, "center"))
    y += FONT.line_height * 2
    items.append(
        PositionedText(0, x, y, script.author or "Anonymous", width, "center")
    )

    if script.logline:
        y = PAGE.height - 200
        for row in wrap_rows(script.logline, width, LOGLINE_FONT_SIZE):
            items.append(
                PositionedText(0, x, y, row, width, "center", LOGLINE_FONT_SIZE)
            )
            y += LOGLINE_FONT_SIZE
    return items


def _body_pages(lines: Sequence[Line], first_page: int) -> list[list[PositionedText]]:
    pages: list[list[PositionedText]] = [[]]
    y = PAGE.margin_top

    for index, line in enumerate(lines):
        next_type = lines[index + 1].type if index + 1 < len(lines) else None
        width = column_width(line.type)
        rows = wrap_rows(display_text(line), width)
        if not rows:
            continue

        height = element_height(line)
        if y + height > PAGE.bottom_limit and pages[-1]:
            pages.append([])
            y = PAGE.margin_top

        x = PAGE.margin_left + ELEMENT_MARGINS[line.type].left
        align = "right" if line.type is LineType.TRANSITION else "left"
        for row in rows:
            # Elements taller than the body area flow onto following pages
            if y + FONT.line_height > PAGE.bottom_limit and pages[-1]:
                pages.append([])
                y = PAGE.margin_top
            page_index = first_page + len(pages) - 1
            pages[-1].append(PositionedText(page_index, x, y, row, width, align))
            y += FONT.line_height

        y += spacing_after(line.type, next_type)

    return pages


def _page_number(page_index: int, number: int) -> PositionedText:
    return PositionedText(
        page=page_index,
        x=PAGE.width - PAGE.margin_right - PAGE_NUMBER_WIDTH,
        y=PAGE.margin_top - PAGE_NUMBER_OFFSET,
        text=f"{number}.",
        width=PAGE_NUMBER_WIDTH,
        align="right",
    )


def plan_pdf_layout(
    script: Script,
    include_title_page: bool = True,
    include_page_numbers: bool = True,
) -> PdfLayout:
    """Lay out a script on fixed-format pages.

    Args:
        script: Script to lay out
        include_title_page: Put a title page before the body
        include_page_numbers: Number body pages, title page excluded

    Returns:
        Positioned text for every page
    """
    layout = PdfLayout(has_title_page=include_title_page)
    if include_title_page:
        layout.pages.append(_title_page(script))

    first_body_page = len(layout.pages)
    body = _body_pages(script.lines, first_body_page)
    if include_page_numbers:
        for number, items in enumerate(body, start=1):
            items.append(_page_number(first_body_page + number - 1, number))
    layout.pages.extend(body)
    return layout
