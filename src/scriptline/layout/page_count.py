"""Screenplay page estimation.

One page is roughly one minute of screen time and holds about 55 weighted
lines. Page breaks, scene page numbers and page statistics all come from
the same scan over the shared weighting table.
"""

from __future__ import annotations

import math
from bisect import bisect_left
from collections.abc import Iterator, Sequence
from dataclasses import dataclass

from scriptline.config import get_logger
from scriptline.layout.weights import LINES_PER_PAGE, TypedText, line_weight
from scriptline.models import LineType

logger = get_logger(__name__)


@dataclass(frozen=True)
class PageStats:
    """Computed length statistics for a screenplay."""

    page_count: float
    estimated_minutes: int
    line_count: int
    word_count: int


@dataclass(frozen=True)
class SceneEntry:
    """A scene heading as listed by the navigator."""

    index: int
    text: str
    page: int


def _round_half_up(value: float, digits: int = 0) -> float:
    factor = 10**digits
    return math.floor(value * factor + 0.5) / factor


def count_words(text: str) -> int:
    """Count whitespace-delimited tokens."""
    return len(text.split())


def calculate_page_stats(lines: Sequence[TypedText]) -> PageStats:
    """Calculate estimated page count and runtime for a screenplay.

    Args:
        lines: Screenplay lines in reading order

    Returns:
        Page statistics; all zero for an empty document
    """
    if not lines:
        return PageStats(page_count=0, estimated_minutes=0, line_count=0, word_count=0)

    weighted_lines = sum(line_weight(line) for line in lines)
    word_count = sum(count_words(line.text or "") for line in lines)

    page_count = max(1.0, _round_half_up(weighted_lines / LINES_PER_PAGE, 1))
    estimated_minutes = int(_round_half_up(page_count))

    return PageStats(
        page_count=page_count,
        estimated_minutes=estimated_minutes,
        line_count=len(lines),
        word_count=word_count,
    )


def _scan(lines: Sequence[TypedText]) -> Iterator[tuple[int, int, bool]]:
    """Yield (index, page, ends_page) for each line in reading order."""
    running = 0.0
    page = 1
    for index, line in enumerate(lines):
        running += line_weight(line)
        ends_page = running >= LINES_PER_PAGE
        yield index, page, ends_page
        if ends_page:
            page += 1
            running = 0.0


def calculate_page_breaks(lines: Sequence[TypedText]) -> list[int]:
    """Return indices of the lines that fill a page."""
    return [index for index, _, ends_page in _scan(lines) if ends_page]


def page_number_for(page_breaks: Sequence[int], index: int) -> int:
    """Return the 1-based page a line index falls on.

    A break line is the last line of its page.
    """
    return 1 + bisect_left(page_breaks, index)


def get_scene_list(lines: Sequence[TypedText]) -> list[SceneEntry]:
    """List non-empty scene headings with the page each falls on."""
    scenes = [
        SceneEntry(index=index, text=lines[index].text, page=page)
        for index, page, _ in _scan(lines)
        if LineType(lines[index].type) is LineType.SCENE and lines[index].text.strip()
    ]
    logger.debug("Built scene list", scenes=len(scenes))
    return scenes


def total_pages(lines: Sequence[TypedText]) -> int:
    """Number of pages the navigator shows, minimum 1."""
    pages = [page for _, page, _ in _scan(lines)]
    return pages[-1] if pages else 1


def first_line_of_page(lines: Sequence[TypedText], page: int) -> int | None:
    """Index of the first line on a 1-based page, or None past the end."""
    if page < 1:
        return None
    if page == 1:
        return 0 if lines else None
    breaks = calculate_page_breaks(lines)
    if page - 2 >= len(breaks):
        return None
    index = breaks[page - 2] + 1
    return index if index < len(lines) else None


def format_page_count(stats: PageStats) -> str:
    """Format page count for display."""
    if stats.page_count == 0:
        return "0 pages"
    if stats.page_count == 1:
        return "1 page"
    return f"{stats.page_count:.1f}".removesuffix(".0") + " pages"


def format_runtime(minutes: int) -> str:
    """Format estimated runtime."""
    if minutes == 0:
        return "0 min"
    if minutes < 60:
        return f"~{minutes} min"
    hours, mins = divmod(minutes, 60)
    if mins == 0:
        return f"~{hours}h"
    return f"~{hours}h {mins}m"
