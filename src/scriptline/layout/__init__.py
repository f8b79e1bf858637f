"""Page estimation and fixed-format layout for Scriptline."""

from __future__ import annotations

from .page_count import (
    PageStats,
    SceneEntry,
    calculate_page_breaks,
    calculate_page_stats,
    first_line_of_page,
    format_page_count,
    format_runtime,
    get_scene_list,
    page_number_for,
    total_pages,
)
from .weights import LINE_WEIGHTS, LINES_PER_PAGE, line_weight

__all__ = [
    "LINES_PER_PAGE",
    "LINE_WEIGHTS",
    "PageStats",
    "SceneEntry",
    "calculate_page_breaks",
    "calculate_page_stats",
    "first_line_of_page",
    "format_page_count",
    "format_runtime",
    "get_scene_list",
    "line_weight",
    "page_number_for",
    "total_pages",
]
