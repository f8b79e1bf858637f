"""Scriptline: screenplay line model, Fountain conversion and page layout.

Scriptline decodes Fountain text into an ordered list of typed screenplay
lines, encodes those lines back to Fountain, and estimates pages, runtime
and scene positions with one shared weighting table.
"""

from scriptline.config import ScriptlineSettings, get_logger, get_settings
from scriptline.layout import (
    PageStats,
    calculate_page_stats,
    format_page_count,
    format_runtime,
    get_scene_list,
)
from scriptline.models import Line, LineType, Script
from scriptline.parser import FountainParser, FountainWriter, validate_fountain

__version__ = "0.1.0"
__license__ = "MIT"

__all__ = [
    "FountainParser",
    "FountainWriter",
    "Line",
    "LineType",
    "PageStats",
    "Script",
    "ScriptlineSettings",
    "__version__",
    "calculate_page_stats",
    "format_page_count",
    "format_runtime",
    "get_logger",
    "get_scene_list",
    "get_settings",
    "validate_fountain",
]
