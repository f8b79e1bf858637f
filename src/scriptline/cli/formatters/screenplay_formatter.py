"""Rich table formatters for screenplay lines, statistics and scenes."""

from __future__ import annotations

from typing import Any

from rich.table import Table

from scriptline.cli.formatters.base import OutputFormat, OutputFormatter
from scriptline.cli.formatters.json_formatter import JsonFormatter
from scriptline.layout.page_count import (
    PageStats,
    SceneEntry,
    format_page_count,
    format_runtime,
)
from scriptline.models import LineType
from scriptline.parser.fountain_parser import ParsedFountain

TYPE_LABELS: dict[LineType, str] = {
    LineType.SCENE: "SCENE HEADING",
    LineType.ACTION: "ACTION",
    LineType.CHARACTER: "CHARACTER",
    LineType.PARENTHETICAL: "PARENTHETICAL",
    LineType.DIALOGUE: "DIALOGUE",
    LineType.TRANSITION: "TRANSITION",
}

TYPE_STYLES: dict[LineType, str] = {
    LineType.SCENE: "bold cyan",
    LineType.CHARACTER: "bold yellow",
    LineType.PARENTHETICAL: "italic",
    LineType.TRANSITION: "bold magenta",
}


class ScreenplayFormatter(OutputFormatter[Any]):
    """Format decoded documents, page statistics and scene lists."""

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        """Initialize with a JSON fallback formatter."""
        super().__init__(*args, **kwargs)
        self.json_formatter = JsonFormatter(self.console)

    def format(self, data: Any, format_type: OutputFormat = OutputFormat.TEXT) -> str:
        """Format data as JSON or a plain text summary."""
        if format_type == OutputFormat.JSON:
            return self.json_formatter.format(data)
        if isinstance(data, PageStats):
            return self.stats_summary(data)
        return str(data)

    def stats_summary(self, stats: PageStats) -> str:
        """One-line human summary of page statistics."""
        return (
            f"{format_page_count(stats)}, {format_runtime(stats.estimated_minutes)}, "
            f"{stats.line_count} lines, {stats.word_count} words"
        )

    def lines_table(self, parsed: ParsedFountain) -> Table:
        """Table of typed lines in reading order."""
        table = Table(title=parsed.script.title, show_lines=False)
        table.add_column("#", justify="right", style="dim")
        table.add_column("Type")
        table.add_column("Text")
        for index, line in enumerate(parsed.lines, start=1):
            style = TYPE_STYLES.get(line.type, "")
            table.add_row(str(index), TYPE_LABELS[line.type], line.text, style=style)
        return table

    def metadata_table(self, parsed: ParsedFountain) -> Table:
        """Table of title page values that were present."""
        table = Table(title="Title Page")
        table.add_column("Key", style="cyan")
        table.add_column("Value")
        metadata = parsed.metadata
        for key in (
            "title",
            "author",
            "credit",
            "source",
            "draft_date",
            "contact",
            "copyright",
            "notes",
        ):
            value = getattr(metadata, key)
            if value is not None:
                table.add_row(key.replace("_", " ").title(), value)
        for key, value in metadata.extra.items():
            table.add_row(key.title(), value)
        return table

    def scenes_table(self, scenes: list[SceneEntry]) -> Table:
        """Scene navigator listing."""
        table = Table(title=f"Scenes ({len(scenes)})")
        table.add_column("Page", justify="right", style="dim")
        table.add_column("Line", justify="right", style="dim")
        table.add_column("Heading", style="bold")
        for scene in scenes:
            table.add_row(f"p{scene.page}", str(scene.index + 1), scene.text)
        return table

    def stats_table(self, stats: PageStats, pages: int) -> Table:
        """Page statistics as a two-column table."""
        table = Table(title="Page Statistics", show_header=False)
        table.add_column("Metric", style="cyan")
        table.add_column("Value")
        table.add_row("Pages", format_page_count(stats))
        table.add_row("Runtime", format_runtime(stats.estimated_minutes))
        table.add_row("Navigator pages", str(pages))
        table.add_row("Lines", str(stats.line_count))
        table.add_row("Words", str(stats.word_count))
        return table
