"""Page statistics and scene navigation commands."""

from __future__ import annotations

from typing import Annotated

import typer
from rich.console import Console

from scriptline.cli.commands.parse import ScriptPath
from scriptline.cli.formatters.base import OutputFormat
from scriptline.cli.formatters.json_formatter import JsonFormatter
from scriptline.cli.formatters.screenplay_formatter import ScreenplayFormatter
from scriptline.cli.utils.cli_handler import cli_command
from scriptline.layout import (
    calculate_page_breaks,
    calculate_page_stats,
    format_page_count,
    format_runtime,
    get_scene_list,
    total_pages,
)
from scriptline.parser import FountainParser

console = Console()


@cli_command
def stats_command(
    script_path: ScriptPath,
    json_output: Annotated[bool, typer.Option("--json", help="Output as JSON")] = False,
    brief: Annotated[
        bool, typer.Option("--brief", "-b", help="Print a one-line summary")
    ] = False,
) -> None:
    """Estimate page count, runtime, line and word counts."""
    lines = FountainParser().parse_file(script_path).lines
    stats = calculate_page_stats(lines)
    pages = total_pages(lines)
    formatter = ScreenplayFormatter(console)

    if json_output:
        payload = {
            "stats": stats,
            "formatted_page_count": format_page_count(stats),
            "formatted_runtime": format_runtime(stats.estimated_minutes),
            "navigator_pages": pages,
            "page_breaks": calculate_page_breaks(lines),
        }
        print(formatter.format(payload, OutputFormat.JSON))
    elif brief:
        print(formatter.format(stats))
    else:
        console.print(formatter.stats_table(stats, pages))


@cli_command
def scenes_command(
    script_path: ScriptPath,
    json_output: Annotated[bool, typer.Option("--json", help="Output as JSON")] = False,
) -> None:
    """List scene headings with the page each one falls on."""
    scenes = get_scene_list(FountainParser().parse_file(script_path).lines)

    if json_output:
        print(JsonFormatter().format(scenes))
        return

    if not scenes:
        console.print("[yellow]No scenes yet.[/yellow]")
        return
    console.print(ScreenplayFormatter(console).scenes_table(scenes))
