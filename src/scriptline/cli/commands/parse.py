"""Decode a Fountain screenplay and show its typed lines."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console

from scriptline.cli.formatters.json_formatter import JsonFormatter
from scriptline.cli.formatters.screenplay_formatter import ScreenplayFormatter
from scriptline.cli.utils.cli_handler import cli_command
from scriptline.parser import FountainParser

console = Console()

ScriptPath = Annotated[
    Path,
    typer.Argument(
        help="Path to Fountain screenplay file",
        exists=True,
        file_okay=True,
        dir_okay=False,
    ),
]


@cli_command
def parse_command(
    script_path: ScriptPath,
    json_output: Annotated[bool, typer.Option("--json", help="Output as JSON")] = False,
) -> None:
    """Show the title page and classified lines of a Fountain file."""
    parsed = FountainParser().parse_file(script_path)

    if json_output:
        print(
            JsonFormatter().format(
                {"metadata": parsed.metadata, "script": parsed.script}
            )
        )
        return

    formatter = ScreenplayFormatter(console)
    if not parsed.metadata.is_empty():
        console.print(formatter.metadata_table(parsed))
    console.print(formatter.lines_table(parsed))
