"""Advisory validation of Fountain files."""

from __future__ import annotations

from typing import Annotated

import typer
from rich.console import Console

from scriptline.cli.commands.parse import ScriptPath
from scriptline.cli.formatters.json_formatter import JsonFormatter
from scriptline.cli.utils.cli_handler import CLIHandler, cli_command
from scriptline.parser import validate_fountain
from scriptline.parser.fountain_parser import read_fountain_file

console = Console()


@cli_command
def validate_command(
    script_path: ScriptPath,
    json_output: Annotated[bool, typer.Option("--json", help="Output as JSON")] = False,
) -> None:
    """Check that a Fountain file can be imported."""
    result = validate_fountain(read_fountain_file(script_path))

    if json_output:
        print(JsonFormatter().format(result))
    elif result.valid:
        CLIHandler(console).handle_success(f"{script_path.name} is valid")
    else:
        for error in result.errors:
            console.print(f"[red]{error}[/red]")

    if not result.valid:
        raise typer.Exit(1)
