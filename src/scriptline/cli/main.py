"""The ``scriptline`` command line application."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated, Any

import typer
from rich.console import Console

from scriptline import __version__
from scriptline.cli.commands import (
    format_command,
    parse_command,
    pdf_command,
    scenes_command,
    stats_command,
    validate_command,
)
from scriptline.cli.formatters.json_formatter import JsonFormatter
from scriptline.cli.utils.cli_handler import CLIHandler
from scriptline.config import (
    configure_logging,
    get_logger,
    get_settings_for_cli,
    set_settings,
)

DESCRIPTION = "Fountain screenplay import, export and page estimation"

logger = get_logger(__name__)
console = Console()

app = typer.Typer(
    name="scriptline",
    help=DESCRIPTION,
    pretty_exceptions_enable=False,
    add_completion=False,
    rich_markup_mode="rich",
)

for name, command in [
    ("parse", parse_command),
    ("format", format_command),
    ("stats", stats_command),
    ("scenes", scenes_command),
    ("validate", validate_command),
    ("pdf", pdf_command),
]:
    app.command(name=name)(command)


@app.command()
def version(
    json_output: Annotated[bool, typer.Option("--json", help="Output as JSON")] = False,
) -> None:
    """Show the installed Scriptline version."""
    if json_output:
        info = {
            "name": "Scriptline",
            "version": __version__,
            "description": DESCRIPTION,
        }
        print(JsonFormatter().format(info))
        return
    console.print(f"Scriptline v{__version__}")


def _logging_overrides(verbose: bool, debug: bool) -> dict[str, Any]:
    """Settings implied by the global verbosity flags; --debug wins."""
    if debug:
        return {"log_level": "DEBUG", "debug": True}
    if verbose:
        return {"log_level": "INFO"}
    return {}


@app.callback()
def main_callback(
    config: Annotated[
        Path | None,
        typer.Option(
            "--config",
            "-c",
            help="Load settings from this YAML, TOML or JSON file",
            envvar="SCRIPTLINE_CONFIG",
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Log at INFO level"),
    ] = False,
    debug: Annotated[
        bool,
        typer.Option("--debug", help="Log at DEBUG level with call sites"),
    ] = False,
) -> None:
    """Fountain screenplay import, export and page estimation."""
    overrides = _logging_overrides(verbose, debug)
    if config is None and not overrides:
        # Nothing to change; modules configure logging lazily from defaults
        return

    try:
        settings = get_settings_for_cli(config_file=config, cli_overrides=overrides)
    except Exception as e:
        CLIHandler(console).handle_error(e)

    set_settings(settings)
    configure_logging(settings)
    logger.debug("Settings loaded", config=str(config) if config else None)


def main() -> None:
    """Run the application; used by the console script."""
    app()
