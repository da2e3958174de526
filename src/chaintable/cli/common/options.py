"""
Reusable Typer Options Module

Common option definitions shared by the main callback and commands. Use
them as ``Annotated[<type>, <option>]`` metadata.
"""

from __future__ import annotations

import typer

from chaintable.shared.constants import CLIDefaults, CLIHelp, CLIOptions


def version_callback(value: bool) -> None:
    """Print version information and exit."""
    if value:
        typer.echo(CLIHelp.VERSION_TEXT.format(version=CLIDefaults.VERSION))
        raise typer.Exit


verbose_option = typer.Option(
    "--verbose",
    "-v",
    count=True,
    help="Enable verbose output (equivalent to --log-level DEBUG).",
)


log_level_option = typer.Option(
    "--log-level",
    case_sensitive=False,
    help="Set the logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL). Default: from configuration.",
)


version_option = typer.Option(
    "--version",
    "-V",
    help="Show version information and exit.",
    is_eager=True,
    callback=version_callback,
)


capacity_option = typer.Option(
    CLIOptions.CAPACITY,
    CLIOptions.CAPACITY_SHORT,
    help=CLIHelp.CAPACITY_HELP,
)


json_output_option = typer.Option(
    CLIOptions.JSON,
    help=CLIHelp.JSON_HELP,
)
