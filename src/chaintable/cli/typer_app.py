"""
chaintable Typer CLI Application

Entry point for the ``chaintable`` command: common options are handled by
the main callback, and each command delegates to its handler module.
"""

from __future__ import annotations

from typing import Annotated, Optional

import typer

from chaintable.cli.common.context import CliContext, LogLevel, set_cli_context
from chaintable.cli.common.error_decorator import handle_cli_errors
from chaintable.cli.common.options import (
    capacity_option,
    json_output_option,
    log_level_option,
    verbose_option,
    version_callback,
    version_option,
)
from chaintable.cli.demo_handler import demo_command
from chaintable.cli.hash_handler import hash_command
from chaintable.cli.inspect_handler import inspect_command
from chaintable.config import get_config
from chaintable.shared.constants import CLICommands, CLIDefaults, CLIHelp
from chaintable.utils.logging_config import setup_logging

__version__ = CLIDefaults.VERSION


def main_callback(
    verbose: int,
    log_level: LogLevel | None,
    version: bool,
) -> None:
    """
    Process the common options before any command runs.

    Sets the global CLI context and configures logging from the
    configuration, with command-line options taking precedence. The
    ``app.debug`` setting turns on DEBUG logging when neither ``-v`` nor
    ``--log-level`` is given.
    """
    if version:
        version_callback(value=True)

    settings = get_config()
    context = CliContext(verbose=verbose, log_level=log_level)
    set_cli_context(context)

    level = context.get_effective_log_level()
    if level is None and settings.app.debug:
        level = LogLevel.DEBUG.value
    setup_logging(settings.logging, level=level)


app = typer.Typer(
    name=CLIHelp.APP_NAME,
    help=CLIHelp.APP_DESCRIPTION,
    add_completion=False,
    rich_markup_mode=CLIHelp.APP_STYLE,
    no_args_is_help=True,
)


@app.callback()
def main(
    verbose: Annotated[int, verbose_option] = 0,
    log_level: Annotated[Optional[LogLevel], log_level_option] = None,
    version: Annotated[bool, version_option] = False,
) -> None:
    """Main CLI callback with error handling."""
    try:
        main_callback(verbose, log_level, version)
    except typer.Exit:
        raise
    except Exception as e:
        from chaintable.cli.common.error_handler import handle_cli_error

        exit_code = handle_cli_error(e, "main-callback")
        raise typer.Exit(exit_code) from e


@app.command(CLICommands.DEMO, help=CLIHelp.DEMO_HELP)
@handle_cli_errors(CLICommands.DEMO)
def demo_command_typer(
    capacity: Annotated[Optional[int], capacity_option] = None,
) -> None:
    raise typer.Exit(demo_command(capacity))


@app.command(CLICommands.HASH, help=CLIHelp.HASH_HELP)
@handle_cli_errors(CLICommands.HASH)
def hash_command_typer(
    key: Annotated[str, typer.Argument(help=CLIHelp.HASH_KEY_HELP)],
    capacity: Annotated[Optional[int], capacity_option] = None,
    json_output: Annotated[bool, json_output_option] = False,
) -> None:
    raise typer.Exit(hash_command(key, capacity, json_output=json_output))


@app.command(CLICommands.INSPECT, help=CLIHelp.INSPECT_HELP)
@handle_cli_errors(CLICommands.INSPECT)
def inspect_command_typer(
    pairs: Annotated[list[str], typer.Argument(help=CLIHelp.INSPECT_PAIRS_HELP)],
    capacity: Annotated[Optional[int], capacity_option] = None,
    json_output: Annotated[bool, json_output_option] = False,
) -> None:
    raise typer.Exit(inspect_command(pairs, capacity, json_output=json_output))


if __name__ == "__main__":
    app()
