"""Inspect command handler.

Loads ``KEY=VALUE`` pairs into a table and shows how they spread over the
buckets. Repeated keys update the earlier value, as insert does.
"""

from __future__ import annotations

import logging

import typer
from rich.console import Console

from chaintable.cli.common.error_handler import format_json_output
from chaintable.cli.render import build_layout_table, layout_to_dict
from chaintable.config import get_config
from chaintable.core.factory import create_table
from chaintable.shared.constants import CLICommands, CLIDefaults, CLIMessages
from chaintable.shared.errors import ErrorCode, create_cli_error

logger = logging.getLogger(__name__)


def parse_pairs(pairs: list[str]) -> list[tuple[str, str]]:
    """Split ``KEY=VALUE`` arguments on the first ``=``.

    Raises:
        CliError: If an argument has no ``=``
    """
    parsed = []
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep:
            raise create_cli_error(
                CLIMessages.BAD_PAIR.format(pair=pair),
                command=CLICommands.INSPECT,
                operation="parse_pairs",
                exit_code=CLIDefaults.EXIT_USAGE,
                code=ErrorCode.CLI_INVALID_ARGUMENTS,
            )
        parsed.append((key, value))
    return parsed


def inspect_command(
    pairs: list[str],
    capacity: int | None = None,
    *,
    json_output: bool = False,
    console: Console | None = None,
) -> int:
    """Insert ``pairs`` into a fresh table and report its bucket layout."""
    items = parse_pairs(pairs)
    table = create_table(get_config(), capacity=capacity)

    with table:
        created = sum(1 for key, value in items if table.insert(key, value))
        logger.debug("Inserted %d new keys from %d pairs", created, len(items))

        if json_output:
            typer.echo(format_json_output(CLICommands.INSPECT, success=True, data=layout_to_dict(table)))
        else:
            (console or Console()).print(build_layout_table(table))

    return CLIDefaults.EXIT_SUCCESS
