"""Hash command handler."""

from __future__ import annotations

import typer

from chaintable.cli.common.error_handler import format_json_output
from chaintable.config import get_config
from chaintable.core.data_structures import djb2
from chaintable.core.data_structures.hashing import validate_capacity
from chaintable.shared.constants import CLICommands, CLIDefaults, CLIMessages


def hash_command(key: str, capacity: int | None = None, *, json_output: bool = False) -> int:
    """Print the djb2 hash of ``key`` and the bucket it maps to."""
    buckets = validate_capacity(capacity if capacity is not None else get_config().table.default_capacity)
    hash_value = djb2(key)
    index = hash_value % buckets

    if json_output:
        typer.echo(
            format_json_output(
                CLICommands.HASH,
                success=True,
                data={"key": key, "hash": hash_value, "index": index, "capacity": buckets},
            )
        )
    else:
        typer.echo(
            CLIMessages.HASH_RESULT.format(key=key, hash=hash_value, index=index, capacity=buckets),
        )
    return CLIDefaults.EXIT_SUCCESS
