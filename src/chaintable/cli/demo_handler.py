"""Demo command handler.

Replays the classic example session: three inserts into a fresh table,
a dump, a lookup, a delete and a second dump before teardown.
"""

from __future__ import annotations

import logging

import typer

from chaintable.config import get_config
from chaintable.core.data_structures import NOT_FOUND
from chaintable.core.factory import create_table
from chaintable.shared.constants import CLIDefaults, CLIMessages

logger = logging.getLogger(__name__)

DEMO_ITEMS: tuple[tuple[str, int], ...] = (
    ("key1", 100),
    ("key2", 200),
    ("key3", 300),
)


def demo_command(capacity: int | None = None) -> int:
    """Run the example session and print each step.

    Args:
        capacity: Bucket count; configured default when None

    Returns:
        Exit code
    """
    settings = get_config()
    table = create_table(settings, capacity=capacity)
    logger.info("Running demo with %d buckets", table.capacity)

    with table:
        for key, value in DEMO_ITEMS:
            table.insert(key, value)

        typer.echo(table.render(), nl=False)

        retrieved = table.lookup("key2")
        if retrieved is not NOT_FOUND:
            typer.echo(CLIMessages.DEMO_LOOKUP.format(key="key2", value=retrieved))

        if table.delete("key1"):
            typer.echo(CLIMessages.DEMO_DELETED.format(key="key1"))

        typer.echo(table.render(), nl=False)

    return CLIDefaults.EXIT_SUCCESS
