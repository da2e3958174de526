"""Rich and JSON presentation of table layouts."""

from __future__ import annotations

from typing import Any

from rich.table import Table

from chaintable.core.factory import AnyTable


def _display(key: str | bytes) -> str:
    if isinstance(key, bytes):
        return key.decode("utf-8", errors="backslashreplace")
    return key


def layout_to_dict(table: AnyTable[Any]) -> dict[str, Any]:
    """Describe the table's size, load and non-empty buckets."""
    buckets = [
        {
            "index": index,
            "keys": [_display(key) for key, _ in chain],
        }
        for index, chain in table.iter_buckets()
        if chain
    ]
    return {
        "size": table.size,
        "capacity": table.capacity,
        "load_factor": round(table.load_factor, 4),
        "longest_chain": max(table.chain_lengths(), default=0),
        "buckets": buckets,
    }


def build_layout_table(table: AnyTable[Any]) -> Table:
    """Build a rich table with one row per non-empty bucket."""
    layout = layout_to_dict(table)
    rich_table = Table(
        title=f"size {layout['size']} / capacity {layout['capacity']} (load {layout['load_factor']:.2f})",
    )
    rich_table.add_column("Bucket", justify="right", style="cyan")
    rich_table.add_column("Length", justify="right")
    rich_table.add_column("Chain (head first)", style="green")

    for bucket in layout["buckets"]:
        rich_table.add_row(
            str(bucket["index"]),
            str(len(bucket["keys"])),
            " -> ".join(bucket["keys"]),
        )
    return rich_table
