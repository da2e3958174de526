"""Hash table configuration model."""

from __future__ import annotations

from pydantic import BaseModel, Field

from chaintable.shared.constants import TableDefaults


class TableSettings(BaseModel):
    """Defaults used when the package builds tables from configuration.

    Capacity is fixed for the lifetime of a table, so it should be sized
    for the expected number of keys up front.
    """

    default_capacity: int = Field(
        default=TableDefaults.CAPACITY,
        gt=0,
        description="Number of buckets for new tables",
    )
    synchronized: bool = Field(
        default=False,
        description="Guard new tables with a lock for multi-threaded use",
    )
