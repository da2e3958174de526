"""CLI error handling decorator.

Wraps Typer command functions so that every failure goes through
:func:`handle_cli_error` and ends in a ``typer.Exit`` with the mapped
exit code, instead of repeating try/except blocks in each command.
"""

from __future__ import annotations

import functools
from typing import Any, Callable, TypeVar

import typer

from chaintable.cli.common.error_handler import handle_cli_error

F = TypeVar("F", bound=Callable[..., Any])


def handle_cli_errors(command_name: str) -> Callable[[F], F]:
    """Decorator for standardized CLI error handling.

    The wrapped function may take a ``json_output`` keyword argument; when
    it is true the error is reported as JSON.

    Args:
        command_name: CLI command name used in error context
    """

    def decorator(func: F) -> F:
        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            try:
                return func(*args, **kwargs)
            except typer.Exit:
                raise
            except Exception as e:  # noqa: BLE001
                exit_code = handle_cli_error(
                    e,
                    command_name,
                    json_output=bool(kwargs.get("json_output", False)),
                )
                raise typer.Exit(exit_code) from e

        return wrapper  # type: ignore[return-value]

    return decorator
