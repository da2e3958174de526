"""
CLI Error Handling Utilities

Consistent error handling for CLI commands: exceptions are mapped to
CliError instances, logged with structured context, and reported on
stderr (or stdout as JSON).
"""

from __future__ import annotations

import json
import logging
import sys
from typing import Any

from chaintable.cli.common.context import get_cli_context
from chaintable.shared.constants import CLIDefaults
from chaintable.shared.errors import (
    ApplicationError,
    ChainTableError,
    CliError,
    ErrorCode,
    TableError,
    create_cli_error,
)
from chaintable.utils.logging_config import log_operation_error

logger = logging.getLogger(__name__)


def format_json_output(
    command: str,
    *,
    success: bool,
    errors: list[str] | None = None,
    data: dict[str, Any] | None = None,
) -> str:
    """Format command output as a JSON document."""
    output: dict[str, Any] = {
        "success": success,
        "command": command,
    }

    if errors:
        output["errors"] = errors

    if data:
        output["data"] = data

    return json.dumps(output, indent=2, ensure_ascii=False)


def handle_cli_error(
    error: Exception,
    command: str,
    *,
    json_output: bool = False,
) -> int:
    """Handle CLI errors with consistent formatting and logging.

    Args:
        error: The exception that occurred
        command: The CLI command being executed
        json_output: Whether to output JSON format

    Returns:
        Exit code for the CLI command
    """
    error_context: dict[str, Any] = {
        "command": command,
        "error_type": type(error).__name__,
    }
    cli_error = _map_error_to_cli_error(error, command, error_context)
    _log_error(error, command, cli_error, error_context)

    if json_output:
        sys.stdout.write(
            format_json_output(
                command,
                success=False,
                errors=[cli_error.message],
                data={
                    "error_code": cli_error.code.value,
                    "exit_code": cli_error.exit_code,
                },
            )
            + "\n"
        )
    else:
        sys.stderr.write(f"Error: {cli_error.message}\n")
        if _verbose_requested() and cli_error.original_error is not None:
            cause = cli_error.original_error
            sys.stderr.write(f"Caused by: {type(cause).__name__}: {cause}\n")

    return cli_error.exit_code


def _map_error_to_cli_error(
    error: Exception,
    command: str,
    error_context: dict[str, Any],
) -> CliError:
    """Map specific exception types to CLI errors."""
    if isinstance(error, CliError):
        error_context["error_code"] = error.code.value
        return error

    if isinstance(error, TableError):
        error_context["error_code"] = error.code.value
        return create_cli_error(
            message=f"Table error: {error.message}",
            command=command,
            original_error=error,
            code=error.code,
        )

    if isinstance(error, ApplicationError):
        error_context["error_code"] = error.code.value
        return create_cli_error(
            message=f"Application error: {error.message}",
            command=command,
            original_error=error,
            code=error.code,
        )

    if isinstance(error, ChainTableError):
        error_context["error_code"] = error.code.value
        return create_cli_error(
            message=error.message,
            command=command,
            original_error=error,
            code=error.code,
        )

    if isinstance(error, KeyboardInterrupt):
        return create_cli_error(
            message="Command interrupted by user",
            command=command,
            original_error=error,
            exit_code=CLIDefaults.EXIT_INTERRUPTED,
        )

    error_context["error_category"] = "unexpected"
    return create_cli_error(
        message=f"Unexpected error: {error}",
        command=command,
        original_error=error,
        code=ErrorCode.CLI_UNEXPECTED_ERROR,
    )


def _log_error(
    error: Exception,
    command: str,
    cli_error: CliError,
    error_context: dict[str, Any],
) -> None:
    """Log the error with structured context."""
    if isinstance(error, KeyboardInterrupt):
        logger.warning(
            "Command interrupted: %s",
            cli_error.message,
            extra={"context": error_context},
        )
    elif isinstance(error, ChainTableError):
        log_operation_error(logger, error, operation=command)
    else:
        logger.exception(
            "CLI error in %s: %s",
            command,
            cli_error.message,
            extra={"context": error_context},
        )


def _verbose_requested() -> bool:
    """Whether -v was given; False when no command callback has run."""
    try:
        return get_cli_context().is_verbose()
    except RuntimeError:
        return False
