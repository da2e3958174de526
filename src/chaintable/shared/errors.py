"""chaintable Error Handling Module

This module defines the error handling system for chaintable, providing
structured error classes with context information.

The error hierarchy follows these principles:
- One Source of Truth: All error codes are defined in ErrorCode enum
- Structured Context: ErrorContext provides additional information
- Proper Exception Chaining: Original exceptions are preserved

Lookup and delete misses are ordinary results and never raise.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Union

# Type alias for primitive context values (str, int, float, bool only)
PrimitiveContextValue = Union[str, int, float, bool]


class ErrorCode(str, Enum):
    """Error codes for chaintable.

    This enum serves as the single source of truth for all error codes
    used throughout the package.
    """

    # Table Errors
    ALLOCATION_FAILED = "ALLOCATION_FAILED"
    INVALID_CAPACITY = "INVALID_CAPACITY"
    INVALID_KEY = "INVALID_KEY"
    TABLE_CLOSED = "TABLE_CLOSED"

    # Configuration Errors
    CONFIGURATION_ERROR = "CONFIGURATION_ERROR"
    INVALID_CONFIG = "INVALID_CONFIG"

    # CLI Errors
    CLI_INVALID_ARGUMENTS = "CLI_INVALID_ARGUMENTS"
    CLI_UNEXPECTED_ERROR = "CLI_UNEXPECTED_ERROR"


def _coerce_primitives(value: Any | None) -> dict[str, PrimitiveContextValue] | None:
    """Coerce additional_data values to primitives.

    Args:
        value: Input dictionary or None

    Returns:
        Dictionary with primitive values only, or None

    Raises:
        TypeError: If value is not a dict or contains unconvertible types
    """
    if value is None:
        return None

    if not isinstance(value, dict):
        error_msg = f"additional_data must be dict, got {type(value).__name__}"
        raise TypeError(error_msg)

    coerced: dict[str, PrimitiveContextValue] = {}
    for key, val in value.items():
        if isinstance(val, (str, int, float, bool)):
            coerced[key] = val
        elif isinstance(val, Enum):
            coerced[key] = val.value
        elif isinstance(val, bytes):
            coerced[key] = val.decode("utf-8", errors="replace")
        else:
            error_msg = (
                f"Cannot coerce {type(val).__name__} to primitive type. "
                f"Only str, int, float, bool, bytes, Enum are allowed."
            )
            raise TypeError(error_msg)

    return coerced


@dataclass(frozen=True)
class ErrorContext:
    """Context information for errors.

    Only primitive types (str, int, float, bool) are allowed in
    additional_data so that contexts stay safe to serialize. Stored values
    are never recorded here: the table does not inspect caller values.

    Attributes:
        operation: Optional operation name that caused the error
        additional_data: Optional dict with primitive values only
    """

    operation: str | None = None
    additional_data: dict[str, PrimitiveContextValue] | None = None

    def __post_init__(self) -> None:
        """Post-initialization validation and coercion."""
        if self.additional_data is not None:
            coerced = _coerce_primitives(self.additional_data)
            object.__setattr__(self, "additional_data", coerced)

    def safe_dict(self) -> dict[str, Any]:
        """Export context as dict, always carrying an additional_data key."""
        data: dict[str, Any] = {}
        if self.operation is not None:
            data["operation"] = self.operation
        data["additional_data"] = self.additional_data or {}
        return data


class ChainTableError(Exception):
    """Base exception class for all chaintable errors."""

    def __init__(
        self,
        code: ErrorCode,
        message: str,
        context: ErrorContext | None = None,
        original_error: Exception | None = None,
    ) -> None:
        """Initialize ChainTableError.

        Args:
            code: Error code from ErrorCode enum
            message: Human-readable error message
            context: Additional context information
            original_error: Original exception that caused this error
        """
        self.code = code
        self.message = message
        self.context = context or ErrorContext()
        self.original_error = original_error

        formatted_message = f"{code.value}: {message}"
        super().__init__(formatted_message)

    def __str__(self) -> str:
        """Return string representation of the error."""
        return f"{self.code.value}: {self.message}"

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for logging.

        Returns:
            Dictionary representation of the error with code, message,
            context, and original_error (if present)
        """
        return {
            "code": self.code.value,
            "message": self.message,
            "context": self.context.safe_dict(),
            "original_error": str(self.original_error) if self.original_error else None,
        }


class TableError(ChainTableError):
    """Errors raised by the hash table itself.

    Examples:
    - Bucket array or entry allocation failure
    - Construction with a non-positive capacity
    - Use of a table after teardown
    """


class AllocationFailedError(TableError):
    """The allocator could not provide a bucket array, entry or key copy.

    The table is left in the state it had before the failing call.
    """


class InvalidCapacityError(TableError):
    """Construction was requested with a bucket count that is not a positive int."""


class InvalidKeyError(TableError):
    """A key was neither text nor bytes."""


class TableClosedError(TableError):
    """An operation was attempted on a table that has been torn down."""


class ApplicationError(ChainTableError):
    """Application-level errors such as configuration problems."""


class CliError(ApplicationError):
    """CLI-specific error with enhanced context for command-line operations."""

    def __init__(
        self,
        code: ErrorCode,
        message: str,
        context: ErrorContext | None = None,
        original_error: Exception | None = None,
        command: str | None = None,
        exit_code: int = 1,
    ):
        super().__init__(code, message, context, original_error)
        self.command = command
        self.exit_code = exit_code


def create_allocation_error(
    what: str,
    operation: str,
    original_error: Exception | None = None,
    **additional_data: PrimitiveContextValue,
) -> AllocationFailedError:
    """Create an allocation failure error for ``what`` during ``operation``."""
    return AllocationFailedError(
        ErrorCode.ALLOCATION_FAILED,
        f"Failed to allocate {what}",
        ErrorContext(
            operation=operation,
            additional_data=additional_data or None,
        ),
        original_error,
    )


def create_invalid_capacity_error(capacity: object) -> InvalidCapacityError:
    """Create an error for a rejected bucket count."""
    return InvalidCapacityError(
        ErrorCode.INVALID_CAPACITY,
        f"Capacity must be a positive integer, got {capacity!r}",
        ErrorContext(
            operation="create",
            additional_data={"capacity_type": type(capacity).__name__},
        ),
    )


def create_cli_error(
    message: str,
    command: str | None = None,
    operation: str | None = None,
    original_error: Exception | None = None,
    exit_code: int = 1,
    code: ErrorCode = ErrorCode.CLI_UNEXPECTED_ERROR,
) -> CliError:
    """Create a CLI error with context."""
    additional_data: dict[str, PrimitiveContextValue] | None = (
        {"command": command} if command else None
    )
    context = ErrorContext(
        operation=operation,
        additional_data=additional_data,
    )
    return CliError(
        code,
        message,
        context,
        original_error,
        command,
        exit_code,
    )


__all__ = [
    "AllocationFailedError",
    "ApplicationError",
    "ChainTableError",
    "CliError",
    "ErrorCode",
    "ErrorContext",
    "InvalidCapacityError",
    "InvalidKeyError",
    "PrimitiveContextValue",
    "TableClosedError",
    "TableError",
    "create_allocation_error",
    "create_cli_error",
    "create_invalid_capacity_error",
]
