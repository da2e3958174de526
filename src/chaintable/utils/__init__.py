"""Utility helpers for chaintable."""

from .logging_config import StructuredFormatter, log_operation_error, setup_logging

__all__ = ["StructuredFormatter", "log_operation_error", "setup_logging"]
