"""Command-line interface for chaintable."""

from .typer_app import app

__all__ = ["app"]
