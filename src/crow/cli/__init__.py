"""Command-line interface for Crow."""

from .main import cli, main

__all__ = ["cli", "main"]
