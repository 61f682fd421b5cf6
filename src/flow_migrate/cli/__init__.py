"""
flow-migrate CLI - Command-line interface for the migration pipeline.
"""

from .main import cli, main

__all__ = ["cli", "main"]
