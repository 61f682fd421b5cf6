"""Console formatting shared by step titles and messages."""

import click


def code(value: str) -> str:
    """Render an inline code fragment (bold cyan)."""
    return click.style(value, fg="cyan", bold=True)
