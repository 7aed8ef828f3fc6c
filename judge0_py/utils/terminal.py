"""Utility functions for terminal output."""

from typing import Optional

from rich.console import Console
from rich.table import Table

from ..client.models import Status

console = Console()

ACCEPTED = 3
TIME_LIMIT_EXCEEDED = 5


def create_table(title: str, headers: list) -> Table:
    """Create a formatted table for display."""
    table = Table(title=title, show_header=True, header_style="bold cyan")
    for header in headers:
        table.add_column(header)
    return table


def format_status(status: Optional[Status]) -> str:
    """Format a submission status with appropriate color."""
    if status is None:
        return ""

    if status.id == ACCEPTED:
        return f"[green]{status.description}[/green]"
    elif status.id in (1, 2):
        return f"[yellow]{status.description}[/yellow]"
    elif status.id == TIME_LIMIT_EXCEEDED:
        return f"[magenta]{status.description}[/magenta]"
    else:
        return f"[red]{status.description}[/red]"


def format_optional(value) -> str:
    """Render an unset field as an empty cell."""
    return "" if value is None else str(value)
