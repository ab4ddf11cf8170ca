"""CLI output utilities for consistent messaging.

Messages often quote registry content (plugin names, URLs, timestamps),
so they are escaped before rich parses markup. Only the prefixes added
here are styled.
"""

from rich.console import Console
from rich.markup import escape

_console = Console()


def success(message: str) -> None:
    """Print a success message with green checkmark."""
    _console.print(f"[green]✓[/green] {escape(message)}")


def error(message: str) -> None:
    """Print an error message with red X."""
    _console.print(f"[red]✗[/red] {escape(message)}")


def info(message: str) -> None:
    """Print a plain message (no prefix)."""
    _console.print(escape(message))


def dim(message: str) -> None:
    """Print a dimmed message for secondary details like rule names or progress."""
    _console.print(f"[dim]{escape(message)}[/dim]")
