"""Rich console output helpers for the tt CLI.

Message text is escaped, so descriptions containing square brackets are
printed literally instead of being parsed as markup.
"""

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel

console = Console()
error_console = Console(stderr=True)


def print_success(message: str) -> None:
    """Print a success message with a green check mark."""
    console.print(f"[green]✓[/green] {escape(message)}")


def print_error(message: str) -> None:
    """Print an error message to stderr."""
    error_console.print(f"[bold red]Error:[/bold red] {escape(message)}")


def print_info(message: str) -> None:
    """Print an informational message."""
    console.print(escape(message))


def print_panel(content: str, title: str | None = None, style: str = "cyan") -> None:
    """Print content inside a bordered panel.

    Args:
        content: Rich-markup text to show.
        title: Optional panel title.
        style: Border style.
    """
    console.print(Panel(content, title=title, border_style=style, expand=False))
