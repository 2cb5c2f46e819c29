"""Console output for themesync status lines."""

from typing import Optional

from rich.console import Console
from rich.markup import escape
from rich.table import Table


class OutputFormatter:
    """Print colored status lines to the terminal.

    Status and success lines go to stdout; warnings and errors go to
    stderr so that they remain visible when stdout is redirected.
    """

    def __init__(
        self,
        quiet: bool = False,
        console: Optional[Console] = None,
        err_console: Optional[Console] = None,
    ):
        """Initialize output formatter.

        Args:
            quiet: Suppress informational output (errors are still shown)
            console: Console used for regular output
            err_console: Console used for warnings and errors
        """
        self.quiet = quiet
        self.console = console or Console(highlight=False)
        self.err_console = err_console or Console(stderr=True, highlight=False)

    def print(self, message: str = "") -> None:
        if not self.quiet:
            self.console.print(message)

    def info(self, message: str) -> None:
        if not self.quiet:
            self.console.print(f"[dim]{escape(message)}[/dim]")

    def success(self, message: str) -> None:
        if not self.quiet:
            self.console.print(f"[green]{escape(message)}[/green]")

    def warning(self, message: str) -> None:
        self.err_console.print(f"[bold red]{escape(message)}[/bold red]")

    def error(self, message: str) -> None:
        self.err_console.print(f"[red]Error: {escape(message)}[/red]")

    def print_summary(self, title: str, rows: list[tuple[str, str]]) -> None:
        """Print a two-column summary table.

        Args:
            title: Table title
            rows: (label, value) pairs
        """
        if self.quiet:
            return
        table = Table(title=title, show_header=False)
        table.add_column("Field", style="cyan")
        table.add_column("Value")
        for label, value in rows:
            table.add_row(label, value)
        self.console.print(table)
