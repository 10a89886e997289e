"""Console output for the CLI.

Provides a Console class that wraps rich for consistent output.
All CLI output should go through this module.
"""

from typing import Any

from rich.console import Console as RichConsole
from rich.table import Table

STATUS_STYLES = {
    "succeeded": "green",
    "partially_succeeded": "yellow",
    "failed": "red",
    "failed_to_start": "red",
}


class Console:
    """CLI output manager wrapping rich."""

    def __init__(self, *, force_terminal: bool | None = None) -> None:
        self._console = RichConsole(force_terminal=force_terminal, stderr=False)
        self._err_console = RichConsole(force_terminal=force_terminal, stderr=True)

    def error(self, message: str, *, hint: str | None = None) -> None:
        """Print an error message to stderr."""
        self._err_console.print(f"[red]✗[/red] {message}")
        if hint:
            self._err_console.print(f"  [dim]{hint}[/dim]")

    def warning(self, message: str) -> None:
        self._console.print(f"[yellow]⚠[/yellow] {message}")

    def print(self, *args: Any, **kwargs: Any) -> None:
        """Print to console (pass-through to rich)."""
        self._console.print(*args, **kwargs)

    def search_job(self, job: dict[str, Any]) -> None:
        """Print a search response: status, result titles and diagnostics."""
        status = job.get("status", "failed_to_start")
        style = STATUS_STYLES.get(status, "white")
        self._console.print(f"Status: [{style}]{status}[/{style}]")

        results = job.get("results", [])
        if results:
            table = Table(show_header=True, header_style="bold")
            table.add_column("#", style="dim", width=3)
            table.add_column("Title")
            table.add_column("Fields")

            for i, result in enumerate(results, 1):
                payload = result.get("payload", {})
                table.add_row(str(i), result.get("title", ""), ", ".join(sorted(payload)))

            self._console.print(table)
        else:
            self._console.print("[dim]No results[/dim]")

        for diagnostic in job.get("diagnostics", []):
            if diagnostic.get("level") == "error":
                self.error(diagnostic.get("message", ""))
            else:
                self.warning(diagnostic.get("message", ""))


_default: Console | None = None


def get_console() -> Console:
    """Get the default console instance."""
    global _default
    if _default is None:
        _default = Console()
    return _default
