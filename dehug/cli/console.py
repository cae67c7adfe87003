"""Console output for the CLI.

Provides a Console class that wraps rich for consistent output. It also
satisfies the Notifier port, so services can report progress straight to
the terminal. All CLI output should go through this module.
"""

from typing import Any

from rich.console import Console as RichConsole
from rich.panel import Panel
from rich.table import Table

from dehug.domain.chain.model.outcome import TransactionOutcome
from dehug.domain.content.model.metadata import DiscoveryResult


class Console:
    """CLI output manager wrapping rich."""

    def __init__(
        self,
        *,
        force_terminal: bool | None = None,
        quiet: bool = False,
    ) -> None:
        """Initialize the console.

        Args:
            force_terminal: Force terminal mode (True/False) or auto-detect (None).
            quiet: Suppress non-essential output.
        """
        self._console = RichConsole(force_terminal=force_terminal, stderr=False)
        self._err_console = RichConsole(force_terminal=force_terminal, stderr=True)
        self._quiet = quiet

    # -------------------------------------------------------------------------
    # Status messages
    # -------------------------------------------------------------------------

    def success(self, message: str) -> None:
        """Print a success message."""
        self._console.print(f"[green]✓[/green] {message}")

    def error(self, message: str, *, hint: str | None = None) -> None:
        """Print an error message to stderr."""
        self._err_console.print(f"[red]✗[/red] {message}")
        if hint:
            self._err_console.print(f"  [dim]{hint}[/dim]")

    def warning(self, message: str) -> None:
        """Print a warning message."""
        self._console.print(f"[yellow]⚠[/yellow] {message}")

    def info(self, message: str) -> None:
        """Print an info message (suppressed in quiet mode)."""
        if not self._quiet:
            self._console.print(f"[dim]{message}[/dim]")

    def print(self, *args: Any, **kwargs: Any) -> None:
        """Print to console (pass-through to rich)."""
        self._console.print(*args, **kwargs)

    # -------------------------------------------------------------------------
    # Records
    # -------------------------------------------------------------------------

    def discovery_results(self, results: list[DiscoveryResult], label: str) -> None:
        if not results:
            self.warning(f"No {label} found")
            return

        table = Table(title=f"Latest {label}", show_header=True, header_style="bold")
        table.add_column("ID", style="dim", justify="right")
        table.add_column("Title")
        table.add_column("Author", style="dim")
        table.add_column("Task")
        table.add_column("Format")
        table.add_column("Downloads", justify="right")
        table.add_column("Uploaded", style="dim")

        for result in results:
            view = result.to_view()
            title = view["title"]
            if view["verified"]:
                title += " [green]✓[/green]"
            if view["trending"]:
                title += " [magenta]↑[/magenta]"
            table.add_row(
                view["id"],
                title,
                view["author"],
                view["task"],
                view["format"],
                str(view["downloads"]),
                view["upload_date"],
            )

        self._console.print(table)

    def record_detail(self, result: DiscoveryResult) -> None:
        """Print detailed record view."""
        record, meta = result.record, result.metadata
        lines = [meta.description, ""]

        lines.append(
            f"[cyan]Category:[/cyan] {meta.category}    [cyan]Task:[/cyan] {meta.task}"
        )
        lines.append(
            f"[cyan]Format:[/cyan] {meta.format}    [cyan]Size:[/cyan] {meta.size}    "
            f"[cyan]License:[/cyan] {meta.license}"
        )
        if meta.framework:
            lines.append(f"[cyan]Framework:[/cyan] {meta.framework}")
        if meta.tags:
            lines.append(f"[cyan]Tags:[/cyan] {', '.join(sorted(meta.tags))}")
        lines.append("")
        lines.append(
            f"[cyan]Owner:[/cyan] {record.owner}    [cyan]Downloads:[/cyan] {record.download_count}"
            f"    [cyan]Likes:[/cyan] {record.likes}"
        )
        lines.append(f"[cyan]Storage:[/cyan] {record.storage_hash}")
        if record.metadata_pointer:
            lines.append(f"[cyan]Metadata:[/cyan] {record.metadata_pointer}")
        if not result.metadata_resolved:
            lines.append("[dim]Metadata document unavailable; showing defaults[/dim]")

        status = "" if record.is_active else " [red](inactive)[/red]"
        self._console.print(
            Panel(
                "\n".join(lines),
                title=f"[bold]{record.title}[/bold]{status}",
                subtitle=f"[dim]#{record.id} · {record.category.name} · {record.upload_date}[/dim]",
                border_style="blue",
                padding=(1, 2),
            )
        )

    def outcome(self, outcome: TransactionOutcome) -> None:
        self._console.print(f"Transaction: {outcome.transaction_hash}")
        if outcome.resolved_record_id is not None:
            self._console.print(f"Record ID:   {outcome.resolved_record_id}")
        if outcome.explorer_url:
            self._console.print(f"Explorer:    {outcome.explorer_url}")

    def status(self, message: str):
        """Return a status context manager for long operations."""
        return self._console.status(message)


# Module-level default instance for convenience
_default: Console | None = None


def get_console() -> Console:
    """Get the default console instance."""
    global _default
    if _default is None:
        _default = Console()
    return _default
