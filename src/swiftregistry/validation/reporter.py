"""
Console reporter for ingestion results.

Formats ingestion and dry-run outcomes using Rich for clear, colored output.
"""

from rich.console import Console
from rich.table import Table

from swiftregistry.ingestion.pipeline import IngestionResult


class ConsoleReporter:
    """Formats and displays ingestion results to the console."""

    def __init__(self, console: Console, *, max_issues: int = 50) -> None:
        """
        Initialize console reporter.

        Args:
            console: Rich Console instance for output.
            max_issues: Skipped rows listed before truncating.
        """
        self.console = console
        self.max_issues = max_issues

    def print_result(self, result: IngestionResult, *, title: str = "Ingestion") -> None:
        """
        Print counters, skipped rows and any source failure.

        Args:
            result: Ingestion or dry-run result to display.
            title: Table title.
        """
        if not result.ran:
            self.console.print(
                "[yellow]Registry already contains data; ingestion skipped.[/yellow]"
            )
            return

        table = Table(title=f"{title} Results", show_header=True)
        table.add_column("Metric", style="cyan")
        table.add_column("Value", justify="right")

        table.add_row("Source", str(result.source))
        table.add_row("Status", self._format_status(result))
        table.add_row("Rows seen", str(result.rows_seen))
        table.add_row("Rows loaded", f"[green]{result.rows_loaded}[/green]")
        table.add_row("Rows skipped", f"[yellow]{result.rows_skipped}[/yellow]")
        table.add_row("Batches", str(result.batches))

        self.console.print(table)

        self._print_issues(result)

        if result.error:
            self.console.print()
            self.console.print(f"[bold red]Source error:[/bold red] {result.error}")

    def _format_status(self, result: IngestionResult) -> str:
        if result.error:
            return "[red]Aborted[/red]"
        if result.rows_skipped:
            return "[yellow]Completed with skipped rows[/yellow]"
        return "[green]Completed[/green]"

    def _print_issues(self, result: IngestionResult) -> None:
        """
        Print a table of skipped rows, truncated to max_issues.

        Args:
            result: Ingestion result.
        """
        if not result.issues:
            return

        table = Table(title="Skipped Rows", show_header=True)
        table.add_column("Row", justify="right")
        table.add_column("SWIFT code", style="cyan", no_wrap=True)
        table.add_column("Reason", style="dim")

        for issue in result.issues[: self.max_issues]:
            row = str(issue.row_number) if issue.row_number is not None else "-"
            table.add_row(row, issue.swift_code or "-", issue.reason)

        self.console.print()
        self.console.print(table)

        hidden = len(result.issues) - self.max_issues
        if hidden > 0:
            self.console.print(f"[dim]... and {hidden} more skipped rows[/dim]")
