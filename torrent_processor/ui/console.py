"""Console UI wrapper using Rich library."""

from typing import Optional

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from torrent_processor.config.context import ProcessConfig
from torrent_processor.pipeline.orchestrator import RunStats


class ConsoleUI:
    """
    Wrapper for Rich Console providing styled output methods.

    Log records go to stderr through loguru; this is the human-facing
    summary on stdout.
    """

    def __init__(self, console: Optional[Console] = None) -> None:
        """Initialize with a Rich Console."""
        self.console = console or Console()

    def print(self, *args, **kwargs) -> None:
        """Print to console (delegates to Rich Console)."""
        self.console.print(*args, **kwargs)

    def print_warning(self, message: str) -> None:
        """Print a warning message with yellow styling."""
        self.console.print(f"[yellow]⚠️  {message}[/yellow]")

    def print_error(self, message: str) -> None:
        """Print an error message with red styling."""
        self.console.print(f"[red]❌ {message}[/red]")

    def print_success(self, message: str) -> None:
        """Print a success message with green styling."""
        self.console.print(f"[green]✓ {message}[/green]")

    def print_panel(self, content: str, title: str = "", border_style: str = "blue") -> None:
        """
        Print content in a bordered panel.

        Args:
            content: Panel content.
            title: Panel title.
            border_style: Border color/style.
        """
        self.console.print(Panel(content, title=title, border_style=border_style))

    def display_configuration(self, config: ProcessConfig) -> None:
        """Show the settings of a process run."""
        mode = "[yellow]SIMULATION[/yellow]" if config.dry_run else "[green]Normal[/green]"
        limit = str(config.limit) if config.limit > 0 else "none"
        retries = str(config.max_retries) if config.max_retries >= 0 else "unlimited"

        self.print_panel(
            f"[bold]Processing configuration[/bold]\n"
            f"Work: [cyan]{config.work_path}[/cyan]\n"
            f"Movies: [cyan]{config.movie_output_path}[/cyan]\n"
            f"TV: [cyan]{config.tv_output_path}[/cyan]\n"
            f"Dormant period: {config.dormant_period:g}s\n"
            f"Max retries: {retries}\n"
            f"Limit: {limit}\n"
            f"Mode: {mode}",
            title="Torrent Processor",
        )

    def display_summary(self, stats: RunStats) -> None:
        """Show the statistics of a finished run."""
        table = Table(title="Run summary", show_header=True, header_style="bold magenta")
        table.add_column("Metric")
        table.add_column("Value", justify="right")
        table.add_row("Entries processed", str(stats.processed))
        table.add_row("Queue polls", str(stats.polls))
        table.add_row("Parse retries", str(stats.retries))
        table.add_row("Time waiting", f"{stats.slept:g}s")
        table.add_row("Stopped by", stats.stopped_by or "-")
        self.console.print(table)
