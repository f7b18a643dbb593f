"""Helpers shared by CLI commands."""

import logging
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from ..config import load_config
from ..installer import Installer, StatusReport
from ..version import Version

console = Console()
err_console = Console(stderr=True)


def configure_logging(verbose: bool) -> None:
    """Send tagpin logs to stderr through rich.

    Args:
        verbose: Log at DEBUG instead of WARNING.
    """
    logger = logging.getLogger("tagpin")
    logger.handlers = [
        RichHandler(console=err_console, show_path=False, rich_tracebacks=False)
    ]
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    logger.propagate = False


def build_installer(
    name: str | None, config: Path | None, git_url: str | None
) -> Installer:
    """Create an installer from the common command-line options."""
    return Installer(load_config(config, app_name=name, git_url=git_url))


def print_error(message: str) -> None:
    """Print an error message."""
    console.print(f"[red]✗[/red] {escape(message)}", highlight=False)


def print_success(message: str) -> None:
    """Print a success message."""
    console.print(f"[green]✓[/green] {escape(message)}", highlight=False)


def _version_text(version: Version | None) -> str:
    return escape(version.raw) if version is not None else "[dim]unknown[/dim]"


def status_table(report: StatusReport) -> Table:
    """Render a status report as a table."""
    table = Table(title=f"{report.app_name} status", show_header=False)
    table.add_column("Field", style="cyan")
    table.add_column("Value")

    table.add_row("Program directory", str(report.program_dir))
    table.add_row("Installed", "yes" if report.installed else "[red]no[/red]")
    table.add_row(
        "Repository", escape(report.git_url) if report.git_url else "[dim]none[/dim]"
    )
    if report.installed:
        table.add_row(
            "Channel", report.channel.value if report.channel else "[dim]unknown[/dim]"
        )
        table.add_row("Current version", _version_text(report.current))
        table.add_row("Latest version", _version_text(report.latest))
        if report.update_available:
            table.add_row("Update", "[yellow]available[/yellow]")
        elif report.current is not None and report.latest is not None:
            table.add_row("Update", "[green]up to date[/green]")
    return table
