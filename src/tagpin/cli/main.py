"""Command-line interface for tagpin."""

from pathlib import Path
from typing import Annotated

import typer
from rich.markup import escape
from rich.table import Table

from .._version import __publish_date__, __version__
from ..channel import Channel, classify
from ..describe import normalize_describe
from ..exceptions import MalformedVersionError, TagpinError
from ..version import Version
from ._helpers import (
    build_installer,
    configure_logging,
    console,
    print_error,
    print_success,
    status_table,
)

app = typer.Typer(
    help="Install and upgrade a Git-tracked application by channel tags",
    no_args_is_help=True,
)

NameOption = Annotated[
    str | None,
    typer.Option(
        ...,
        "--name",
        "-n",
        help="Application name (default: detected from the current directory)",
    ),
]

ConfigOption = Annotated[
    Path | None,
    typer.Option(
        ...,
        "--config",
        "-c",
        help="Path to config file (tagpin.toml or pyproject.toml)",
    ),
]

GitUrlOption = Annotated[
    str | None,
    typer.Option(
        ...,
        "--git-url",
        "-g",
        help="Repository URL (stored only when none is stored yet)",
    ),
]

ChannelOption = Annotated[
    Channel | None,
    typer.Option(
        ...,
        "--channel",
        "-b",
        case_sensitive=False,
        help="Channel to use (default: the installed channel, else release)",
    ),
]

VerboseOption = Annotated[
    bool, typer.Option(..., "--verbose", "-v", help="Show debug logging")
]


@app.command()
def channel(
    name: NameOption = None,
    config: ConfigOption = None,
    git_url: GitUrlOption = None,
    verbose: VerboseOption = False,
) -> None:
    """Print the channel of the installation."""
    configure_logging(verbose)
    try:
        installer = build_installer(name, config, git_url)
        typer.echo(installer.current_channel(git_url).value)
    except TagpinError as e:
        print_error(str(e))
        raise typer.Exit(1) from e


@app.command()
def current_version(
    name: NameOption = None,
    config: ConfigOption = None,
    git_url: GitUrlOption = None,
    verbose: VerboseOption = False,
) -> None:
    """Print the installed version."""
    configure_logging(verbose)
    try:
        installer = build_installer(name, config, git_url)
        typer.echo(installer.current_version(git_url).raw)
    except TagpinError as e:
        print_error(str(e))
        raise typer.Exit(1) from e


@app.command()
def latest_version(
    channel: ChannelOption = None,
    name: NameOption = None,
    config: ConfigOption = None,
    git_url: GitUrlOption = None,
    verbose: VerboseOption = False,
) -> None:
    """Print the latest version available on a channel."""
    configure_logging(verbose)
    try:
        installer = build_installer(name, config, git_url)
        selected = installer.resolve_channel(channel, git_url)
        typer.echo(installer.latest_version(selected, git_url).raw)
    except TagpinError as e:
        print_error(str(e))
        raise typer.Exit(1) from e


@app.command()
def install(
    channel: ChannelOption = None,
    name: NameOption = None,
    config: ConfigOption = None,
    git_url: GitUrlOption = None,
    verbose: VerboseOption = False,
) -> None:
    """Install the latest version of a channel, replacing any existing install."""
    configure_logging(verbose)
    try:
        installer = build_installer(name, config, git_url)
        selected = installer.resolve_channel(channel, git_url)
        installed = installer.install(selected, git_url)
        print_success(
            f"Installed {installer.config.app_name} {installed.raw} ({selected.value})"
        )
    except TagpinError as e:
        print_error(str(e))
        raise typer.Exit(1) from e
    except OSError as e:
        print_error(f"Install failed: {e}")
        raise typer.Exit(1) from e


@app.command()
def upgrade(
    channel: ChannelOption = None,
    name: NameOption = None,
    config: ConfigOption = None,
    git_url: GitUrlOption = None,
    verbose: VerboseOption = False,
) -> None:
    """Upgrade the installation to the latest version of its channel."""
    configure_logging(verbose)
    try:
        installer = build_installer(name, config, git_url)
        selected = installer.resolve_channel(channel, git_url)
        result = installer.upgrade(selected, git_url)
        if result.changed:
            print_success(f"Upgraded {result.previous.raw} → {result.target.raw}")
        else:
            print_success(f"Already at latest version {result.target.raw}")
    except TagpinError as e:
        print_error(str(e))
        raise typer.Exit(1) from e


@app.command()
def uninstall(
    name: NameOption = None,
    config: ConfigOption = None,
    verbose: VerboseOption = False,
) -> None:
    """Remove the program directory and launcher links."""
    configure_logging(verbose)
    try:
        installer = build_installer(name, config, None)
        removed = installer.uninstall()
    except TagpinError as e:
        print_error(str(e))
        raise typer.Exit(1) from e
    except OSError as e:
        print_error(f"Uninstall failed: {e}")
        raise typer.Exit(1) from e

    if not removed:
        console.print("[yellow]Nothing to remove[/yellow]")
        return
    for path in removed:
        console.print(f"[dim]  • {path}[/dim]", highlight=False)
    print_success(f"Uninstalled {installer.config.app_name}")


@app.command()
def status(
    name: NameOption = None,
    config: ConfigOption = None,
    verbose: VerboseOption = False,
) -> None:
    """Show installation state, channel and versions."""
    configure_logging(verbose)
    try:
        installer = build_installer(name, config, None)
        report = installer.status()
    except TagpinError as e:
        print_error(str(e))
        raise typer.Exit(1) from e

    console.print(status_table(report))


@app.command()
def tags(
    limit: Annotated[
        int, typer.Option(..., "--limit", "-l", min=1, help="Tags to show per list")
    ] = 20,
    name: NameOption = None,
    config: ConfigOption = None,
    verbose: VerboseOption = False,
) -> None:
    """List local and remote tags for debugging."""
    configure_logging(verbose)
    try:
        installer = build_installer(name, config, None)
        listing = installer.tag_listing(limit)
    except TagpinError as e:
        print_error(str(e))
        raise typer.Exit(1) from e

    console.print("[bold]Local tags (newest first):[/bold]")
    for tag in listing.local:
        console.print(f"  • {tag}", highlight=False, markup=False)
    console.print("[bold]Remote tags:[/bold]")
    for line in listing.remote:
        console.print(f"  • {line}", highlight=False, markup=False)


@app.command()
def refresh(
    name: NameOption = None,
    config: ConfigOption = None,
    verbose: VerboseOption = False,
) -> None:
    """Delete local tags and fetch them again from the remote."""
    configure_logging(verbose)
    try:
        installer = build_installer(name, config, None)
        deleted = installer.force_refresh()
    except TagpinError as e:
        print_error(str(e))
        raise typer.Exit(1) from e

    print_success(f"Refreshed tags ({deleted} local tags replaced)")


@app.command()
def set_git_url(
    url: Annotated[str, typer.Argument(..., help="New repository URL")],
    name: NameOption = None,
    config: ConfigOption = None,
    verbose: VerboseOption = False,
) -> None:
    """Store a new repository URL and point origin at it."""
    configure_logging(verbose)
    try:
        installer = build_installer(name, config, None)
        installer.update_git_url(url)
    except TagpinError as e:
        print_error(str(e))
        raise typer.Exit(1) from e

    print_success(f"Repository URL set to {url}")


@app.command()
def inspect(
    tag: Annotated[str, typer.Argument(..., help="Tag or git describe output")],
) -> None:
    """Show how a tag is normalized, parsed and classified."""
    normalized = normalize_describe(tag)
    try:
        version = Version.parse(normalized)
    except MalformedVersionError as e:
        print_error(str(e))
        raise typer.Exit(1) from e

    table = Table(title=f"Tag {escape(tag)}", show_header=False)
    table.add_column("Field", style="cyan")
    table.add_column("Value")
    table.add_row("Normalized", escape(normalized))
    table.add_row("Major", str(version.major))
    table.add_row("Minor", str(version.minor))
    table.add_row("Patch", str(version.patch))
    table.add_row("Pre-release", version.pre_release or "-")
    table.add_row("Build metadata", version.build_metadata or "-")
    table.add_row("Release", "yes" if version.is_release() else "no")
    table.add_row("Date version", "yes" if version.is_date_version() else "no")
    table.add_row("Channel", classify(version).value)
    console.print(table)


@app.command()
def version() -> None:
    """Print the tagpin version."""
    typer.echo(f"{__version__} - {__publish_date__}")


if __name__ == "__main__":
    app()
