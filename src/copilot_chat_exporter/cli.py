"""Command-line interface for Copilot Chat Exporter.

This module provides a CLI built with Typer for exporting the GitHub Copilot
chat history of the most recently used VS Code workspace.
"""

import logging
from datetime import datetime
from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from . import __version__
from .config import DEFAULT_MAX_AGE_DAYS, ExportOptions, default_output_dir
from .discovery import resolve_workspace
from .errors import ExporterError, StorageNotFoundError
from .exporter import run_export
from .storage import EDITION_PRODUCTS, get_vscode_storage_path, require_storage_root

app = typer.Typer(
    name="copilot-chat-exporter",
    help="Export VS Code GitHub Copilot chat history to JSON and markdown.",
    no_args_is_help=True,
)
console = Console()
logger = logging.getLogger(__name__)
err_console = Console(stderr=True)


def version_callback(value: bool):
    """Print version and exit."""
    if value:
        console.print(f"copilot-chat-exporter version {__version__}")
        raise typer.Exit()


def format_timestamp(ts: float | None) -> str:
    """Convert an epoch timestamp (seconds) to a human-readable date string."""
    if ts is None:
        return "Unknown"
    try:
        return datetime.fromtimestamp(ts).strftime("%Y-%m-%d %H:%M:%S")
    except (ValueError, OSError, OverflowError):
        return str(ts)


def _configure_logging(verbose: bool) -> None:
    if not verbose:
        return
    logging.basicConfig(
        level=logging.DEBUG,
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


def _check_edition(edition: str) -> None:
    if edition not in EDITION_PRODUCTS:
        console.print(f"[red]Error: edition must be one of: {', '.join(EDITION_PRODUCTS)}[/red]")
        raise typer.Exit(1)


@app.callback()
def main(
    version: Annotated[
        bool,
        typer.Option(
            "--version", "-V",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit.",
        ),
    ] = False,
):
    """Copilot Chat Exporter - Archive VS Code GitHub Copilot chats to JSON and markdown."""
    pass


@app.command()
def export(
    output: Annotated[
        Optional[Path],
        typer.Option(
            "--output", "-o",
            help="Output directory. Defaults to <workspace-folder>/copilot_exports or ~/copilot_exports.",
            envvar="COPILOT_EXPORT_DIR",
            file_okay=False,
        ),
    ] = None,
    workspace_folder: Annotated[
        Optional[Path],
        typer.Option(
            "--workspace-folder",
            help="Project folder used for the default output directory.",
            file_okay=False,
        ),
    ] = None,
    storage_path: Annotated[
        Optional[Path],
        typer.Option(
            "--storage-path", "-s",
            help="Custom VS Code workspaceStorage path to scan.",
            envvar="COPILOT_STORAGE_PATH",
            file_okay=False,
        ),
    ] = None,
    workspace_id: Annotated[
        Optional[str],
        typer.Option(
            "--workspace-id", "-w",
            help="Export this workspace storage directory instead of the most recent one.",
        ),
    ] = None,
    edition: Annotated[
        str,
        typer.Option(
            "--edition", "-e",
            help="VS Code edition to scan (stable or insider).",
            envvar="COPILOT_EDITION",
        ),
    ] = "stable",
    max_age_days: Annotated[
        int,
        typer.Option(
            "--max-age-days",
            help="Only consider workspaces with chat sessions modified within this many days.",
            min=1,
        ),
    ] = DEFAULT_MAX_AGE_DAYS,
    open_target: Annotated[
        Optional[str],
        typer.Option(
            "--open",
            help="After exporting, open the 'file' or reveal it in its 'folder'.",
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose", "-v",
            help="Show verbose output.",
        ),
    ] = False,
):
    """Export Copilot chat conversations of the most recent workspace.

    Writes a JSON archive and a markdown summary. If no conversations are
    found, a diagnostics report is written instead.
    """
    _check_edition(edition)
    if open_target not in (None, "file", "folder"):
        console.print("[red]Error: --open must be 'file' or 'folder'[/red]")
        raise typer.Exit(1)
    _configure_logging(verbose)

    options = ExportOptions(
        output_dir=output or default_output_dir(workspace_folder),
        storage_root=storage_path,
        workspace_id=workspace_id,
        edition=edition,
        max_age_days=max_age_days,
    )

    try:
        result = run_export(options)
    except (ExporterError, OSError) as e:
        console.print(f"[red]Copilot export failed: {escape(str(e))}[/red]")
        raise typer.Exit(1)
    except Exception as e:
        logger.debug("Unexpected export failure", exc_info=True)
        console.print(f"[red]Copilot export failed: {escape(repr(e))}[/red]")
        raise typer.Exit(1)

    if result.found_entries:
        console.print(
            f"[green]Copilot export complete![/green] {result.entry_count} entries "
            f"exported to {escape(str(result.json_path))}"
        )
        console.print(f"  Summary: {escape(str(result.markdown_path))}")
        if open_target == "file":
            typer.launch(str(result.json_path))
        elif open_target == "folder":
            typer.launch(str(result.json_path), locate=True)
    else:
        console.print("[yellow]No Copilot data found.[/yellow]")
        console.print(f"  Diagnostics: {escape(str(result.diagnostics_path))}")
        if open_target == "file":
            typer.launch(str(result.diagnostics_path))


@app.command()
def locate(
    storage_path: Annotated[
        Optional[Path],
        typer.Option(
            "--storage-path", "-s",
            help="Custom VS Code workspaceStorage path to inspect.",
            envvar="COPILOT_STORAGE_PATH",
            file_okay=False,
        ),
    ] = None,
    edition: Annotated[
        str,
        typer.Option(
            "--edition", "-e",
            help="VS Code edition (stable or insider).",
            envvar="COPILOT_EDITION",
        ),
    ] = "stable",
    max_age_days: Annotated[
        int,
        typer.Option(
            "--max-age-days",
            help="Recency window in days.",
            min=1,
        ),
    ] = DEFAULT_MAX_AGE_DAYS,
):
    """Show where chat sessions are stored and which workspace would be exported."""
    _check_edition(edition)
    root = storage_path or get_vscode_storage_path(edition=edition)
    console.print(f"Storage path: {escape(str(root))}")

    try:
        require_storage_root(root)
    except StorageNotFoundError as e:
        console.print(f"[red]{escape(str(e))}[/red]")
        raise typer.Exit(1)

    resolution = resolve_workspace(root, max_age_days=max_age_days)

    if resolution.candidates:
        table = Table(title="Workspaces with chat sessions")
        table.add_column("Workspace", style="cyan")
        table.add_column("Sessions", justify="right")
        table.add_column("Last modified")
        table.add_column("Selected", justify="center")
        for candidate in resolution.candidates:
            selected = "✓" if candidate.workspace_id == resolution.workspace_id else ""
            table.add_row(
                candidate.workspace_id,
                str(candidate.session_count),
                format_timestamp(candidate.newest_mtime),
                selected,
            )
        console.print(table)

    if resolution.found:
        console.print(f"[green]Selected workspace:[/green] {resolution.workspace_id}")
    else:
        console.print(f"[yellow]No workspace selected ({resolution.failure.value})[/yellow]")
        for line in resolution.diagnostics:
            console.print(f"  • {escape(line)}")


if __name__ == "__main__":
    app()
