"""Command-line interface for dottrack."""

from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from .config import Settings
from .errors import DotError, EntryNotFoundError, UnsupportedOperationError
from .log import setup_logging
from .manager import DotManager
from .models import Entry, TrackAction, TransferResult, UntrackAction

app = typer.Typer(help="Track dotfiles in a manifest-backed storage directory", no_args_is_help=True)
console = Console(emoji=False)


def _load_manager(ctx: typer.Context) -> DotManager:
    settings: Settings = ctx.obj
    return DotManager(settings)


def _handle_error(exc: Exception) -> None:
    if isinstance(exc, PermissionError):
        console.print("[red]Permission denied.[/red] Re-run the command with elevated privileges (e.g. `sudo`).")
        raise typer.Exit(code=1)
    if isinstance(exc, EntryNotFoundError):
        console.print(f"[red]{escape(str(exc))}.[/red]")
        console.print("[yellow]Run 'dot list' to see tracked names.[/yellow]")
        raise typer.Exit(code=1)
    if isinstance(exc, UnsupportedOperationError):
        console.print(f"[red]Unsupported:[/red] {escape(str(exc))}", highlight=False)
        raise typer.Exit(code=1)
    if isinstance(exc, DotError):
        console.print(f"[red]{escape(str(exc))}[/red]", highlight=False)
        raise typer.Exit(code=1)
    raise exc


def _format_entries(entries: list[Entry]) -> None:
    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Name")
    table.add_column("Path", overflow="fold")
    table.add_column("Stored", overflow="fold")
    table.add_column("Dir")

    for entry in entries:
        table.add_row(
            escape(entry.name),
            escape(str(entry.original_path)),
            escape(str(entry.stored_path)),
            "yes" if entry.is_directory else "",
        )

    console.print(table)


def _report_transfer(result: TransferResult) -> None:
    console.print(f"[green]{result.direction.value.capitalize()}ed '{escape(result.entry.name)}'.[/green]", highlight=False)


@app.callback()
def main(
    ctx: typer.Context,
    manifest: Path | None = typer.Option(
        None,
        "--manifest",
        "-m",
        envvar="DOT_MANIFEST",
        help="Path to manifest file (defaults to $CONFIG_DIR/dot/.dot.toml)",
    ),
    store: Path | None = typer.Option(
        None,
        "--store",
        "-s",
        envvar="DOT_STORE",
        help="Directory holding stored copies (defaults to $CONFIG_DIR/dot)",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging"),
) -> None:
    """Track dotfiles in a manifest-backed storage directory."""

    setup_logging(verbose)
    try:
        ctx.obj = Settings.resolve(manifest=manifest, base_dir=store)
    except Exception as exc:  # noqa: BLE001
        _handle_error(exc)


@app.command()
def track(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Name to track the file under"),
    path: Path = typer.Argument(..., help="File to copy into storage"),
) -> None:
    """Install dotfiles to the manifest repo."""

    try:
        manager = _load_manager(ctx)
        result = manager.track(name, path)
        if result.action is TrackAction.ALREADY_TRACKED:
            console.print(
                f"[yellow]'{escape(name)}' is already tracked from '{escape(str(result.entry.original_path))}'; nothing changed.[/yellow]",
                highlight=False,
            )
        else:
            console.print(f"[green]Tracked '{escape(name)}'.[/green]", highlight=False)
    except Exception as exc:  # noqa: BLE001
        _handle_error(exc)


@app.command()
def untrack(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Tracked name to forget"),
    purge: bool = typer.Option(False, "--purge", help="Also delete the stored copy"),
) -> None:
    """Purge dotfiles from the manifest repo."""

    try:
        manager = _load_manager(ctx)
        result = manager.untrack(name, purge=purge)
        if result.action is UntrackAction.NOT_TRACKED:
            console.print(f"[yellow]'{escape(name)}' was not tracked.[/yellow]", highlight=False)
        elif result.purged:
            console.print(f"[green]Untracked '{escape(name)}' and deleted its stored copy.[/green]", highlight=False)
        else:
            console.print(f"[green]Untracked '{escape(name)}'.[/green]", highlight=False)
    except Exception as exc:  # noqa: BLE001
        _handle_error(exc)


@app.command()
def export(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Tracked name to copy back to disk"),
) -> None:
    """Copy dotfiles from the manifest repo to disk."""

    try:
        manager = _load_manager(ctx)
        _report_transfer(manager.export(name))
    except Exception as exc:  # noqa: BLE001
        _handle_error(exc)


@app.command("import")
def import_(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Tracked name to refresh from disk"),
) -> None:
    """Copy dotfiles from disk to the manifest repo."""

    try:
        manager = _load_manager(ctx)
        _report_transfer(manager.import_(name))
    except Exception as exc:  # noqa: BLE001
        _handle_error(exc)


@app.command("list")
def list_(
    ctx: typer.Context,
    long: bool = typer.Option(False, "--long", "-l", help="Show paths as a table"),
) -> None:
    """List tracked names."""

    try:
        manager = _load_manager(ctx)
        if long:
            _format_entries(manager.entries())
            return
        for name in manager.names():
            console.print(name, markup=False, highlight=False, soft_wrap=True)
    except Exception as exc:  # noqa: BLE001
        _handle_error(exc)


app.command("t", hidden=True)(track)
app.command("u", hidden=True)(untrack)
app.command("e", hidden=True)(export)
app.command("i", hidden=True)(import_)
app.command("ls", hidden=True)(list_)


def run() -> None:
    """Entry point used for console_script bindings."""

    app()
