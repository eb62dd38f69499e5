"""Filesystem commands.

Thin wrappers over apathy.filesystem.operations that render results
with Rich and exit non-zero on failure.
"""

import json
from enum import Enum
from typing import Annotated

import typer
from rich.markup import escape

from apathy.core.path import Path
from apathy.filesystem.models import EntryType, OperationResult
from apathy.filesystem.operations import (
    entry_type,
    listdir,
    makedirs,
    move,
    rmdirs,
    touch,
)
from apathy.utils.formatting import (
    console,
    create_listing_table,
    print_error,
    print_success,
    print_warning,
)

app = typer.Typer(
    help="Filesystem operations.",
    invoke_without_command=True,
    no_args_is_help=True,
)


class OutputFormat(str, Enum):
    """Output format options for directory listings."""

    TABLE = "table"
    JSON = "json"
    PLAIN = "plain"


_TYPE_ICONS: dict[EntryType, str] = {
    EntryType.DIRECTORY: "[directory]d[/]",
    EntryType.FILE: "[file]f[/]",
    EntryType.SYMLINK: "[info]l[/]",
    EntryType.OTHER: "[muted]?[/]",
    EntryType.MISSING: "[warning]-[/]",
}


@app.command("ls")
def list_directory(
    path: Annotated[str, typer.Argument(help="Directory to list.")] = ".",
    output_format: Annotated[
        OutputFormat,
        typer.Option(
            "--format",
            "-f",
            help="Output format.",
            case_sensitive=False,
        ),
    ] = OutputFormat.TABLE,
) -> None:
    """List the entries of a directory."""
    base = Path(path)
    if not base.is_directory():
        print_error(f"Not a directory: {escape(path)}")
        raise typer.Exit(code=1)

    entries = sorted(listdir(base), key=lambda p: p.raw)

    if output_format == OutputFormat.PLAIN:
        for entry in entries:
            typer.echo(entry.raw)
        return

    if output_format == OutputFormat.JSON:
        data = [{"path": e.raw, "name": e.name(), "type": entry_type(e).value} for e in entries]
        typer.echo(json.dumps(data, indent=2))
        return

    table = create_listing_table(escape(base.absolute().sanitize().raw))
    for entry in entries:
        table.add_row(_TYPE_ICONS[entry_type(entry)], escape(entry.name()), escape(entry.raw))
    console.print(table)
    console.print(f"\n[muted]{len(entries)} entries[/muted]")


@app.command("mkdir")
def make_directory(
    path: Annotated[str, typer.Argument(help="Directory to create.")],
    mode: Annotated[
        str | None,
        typer.Option("--mode", "-m", help="Octal permission bits, e.g. 755."),
    ] = None,
) -> None:
    """Create a directory and any missing parents."""
    _finish(makedirs(path, _parse_mode(mode)), f"Created {path}")


@app.command("rm")
def remove_tree(
    path: Annotated[str, typer.Argument(help="Directory to remove recursively.")],
    ignore_errors: Annotated[
        bool,
        typer.Option("--ignore-errors", help="Keep going past entries that cannot be removed."),
    ] = False,
    yes: Annotated[
        bool,
        typer.Option("--yes", "-y", help="Skip confirmation prompt."),
    ] = False,
) -> None:
    """Recursively remove a directory."""
    if not yes:
        confirmed = typer.confirm(f"Remove {path} and everything below it?", default=False)
        if not confirmed:
            console.print("[info]Aborted.[/]")
            raise typer.Exit(code=0)

    result = rmdirs(path, ignore_errors=ignore_errors)
    for failure in result.failures:
        print_warning(f"Could not remove {escape(failure.path)}: {escape(failure.error or '')}")
    _finish(result, f"Removed {path}")


@app.command("touch")
def touch_file(
    path: Annotated[str, typer.Argument(help="File to create.")],
    mode: Annotated[
        str | None,
        typer.Option("--mode", "-m", help="Octal permission bits, e.g. 644."),
    ] = None,
) -> None:
    """Create a file, creating missing parent directories."""
    _finish(touch(path, _parse_mode(mode)), f"Touched {path}")


@app.command("mv")
def move_entry(
    source: Annotated[str, typer.Argument(help="Entry to move.")],
    dest: Annotated[str, typer.Argument(help="New location.")],
    force: Annotated[
        bool,
        typer.Option("--force", help="Create missing destination directories."),
    ] = False,
) -> None:
    """Move or rename an entry."""
    _finish(move(source, dest, force=force), f"Moved {source} -> {dest}")


@app.command("exists")
def check_exists(
    path: Annotated[str, typer.Argument(help="Path to check.")],
) -> None:
    """Print the entry type; exit 1 if the path does not exist."""
    kind = entry_type(path)
    typer.echo(kind.value)
    if kind == EntryType.MISSING:
        raise typer.Exit(code=1)


# === Private helper functions ===


def _parse_mode(mode: str | None) -> int | None:
    """Parse an octal mode string, exiting on invalid input."""
    if mode is None:
        return None
    try:
        return int(mode, 8)
    except ValueError:
        print_error(f"Invalid octal mode: {escape(mode)}")
        raise typer.Exit(code=1) from None


def _finish(result: OperationResult, message: str) -> None:
    """Report a result, exiting with code 1 on failure."""
    if result:
        print_success(escape(message))
        return
    print_error(f"{escape(result.path)}: {escape(result.error or 'unknown error')}")
    raise typer.Exit(code=1)
