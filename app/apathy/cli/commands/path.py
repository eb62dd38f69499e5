"""Lexical path commands.

These commands only transform path strings; apart from reading the
working directory they never touch the filesystem.
"""

import json
from typing import Annotated

import typer

from apathy.core.path import Path

app = typer.Typer(
    help="Lexical path transformations.",
    invoke_without_command=True,
    no_args_is_help=True,
)

PathArgument = Annotated[str, typer.Argument(help="Path to transform.")]


@app.command()
def sanitize(path: PathArgument) -> None:
    """Collapse separators and resolve '.' and '..' segments."""
    typer.echo(Path(path).sanitize().raw)


@app.command()
def absolute(
    path: PathArgument,
    sanitize: Annotated[
        bool,
        typer.Option("--sanitize", "-s", help="Also sanitize the result."),
    ] = False,
) -> None:
    """Resolve a path against the working directory."""
    result = Path(path).absolute()
    if sanitize:
        result = result.sanitize()
    typer.echo(result.raw)


@app.command()
def parent(
    path: PathArgument,
    levels: Annotated[
        int,
        typer.Option("--levels", "-n", min=1, help="Number of levels to go up."),
    ] = 1,
) -> None:
    """Print the parent directory of a path."""
    result = Path(path)
    for _ in range(levels):
        result = result.parent()
    typer.echo(result.raw)


@app.command()
def stem(path: PathArgument) -> None:
    """Strip the last extension from the final segment."""
    typer.echo(Path(path).stem().raw)


@app.command()
def ext(path: PathArgument) -> None:
    """Print the extension of the final segment."""
    typer.echo(Path(path).extension())


@app.command()
def split(
    path: PathArgument,
    as_json: Annotated[
        bool,
        typer.Option("--json", help="Print segments as a JSON array."),
    ] = False,
) -> None:
    """Print the segments of a path, one per line."""
    segments = [s.segment for s in Path(path).split()]
    if as_json:
        typer.echo(json.dumps(segments))
        return
    for segment in segments:
        typer.echo(segment)


@app.command()
def equivalent(
    first: Annotated[str, typer.Argument(help="First path.")],
    second: Annotated[str, typer.Argument(help="Second path.")],
) -> None:
    """Exit 0 if both paths normalize to the same location, 1 otherwise."""
    if Path(first).equivalent(second):
        typer.echo("equivalent")
        return
    typer.echo("different")
    raise typer.Exit(code=1)
