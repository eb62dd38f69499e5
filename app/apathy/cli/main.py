"""Main CLI application entry point.

Defines the Typer application and global options.
"""

from typing import Annotated

import typer

from apathy import __version__
from apathy.cli.commands import config, fs, path
from apathy.core.config import cached_config
from apathy.core.log import setup_logging

# Create main Typer app
app = typer.Typer(
    name="apathy",
    help="Path manipulation and filesystem utilities.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"apathy version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    ctx: typer.Context,
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit.",
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Enable debug logging.",
        ),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option(
            "--quiet",
            "-q",
            help="Only log errors.",
        ),
    ] = False,
) -> None:
    """apathy - path manipulation and filesystem utilities."""
    if verbose:
        level = "DEBUG"
    elif quiet:
        level = "ERROR"
    else:
        level = cached_config().log_level
    setup_logging(level)

    # Store options in context for subcommands
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet


# Register commands
app.add_typer(path.app, name="path")
app.add_typer(fs.app, name="fs")
app.add_typer(config.app, name="config")


if __name__ == "__main__":
    app()
