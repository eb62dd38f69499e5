"""Configuration commands.

Shows the effective settings and writes a default config file.
"""

import json
from typing import Annotated

import typer

from apathy.core.config import (
    ApathyConfig,
    ConfigError,
    get_config,
    save_config,
)
from apathy.core.paths import get_config_path
from apathy.utils.formatting import print_error, print_info, print_success

app = typer.Typer(
    help="Show or initialize configuration.",
    invoke_without_command=True,
    no_args_is_help=True,
)


@app.command()
def show() -> None:
    """Print the effective configuration as JSON."""
    config = get_config()
    data = config.model_dump()
    data["default_mode"] = oct(config.default_mode)
    typer.echo(json.dumps(data, indent=2))
    print_info(f"Config file: {get_config_path()}")


@app.command()
def init(
    force: Annotated[
        bool,
        typer.Option("--force", help="Overwrite an existing config file."),
    ] = False,
) -> None:
    """Write a config file with default settings."""
    config_path = get_config_path()
    if config_path.exists() and not force:
        print_error(f"Config already exists: {config_path} (use --force to overwrite)")
        raise typer.Exit(code=1)

    try:
        saved = save_config(ApathyConfig(), config_path)
    except ConfigError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e
    print_success(f"Config written to {saved}")
