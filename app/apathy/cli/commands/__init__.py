"""CLI commands for apathy.

This package contains all subcommand implementations.
"""

from apathy.cli.commands import config, fs, path

__all__ = ["config", "fs", "path"]
