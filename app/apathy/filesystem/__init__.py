"""Filesystem operations module.

This module provides existence checks, recursive directory creation and
removal, directory listing, file creation, and moves on apathy paths.
"""

from apathy.filesystem.models import EntryType, OperationResult
from apathy.filesystem.operations import (
    cwd,
    entry_type,
    exists,
    is_directory,
    is_file,
    listdir,
    makedirs,
    move,
    remove,
    rmdirs,
    touch,
)

__all__ = [
    "EntryType",
    "OperationResult",
    "cwd",
    "entry_type",
    "exists",
    "is_directory",
    "is_file",
    "listdir",
    "makedirs",
    "move",
    "remove",
    "rmdirs",
    "touch",
]
