"""Result types for filesystem operations.

Filesystem operations never raise on OS errors. They return an
OperationResult that carries the error text and errno, so the caller
decides whether a failure is worth logging or displaying.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from enum import Enum

PathArg = str | os.PathLike[str]


class EntryType(str, Enum):
    """Type of a filesystem entry as seen by lstat.

    Attributes:
        DIRECTORY: Directory (not a symlink to one).
        FILE: Regular file.
        SYMLINK: Symbolic link, whatever its target.
        OTHER: Fifo, socket, device, or anything else.
        MISSING: Entry does not exist or could not be inspected.
    """

    DIRECTORY = "directory"
    FILE = "file"
    SYMLINK = "symlink"
    OTHER = "other"
    MISSING = "missing"


@dataclass(frozen=True, slots=True)
class OperationResult:
    """Result of a single filesystem operation.

    Truthiness follows ``success``, so ``if makedirs(p):`` reads naturally.

    Attributes:
        path: Path string that was operated on.
        success: Whether the operation completed successfully.
        error: Error message if the operation failed, None otherwise.
        errno: OS error number if the failure came from the OS, None otherwise.
        failures: Failed results of nested operations (rmdirs children).
    """

    path: str
    success: bool
    error: str | None = None
    errno: int | None = None
    failures: tuple[OperationResult, ...] = ()

    def __bool__(self) -> bool:
        return self.success

    @classmethod
    def ok(cls, path: PathArg, failures: tuple[OperationResult, ...] = ()) -> OperationResult:
        """Build a successful result."""
        return cls(path=os.fspath(path), success=True, failures=failures)

    @classmethod
    def from_os_error(
        cls,
        path: PathArg,
        error: OSError,
        failures: tuple[OperationResult, ...] = (),
    ) -> OperationResult:
        """Build a failed result from an OSError."""
        return cls(
            path=os.fspath(path),
            success=False,
            error=error.strerror or str(error),
            errno=error.errno,
            failures=failures,
        )

    @classmethod
    def failed(
        cls,
        path: PathArg,
        error: str,
        failures: tuple[OperationResult, ...] = (),
    ) -> OperationResult:
        """Build a failed result that did not come from an OS call."""
        return cls(path=os.fspath(path), success=False, error=error, failures=failures)
