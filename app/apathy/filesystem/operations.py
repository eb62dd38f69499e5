"""Filesystem operations on apathy paths.

Every operation normalizes its arguments through the Path transformations
before touching the OS, and reports the outcome as an OperationResult
instead of raising. Queries (exists, listdir, ...) conflate "does not
exist" with "could not check" and return False or an empty list.

Directory-tree operations recurse at most ``max_depth`` levels, which
defaults to the configured value (see apathy.core.config).
"""

import logging
import os
import stat

from apathy.core.config import cached_config
from apathy.core.path import Path, PathLike, coerce
from apathy.filesystem.models import EntryType, OperationResult

logger = logging.getLogger(__name__)

cwd = Path.cwd


def exists(path: PathLike) -> bool:
    """Check if the path can be stat'd."""
    return coerce(path).exists()


def is_file(path: PathLike) -> bool:
    """Check if the path is an existing regular file."""
    return coerce(path).is_file()


def is_directory(path: PathLike) -> bool:
    """Check if the path is an existing directory."""
    return coerce(path).is_directory()


def entry_type(path: PathLike) -> EntryType:
    """Classify a path without following a final symlink.

    Args:
        path: Path to inspect.

    Returns:
        EntryType of the entry, MISSING if it cannot be lstat'd.
    """
    try:
        mode = os.lstat(coerce(path).raw).st_mode
    except (OSError, ValueError):
        return EntryType.MISSING

    if stat.S_ISLNK(mode):
        return EntryType.SYMLINK
    if stat.S_ISDIR(mode):
        return EntryType.DIRECTORY
    if stat.S_ISREG(mode):
        return EntryType.FILE
    return EntryType.OTHER


def touch(path: PathLike, mode: int | None = None) -> OperationResult:
    """Create a file if one does not exist.

    Missing parent directories are created with the configured mode and
    the open is retried once.

    Args:
        path: File to create.
        mode: Permission bits for a new file. Defaults to the configured mode.
            Does not apply to parent directories.

    Returns:
        OperationResult for the file.
    """
    target = coerce(path)
    if mode is None:
        mode = cached_config().default_mode

    try:
        fd = os.open(target.raw, os.O_RDONLY | os.O_CREAT, mode)
    except FileNotFoundError:
        parent = makedirs(target.parent())
        if not parent:
            return OperationResult.failed(
                target, f"Cannot create parent directory: {parent.error}", failures=(parent,)
            )
        try:
            fd = os.open(target.raw, os.O_RDONLY | os.O_CREAT, mode)
        except OSError as e:
            logger.debug("touch %s failed after makedirs: %s", target, e)
            return OperationResult.from_os_error(target, e)
    except OSError as e:
        logger.debug("touch %s failed: %s", target, e)
        return OperationResult.from_os_error(target, e)

    try:
        os.close(fd)
    except OSError as e:
        logger.debug("touch %s: close failed: %s", target, e)
        return OperationResult.from_os_error(target, e)

    return OperationResult.ok(target)


def makedirs(
    path: PathLike,
    mode: int | None = None,
    max_depth: int | None = None,
) -> OperationResult:
    """Recursively create a directory and any missing parents.

    An existing directory counts as success.

    Args:
        path: Directory to create; made absolute and sanitized first.
        mode: Permission bits for new directories. Defaults to the configured mode.
        max_depth: Maximum number of missing ancestors to create.
            Defaults to the configured limit.

    Returns:
        OperationResult for the directory. On failure, ``failures`` holds the
        result for the ancestor that could not be created, if any.
    """
    config = cached_config()
    if mode is None:
        mode = config.default_mode
    if max_depth is None:
        max_depth = config.max_depth

    return _makedirs(coerce(path).absolute().sanitize(), mode, max_depth)


def _makedirs(target: Path, mode: int, depth: int) -> OperationResult:
    try:
        os.mkdir(target.raw, mode)
        return OperationResult.ok(target)
    except FileExistsError as e:
        if target.is_directory():
            return OperationResult.ok(target)
        return OperationResult.from_os_error(target, e)
    except FileNotFoundError:
        pass
    except OSError as e:
        logger.debug("makedirs %s failed: %s", target, e)
        return OperationResult.from_os_error(target, e)

    # An intermediate directory is missing; create the parent, then retry
    if depth <= 0:
        return OperationResult.failed(target, "Maximum directory depth exceeded")

    parent = _makedirs(target.parent(), mode, depth - 1)
    if not parent:
        return OperationResult.failed(
            target, f"Cannot create parent directory: {parent.error}", failures=(parent,)
        )

    try:
        os.mkdir(target.raw, mode)
    except FileExistsError as e:
        if not target.is_directory():
            return OperationResult.from_os_error(target, e)
    except OSError as e:
        logger.debug("makedirs %s failed after creating parent: %s", target, e)
        return OperationResult.from_os_error(target, e)
    return OperationResult.ok(target)


def remove(path: PathLike) -> OperationResult:
    """Remove a single non-directory entry (file, symlink, fifo, ...).

    Args:
        path: Entry to unlink.

    Returns:
        OperationResult for the entry.
    """
    target = coerce(path)
    try:
        os.unlink(target.raw)
    except OSError as e:
        logger.debug("remove %s failed: %s", target, e)
        return OperationResult.from_os_error(target, e)
    return OperationResult.ok(target)


def rmdirs(
    path: PathLike,
    ignore_errors: bool = False,
    max_depth: int | None = None,
) -> OperationResult:
    """Recursively remove a directory and everything below it.

    Subdirectories are recursed into; every other entry, including
    symlinks to directories, is unlinked. A symlink to a directory given
    as ``path`` is unlinked as well, leaving its target untouched.

    Args:
        path: Directory to remove.
        ignore_errors: If False, stop at the first entry that cannot be
            removed. If True, keep going and collect every failure.
        max_depth: Maximum nesting depth to descend. Defaults to the
            configured limit.

    Returns:
        OperationResult whose success reflects removal of ``path`` itself.
        ``failures`` holds the results of entries that could not be removed.
    """
    target = coerce(path)
    if not target.is_directory():
        return OperationResult.failed(target, f"Not a directory: {target}")
    if entry_type(target) == EntryType.SYMLINK:
        return remove(target)

    if max_depth is None:
        max_depth = cached_config().max_depth

    return _rmdirs(target, ignore_errors, max_depth)


def _rmdirs(target: Path, ignore_errors: bool, depth: int) -> OperationResult:
    if depth <= 0:
        return OperationResult.failed(target, "Maximum directory depth exceeded")

    failures: list[OperationResult] = []
    for child in listdir(target):
        if entry_type(child) == EntryType.DIRECTORY:
            result = _rmdirs(child, ignore_errors, depth - 1)
        else:
            result = remove(child)

        if result:
            continue

        logger.debug("rmdirs: could not remove %s: %s", child, result.error)
        failures.append(result)
        if not ignore_errors:
            return OperationResult.failed(
                target, f"Could not remove {child}", failures=tuple(failures)
            )

    try:
        os.rmdir(target.raw)
    except OSError as e:
        logger.debug("rmdirs %s failed: %s", target, e)
        return OperationResult.from_os_error(target, e, failures=tuple(failures))
    return OperationResult.ok(target, failures=tuple(failures))


def listdir(path: PathLike) -> list[Path]:
    """List the entries of a directory.

    Entries are returned in the order the OS enumerates them, each resolved
    against the absolute directory path. The ``.`` and ``..`` pseudo-entries
    are never included.

    Args:
        path: Directory to list.

    Returns:
        List of entry paths, empty if the directory cannot be opened.
    """
    base = coerce(path).absolute()
    try:
        with os.scandir(base.raw) as entries:
            return [base.relative(entry.name) for entry in entries]
    except OSError as e:
        logger.debug("listdir %s failed: %s", base, e)
        return []


def move(source: PathLike, dest: PathLike, force: bool = False) -> OperationResult:
    """Rename ``source`` to ``dest``.

    Args:
        source: Entry to move.
        dest: New location.
        force: Create the destination's parent directories if missing.

    Returns:
        OperationResult for the destination.
    """
    src = coerce(source)
    dst = coerce(dest)

    parent = dst.parent()
    if not parent.is_directory():
        if not force:
            return OperationResult.failed(dst, f"Destination directory does not exist: {parent}")
        created = makedirs(parent)
        if not created:
            return OperationResult.failed(
                dst, f"Cannot create destination directory: {created.error}", failures=(created,)
            )

    try:
        os.rename(src.raw, dst.raw)
    except OSError as e:
        logger.debug("move %s -> %s failed: %s", src, dst, e)
        return OperationResult.from_os_error(dst, e)
    return OperationResult.ok(dst)
