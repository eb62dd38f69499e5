"""Path value type and lexical path transformations.

A Path wraps a raw path string using ``/`` as its only separator. All
transformations are purely lexical and return a new Path; the receiver
is never modified. Structural information (segments, parent, stem) is
re-derived from the raw string on every call.

The only calls that reach the operating system are ``Path.cwd()`` (used by
``absolute()``) and the ``exists``/``is_file``/``is_directory``/``is_symlink``
queries, each of which performs a single stat.
"""

from __future__ import annotations

import logging
import os
import stat
from dataclasses import dataclass

logger = logging.getLogger(__name__)

# The only separator recognized on this system
SEPARATOR = "/"


@dataclass(frozen=True, slots=True)
class Segment:
    """One ``/``-delimited token of a path.

    Attributes:
        segment: Token text. Empty for a leading root or trailing
            directory marker.
        start: Offset of the token within the owning path string.
    """

    segment: str
    start: int

    @property
    def end(self) -> int:
        """Offset one past the last character of the token."""
        return self.start + len(self.segment)


@dataclass(frozen=True, slots=True)
class Path:
    """Immutable path string with lexical transformation methods.

    Equality is exact string equality. Two paths that refer to the same
    location but are spelled differently compare unequal; use
    ``equivalent`` for that.

    Attributes:
        raw: The path string, exactly as given.
    """

    raw: str = ""

    def __post_init__(self) -> None:
        if not isinstance(self.raw, str):
            msg = f"Path expects str, got {type(self.raw).__name__}; use coerce() to convert"
            raise TypeError(msg)

    # ------------------------------------------------------------------
    # Conversions
    # ------------------------------------------------------------------

    @classmethod
    def from_text(cls, value: str) -> Path:
        """Create a path from text."""
        if not isinstance(value, str):
            msg = f"Expected str, got {type(value).__name__}"
            raise TypeError(msg)
        return cls(value)

    @classmethod
    def from_int(cls, value: int) -> Path:
        """Create a path segment from an integer, e.g. ``5`` -> ``"5"``."""
        if isinstance(value, bool) or not isinstance(value, int):
            msg = f"Expected int, got {type(value).__name__}"
            raise TypeError(msg)
        return cls(str(value))

    @classmethod
    def from_float(cls, value: float) -> Path:
        """Create a path segment from a float, e.g. ``3.14`` -> ``"3.14"``.

        Uses general format with six significant digits.
        """
        if not isinstance(value, float):
            msg = f"Expected float, got {type(value).__name__}"
            raise TypeError(msg)
        return cls(format(value, "g"))

    def __str__(self) -> str:
        return self.raw

    def __fspath__(self) -> str:
        return self.raw

    def string(self) -> str:
        """Return the raw path string."""
        return self.raw

    # ------------------------------------------------------------------
    # Operators
    # ------------------------------------------------------------------

    def __lshift__(self, segment: PathLike) -> Path:
        return self.append(segment)

    def __truediv__(self, segment: PathLike) -> Path:
        return self.append(segment)

    # ------------------------------------------------------------------
    # Manipulations
    # ------------------------------------------------------------------

    def trim(self) -> Path:
        """Return this path without trailing separators."""
        return Path(self.raw.rstrip(SEPARATOR))

    def directory(self) -> Path:
        """Return this path with exactly one trailing separator."""
        return Path(self.trim().raw + SEPARATOR)

    def append(self, segment: PathLike) -> Path:
        """Return this path with ``segment`` added as a child.

        The segment text is added as-is; separators inside it are not
        normalized.

        Args:
            segment: Path, text, or number to add.

        Returns:
            New joined path.
        """
        return Path(self.trim().raw + SEPARATOR + coerce(segment).raw)

    def relative(self, rel: PathLike) -> Path:
        """Evaluate ``rel`` relative to this path.

        An absolute ``rel`` replaces this path entirely; otherwise it is
        appended as a child.
        """
        other = coerce(rel)
        if other.is_absolute():
            return other
        return self.append(other)

    def absolute(self) -> Path:
        """Return this path resolved against the working directory.

        Already-absolute paths are returned unchanged.
        """
        if self.is_absolute():
            return self
        return join(Path.cwd(), self)

    def sanitize(self) -> Path:
        """Lexically normalize this path.

        Collapses runs of separators, drops ``.`` segments and resolves
        ``..`` against the preceding segment. A ``..`` that would climb
        above the start of a relative path forces the path to be resolved
        against the working directory first. A ``..`` above the root of an
        absolute path is dropped. Paths written as ``.`` or ``./...`` are
        rebased onto the working directory. A trailing separator survives.

        Returns:
            New normalized path.
        """
        stack: list[str] = []
        for token in self._tokens():
            if token == "..":
                if stack:
                    stack.pop()
                elif not self.is_absolute():
                    return self.absolute().sanitize()
            elif token != ".":
                stack.append(token)

        if self.raw == "." or self.raw.startswith("." + SEPARATOR):
            base = Path.cwd().raw
        elif self.is_absolute():
            base = SEPARATOR
        else:
            base = ""
        return Path(base + SEPARATOR.join(stack))

    def _tokens(self) -> list[str]:
        """Split into non-empty tokens, with ``""`` marking a directory."""
        tokens = [token for token in self.raw.split(SEPARATOR) if token]
        if not self.raw or self.raw.endswith(SEPARATOR):
            tokens.append("")
        return tokens

    def parent(self) -> Path:
        """Return the parent directory, always directory-suffixed.

        The path is made absolute and sanitized first, so relative and
        empty paths resolve through the working directory. The root is
        its own parent.
        """
        trimmed = self.absolute().sanitize().trim().raw
        pos = trimmed.rfind(SEPARATOR)
        if pos != -1:
            trimmed = trimmed[:pos]
        return Path(trimmed).directory()

    def up(self) -> Path:
        """Alias for ``parent``."""
        return self.parent()

    def name(self) -> str:
        """Return the final segment (empty for directory-suffixed paths)."""
        return self.raw[self.raw.rfind(SEPARATOR) + 1 :]

    def stem(self) -> Path:
        """Strip the last ``.suffix`` from the final segment.

        Returns the path unchanged when the final segment has no suffix,
        so repeated calls reach a fixed point:
        ``foo.bar.out`` -> ``foo.bar`` -> ``foo`` -> ``foo``.
        """
        name = self.name()
        dot = name.rfind(".")
        if dot <= 0:
            return self
        return Path(self.raw[: len(self.raw) - len(name) + dot])

    def extension(self) -> str:
        """Return the text after the last dot of the final segment.

        Dots inside directory segments do not count, so
        ``foo/bar.baz/out`` has no extension.
        """
        name = self.name()
        dot = name.rfind(".")
        if dot <= 0:
            return ""
        return name[dot + 1 :]

    def split(self) -> list[Segment]:
        """Return the segments between separators.

        A leading separator yields a leading empty segment and a trailing
        separator a trailing one, so ``"a/b/"`` splits into ``a``, ``b``
        and ``""``.
        """
        segments: list[Segment] = []
        start = 0
        for token in self.raw.split(SEPARATOR):
            segments.append(Segment(segment=token, start=start))
            start += len(token) + 1
        return segments

    def equivalent(self, other: PathLike) -> bool:
        """Check whether both paths normalize to the same absolute string.

        Purely lexical; symlinks are not resolved.
        """
        return self.absolute().sanitize() == coerce(other).absolute().sanitize()

    # ------------------------------------------------------------------
    # Type tests
    # ------------------------------------------------------------------

    def is_absolute(self) -> bool:
        """Check if the path starts with the separator."""
        return self.raw.startswith(SEPARATOR)

    def trailing_slash(self) -> bool:
        """Check if the path ends with the separator."""
        return self.raw.endswith(SEPARATOR)

    def exists(self) -> bool:
        """Check if the path can be stat'd."""
        return self._stat() is not None

    def is_file(self) -> bool:
        """Check if the path is an existing regular file."""
        st = self._stat()
        return st is not None and stat.S_ISREG(st.st_mode)

    def is_directory(self) -> bool:
        """Check if the path is an existing directory."""
        st = self._stat()
        return st is not None and stat.S_ISDIR(st.st_mode)

    def is_symlink(self) -> bool:
        """Check if the path itself is a symbolic link."""
        try:
            return stat.S_ISLNK(os.lstat(self.raw).st_mode)
        except (OSError, ValueError):
            return False

    def _stat(self) -> os.stat_result | None:
        # Any failure, including permission errors, reads as "does not exist"
        try:
            return os.stat(self.raw)
        except (OSError, ValueError):
            return None

    # ------------------------------------------------------------------
    # Process state
    # ------------------------------------------------------------------

    @classmethod
    def cwd(cls) -> Path:
        """Return the working directory as a directory-suffixed path.

        Returns an empty path if the working directory cannot be
        determined (e.g. it was deleted).
        """
        try:
            current = os.getcwd()
        except OSError as e:
            logger.warning("Cannot determine working directory: %s", e)
            return cls("")
        return cls(current).directory()


PathLike = Path | str | int | float


def coerce(value: PathLike) -> Path:
    """Convert a supported value to a Path.

    Args:
        value: Path, str, int, or float.

    Returns:
        The equivalent Path.

    Raises:
        TypeError: If the value is of any other type.
    """
    if isinstance(value, Path):
        return value
    if isinstance(value, str):
        return Path.from_text(value)
    if isinstance(value, float):
        return Path.from_float(value)
    if isinstance(value, int) and not isinstance(value, bool):
        return Path.from_int(value)
    msg = f"Cannot convert {type(value).__name__} to Path"
    raise TypeError(msg)


def join(a: PathLike, b: PathLike) -> Path:
    """Return ``a`` with ``b`` appended, leaving both inputs untouched."""
    return coerce(a).append(b)
