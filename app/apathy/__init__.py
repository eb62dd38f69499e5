"""apathy - path manipulation for POSIX filesystems.

Provides an immutable Path value type with lexical transformations and
a set of filesystem operations built on it.
"""

from apathy.core.path import Path, Segment, join
from apathy.filesystem.models import OperationResult
from apathy.filesystem.operations import listdir, makedirs, move, rmdirs, touch

__version__ = "0.1.0"

__all__ = [
    "OperationResult",
    "Path",
    "Segment",
    "__version__",
    "join",
    "listdir",
    "makedirs",
    "move",
    "rmdirs",
    "touch",
]
