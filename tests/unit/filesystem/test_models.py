"""Unit tests for filesystem result models."""

import errno

import pytest
from apathy.core.path import Path
from apathy.filesystem.models import EntryType, OperationResult


class TestOperationResult:
    """Tests for OperationResult."""

    def test_ok(self) -> None:
        """ok builds a truthy result with no error."""
        result = OperationResult.ok(Path("/a"))
        assert result
        assert result.success is True
        assert result.path == "/a"
        assert result.error is None
        assert result.errno is None
        assert result.failures == ()

    def test_from_os_error(self) -> None:
        """from_os_error copies strerror and errno."""
        err = FileNotFoundError(errno.ENOENT, "No such file or directory")
        result = OperationResult.from_os_error("/missing", err)
        assert not result
        assert result.error == "No such file or directory"
        assert result.errno == errno.ENOENT

    def test_from_os_error_without_strerror(self) -> None:
        """An OSError without strerror falls back to its message."""
        result = OperationResult.from_os_error("/x", OSError("boom"))
        assert result.error == "boom"
        assert result.errno is None

    def test_failed_keeps_failures(self) -> None:
        """failed records nested failures."""
        child = OperationResult.failed("/a/b", "blocked")
        result = OperationResult.failed("/a", "child failed", failures=(child,))
        assert not result
        assert result.failures == (child,)

    def test_frozen(self) -> None:
        """Results are immutable."""
        result = OperationResult.ok("/a")
        with pytest.raises(AttributeError):
            result.success = False  # type: ignore[misc]


class TestEntryType:
    """Tests for EntryType."""

    def test_values(self) -> None:
        """EntryType values are lowercase strings."""
        assert EntryType.DIRECTORY.value == "directory"
        assert EntryType.MISSING == "missing"
