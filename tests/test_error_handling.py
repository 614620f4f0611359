"""
Tests for error translation and the ErrorHandlingAdapter.
"""

import errno
import pickle
from pathlib import Path
from unittest.mock import Mock

import pytest

from tree2json import IOErrorKind, KeyCollisionError, TraversalCancelled, TreeIOError
from tree2json.aio import CancellationToken, ErrorHandlingAdapter
from tree2json.errors import translate_os_error
from tree2json.testing import InMemoryTreeAdapter


class TestTranslateOsError:
    """Mapping of builtin exceptions onto TreeIOError kinds."""

    @pytest.mark.parametrize("error, operation, kind", [
        (FileNotFoundError(errno.ENOENT, "missing"), "list_entries", IOErrorKind.NOT_FOUND),
        (FileNotFoundError(errno.ENOENT, "missing"), "read_content", IOErrorKind.NOT_FOUND),
        (PermissionError(errno.EACCES, "denied"), "classify", IOErrorKind.PERMISSION_DENIED),
        (OSError(errno.EPERM, "not permitted"), "write", IOErrorKind.PERMISSION_DENIED),
        (IsADirectoryError(errno.EISDIR, "is a dir"), "read_content", IOErrorKind.READ_FAILURE),
        (OSError(errno.ENOSPC, "disk full"), "write", IOErrorKind.WRITE_FAILURE),
        (NotADirectoryError(errno.ENOTDIR, "not a dir"), "list_entries", IOErrorKind.OTHER),
        (ValueError("odd"), "classify", IOErrorKind.OTHER),
    ])
    def test_kinds(self, error, operation, kind):
        translated = translate_os_error(error, "/some/path", operation)
        assert translated.kind is kind
        assert translated.path == Path("/some/path")
        assert translated.operation == operation
        assert translated.cause is error
        assert translated.__cause__ is error

    def test_already_translated_passes_through(self):
        error = TreeIOError(IOErrorKind.OTHER, "/x", "classify")
        assert translate_os_error(error, "/y", "read_content") is error

    def test_tree_io_error_is_an_os_error(self):
        error = translate_os_error(FileNotFoundError(errno.ENOENT, "missing"), "/x", "classify")
        assert isinstance(error, OSError)
        assert error.errno == errno.ENOENT
        assert "not_found" in str(error)
        assert "/x" in str(error)

    def test_tree_io_error_pickles(self):
        error = TreeIOError(IOErrorKind.WRITE_FAILURE, "/out.json", "write")
        restored = pickle.loads(pickle.dumps(error))
        assert restored.kind is IOErrorKind.WRITE_FAILURE
        assert restored.path == Path("/out.json")

    def test_key_collision_message(self):
        error = KeyCollisionError(("sub", "note"))
        assert error.path_key == ("sub", "note")
        assert "sub/note" in str(error)


class TestErrorHandlingAdapter:
    """The proxy translates every failure raised by the base adapter."""

    @pytest.mark.asyncio
    async def test_successful_operation_passes_through(self):
        adapter = ErrorHandlingAdapter(InMemoryTreeAdapter({"a.txt": "x"}))
        assert await adapter.list_entries("root") == {"a.txt"}
        assert await adapter.read_content("root/a.txt") == b"x"

    @pytest.mark.asyncio
    async def test_async_failure_is_translated(self):
        adapter = ErrorHandlingAdapter(InMemoryTreeAdapter(
            {"a.txt": "x"},
            failures={"root/a.txt": PermissionError(errno.EACCES, "denied")},
        ))
        with pytest.raises(TreeIOError) as exc_info:
            await adapter.read_content("root/a.txt")
        assert exc_info.value.kind is IOErrorKind.PERMISSION_DENIED
        assert exc_info.value.operation == "read_content"
        assert exc_info.value.path == Path("root/a.txt")

    def test_sync_failure_is_translated(self):
        base = Mock()
        base.join.side_effect = OSError(errno.EIO, "I/O error")
        adapter = ErrorHandlingAdapter(base)
        with pytest.raises(TreeIOError) as exc_info:
            adapter.join("root", "child")
        assert exc_info.value.kind is IOErrorKind.OTHER
        assert exc_info.value.operation == "join"

    @pytest.mark.asyncio
    async def test_package_errors_are_not_rewrapped(self):
        collision = KeyCollisionError(("a",))
        adapter = ErrorHandlingAdapter(InMemoryTreeAdapter({"a": "x"}, failures={"root/a": collision}))
        with pytest.raises(KeyCollisionError) as exc_info:
            await adapter.classify("root/a")
        assert exc_info.value is collision

    def test_attributes_are_proxied(self):
        base = InMemoryTreeAdapter({}, max_concurrent=3)
        adapter = ErrorHandlingAdapter(base)
        assert adapter.max_concurrent == 3
        assert adapter.get_base_adapter() is base
        assert adapter.join("root", "x") == "root/x"


class TestCancellationToken:

    def test_first_error_is_kept(self):
        token = CancellationToken()
        first, second = OSError("first"), OSError("second")
        assert not token.cancelled
        assert token.cancel(first) is True
        assert token.cancel(second) is False
        assert token.cancelled
        assert token.error is first

    def test_raise_if_cancelled(self):
        token = CancellationToken()
        token.raise_if_cancelled()
        token.cancel(OSError("boom"))
        with pytest.raises(TraversalCancelled):
            token.raise_if_cancelled()
