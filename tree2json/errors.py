"""
Error types for Tree2Json.

All I/O failures are surfaced as TreeIOError, which carries a coarse
IOErrorKind alongside the offending path and the underlying cause.
"""

import errno
from enum import Enum
from pathlib import Path
from typing import Optional, Tuple, Union


class IOErrorKind(Enum):
    """Coarse classification of an I/O failure."""
    NOT_FOUND = "not_found"
    PERMISSION_DENIED = "permission_denied"
    READ_FAILURE = "read_failure"
    WRITE_FAILURE = "write_failure"
    OTHER = "other"


class Tree2JsonError(Exception):
    """Base class for all Tree2Json errors."""


class TreeIOError(Tree2JsonError, OSError):
    """
    An I/O operation on the source tree or the destination failed.

    Attributes:
        kind: IOErrorKind of the failure
        path: Path the operation was acting on
        operation: Name of the failed operation (e.g. 'list_entries')
        cause: The original exception
    """

    def __init__(
        self,
        kind: IOErrorKind,
        path: Union[str, Path, None],
        operation: str = "",
        cause: Optional[BaseException] = None,
    ):
        self.kind = kind
        self.path = Path(path) if path is not None else None
        self.operation = operation
        self.cause = cause
        detail = f": {cause}" if cause is not None else ""
        message = f"{kind.value} during {operation or 'I/O'} on '{self.path}'{detail}"
        # Keep errno/strerror when the cause has them
        if isinstance(cause, OSError) and cause.errno is not None:
            super().__init__(cause.errno, message)
        else:
            super().__init__(message)
        self._message = message

    def __str__(self) -> str:
        return self._message

    def __reduce__(self):
        return (self.__class__, (self.kind, self.path, self.operation, self.cause))


class KeyCollisionError(Tree2JsonError):
    """Two entries normalized to the same document key."""

    def __init__(self, path_key: Tuple[str, ...]):
        self.path_key = tuple(path_key)
        super().__init__(f"Duplicate document key: {'/'.join(self.path_key)!r}")


class ConfigError(Tree2JsonError, ValueError):
    """Invalid conversion configuration."""


class TraversalCancelled(Tree2JsonError):
    """
    Raised by a branch that stopped because another branch already failed.

    Never escapes TreeWalker.walk; the walker re-raises the first real error.
    """


_WRITE_OPERATIONS = {"write", "write_document"}
_READ_OPERATIONS = {"read_content"}


def translate_os_error(
    error: BaseException,
    path: Union[str, Path, None],
    operation: str,
) -> TreeIOError:
    """
    Map a builtin exception onto a TreeIOError.

    Args:
        error: Exception raised by the failed operation
        path: Path the operation was acting on
        operation: Name of the failed operation

    Returns:
        TreeIOError with the matching kind; the input is returned untouched
        if it already is one.
    """
    if isinstance(error, TreeIOError):
        return error

    if isinstance(error, FileNotFoundError) or getattr(error, "errno", None) == errno.ENOENT:
        kind = IOErrorKind.NOT_FOUND
    elif isinstance(error, PermissionError) or getattr(error, "errno", None) in (errno.EACCES, errno.EPERM):
        kind = IOErrorKind.PERMISSION_DENIED
    elif operation in _READ_OPERATIONS:
        kind = IOErrorKind.READ_FAILURE
    elif operation in _WRITE_OPERATIONS:
        kind = IOErrorKind.WRITE_FAILURE
    else:
        kind = IOErrorKind.OTHER

    translated = TreeIOError(kind, path, operation, error)
    translated.__cause__ = error
    return translated
