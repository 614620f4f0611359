"""
Error translation adapter for Tree2Json.

This module provides the ErrorHandlingAdapter that wraps a source
adapter and turns whatever its I/O methods raise into TreeIOError.
"""

import asyncio
import functools
import logging
from typing import Any

from ..errors import Tree2JsonError, translate_os_error

logger = logging.getLogger(__name__)


class ErrorHandlingAdapter:
    """
    Adapter that wraps another adapter and normalizes its errors.

    Uses the dynamic proxy pattern: every callable attribute of the base
    adapter is wrapped so that exceptions raised by it (synchronously or
    from the returned coroutine) reach the caller as TreeIOError carrying
    the path and the name of the failed operation. Errors are never
    swallowed or retried.
    """

    def __init__(self, base_adapter: Any):
        """
        Initialize the error handling adapter.

        Args:
            base_adapter: The adapter to wrap (e.g., AsyncFileSystemAdapter)
        """
        self._base_adapter = base_adapter

    def __getattr__(self, name: str) -> Any:
        """
        Proxy attribute access to the base adapter, wrapping methods.

        Args:
            name: The attribute name being accessed

        Returns:
            The attribute from the base adapter, wrapped if it's a method
        """
        attr = getattr(self._base_adapter, name)

        if not callable(attr):
            return attr

        @functools.wraps(attr)
        def wrapper(*args, **kwargs):
            path = args[0] if args else None
            try:
                result = attr(*args, **kwargs)
            except Exception as e:
                raise self._translate(e, name, path)

            if asyncio.iscoroutine(result):
                return self._handle_coroutine(result, name, path)
            return result

        return wrapper

    async def _handle_coroutine(self, coro, method_name: str, path: Any) -> Any:
        """
        Await an adapter coroutine, translating its errors.

        Args:
            coro: The coroutine to execute
            method_name: Name of the method being called
            path: Path the method was called with

        Returns:
            The result from the coroutine
        """
        try:
            return await coro
        except Exception as e:
            raise self._translate(e, method_name, path)

    def _translate(self, error: Exception, method_name: str, path: Any) -> Exception:
        # Errors that already belong to this package pass through untouched
        if isinstance(error, Tree2JsonError):
            return error
        translated = translate_os_error(error, path, method_name)
        if translated is not error:
            logger.debug("%s failed for %s: %r", method_name, path, error)
        return translated

    def get_base_adapter(self) -> Any:
        """
        Get the wrapped base adapter.

        Returns:
            The underlying adapter being wrapped
        """
        return self._base_adapter

    def get_adapter_chain(self):
        """
        Return a list of adapter class names in the chain.

        Returns:
            List of class names from this adapter down through the chain
        """
        chain = []
        adapter = self
        while adapter:
            chain.append(adapter.__class__.__name__)
            if hasattr(adapter, '_base_adapter'):
                adapter = adapter._base_adapter
            else:
                break
        return chain

    def __repr__(self) -> str:
        """String representation."""
        return f"ErrorHandlingAdapter({self._base_adapter!r})"
