"""Async adapters for tree sources.

This module contains adapters that bridge a concrete source (currently
the local filesystem) to the walker's adapter interface.
"""

from .filesystem import AsyncFileSystemAdapter

__all__ = [
    'AsyncFileSystemAdapter',
]
