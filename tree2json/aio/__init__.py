"""Asynchronous implementation of Tree2Json.

This package contains the asyncio walker, its adapters and the
high-level conversion API. All I/O is non-blocking for the event loop.
"""

# Core abstractions
from .core import (
    AsyncTreeAdapter,
    CancellationToken,
    Document,
    EntryKind,
    PathKey,
    TreeWalker,
    insert,
    leaf_key,
    new_document,
)

# Adapters
from .adapters import AsyncFileSystemAdapter

# Error handling
from .error_handling import ErrorHandlingAdapter

# Output
from .writer import JsonWriter

# High-level API
from .api import (
    Tree2Json,
    build_document,
    convert,
)

__all__ = [
    # Core abstractions
    'AsyncTreeAdapter',
    'CancellationToken',
    'Document',
    'EntryKind',
    'PathKey',
    'TreeWalker',
    'insert',
    'leaf_key',
    'new_document',
    # Adapters
    'AsyncFileSystemAdapter',
    'ErrorHandlingAdapter',
    # Output
    'JsonWriter',
    # High-level API
    'Tree2Json',
    'build_document',
    'convert',
]
