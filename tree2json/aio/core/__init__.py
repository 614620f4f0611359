"""Core abstractions for async tree-to-document conversion.

This module defines the adapter interface, the document model, the
assembler that builds documents, and the walker that drives them.
"""

from .node import (
    EntryKind,
    Document,
    PathKey,
    is_directory,
    leaf_key,
)
from .adapter import AsyncTreeAdapter
from .assembler import insert, new_document
from .cancellation import CancellationToken
from .walker import TreeWalker

__all__ = [
    # Document model
    'EntryKind',
    'Document',
    'PathKey',
    'is_directory',
    'leaf_key',
    # Adapter
    'AsyncTreeAdapter',
    # Assembly
    'insert',
    'new_document',
    # Walking
    'CancellationToken',
    'TreeWalker',
]
