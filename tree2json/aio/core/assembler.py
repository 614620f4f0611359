"""Incremental construction of the nested output document.

Inserts never remove a Directory node once it exists: intermediate
segments are created only if absent, and a complete sub-document
inserted over an existing Directory is merged into it.
"""

import logging
from typing import Any, Mapping

from ...config import CollisionPolicy
from ...errors import KeyCollisionError
from .node import Document, PathKey, is_directory

logger = logging.getLogger(__name__)


def new_document() -> Document:
    """Create an empty document for one traversal."""
    return {}


def insert(
    document: Document,
    path_key: PathKey,
    value: Any,
    policy: CollisionPolicy = CollisionPolicy.OVERWRITE,
) -> None:
    """Insert a value at path_key, creating intermediate Directories.

    Args:
        document: Root of the document being built
        path_key: Segments from the root to the target key. An empty
            key merges value (which must be a mapping) into the root.
        value: A str for a leaf, or a mapping for a complete subtree
        policy: How to treat a key that is already taken

    Raises:
        KeyCollisionError: Under CollisionPolicy.ERROR, if the key (or an
            intermediate segment) is already taken by a different entry
    """
    path_key = tuple(path_key)
    if not path_key:
        if not isinstance(value, Mapping):
            raise TypeError("only a mapping can be inserted at the document root")
        _merge(document, value, path_key, policy)
        return

    node = document
    for depth, segment in enumerate(path_key[:-1]):
        child = node.get(segment)
        if not is_directory(child):
            if segment in node:
                # A leaf sits where a directory is needed
                if policy is CollisionPolicy.ERROR:
                    raise KeyCollisionError(path_key[:depth + 1])
                logger.debug("Replacing leaf %r with a directory", '/'.join(path_key[:depth + 1]))
            child = {}
            node[segment] = child
        node = child

    _set(node, path_key, value, policy)


def _set(parent: Document, path_key: PathKey, value: Any, policy: CollisionPolicy) -> None:
    key = path_key[-1]
    if key not in parent:
        parent[key] = dict(value) if isinstance(value, Mapping) and not is_directory(value) else value
        return

    existing = parent[key]
    if is_directory(existing) and isinstance(value, Mapping):
        _merge(existing, value, path_key, policy)
        return

    if policy is CollisionPolicy.ERROR:
        raise KeyCollisionError(path_key)

    if is_directory(existing):
        logger.warning(
            "Dropping file contents for %r: key is already a directory",
            '/'.join(path_key),
        )
        return

    logger.debug("Overwriting duplicate key %r", '/'.join(path_key))
    parent[key] = value


def _merge(target: Document, source: Mapping, path_key: PathKey, policy: CollisionPolicy) -> None:
    for name, child in source.items():
        _set(target, path_key + (name,), child, policy)
