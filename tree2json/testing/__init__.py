"""Testing utilities for Tree2Json."""

from .fixtures import InMemoryTreeAdapter, make_tree

__all__ = ['InMemoryTreeAdapter', 'make_tree']
