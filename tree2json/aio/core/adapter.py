"""Async source adapter abstraction.

Defines the narrow I/O capability the tree walker needs from a source:
list a directory, classify an entry, read a file. Keeping this separate
from the walker lets either side be tested on its own.
"""

import asyncio
from abc import ABC, abstractmethod
from typing import Any, Set

from .node import EntryKind


class AsyncTreeAdapter(ABC):
    """Abstract base class for async source adapters.

    Adapters bridge between the generic walking logic and a concrete
    source (the local filesystem, an in-memory tree in tests, ...).
    Every method is a single suspension point; none of them recurse.
    """

    def __init__(self, max_concurrent: int = 100):
        """Initialize adapter with concurrency control.

        Args:
            max_concurrent: Maximum concurrent I/O operations
        """
        self.max_concurrent = max_concurrent
        self.semaphore = asyncio.Semaphore(max_concurrent)

    @abstractmethod
    async def list_entries(self, path: Any) -> Set[str]:
        """List the names of the entries in a directory.

        Args:
            path: Directory to list

        Returns:
            Set of entry names (no directory part)
        """
        pass

    @abstractmethod
    async def classify(self, path: Any) -> EntryKind:
        """Determine whether an entry is a directory or a file.

        Args:
            path: Entry to inspect

        Returns:
            EntryKind of the entry
        """
        pass

    @abstractmethod
    async def read_content(self, path: Any) -> bytes:
        """Read the full contents of a file.

        Args:
            path: File to read

        Returns:
            Raw file contents
        """
        pass

    @abstractmethod
    def join(self, parent: Any, name: str) -> Any:
        """Build the path of a child entry.

        Args:
            parent: Directory path
            name: Entry name as returned by list_entries

        Returns:
            Path accepted by the other adapter methods
        """
        pass
