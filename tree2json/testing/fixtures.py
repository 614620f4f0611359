"""Test fixtures for Tree2Json consumers.

These fixtures build source trees for tests without touching the walker
internals: an in-memory adapter with injectable failures and delays,
and a helper that materializes a nested dict as real files.
"""

import asyncio
from pathlib import Path
from typing import Any, Dict, List, Optional, Set, Tuple, Union

from ..aio.core import AsyncTreeAdapter, EntryKind

TreeSpec = Dict[str, Any]


def make_tree(root: Union[str, Path], spec: TreeSpec) -> Path:
    """Create files and directories under root from a nested dict.

    str values are written as UTF-8 text, bytes values verbatim, and
    dict values become subdirectories (an empty dict is an empty
    directory).

    Example:
        make_tree(tmp_path / "site", {"hello.txt": "hi", "sub": {"a.txt": "x"}})

    Returns:
        The root path
    """
    root = Path(root)
    root.mkdir(parents=True, exist_ok=True)
    for name, value in spec.items():
        target = root / name
        if isinstance(value, dict):
            make_tree(target, value)
        elif isinstance(value, bytes):
            target.write_bytes(value)
        else:
            target.write_text(value, encoding='utf-8')
    return root


class InMemoryTreeAdapter(AsyncTreeAdapter):
    """Adapter over a nested dict, for exercising the walker in tests.

    Paths are '/'-joined strings starting at `root` ("root" by default).
    Every call yields to the event loop at least once, and records what
    happened so tests can check ordering, cancellation and concurrency.

    Example:
        adapter = InMemoryTreeAdapter(
            {"a.txt": "x", "sub": {"b.txt": "y"}},
            failures={"root/sub/b.txt": PermissionError("denied")},
        )
    """

    def __init__(
        self,
        tree: TreeSpec,
        *,
        root: str = "root",
        failures: Optional[Dict[Union[str, Tuple[str, str]], BaseException]] = None,
        delays: Optional[Dict[str, float]] = None,
        max_concurrent: int = 100,
    ):
        """Initialize adapter.

        Args:
            tree: Nested dict; str/bytes values are files, dicts directories
            root: Path string of the tree root
            failures: Exceptions to raise, keyed by path (any operation) or
                by (operation, path)
            delays: Seconds to sleep before completing a call, keyed by path
            max_concurrent: Maximum concurrent calls
        """
        super().__init__(max_concurrent)
        self.tree = tree
        self.root = root
        self.failures = failures or {}
        self.delays = delays or {}
        self.calls: List[Tuple[str, str]] = []
        self.completed: List[Tuple[str, str]] = []
        self.cancelled: List[Tuple[str, str]] = []
        self.in_flight = 0
        self.peak_in_flight = 0

    def join(self, parent: str, name: str) -> str:
        return f"{parent}/{name}"

    async def list_entries(self, path: str) -> Set[str]:
        node = await self._operation('list_entries', path)
        if not isinstance(node, dict):
            raise NotADirectoryError(20, "Not a directory", path)
        return set(node)

    async def classify(self, path: str) -> EntryKind:
        node = await self._operation('classify', path)
        return EntryKind.DIRECTORY if isinstance(node, dict) else EntryKind.FILE

    async def read_content(self, path: str) -> bytes:
        node = await self._operation('read_content', path)
        if isinstance(node, dict):
            raise IsADirectoryError(21, "Is a directory", path)
        return node if isinstance(node, bytes) else node.encode('utf-8')

    async def _operation(self, operation: str, path: str) -> Any:
        self.calls.append((operation, path))
        async with self.semaphore:
            self.in_flight += 1
            self.peak_in_flight = max(self.peak_in_flight, self.in_flight)
            try:
                await asyncio.sleep(self.delays.get(path, 0))
                failure = self.failures.get((operation, path)) or self.failures.get(path)
                if failure is not None:
                    raise failure
                node = self._lookup(path)
            except asyncio.CancelledError:
                self.cancelled.append((operation, path))
                raise
            finally:
                self.in_flight -= 1
        self.completed.append((operation, path))
        return node

    def _lookup(self, path: str) -> Any:
        if path != self.root and not path.startswith(self.root + "/"):
            raise FileNotFoundError(2, "No such file or directory", path)
        node: Any = self.tree
        for segment in path[len(self.root):].split("/")[1:]:
            if not isinstance(node, dict) or segment not in node:
                raise FileNotFoundError(2, "No such file or directory", path)
            node = node[segment]
        return node
