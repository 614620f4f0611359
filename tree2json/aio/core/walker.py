"""Concurrent recursive walk of a source tree into a document.

For each directory the walker lists the entries, then spawns one task
per entry that classifies it and either recurses (directories) or loads
and decodes the contents (files). A directory is complete once all of
its tasks succeed, or as soon as one fails.

Failure handling is first-error-wins: the first failure anywhere in the
tree is recorded on a CancellationToken shared by the whole walk, the
failing directory cancels its outstanding sibling tasks, and the
failure propagates up, cancelling siblings at every level. Branches
whose I/O was already running stop at the token before their next step.
No task outlives the walk call that spawned it.
"""

import asyncio
import logging
from typing import Any, Iterable, List, Optional

from ...config import ConvertConfig
from ...errors import KeyCollisionError, TraversalCancelled, translate_os_error
from ..error_handling import ErrorHandlingAdapter
from .adapter import AsyncTreeAdapter
from .assembler import insert, new_document
from .cancellation import CancellationToken
from .node import Document, EntryKind, PathKey, leaf_key

logger = logging.getLogger(__name__)


class TreeWalker:
    """Walks a tree through an adapter and assembles the document.

    A walker keeps no per-walk state, so one instance can serve any
    number of concurrent walks; each walk gets its own document and
    its own CancellationToken.
    """

    def __init__(self, adapter: AsyncTreeAdapter, config: Optional[ConvertConfig] = None):
        """Initialize walker.

        Args:
            adapter: Source adapter providing list/classify/read
            config: Conversion configuration (defaults to ConvertConfig())
        """
        self.config = (config or ConvertConfig()).ensure_valid()
        if not isinstance(adapter, ErrorHandlingAdapter):
            adapter = ErrorHandlingAdapter(adapter)
        self.adapter = adapter

    async def walk(self, root: Any) -> Document:
        """Walk the tree rooted at root.

        Args:
            root: Root directory path, in the adapter's path type

        Returns:
            The complete document for the tree

        Raises:
            TreeIOError: The first I/O failure observed anywhere in the tree
            KeyCollisionError: Duplicate key under CollisionPolicy.ERROR
        """
        token = CancellationToken()
        try:
            return await self._walk_directory(root, (), token)
        except Exception as exc:
            first = token.error if token.error is not None else exc
            if first is exc:
                raise
            raise first

    async def _walk_directory(self, path: Any, path_key: PathKey, token: CancellationToken) -> Document:
        try:
            token.raise_if_cancelled()
            names = await self.adapter.list_entries(path)
        except TraversalCancelled:
            raise
        except Exception as exc:
            token.cancel(exc)
            raise

        document = new_document()
        if not names:
            return document

        logger.debug("Walking %s (%d entries)", path, len(names))
        tasks = [
            asyncio.create_task(
                self._walk_entry(document, path, path_key, name, token),
                name=f"tree2json:{'/'.join(path_key + (name,))}",
            )
            for name in names
        ]
        await _join(tasks, token)
        return document

    async def _walk_entry(
        self,
        document: Document,
        parent: Any,
        parent_key: PathKey,
        name: str,
        token: CancellationToken,
    ) -> None:
        path = self.adapter.join(parent, name)
        try:
            token.raise_if_cancelled()
            kind = await self.adapter.classify(path)

            if kind is EntryKind.DIRECTORY:
                key = name
                value = await self._walk_directory(path, parent_key + (name,), token)
            else:
                token.raise_if_cancelled()
                key = leaf_key(name)
                value = self._decode(await self.adapter.read_content(path), path)

            # Another branch may have failed while this one was suspended
            token.raise_if_cancelled()
            try:
                insert(document, (key,), value, self.config.collision)
            except KeyCollisionError as exc:
                raise KeyCollisionError(parent_key + exc.path_key) from None
        except TraversalCancelled:
            raise
        except Exception as exc:
            token.cancel(exc)
            raise

    def _decode(self, raw: bytes, path: Any) -> str:
        try:
            return raw.decode(self.config.encoding, self.config.decode_errors)
        except UnicodeDecodeError as exc:
            raise translate_os_error(exc, path, 'read_content')


async def _join(tasks: List[asyncio.Task], token: CancellationToken) -> None:
    """Wait for sibling tasks; on the first failure cancel the rest.

    Raises the traversal's first recorded error if any task failed.
    """
    try:
        await asyncio.wait(tasks, return_when=asyncio.FIRST_EXCEPTION)
    finally:
        for task in tasks:
            if not task.done():
                task.cancel()
        # Gathering every task, finished ones included, retrieves each
        # exception even when this join is itself being cancelled
        await asyncio.gather(*tasks, return_exceptions=True)

    failures = _failures(tasks)
    if failures:
        raise token.error if token.error is not None else failures[0]


def _failures(tasks: Iterable[asyncio.Task]) -> List[BaseException]:
    return [
        task.exception()
        for task in tasks
        if not task.cancelled() and task.exception() is not None
    ]
