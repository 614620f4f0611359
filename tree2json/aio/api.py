"""High-level async API for Tree2Json.

This module provides the entry points a build pipeline calls: convert()
for one resolve-walk-write step, build_document() for the walk alone,
and the Tree2Json step object that mirrors a pipeline plugin.
"""

import logging
import time
from pathlib import Path
from typing import Any, Awaitable, Callable, Optional, Union

from ..config import ConvertConfig
from ..errors import Tree2JsonError
from .adapters import AsyncFileSystemAdapter
from .core import AsyncTreeAdapter, Document, TreeWalker
from .writer import JsonWriter

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]
RootResolver = Callable[[], Awaitable[PathLike]]


def _default_adapter(config: ConvertConfig) -> AsyncFileSystemAdapter:
    return AsyncFileSystemAdapter(
        max_concurrent=config.max_concurrent,
        follow_symlinks=config.follow_symlinks,
    )


def _base_name(path: Any) -> str:
    candidate = Path(str(path))
    return candidate.name or candidate.resolve().name


async def build_document(
    root: PathLike,
    *,
    config: Optional[ConvertConfig] = None,
    adapter: Optional[AsyncTreeAdapter] = None,
) -> Document:
    """Walk a directory tree and return its document without writing it.

    Args:
        root: Root directory of the tree
        config: Conversion configuration
        adapter: Custom source adapter (creates AsyncFileSystemAdapter if None)

    Returns:
        Nested dict of file contents keyed by extension-stripped names

    Example:
        >>> document = await build_document('fixtures/')
        >>> document['hello']
        'hi'
    """
    config = (config or ConvertConfig()).ensure_valid()
    if adapter is None:
        adapter = _default_adapter(config)
    walker = TreeWalker(adapter, config)
    return await walker.walk(root)


async def convert(
    resolve_root: RootResolver,
    destination_dir: PathLike,
    *,
    root_name: Optional[str] = None,
    config: Optional[ConvertConfig] = None,
    adapter: Optional[AsyncTreeAdapter] = None,
) -> Path:
    """Convert a source tree into `<root_name>.json` in destination_dir.

    The host's resolver is awaited once to obtain the root directory.
    The output is written only after the whole tree was walked without
    error; on failure nothing is written and an existing output file is
    left untouched.

    Args:
        resolve_root: Async callable returning the root directory path
        destination_dir: Existing directory receiving the JSON file
        root_name: Output base name (defaults to the root directory's name)
        config: Conversion configuration
        adapter: Custom source adapter (creates AsyncFileSystemAdapter if None)

    Returns:
        Path of the written JSON file

    Raises:
        TreeIOError: First I/O failure while walking or writing
        KeyCollisionError: Duplicate key under CollisionPolicy.ERROR
    """
    config = (config or ConvertConfig()).ensure_valid()
    root = await resolve_root()
    name = root_name or _base_name(root)
    started = time.perf_counter()

    try:
        document = await build_document(root, config=config, adapter=adapter)
        target = await JsonWriter(config).write(document, destination_dir, name)
    except Tree2JsonError as e:
        logger.error("Converting %s failed: %s", root, e)
        raise

    logger.info(
        "Converted %s to %s in %.3fs",
        root, target, time.perf_counter() - started,
    )
    return target


class Tree2Json:
    """Pipeline step rolling an input tree up into one JSON document.

    The output is named after the input tree's base name. The step holds
    only its input handle and configuration; every write() call builds a
    fresh document, so concurrent or repeated calls never share state.

    Example:
        >>> step = Tree2Json('app/templates')
        >>> await step.write(read_tree, 'dist')   # writes dist/templates.json
    """

    def __init__(
        self,
        input_tree: Any,
        config: Optional[ConvertConfig] = None,
        adapter_factory: Optional[Callable[[ConvertConfig], AsyncTreeAdapter]] = None,
    ):
        """Initialize the step.

        Args:
            input_tree: Host handle for the source tree
            config: Conversion configuration
            adapter_factory: Builds the source adapter for each write()
        """
        self.input_tree = input_tree
        self.config = (config or ConvertConfig()).ensure_valid()
        self.adapter_factory = adapter_factory or _default_adapter

    @property
    def root_name(self) -> str:
        return _base_name(self.input_tree)

    async def write(
        self,
        read_tree: Callable[[Any], Awaitable[PathLike]],
        destination_dir: PathLike,
    ) -> Path:
        """Resolve the input tree through the host and convert it.

        Args:
            read_tree: Host accessor resolving the input tree to a path
            destination_dir: Directory receiving `<root_name>.json`

        Returns:
            Path of the written JSON file
        """
        async def resolve_root() -> PathLike:
            return await read_tree(self.input_tree)

        return await convert(
            resolve_root,
            destination_dir,
            root_name=self.root_name,
            config=self.config,
            adapter=self.adapter_factory(self.config),
        )

    def __repr__(self) -> str:
        return f"Tree2Json({self.input_tree!r})"
