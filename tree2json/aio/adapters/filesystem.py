"""Async filesystem adapter.

Lists, classifies and reads entries of a local directory tree. The
blocking os calls run in worker threads so that sibling entries are
inspected concurrently; a semaphore bounds how many run at once.
"""

import asyncio
import os
import stat as stat_module  # To avoid name collision with stat results
from pathlib import Path
from typing import Set, Union

from ..core import AsyncTreeAdapter, EntryKind
from ...errors import translate_os_error


class AsyncFileSystemAdapter(AsyncTreeAdapter):
    """Async adapter over the local filesystem.

    Paths are pathlib.Path objects. Errors are raised as TreeIOError
    carrying the offending path; nothing is skipped silently.
    """

    def __init__(
        self,
        max_concurrent: int = 100,
        follow_symlinks: bool = True
    ):
        """Initialize filesystem adapter.

        Args:
            max_concurrent: Maximum concurrent I/O operations
            follow_symlinks: Classify symlinks by their target. When False,
                a symlink is a file whose content is its link text.
        """
        super().__init__(max_concurrent)
        self.follow_symlinks = follow_symlinks

    def join(self, parent: Union[str, Path], name: str) -> Path:
        return Path(parent) / name

    async def list_entries(self, path: Union[str, Path]) -> Set[str]:
        """List entry names of a directory using os.scandir.

        Args:
            path: Directory to list

        Returns:
            Set of entry names
        """
        path = Path(path)

        def _scan_directory_sync(directory: Path) -> Set[str]:
            with os.scandir(directory) as iterator:
                return {entry.name for entry in iterator}

        async with self.semaphore:
            try:
                return await asyncio.to_thread(_scan_directory_sync, path)
            except OSError as e:
                raise translate_os_error(e, path, 'list_entries') from e

    async def classify(self, path: Union[str, Path]) -> EntryKind:
        """Classify an entry from its stat result.

        A broken symlink fails here rather than being treated as a file.

        Args:
            path: Entry to inspect

        Returns:
            EntryKind.DIRECTORY or EntryKind.FILE
        """
        path = Path(path)

        def _stat_sync(entry: Path) -> os.stat_result:
            return os.stat(entry, follow_symlinks=self.follow_symlinks)

        async with self.semaphore:
            try:
                st = await asyncio.to_thread(_stat_sync, path)
            except OSError as e:
                raise translate_os_error(e, path, 'classify') from e

        if stat_module.S_ISDIR(st.st_mode):
            return EntryKind.DIRECTORY
        return EntryKind.FILE

    async def read_content(self, path: Union[str, Path]) -> bytes:
        """Read a file's full contents.

        Without follow_symlinks a symlink is never dereferenced; its
        link text is returned instead.

        Args:
            path: File to read

        Returns:
            Raw bytes of the file
        """
        path = Path(path)

        def _read_sync(entry: Path) -> bytes:
            if not self.follow_symlinks and entry.is_symlink():
                return os.fsencode(os.readlink(entry))
            return entry.read_bytes()

        async with self.semaphore:
            try:
                return await asyncio.to_thread(_read_sync, path)
            except OSError as e:
                raise translate_os_error(e, path, 'read_content') from e

    def __repr__(self) -> str:
        return (
            f"AsyncFileSystemAdapter(max_concurrent={self.max_concurrent}, "
            f"follow_symlinks={self.follow_symlinks})"
        )
