"""Serialization of a finished document to a JSON file.

The file is written to a temporary sibling first and moved into place
with os.replace, so a failed write never leaves a truncated
`<root_name>.json` behind and never clobbers an existing one.
"""

import asyncio
import json
import logging
import os
import stat
import tempfile
from pathlib import Path
from typing import Optional, Union

from ..config import ConvertConfig
from ..errors import translate_os_error
from .core import Document

logger = logging.getLogger(__name__)


class JsonWriter:
    """Writes documents as `<root_name>.json` files."""

    def __init__(self, config: Optional[ConvertConfig] = None):
        self.config = config or ConvertConfig()

    def serialize(self, document: Document) -> str:
        """Serialize a document to JSON text.

        Compact output uses no whitespace between tokens; non-ASCII
        characters are kept as-is.
        """
        separators = (',', ':') if self.config.indent is None else None
        return json.dumps(
            document,
            ensure_ascii=False,
            indent=self.config.indent,
            sort_keys=self.config.sort_keys,
            separators=separators,
        )

    def destination(self, destination_dir: Union[str, Path], root_name: str) -> Path:
        """Path of the output file for a given root name."""
        return Path(destination_dir) / f"{root_name}.json"

    async def write(
        self,
        document: Document,
        destination_dir: Union[str, Path],
        root_name: str,
    ) -> Path:
        """Serialize and persist a document.

        Args:
            document: Complete document from a successful walk
            destination_dir: Existing directory to write into
            root_name: Base name of the output file (without .json)

        Returns:
            Path of the written file

        Raises:
            TreeIOError: If the file cannot be written
        """
        target = self.destination(destination_dir, root_name)
        text = self.serialize(document)
        try:
            await asyncio.to_thread(_write_atomic, target, text)
        except OSError as e:
            raise translate_os_error(e, target, 'write') from e
        logger.debug("Wrote %d characters to %s", len(text), target)
        return target


def _output_mode(target: Path) -> int:
    """Mode for the output file: the existing file's, else 0o666 less the umask."""
    try:
        return stat.S_IMODE(os.stat(target).st_mode)
    except FileNotFoundError:
        umask = os.umask(0)
        os.umask(umask)
        return 0o666 & ~umask


def _write_atomic(target: Path, text: str) -> None:
    mode = _output_mode(target)
    fd, tmp_name = tempfile.mkstemp(
        prefix=f".{target.name}.", suffix=".tmp", dir=target.parent
    )
    try:
        with os.fdopen(fd, 'w', encoding='utf-8') as handle:
            handle.write(text)
        # mkstemp creates the file owner-only
        os.chmod(tmp_name, mode)
        os.replace(tmp_name, target)
    except BaseException:
        try:
            os.unlink(tmp_name)
        except OSError:
            pass
        raise
