"""Document node types.

A document is plain JSON-shaped data: directories are dicts keyed by
entry name, leaves are the decoded file contents as str.
"""

from enum import Enum
from typing import Any, Dict, Tuple


class EntryKind(Enum):
    """Result of classifying a directory entry."""
    DIRECTORY = "directory"
    FILE = "file"


# The root directory node built by one traversal. Directory nodes are
# dicts mapping names to nodes; leaves are str.
Document = Dict[str, Any]

# Segments from the traversal root to an entry; the last one is its key.
PathKey = Tuple[str, ...]


def is_directory(node: Any) -> bool:
    """Check if a document node is a directory node."""
    return isinstance(node, dict)


def leaf_key(name: str) -> str:
    """Document key for a file entry.

    Everything from the first '.' on is dropped, so 'notes.txt' and
    'notes.tar.gz' both become 'notes'. Names without a '.' are kept
    verbatim.

    Args:
        name: File name (no directory part)

    Returns:
        Key under which the file's contents are stored
    """
    return name.split('.', 1)[0]
