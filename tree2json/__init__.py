"""Tree2Json - roll a directory tree up into a single JSON document.

Each directory becomes an object keyed by entry name, each file becomes a
string holding its contents, keyed by its name with the extension stripped.

Typical use from a build pipeline step:
━━━━━━━━━━━━━━━━━━━━━━━━━━
    from tree2json.aio import convert

    await convert(resolve_root, "dist/")
━━━━━━━━━━━━━━━━━━━━━━━━━━
"""

__version__ = "0.1.0"

from . import aio
from .config import ConvertConfig, CollisionPolicy
from .errors import (
    Tree2JsonError,
    TreeIOError,
    IOErrorKind,
    KeyCollisionError,
    ConfigError,
    TraversalCancelled,
)

__all__ = [
    "__version__",
    "aio",
    "ConvertConfig",
    "CollisionPolicy",
    "Tree2JsonError",
    "TreeIOError",
    "IOErrorKind",
    "KeyCollisionError",
    "ConfigError",
    "TraversalCancelled",
]
