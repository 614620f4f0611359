"""Configuration for Tree2Json conversions.

This module defines how callers tune a conversion: concurrency limits,
how file contents are decoded, how key collisions are treated, and how
the finished document is formatted.
"""

import codecs
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

from .errors import ConfigError


class CollisionPolicy(Enum):
    """What to do when two entries normalize to the same document key."""
    OVERWRITE = "overwrite"   # Later insert wins (directories are never replaced)
    ERROR = "error"           # Fail the conversion with KeyCollisionError


@dataclass
class ConvertConfig:
    """Complete configuration for one conversion.

    The same config may be shared by many conversions; it holds no
    per-conversion state.
    """

    # Concurrency
    max_concurrent: int = 100       # Simultaneous I/O calls per adapter

    # Source tree
    follow_symlinks: bool = True    # Classify symlinks by their target

    # Decoding
    encoding: str = "utf-8"
    decode_errors: str = "strict"   # codecs error handler for file contents

    # Document assembly
    collision: CollisionPolicy = CollisionPolicy.OVERWRITE

    # Output formatting
    indent: Optional[int] = None    # None = compact JSON
    sort_keys: bool = False

    @classmethod
    def strict(cls) -> 'ConvertConfig':
        """Create config that fails on key collisions.

        Returns:
            ConvertConfig with CollisionPolicy.ERROR
        """
        return cls(collision=CollisionPolicy.ERROR)

    @classmethod
    def pretty(cls, indent: int = 2) -> 'ConvertConfig':
        """Create config producing human-readable, stable output.

        Args:
            indent: Spaces per indentation level

        Returns:
            ConvertConfig with indentation and sorted keys
        """
        return cls(indent=indent, sort_keys=True)

    def validate(self) -> List[str]:
        """Validate configuration for consistency.

        Returns:
            List of validation errors (empty if valid)
        """
        errors = []

        if self.max_concurrent <= 0:
            errors.append("max_concurrent must be positive")

        try:
            codecs.lookup(self.encoding)
        except LookupError:
            errors.append(f"unknown encoding: {self.encoding}")

        try:
            codecs.lookup_error(self.decode_errors)
        except LookupError:
            errors.append(f"unknown decode error handler: {self.decode_errors}")

        if not isinstance(self.collision, CollisionPolicy):
            errors.append("collision must be a CollisionPolicy")

        if self.indent is not None and self.indent < 0:
            errors.append("indent cannot be negative")

        return errors

    def ensure_valid(self) -> 'ConvertConfig':
        """Raise ConfigError if the configuration is invalid.

        Returns:
            self, for chaining
        """
        errors = self.validate()
        if errors:
            raise ConfigError("; ".join(errors))
        return self
