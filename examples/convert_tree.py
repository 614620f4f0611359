#!/usr/bin/env python3
"""
Basic conversion example showing how a pipeline step drives Tree2Json.

This example demonstrates:
- Resolving the source tree through an async accessor
- Writing <root_name>.json into a destination directory
- Handling a failed conversion
"""

import asyncio
import logging
import sys
from pathlib import Path

# Add parent directory to path for development
sys.path.insert(0, str(Path(__file__).parent.parent))

from tree2json import ConvertConfig, Tree2JsonError
from tree2json.aio import Tree2Json


async def main():
    """Convert a directory into a JSON document."""
    source = Path(sys.argv[1]) if len(sys.argv) > 1 else Path.cwd()
    destination = Path(sys.argv[2]) if len(sys.argv) > 2 else Path.cwd()

    async def read_tree(handle):
        # A real pipeline would resolve its own tree handle here
        return Path(handle).resolve()

    step = Tree2Json(source, config=ConvertConfig.pretty())
    try:
        target = await step.write(read_tree, destination)
    except Tree2JsonError as e:
        print(f"Conversion failed: {e}")
        return 1

    print(f"Wrote {target}")
    return 0


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    sys.exit(asyncio.run(main()))
