"""Removal of files that belong to the variants that were not selected."""

from __future__ import annotations

import asyncio
import logging
import shutil
from pathlib import Path

from extpage.variants import VariantRegistry

logger = logging.getLogger("extpage")


def remove_path(path: Path) -> bool:
    """Remove a file or directory tree.

    Returns ``True`` if something was removed and ``False`` if *path* did
    not exist.  Any other ``OSError`` propagates.
    """
    try:
        if path.is_dir() and not path.is_symlink():
            shutil.rmtree(path)
        else:
            path.unlink()
    except FileNotFoundError:
        return False
    return True


async def prune(destination: str | Path, selected: str, registry: VariantRegistry) -> list[Path]:
    """Delete every exclusive path of the non-selected variants.

    Idempotent: running it again on an already-pruned tree removes nothing
    and raises nothing.

    Returns:
        The paths that were actually removed.
    """
    root = Path(destination)
    targets = [
        root / relative
        for variant in registry.others(selected)
        for relative in variant.exclusive_paths
    ]
    removed = await asyncio.gather(*(asyncio.to_thread(remove_path, t) for t in targets))
    result = [t for t, done in zip(targets, removed) if done]
    for path in result:
        logger.debug("Pruned %s", path)
    return result
