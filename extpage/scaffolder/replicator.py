"""Template tree replication.

Copies the template project into the target directory, skipping ignored
names and ignored absolute paths.  Sibling entries are copied concurrently;
the blocking file-system calls run in worker threads.
"""

from __future__ import annotations

import asyncio
import logging
import os
import shutil
from collections.abc import Iterable
from pathlib import Path

from extpage.utils import is_within

logger = logging.getLogger("extpage")


def self_copy_guard(template_root: Path, target_dir: Path) -> frozenset[Path]:
    """Return the ignore-path set that keeps *target_dir* out of the copy.

    When the target lives inside the template, walking the template would
    eventually reach the target itself and copy it into itself forever.
    """
    if is_within(target_dir, template_root):
        return frozenset({target_dir.resolve()})
    return frozenset()


async def replicate(
    source: str | Path,
    destination: str | Path,
    ignore_names: Iterable[str] = (),
    ignore_paths: Iterable[str | Path] = (),
) -> int:
    """Recursively copy *source* into *destination*.

    Args:
        source: Template directory to read from.
        destination: Directory to write into.  It and its sub-directories
            are created on demand; existing directories are reused.
        ignore_names: Entry names skipped at any depth (e.g. ``node_modules``).
        ignore_paths: Absolute source paths skipped entirely.

    Returns:
        Number of files copied.
    """
    names = frozenset(ignore_names)
    paths = frozenset(Path(p).resolve() for p in ignore_paths)
    return await _copy_dir(Path(source), Path(destination), names, paths)


async def _copy_dir(
    source: Path,
    destination: Path,
    ignore_names: frozenset[str],
    ignore_paths: frozenset[Path],
) -> int:
    await asyncio.to_thread(destination.mkdir, parents=True, exist_ok=True)
    entries = await asyncio.to_thread(_list_entries, source)

    tasks = []
    for entry in entries:
        if entry.name in ignore_names:
            continue
        source_path = Path(entry.path)
        if source_path.resolve() in ignore_paths:
            logger.debug("Skipping %s (target directory)", source_path)
            continue
        dest_path = destination / entry.name

        if entry.is_dir(follow_symlinks=False):
            tasks.append(_copy_dir(source_path, dest_path, ignore_names, ignore_paths))
        elif entry.is_file(follow_symlinks=False):
            tasks.append(_copy_file(source_path, dest_path))

    counts = await asyncio.gather(*tasks)
    return sum(counts)


async def _copy_file(source: Path, destination: Path) -> int:
    await asyncio.to_thread(shutil.copy, source, destination)
    return 1


def _list_entries(path: Path) -> list[os.DirEntry[str]]:
    with os.scandir(path) as it:
        return sorted(it, key=lambda e: e.name)


async def copy_aux_file(source_root: Path, target_root: Path, relative: str) -> Path:
    """Copy a single file that lives in an otherwise ignored directory."""
    source = source_root / relative
    destination = target_root / relative

    def _copy() -> None:
        destination.parent.mkdir(parents=True, exist_ok=True)
        shutil.copy(source, destination)

    await asyncio.to_thread(_copy)
    return destination
