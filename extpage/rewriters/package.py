"""Package metadata rewriter (``package.json`` and ``package-lock.json``)."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from extpage.utils import dump_json, parse_json_object, read_text_async, write_text_async


def rewrite_package(data: dict[str, Any], project_name: str) -> dict[str, Any]:
    """Rename the package and drop the template's ``bin`` declaration."""
    updated = dict(data)
    updated["name"] = project_name
    updated.pop("bin", None)
    return updated


def rewrite_lockfile(data: dict[str, Any], project_name: str) -> dict[str, Any]:
    """Mirror the new name into the lockfile root and its root package entry."""
    updated = dict(data)
    updated["name"] = project_name
    packages = updated.get("packages")
    if isinstance(packages, dict) and isinstance(packages.get(""), dict):
        packages = dict(packages)
        packages[""] = {**packages[""], "name": project_name}
        updated["packages"] = packages
    return updated


def rewrite_package_text(raw: str, project_name: str, path: Path = Path("package.json")) -> str:
    return dump_json(rewrite_package(parse_json_object(raw, path), project_name))


def rewrite_lockfile_text(
    raw: str, project_name: str, path: Path = Path("package-lock.json")
) -> str:
    return dump_json(rewrite_lockfile(parse_json_object(raw, path), project_name))


async def update_package(path: Path, project_name: str) -> None:
    raw = await read_text_async(path)
    await write_text_async(path, rewrite_package_text(raw, project_name, path))


async def update_lockfile(path: Path, project_name: str) -> bool:
    """Rename the lockfile if there is one.

    Returns:
        ``False`` when the lockfile does not exist (not an error), ``True``
        when it was rewritten.
    """
    try:
        raw = await read_text_async(path)
    except FileNotFoundError:
        return False
    await write_text_async(path, rewrite_lockfile_text(raw, project_name, path))
    return True
