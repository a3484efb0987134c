"""Extension manifest rewriter.

Points ``chrome_url_overrides`` at the selected page and keeps exactly the
variant permission that page needs.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from extpage.errors import MalformedConfigError
from extpage.utils import dump_json, parse_json_object, read_text_async, write_text_async
from extpage.variants import Variant, VariantRegistry


def rewrite_manifest(
    data: dict[str, Any], selected: Variant, registry: VariantRegistry
) -> dict[str, Any]:
    """Return a copy of the manifest specialised for *selected*."""
    permissions = data.get("permissions", [])
    if not isinstance(permissions, list):
        raise TypeError("'permissions' must be a list")

    variant_permissions = set(registry.permissions())
    kept = [p for p in permissions if p not in variant_permissions]
    if selected.permission:
        kept.append(selected.permission)

    updated = dict(data)
    updated["chrome_url_overrides"] = {selected.id: selected.html_filename}
    updated["permissions"] = list(dict.fromkeys(kept))
    return updated


def rewrite_manifest_text(
    raw: str, selected: Variant, registry: VariantRegistry, path: Path = Path("manifest.json")
) -> str:
    data = parse_json_object(raw, path)
    try:
        updated = rewrite_manifest(data, selected, registry)
    except TypeError as exc:
        raise MalformedConfigError(path, str(exc)) from exc
    return dump_json(updated)


async def update_manifest(path: Path, selected: Variant, registry: VariantRegistry) -> None:
    raw = await read_text_async(path)
    await write_text_async(path, rewrite_manifest_text(raw, selected, registry, path))
