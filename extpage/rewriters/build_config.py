"""Bundler configuration rewriter.

The configuration is modelled as an ordered list of line records, each
tagged with the variant whose entry-point marker starts the line.  Records
tagged with a non-selected variant are dropped; every other line is kept
verbatim and in order.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path

from extpage.utils import read_text_async, write_text_async
from extpage.variants import Variant, VariantRegistry

_LINE_BREAK = re.compile(r"\r?\n")


@dataclass(frozen=True)
class ConfigLine:
    """One line of the bundler configuration."""

    text: str
    variant_id: str | None = None


def parse_build_config(raw: str, registry: VariantRegistry) -> list[ConfigLine]:
    """Split *raw* into line records tagged by entry-point marker."""
    records: list[ConfigLine] = []
    for line in _LINE_BREAK.split(raw):
        content = line.lstrip()
        owner = next((v.id for v in registry if content.startswith(v.build_marker)), None)
        records.append(ConfigLine(text=line, variant_id=owner))
    return records


def rewrite_build_config_text(raw: str, selected: Variant, registry: VariantRegistry) -> str:
    """Drop the entry lines of every variant except *selected*.

    Finding no entry line at all is not an error; the text is returned with
    its line endings normalised.
    """
    records = parse_build_config(raw, registry)
    kept = [r.text for r in records if r.variant_id in (None, selected.id)]
    return "\n".join(kept)


async def update_build_config(path: Path, selected: Variant, registry: VariantRegistry) -> None:
    raw = await read_text_async(path)
    await write_text_async(path, rewrite_build_config_text(raw, selected, registry))
