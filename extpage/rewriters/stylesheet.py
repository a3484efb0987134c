"""Shared stylesheet rewriter.

The stylesheet is modelled as an ordered list of blocks separated by blank
lines.  Each block is cut into segments at every registered marker comment;
text in front of the first marker is a shared segment.  A segment is owned
by a variant when one of the variant's ``StyleMatcher`` entries recognises
its marker comment.  Removing a variant's styling is a structural delete of
its segments; shared rules and headers are never touched.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import Path

from extpage.utils import read_text_async, write_text_async
from extpage.variants import Variant, VariantRegistry

_BLANK_LINES = re.compile(r"(\n[ \t]*\n(?:[ \t]*\n)*)")
_COMMENT = re.compile(r"/\*(.*?)\*/", re.DOTALL)


@dataclass
class StyleSegment:
    """Text from one marker comment up to the next (or the shared lead-in)."""

    text: str
    variant_id: str | None = None

    @property
    def leading_comment(self) -> str | None:
        match = _COMMENT.match(self.text.lstrip())
        return match.group(1).strip() if match else None


@dataclass
class StyleBlock:
    """A run of non-blank lines plus the blank-line separator after it."""

    text: str
    separator: str = ""
    segments: list[StyleSegment] = field(default_factory=list)

    @property
    def comments(self) -> list[str]:
        return [m.group(1).strip() for m in _COMMENT.finditer(self.text)]

    @property
    def is_comment_only(self) -> bool:
        return bool(self.comments) and not _COMMENT.sub("", self.text).strip()

    @property
    def owners(self) -> tuple[str | None, ...]:
        return tuple(s.variant_id for s in self.segments)

    def render(self, selected_id: str) -> str:
        """Return the block text with foreign segments removed.

        An untouched block is returned verbatim; a block that lost every
        segment disappears together with its separator.
        """
        kept = [s.text for s in self.segments if s.variant_id in (None, selected_id)]
        if len(kept) == len(self.segments):
            return self.text + self.separator
        text = "".join(kept).rstrip()
        return text + self.separator if text else ""


def marker_comments(registry: VariantRegistry) -> frozenset[str]:
    """Every comment text some variant uses as a style marker."""
    return frozenset(m.comment for v in registry for m in v.style_matchers)


def parse_stylesheet(raw: str, registry: VariantRegistry) -> list[StyleBlock]:
    """Split *raw* into blocks, segment them and tag each segment's owner.

    A block holding nothing but comments, at least one of them a marker, is
    merged with the block after it, so a marker separated from its rule by
    a blank line still belongs to that rule.  Other comment-only blocks
    (section headers) stay on their own.
    """
    markers = marker_comments(registry)
    parts = _BLANK_LINES.split(raw.replace("\r\n", "\n"))
    blocks: list[StyleBlock] = []
    pending: StyleBlock | None = None
    for index in range(0, len(parts), 2):
        text = parts[index]
        separator = parts[index + 1] if index + 1 < len(parts) else ""
        if pending is not None:
            text = pending.text + pending.separator + text
            pending = None
        block = StyleBlock(text=text, separator=separator)
        if separator and block.is_comment_only and markers.intersection(block.comments):
            pending = block
            continue
        blocks.append(block)
    if pending is not None:
        blocks.append(pending)

    for block in blocks:
        block.segments = _segments(block.text, markers)
        for segment in block.segments:
            segment.variant_id = _owner(segment, registry)
    return blocks


def _segments(text: str, markers: frozenset[str]) -> list[StyleSegment]:
    bounds = [m.start() for m in _COMMENT.finditer(text) if m.group(1).strip() in markers]
    if not bounds or text[: bounds[0]].strip():
        bounds.insert(0, 0)
    else:
        bounds[0] = 0
    ends = [*bounds[1:], len(text)]
    return [StyleSegment(text=text[start:end]) for start, end in zip(bounds, ends)]


def _owner(segment: StyleSegment, registry: VariantRegistry) -> str | None:
    comment = segment.leading_comment
    if comment is None:
        return None
    for variant in registry:
        if any(m.matches(comment, segment.text) for m in variant.style_matchers):
            return variant.id
    return None


def rewrite_stylesheet_text(raw: str, selected: Variant, registry: VariantRegistry) -> str:
    """Strip the segments of every variant except *selected*.

    The result has trailing whitespace trimmed and ends with exactly one
    newline.
    """
    blocks = parse_stylesheet(raw, registry)
    return "".join(b.render(selected.id) for b in blocks).rstrip() + "\n"


async def update_stylesheet(path: Path, selected: Variant, registry: VariantRegistry) -> None:
    raw = await read_text_async(path)
    await write_text_async(path, rewrite_stylesheet_text(raw, selected, registry))
