"""README rewriter.

The README is parsed into a flat list of heading-delimited sections.  The
page-listing section (identified by its exact heading line) extends until
the next heading of the same or a higher level; it is replaced wholesale
with a freshly rendered section describing only the selected page.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import Path

from extpage.scaffolder.templates import TemplateRenderer
from extpage.utils import read_text_async, write_text_async
from extpage.variants import Variant

_HEADING = re.compile(r"^(#{1,6})(?:[ \t]+.*)?$")
_FENCE = re.compile(r"^(`{3,}|~{3,})")


@dataclass
class Section:
    heading: str
    level: int
    body: list[str] = field(default_factory=list)

    def lines(self) -> list[str]:
        return [self.heading, *self.body]


@dataclass
class MarkdownDocument:
    preamble: list[str] = field(default_factory=list)
    sections: list[Section] = field(default_factory=list)

    @classmethod
    def parse(cls, raw: str) -> "MarkdownDocument":
        doc = cls()
        current: Section | None = None
        fence: str | None = None
        for line in raw.replace("\r\n", "\n").split("\n"):
            stripped = line.strip()
            if fence is not None:
                if stripped.startswith(fence):
                    fence = None
            elif _FENCE.match(stripped):
                fence = _FENCE.match(stripped).group(1)
            else:
                match = _HEADING.match(line)
                if match:
                    current = Section(heading=line, level=len(match.group(1)))
                    doc.sections.append(current)
                    continue
            (current.body if current is not None else doc.preamble).append(line)
        return doc

    def find(self, heading: str) -> tuple[int, int] | None:
        """Return the ``[start, end)`` section span headed by *heading*."""
        for start, section in enumerate(self.sections):
            if section.heading.rstrip() == heading:
                end = start + 1
                while end < len(self.sections) and self.sections[end].level > section.level:
                    end += 1
                return start, end
        return None

    def render(self) -> str:
        lines = list(self.preamble)
        for section in self.sections:
            lines.extend(section.lines())
        return "\n".join(lines)


def render_page_section(
    selected: Variant, heading: str, renderer: TemplateRenderer | None = None
) -> str:
    """Render the page-listing section for *selected*, without a trailing newline."""
    renderer = renderer or TemplateRenderer()
    text = renderer.render("readme_section.md.j2", {"heading": heading, "variant": selected})
    return text.strip()


def rewrite_readme_text(
    raw: str,
    selected: Variant,
    heading: str,
    renderer: TemplateRenderer | None = None,
) -> str:
    """Replace (or append) the page-listing section.

    Any further sections with the same heading are removed so the result
    holds exactly one.
    """
    section_text = render_page_section(selected, heading, renderer)
    doc = MarkdownDocument.parse(raw)

    span = doc.find(heading)
    if span is None:
        body = doc.render().rstrip()
        combined = f"{body}\n\n{section_text}" if body else section_text
        return combined + "\n"

    start, end = span
    replacement = MarkdownDocument.parse(section_text).sections
    if end < len(doc.sections):
        replacement[-1].body.append("")
    doc.sections[start:end] = replacement

    extra = _find_after(doc, heading, start + len(replacement))
    while extra is not None:
        del doc.sections[extra[0]:extra[1]]
        extra = _find_after(doc, heading, start + len(replacement))

    return doc.render().rstrip() + "\n"


def _find_after(doc: MarkdownDocument, heading: str, offset: int) -> tuple[int, int] | None:
    tail = MarkdownDocument(sections=doc.sections[offset:])
    span = tail.find(heading)
    if span is None:
        return None
    return span[0] + offset, span[1] + offset


async def update_readme(
    path: Path, selected: Variant, heading: str, renderer: TemplateRenderer | None = None
) -> None:
    raw = await read_text_async(path)
    await write_text_async(path, rewrite_readme_text(raw, selected, heading, renderer))
