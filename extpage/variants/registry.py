"""Page variant registry.

A single ordered collection of immutable variant descriptors.  The
selector, the pruner and every rewriter read the variants from here, so
adding a page type means registering one more ``Variant``.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Iterator

from pydantic import BaseModel, ConfigDict, Field

from extpage.errors import UnknownVariantError


# ---------------------------------------------------------------------------
# Descriptors
# ---------------------------------------------------------------------------


class StyleMatcher(BaseModel):
    """Identifies one variant-specific block inside the shared stylesheet.

    A block matches when its leading comment is exactly ``/* <comment> */``
    and, if ``selector`` is set, the selector token occurs in the block body.
    """

    model_config = ConfigDict(frozen=True)

    comment: str = Field(..., min_length=1, description="Text inside the marker comment")
    selector: str | None = Field(default=None, description="Selector token that must appear")

    def matches(self, leading_comment: str | None, body: str) -> bool:
        if leading_comment is None or leading_comment != self.comment:
            return False
        if self.selector is None:
            return True
        pattern = re.escape(self.selector) + r"(?![\w-])"
        return re.search(pattern, body) is not None


class Variant(BaseModel):
    """Everything the generator knows about one page variant."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., pattern=r"^[a-z][a-z0-9_-]*$")
    label: str
    description: str = ""
    html_path: str = Field(..., description="Overridden page HTML, relative to the project root")
    entry_path: str = Field(..., description="Script entry point, relative to the project root")
    permission: str | None = Field(default=None, description="Runtime permission the page needs")
    exclusive_paths: tuple[str, ...] = Field(
        default=(), description="Files/directories that belong only to this variant"
    )
    style_matchers: tuple[StyleMatcher, ...] = Field(default=())

    @property
    def html_filename(self) -> str:
        """File name used in the manifest override mapping."""
        return f"{self.id}.html"

    @property
    def build_marker(self) -> str:
        """Prefix of this variant's entry line in the build configuration."""
        return f"{self.id}: resolve("

    def metadata(self) -> dict[str, str | None]:
        """Return the display metadata as a plain mapping."""
        return {
            "label": self.label,
            "description": self.description,
            "html_path": self.html_path,
            "entry_path": self.entry_path,
            "permission": self.permission,
        }


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------


class VariantRegistry:
    """Ordered, validated collection of page variants.

    Declaration order matters: the first variant is the interactive default
    and the order drives menu rendering.
    """

    def __init__(self, variants: Iterable[Variant]) -> None:
        self._variants: tuple[Variant, ...] = tuple(variants)
        if not self._variants:
            raise ValueError("A variant registry needs at least one variant.")

        self._by_id: dict[str, Variant] = {}
        for variant in self._variants:
            if variant.id in self._by_id:
                raise ValueError(f"Duplicate variant id: {variant.id!r}")
            self._by_id[variant.id] = variant

        owners: dict[str, str] = {}
        for variant in self._variants:
            for path in variant.exclusive_paths:
                if path in owners and owners[path] != variant.id:
                    raise ValueError(
                        f"Path {path!r} is claimed by both {owners[path]!r} and {variant.id!r}"
                    )
                owners[path] = variant.id

    # -- Lookup ------------------------------------------------------------

    def __iter__(self) -> Iterator[Variant]:
        return iter(self._variants)

    def __len__(self) -> int:
        return len(self._variants)

    def __contains__(self, variant_id: object) -> bool:
        return variant_id in self._by_id

    @property
    def default(self) -> Variant:
        """The first declared variant."""
        return self._variants[0]

    def ids(self) -> list[str]:
        return [v.id for v in self._variants]

    def get(self, variant_id: str) -> Variant:
        try:
            return self._by_id[variant_id]
        except KeyError:
            raise UnknownVariantError(variant_id) from None

    def others(self, variant_id: str) -> list[Variant]:
        """Return every variant except *variant_id*, in declaration order."""
        self.get(variant_id)
        return [v for v in self._variants if v.id != variant_id]

    # -- Accessors ---------------------------------------------------------

    def metadata_of(self, variant_id: str) -> dict[str, str | None]:
        return self.get(variant_id).metadata()

    def exclusive_paths_of(self, variant_id: str) -> tuple[str, ...]:
        return self.get(variant_id).exclusive_paths

    def style_matchers_of(self, variant_id: str) -> tuple[StyleMatcher, ...]:
        return self.get(variant_id).style_matchers

    def permissions(self) -> list[str]:
        """All variant-specific permissions, in declaration order."""
        return [v.permission for v in self._variants if v.permission]


# ---------------------------------------------------------------------------
# Built-in variants
# ---------------------------------------------------------------------------


def _theme_matchers(variant_id: str, prefix: str) -> tuple[StyleMatcher, ...]:
    return (
        StyleMatcher(comment=f"{prefix} 特定全局样式"),
        StyleMatcher(comment="亮色主题背景渐变", selector=f"body.{variant_id}"),
        StyleMatcher(comment="暗色主题背景渐变", selector=f"body.{variant_id}"),
    )


def default_variants() -> list[Variant]:
    """The three page variants shipped in the extension template."""
    return [
        Variant(
            id="newtab",
            label="newtab",
            description="新标签页",
            html_path="src/newtab.html",
            entry_path="src/newtab/index.tsx",
            permission=None,
            exclusive_paths=(
                "src/newtab.html",
                "src/newtab",
                "src/components/NewTabContent",
            ),
            style_matchers=_theme_matchers("newtab", "NewTab"),
        ),
        Variant(
            id="history",
            label="history",
            description="历史记录页",
            html_path="src/history.html",
            entry_path="src/history/index.tsx",
            permission="history",
            exclusive_paths=(
                "src/history.html",
                "src/history",
                "src/components/HistoryContent",
            ),
            style_matchers=_theme_matchers("history", "History"),
        ),
        Variant(
            id="bookmarks",
            label="bookmarks",
            description="书签页",
            html_path="src/bookmarks.html",
            entry_path="src/bookmarks/index.tsx",
            permission="bookmarks",
            exclusive_paths=(
                "src/bookmarks.html",
                "src/bookmarks",
                "src/components/BookmarksContent",
            ),
            style_matchers=_theme_matchers("bookmarks", "Bookmarks"),
        ),
    ]


def default_registry() -> VariantRegistry:
    return VariantRegistry(default_variants())
