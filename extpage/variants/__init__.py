"""Page variant registry.

Quick usage::

    from extpage.variants import default_registry

    registry = default_registry()
    history = registry.get("history")
    registry.exclusive_paths_of("bookmarks")
"""

from extpage.variants.registry import (
    StyleMatcher,
    Variant,
    VariantRegistry,
    default_registry,
    default_variants,
)

__all__ = [
    "StyleMatcher",
    "Variant",
    "VariantRegistry",
    "default_registry",
    "default_variants",
]
