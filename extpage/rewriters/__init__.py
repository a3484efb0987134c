"""Per-file rewriters that specialise a copied template for one page variant.

Each rewriter owns exactly one file, rewrites it whole, and is idempotent.
The pure ``rewrite_*_text`` functions hold the logic; the ``update_*``
coroutines do the file I/O.
"""

from extpage.rewriters.build_config import rewrite_build_config_text, update_build_config
from extpage.rewriters.manifest import rewrite_manifest_text, update_manifest
from extpage.rewriters.package import (
    rewrite_lockfile_text,
    rewrite_package_text,
    update_lockfile,
    update_package,
)
from extpage.rewriters.readme import rewrite_readme_text, update_readme
from extpage.rewriters.stylesheet import rewrite_stylesheet_text, update_stylesheet

__all__ = [
    "rewrite_build_config_text",
    "rewrite_lockfile_text",
    "rewrite_manifest_text",
    "rewrite_package_text",
    "rewrite_readme_text",
    "rewrite_stylesheet_text",
    "update_build_config",
    "update_lockfile",
    "update_manifest",
    "update_package",
    "update_readme",
    "update_stylesheet",
]
