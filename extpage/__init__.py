"""extpage -- single-page browser-extension project generator.

Creates a standalone project from a template that ships three alternative
extension pages (new tab, history, bookmarks), keeping only the chosen one
and rewriting the manifest, bundler config, stylesheet, README and package
metadata to match.
"""

__version__ = "0.1.0"
