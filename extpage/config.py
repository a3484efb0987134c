"""Generator configuration.

Centralised, typed configuration for a generator run.  All settings use a
Pydantic v2 model so they are validated at construction time and can be
overridden from environment variables without boiler-plate.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, field_validator


DEFAULT_IGNORE_NAMES: tuple[str, ...] = (
    "node_modules",
    "dist",
    ".git",
    ".DS_Store",
    "scripts",
)


class GeneratorConfig(BaseModel):
    """Global generator configuration.

    Holds the template location, the copy filters and the location of every
    file the rewriters touch.  Instances are created once by the CLI entry
    point and passed to ``Pipeline``.
    """

    template_root: Path = Field(default_factory=Path.cwd, validate_default=True)
    default_target: str = Field(default="extension-app", min_length=1)
    ignore_names: tuple[str, ...] = Field(default=DEFAULT_IGNORE_NAMES)
    aux_scripts: tuple[str, ...] = Field(
        default=("scripts/dev.js",),
        description="Files copied individually even though their directory is ignored",
    )

    # Files rewritten for the selected variant, relative to the project root.
    manifest_path: str = Field(default="src/manifest.json")
    build_config_path: str = Field(default="vite.config.ts")
    stylesheet_path: str = Field(default="src/style.css")
    readme_path: str = Field(default="README.md")
    package_path: str = Field(default="package.json")
    lockfile_path: str = Field(default="package-lock.json")

    readme_heading: str = Field(default="### 页面覆盖")

    @field_validator("template_root")
    @classmethod
    def _resolve_template_root(cls, value: Path) -> Path:
        return Path(value).expanduser().resolve()

    @field_validator("readme_heading")
    @classmethod
    def _check_heading(cls, value: str) -> str:
        if not value.startswith("#"):
            raise ValueError("readme_heading must be a markdown ATX heading")
        return value.strip()

    # ------------------------------------------------------------------
    # Derived paths
    # ------------------------------------------------------------------

    def manifest_file(self, root: Path) -> Path:
        """Path to the extension manifest inside *root*."""
        return root / self.manifest_path

    def build_config_file(self, root: Path) -> Path:
        """Path to the bundler configuration inside *root*."""
        return root / self.build_config_path

    def stylesheet_file(self, root: Path) -> Path:
        """Path to the shared stylesheet inside *root*."""
        return root / self.stylesheet_path

    def readme_file(self, root: Path) -> Path:
        return root / self.readme_path

    def package_file(self, root: Path) -> Path:
        return root / self.package_path

    def lockfile(self, root: Path) -> Path:
        return root / self.lockfile_path

    # ------------------------------------------------------------------
    # Construction helpers
    # ------------------------------------------------------------------

    @classmethod
    def from_env(cls, **overrides: Any) -> "GeneratorConfig":
        """Build a ``GeneratorConfig`` from environment variables.

        Recognised variables (all optional):
            EXTPAGE_TEMPLATE_ROOT, EXTPAGE_DEFAULT_TARGET, EXTPAGE_IGNORE_NAMES.

        Keyword *overrides* win over the environment; ``None`` values are
        ignored so CLI options can be passed straight through.
        """
        kwargs: dict[str, Any] = {}
        if os.environ.get("EXTPAGE_TEMPLATE_ROOT"):
            kwargs["template_root"] = Path(os.environ["EXTPAGE_TEMPLATE_ROOT"])
        if os.environ.get("EXTPAGE_DEFAULT_TARGET"):
            kwargs["default_target"] = os.environ["EXTPAGE_DEFAULT_TARGET"]
        if os.environ.get("EXTPAGE_IGNORE_NAMES"):
            names = os.environ["EXTPAGE_IGNORE_NAMES"].split(",")
            kwargs["ignore_names"] = tuple(n.strip() for n in names if n.strip())

        kwargs.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**kwargs)
