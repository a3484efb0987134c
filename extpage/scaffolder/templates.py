"""Jinja2 rendering of the text fragments the generator writes.

Provides the TemplateRenderer class which loads Jinja2 templates from the
``extpage/scaffolder/templates/`` directory and renders them with variant
and run context data.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, StrictUndefined, select_autoescape


_DEFAULT_TEMPLATE_DIR = Path(__file__).parent / "templates"


class TemplateRenderer:
    """Renders Jinja2 templates bundled with the generator.

    Templates live under a configurable directory and are rendered with a
    context dictionary (typically the selected variant and the run
    configuration).  Undefined variables are errors, never blank output.
    """

    def __init__(self, template_dir: str | Path | None = None) -> None:
        if template_dir is None:
            template_dir = _DEFAULT_TEMPLATE_DIR
        self.template_dir = Path(template_dir)
        self.env = Environment(
            loader=FileSystemLoader(str(self.template_dir)),
            autoescape=select_autoescape([]),
            undefined=StrictUndefined,
            keep_trailing_newline=True,
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self.env.filters["code"] = _code_filter

    def render(self, template_path: str, context: dict[str, Any]) -> str:
        """Render a single template with the provided context.

        Args:
            template_path: Path relative to the template directory (e.g.
                ``"readme_section.md.j2"``).
            context: Dictionary of variables available inside the template.
        """
        template = self.env.get_template(template_path)
        return template.render(**context)

    def list_templates(self) -> list[str]:
        """Return a sorted list of all ``.j2`` template paths."""
        if not self.template_dir.is_dir():
            return []
        return sorted(
            str(p.relative_to(self.template_dir)) for p in self.template_dir.rglob("*.j2")
        )


def _code_filter(value: str) -> str:
    """Wrap a value in markdown inline-code backticks."""
    return f"`{value}`"
