"""Extension project generator pipeline.

Turns the three-variant extension template into a standalone project that
contains a single page type:

1. Copy the template (minus build output, VCS data and the target itself).
2. Copy the dev script from the otherwise ignored ``scripts/`` directory.
3. Prune the files of the page types that were not chosen.
4. Rewrite manifest, bundler config, stylesheet, README and package metadata.

Every stage declares the project state it needs and the state it leaves
behind, so stages cannot be reordered by accident.

Usage::

    extpage-create my-ext --type history
    python -m extpage.pipeline my-ext -t bookmarks --template ../extension-template
"""

from __future__ import annotations

import argparse
import asyncio
import enum
import logging
import os
import sys
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from pydantic import ValidationError
from rich.console import Console
from rich.panel import Panel

from extpage.config import GeneratorConfig
from extpage.errors import (
    DestinationNotEmptyError,
    GeneratorError,
    InvalidSelectionError,
    PipelineError,
    PipelineOrderError,
)
from extpage.rewriters import (
    update_build_config,
    update_lockfile,
    update_manifest,
    update_package,
    update_readme,
    update_stylesheet,
)
from extpage.scaffolder import TemplateRenderer, copy_aux_file, prune, replicate, self_copy_guard
from extpage.terminal import ProgressReporter, VariantSelector
from extpage.utils import configure_logging, print_error, print_warning
from extpage.utils import console as default_console
from extpage.variants import Variant, VariantRegistry, default_registry

logger = logging.getLogger("extpage")


# ---------------------------------------------------------------------------
# Run model
# ---------------------------------------------------------------------------


class ProjectState(enum.IntEnum):
    """Lifecycle of the target project during one run."""

    EMPTY = 0
    REPLICATED = 1
    PRUNED = 2
    REWRITTEN = 3


@dataclass(frozen=True)
class RunConfiguration:
    """Resolved inputs for one run."""

    target_dir: Path
    project_name: str
    variant: Variant


@dataclass
class TargetProject:
    """The destination tree and the state it has reached."""

    root: Path
    state: ProjectState = ProjectState.EMPTY

    def enter(self, stage: "Stage") -> None:
        if self.state is not stage.requires:
            raise PipelineOrderError(
                f"Stage '{stage.label}' needs a {stage.requires.name} project, "
                f"but {self.root} is {self.state.name}"
            )

    def leave(self, stage: "Stage") -> None:
        self.state = stage.produces


@dataclass(frozen=True)
class Stage:
    """One pipeline step with its required and resulting project state."""

    label: str
    requires: ProjectState
    produces: ProjectState
    action: Callable[[RunConfiguration], Awaitable[Any]]


# ---------------------------------------------------------------------------
# Pipeline
# ---------------------------------------------------------------------------


class Pipeline:
    """Drives a single generator run.

    Attributes:
        config: Template location, copy filters and rewritten file paths.
        registry: The page variants on offer.
        renderer: Jinja2 renderer for generated text fragments.
        console: Where progress and the final summary are printed.
    """

    def __init__(
        self,
        config: GeneratorConfig,
        registry: VariantRegistry | None = None,
        renderer: TemplateRenderer | None = None,
        console: Console | None = None,
    ) -> None:
        self.config = config
        self.registry = registry or default_registry()
        self.renderer = renderer or TemplateRenderer()
        self.console = console or default_console

    # ------------------------------------------------------------------
    # Input resolution
    # ------------------------------------------------------------------

    def resolve_run(
        self,
        target_arg: str | None,
        type_arg: str | None,
        selector: VariantSelector | None = None,
    ) -> RunConfiguration:
        """Resolve the target directory, project name and variant.

        An explicit, registered *type_arg* wins; anything else falls back to
        the interactive selector.

        Raises:
            InvalidSelectionError: If no variant could be resolved.
        """
        target = Path(target_arg or self.config.default_target).expanduser()
        target_dir = (Path.cwd() / target).resolve()

        variant: Variant | None = None
        if type_arg and type_arg in self.registry:
            variant = self.registry.get(type_arg)
        else:
            if type_arg:
                print_warning(
                    f"Unknown page type '{type_arg}'. "
                    f"Available: {', '.join(self.registry.ids())}"
                )
            selector = selector or VariantSelector(self.registry, self.console)
            variant = selector.select()

        if variant is None or variant.id not in self.registry:
            raise InvalidSelectionError()

        return RunConfiguration(
            target_dir=target_dir,
            project_name=target_dir.name,
            variant=variant,
        )

    # ------------------------------------------------------------------
    # Pre-flight
    # ------------------------------------------------------------------

    def prepare_target(self, target_dir: Path) -> None:
        """Make sure the template exists and the target is absent or empty.

        Creates the target when it does not exist yet.  Nothing is written
        when a check fails.
        """
        template_root = self.config.template_root
        if not template_root.is_dir():
            raise GeneratorError(
                f"Template directory not found: {template_root} "
                "(pass --template or set EXTPAGE_TEMPLATE_ROOT)"
            )

        if target_dir.exists():
            if not target_dir.is_dir():
                raise NotADirectoryError(f"Target exists and is not a directory: {target_dir}")
            if any(target_dir.iterdir()):
                raise DestinationNotEmptyError(target_dir)
        target_dir.mkdir(parents=True, exist_ok=True)

    # ------------------------------------------------------------------
    # Stages
    # ------------------------------------------------------------------

    def stages(self) -> list[Stage]:
        """The fixed stage sequence of a run."""
        replicated, pruned = ProjectState.REPLICATED, ProjectState.PRUNED
        return [
            Stage("Copy template", ProjectState.EMPTY, replicated, self._copy_template),
            Stage("Write dev script", replicated, replicated, self._copy_scripts),
            Stage("Prune files", replicated, pruned, self._prune),
            Stage("Update manifest", pruned, pruned, self._update_manifest),
            Stage("Update build config", pruned, pruned, self._update_build_config),
            Stage("Update styles", pruned, pruned, self._update_stylesheet),
            Stage("Update README", pruned, pruned, self._update_readme),
            Stage("Update package.json", pruned, pruned, self._update_package),
            Stage("Update package-lock.json", pruned, ProjectState.REWRITTEN, self._update_lockfile),
        ]

    async def _copy_template(self, run: RunConfiguration) -> None:
        template_root = self.config.template_root
        count = await replicate(
            template_root,
            run.target_dir,
            ignore_names=self.config.ignore_names,
            ignore_paths=self_copy_guard(template_root, run.target_dir),
        )
        logger.debug("Copied %d files from %s", count, template_root)

    async def _copy_scripts(self, run: RunConfiguration) -> None:
        for relative in self.config.aux_scripts:
            await copy_aux_file(self.config.template_root, run.target_dir, relative)

    async def _prune(self, run: RunConfiguration) -> None:
        removed = await prune(run.target_dir, run.variant.id, self.registry)
        logger.debug("Pruned %d paths", len(removed))

    async def _update_manifest(self, run: RunConfiguration) -> None:
        await update_manifest(self.config.manifest_file(run.target_dir), run.variant, self.registry)

    async def _update_build_config(self, run: RunConfiguration) -> None:
        await update_build_config(
            self.config.build_config_file(run.target_dir), run.variant, self.registry
        )

    async def _update_stylesheet(self, run: RunConfiguration) -> None:
        await update_stylesheet(
            self.config.stylesheet_file(run.target_dir), run.variant, self.registry
        )

    async def _update_readme(self, run: RunConfiguration) -> None:
        await update_readme(
            self.config.readme_file(run.target_dir),
            run.variant,
            self.config.readme_heading,
            self.renderer,
        )

    async def _update_package(self, run: RunConfiguration) -> None:
        await update_package(self.config.package_file(run.target_dir), run.project_name)

    async def _update_lockfile(self, run: RunConfiguration) -> None:
        if not await update_lockfile(self.config.lockfile(run.target_dir), run.project_name):
            logger.debug("No lockfile in %s, skipped", run.target_dir)

    # ------------------------------------------------------------------
    # Execution
    # ------------------------------------------------------------------

    async def run(self, run: RunConfiguration) -> TargetProject:
        """Execute every stage in order against a fresh target.

        The first failing stage stops the run.  Files written before the
        failure are left in place.

        Raises:
            DestinationNotEmptyError: If the target already has content.
            PipelineError: If a stage fails with an unexpected error.
            GeneratorError: For the generator's own fatal conditions.
        """
        await asyncio.to_thread(self.prepare_target, run.target_dir)
        project = TargetProject(root=run.target_dir)

        stages = self.stages()
        with ProgressReporter(len(stages), self.console) as progress:
            for stage in stages:
                progress.step(stage.label)
                project.enter(stage)
                logger.debug("Stage: %s", stage.label)
                try:
                    await stage.action(run)
                except GeneratorError:
                    raise
                except Exception as exc:
                    raise PipelineError(stage.label, str(exc)) from exc
                project.leave(stage)

        return project

    def print_summary(self, run: RunConfiguration) -> None:
        """Print the success panel with suggested next commands."""
        text = self.renderer.render(
            "summary.txt.j2",
            {
                "target_dir": run.target_dir,
                "variant": run.variant,
                "relative_target": os.path.relpath(run.target_dir, Path.cwd()),
            },
        )
        self.console.print()
        self.console.print(
            Panel(
                text.rstrip(),
                title="[bold]Project created[/bold]",
                border_style="bold green",
            ),
            highlight=False,
            markup=False,
        )


# ---------------------------------------------------------------------------
# CLI entry point
# ---------------------------------------------------------------------------


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="extpage-create",
        description="Create a browser-extension project with a single page type",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  extpage-create my-ext --type history\n"
            "  extpage-create my-ext -t bookmarks --template ../extension-template\n"
            "  extpage-create            # interactive menu, creates ./extension-app\n"
            "\n"
            "The template is read from --template, else $EXTPAGE_TEMPLATE_ROOT, else the\n"
            "current directory.  Run from the template root or pass --template.\n"
        ),
    )
    parser.add_argument(
        "target",
        nargs="?",
        default=None,
        help="Directory to create, relative to the current directory (default: extension-app)",
    )
    parser.add_argument(
        "--type", "-t",
        dest="type",
        default=None,
        help="Page type to generate; skips the interactive menu when valid",
    )
    parser.add_argument(
        "--template",
        type=Path,
        default=None,
        help=(
            "Template project root; required unless $EXTPAGE_TEMPLATE_ROOT is set "
            "or the current directory is the template"
        ),
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Log every stage",
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for ``extpage-create``."""
    args = build_parser().parse_args(argv)
    configure_logging(args.verbose)

    try:
        config = GeneratorConfig.from_env(template_root=args.template)
    except ValidationError as exc:
        print_error(f"Invalid configuration: {exc}")
        sys.exit(1)

    pipeline = Pipeline(config)
    try:
        run = pipeline.resolve_run(args.target, args.type)
        asyncio.run(pipeline.run(run))
    except (GeneratorError, OSError) as exc:
        print_error(f"Creation failed: {exc}")
        sys.exit(1)

    pipeline.print_summary(run)


if __name__ == "__main__":
    main()
