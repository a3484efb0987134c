"""Shared utility functions for the extension project generator.

Provides JSON and text file I/O with consistent error reporting,
file-system helpers, Rich-based console output, and logging setup.
"""

from __future__ import annotations

import asyncio
import json
import logging
from pathlib import Path
from typing import Any

from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from extpage.errors import MalformedConfigError

console = Console()
err_console = Console(stderr=True)

logger = logging.getLogger("extpage")


# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------


def configure_logging(verbose: bool = False) -> None:
    """Route the ``extpage`` logger through a Rich handler on stderr.

    Args:
        verbose: Emit DEBUG records when ``True``; WARNING and above otherwise.
    """
    level = logging.DEBUG if verbose else logging.WARNING
    logger.handlers.clear()
    handler = RichHandler(console=err_console, show_path=False, markup=False)
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)
    logger.setLevel(level)
    logger.propagate = False


# ---------------------------------------------------------------------------
# Text / JSON I/O
# ---------------------------------------------------------------------------


def read_text(path: str | Path) -> str:
    """Read a UTF-8 text file.

    Line endings are returned untouched so rewriters can decide how to
    normalise them.
    """
    with open(path, encoding="utf-8", newline="") as fh:
        return fh.read()


def write_text(path: str | Path, content: str) -> None:
    """Replace the whole content of a UTF-8 text file."""
    with open(path, "w", encoding="utf-8", newline="") as fh:
        fh.write(content)


def parse_json_object(raw: str, path: str | Path) -> dict[str, Any]:
    """Parse *raw* as a JSON object.

    Raises:
        MalformedConfigError: If the text is not valid JSON or the top-level
            value is not an object.
    """
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise MalformedConfigError(Path(path), f"invalid JSON ({exc})") from exc
    if not isinstance(data, dict):
        raise MalformedConfigError(
            Path(path), f"expected a JSON object, found {type(data).__name__}"
        )
    return data


def dump_json(data: dict[str, Any]) -> str:
    """Serialise *data* the way npm and the extension template format JSON."""
    return json.dumps(data, indent=2, ensure_ascii=False) + "\n"


async def read_text_async(path: str | Path) -> str:
    """Read a text file in a worker thread."""
    return await asyncio.to_thread(read_text, path)


async def write_text_async(path: str | Path, content: str) -> None:
    """Write a text file in a worker thread."""
    await asyncio.to_thread(write_text, path, content)


# ---------------------------------------------------------------------------
# File-system helpers
# ---------------------------------------------------------------------------


def is_within(path: Path, root: Path) -> bool:
    """Return ``True`` if *path* is *root* or lies underneath it."""
    try:
        path.resolve().relative_to(root.resolve())
    except ValueError:
        return False
    return True


# ---------------------------------------------------------------------------
# Rich output helpers
# ---------------------------------------------------------------------------


def print_error(message: str) -> None:
    """Print a red error message on stderr."""
    err_console.print(f"[bold red]{escape(message)}[/bold red]", highlight=False)


def print_warning(message: str) -> None:
    """Print a yellow warning message on stderr."""
    err_console.print(f"[bold yellow]{escape(message)}[/bold yellow]", highlight=False)
