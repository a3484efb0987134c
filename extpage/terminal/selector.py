"""Interactive page-type selection.

The menu consumes a stream of ``MenuEvent`` values and redraws the whole
frame after each one.  ``KeyboardEvents`` produces the stream from raw key
presses via ``readchar``; ``ScriptedEvents`` replays a fixed sequence and is
what tests use.
"""

from __future__ import annotations

import enum
import sys
from collections.abc import Iterable, Iterator

import readchar
from rich.console import Console
from rich.live import Live
from rich.panel import Panel
from rich.table import Table

from extpage.variants import Variant, VariantRegistry


class MenuEvent(enum.Enum):
    UP = "up"
    DOWN = "down"
    CONFIRM = "confirm"
    ABORT = "abort"


_KEY_EVENTS: dict[str, MenuEvent] = {
    readchar.key.UP: MenuEvent.UP,
    "k": MenuEvent.UP,
    readchar.key.DOWN: MenuEvent.DOWN,
    "j": MenuEvent.DOWN,
    readchar.key.ENTER: MenuEvent.CONFIRM,
    "\n": MenuEvent.CONFIRM,
    readchar.key.ESC: MenuEvent.ABORT,
    readchar.key.CTRL_C: MenuEvent.ABORT,
    readchar.key.CTRL_D: MenuEvent.ABORT,
    "q": MenuEvent.ABORT,
}


class KeyboardEvents:
    """Menu events read one key at a time from the terminal.

    Unrecognised keys are ignored.  Ctrl-C, end of input and a closed
    stream all end the stream with ``ABORT``.
    """

    def __iter__(self) -> Iterator[MenuEvent]:
        while True:
            try:
                key = readchar.readkey()
            except (KeyboardInterrupt, EOFError, OSError):
                yield MenuEvent.ABORT
                return
            if not key:
                yield MenuEvent.ABORT
                return
            event = _KEY_EVENTS.get(key)
            if event is not None:
                yield event


class ScriptedEvents:
    """Replays a fixed event sequence; an exhausted script aborts."""

    def __init__(self, events: Iterable[MenuEvent]) -> None:
        self.events = list(events)

    def __iter__(self) -> Iterator[MenuEvent]:
        yield from self.events
        yield MenuEvent.ABORT


class VariantSelector:
    """Arrow-key menu over the registered page variants.

    Args:
        registry: Variants to offer, in menu order.
        console: Console the menu is drawn on.
        events: Event source.  Defaults to ``KeyboardEvents``.
        interactive: Force (or disable) the interactive menu.  By default
            it is shown only when stdin is a terminal or an event source was
            injected.
    """

    prompt = "Select the page type to create"

    def __init__(
        self,
        registry: VariantRegistry,
        console: Console | None = None,
        events: Iterable[MenuEvent] | None = None,
        interactive: bool | None = None,
    ) -> None:
        self.registry = registry
        self.console = console or Console()
        self.events = events
        if interactive is None:
            interactive = events is not None or sys.stdin.isatty()
        self.interactive = interactive
        self.options: list[Variant] = list(registry)
        self.index = 0

    def select(self) -> Variant | None:
        """Block until a variant is confirmed.

        Returns the registry default straight away when not interactive, and
        ``None`` if the user aborts.
        """
        if not self.interactive:
            return self.registry.default

        self.index = 0
        events = self.events if self.events is not None else KeyboardEvents()
        with Live(self.render(), console=self.console, transient=True, auto_refresh=False) as live:
            for event in events:
                if event is MenuEvent.CONFIRM:
                    return self.options[self.index]
                if event is MenuEvent.ABORT:
                    return None
                self.move(event)
                live.update(self.render(), refresh=True)
        return None

    def move(self, event: MenuEvent) -> None:
        """Move the highlight one entry, wrapping at both ends."""
        step = -1 if event is MenuEvent.UP else 1
        self.index = (self.index + step) % len(self.options)

    def render(self) -> Panel:
        """Build the complete menu frame for the current highlight."""
        table = Table.grid(padding=(0, 2))
        table.add_column(style="cyan", justify="left", width=2)
        table.add_column(style="white", justify="left")

        for i, variant in enumerate(self.options):
            marker = "➤" if i == self.index else " "
            table.add_row(marker, f"[cyan]{variant.label}[/cyan] [dim]({variant.description})[/dim]")

        table.add_row("", "")
        table.add_row("", "[dim]↑/↓ to move, Enter to confirm, Esc to cancel[/dim]")
        return Panel(table, title=f"[bold]{self.prompt}[/bold]", border_style="cyan", padding=(1, 2))
