"""Terminal interaction: the page-type menu and the run progress bar."""

from extpage.terminal.progress import ProgressReporter
from extpage.terminal.selector import (
    KeyboardEvents,
    MenuEvent,
    ScriptedEvents,
    VariantSelector,
)

__all__ = [
    "KeyboardEvents",
    "MenuEvent",
    "ProgressReporter",
    "ScriptedEvents",
    "VariantSelector",
]
