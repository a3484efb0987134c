"""Step-counting progress bar for a generator run."""

from __future__ import annotations

from rich.console import Console
from rich.progress import BarColumn, Progress, TaskID, TaskProgressColumn, TextColumn


class ProgressReporter:
    """Proportional progress bar advanced one named step at a time.

    Only draws when the console is an interactive terminal; otherwise every
    call is a no-op so piped output stays clean.  The bar is transient: after
    the final step it is cleared instead of lingering at 100%.
    """

    def __init__(self, total: int, console: Console | None = None) -> None:
        if total < 1:
            raise ValueError("total must be at least 1")
        self.total = total
        self.current = 0
        self.console = console or Console()
        self.enabled = self.console.is_terminal
        self._progress: Progress | None = None
        self._task: TaskID | None = None

    def __enter__(self) -> "ProgressReporter":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def step(self, label: str) -> None:
        """Count one finished step and show *label* next to the bar."""
        self.current = min(self.current + 1, self.total)
        if not self.enabled:
            return
        if self._progress is None:
            self._progress = Progress(
                BarColumn(bar_width=24),
                TaskProgressColumn(),
                TextColumn("{task.description}"),
                console=self.console,
                transient=True,
            )
            self._task = self._progress.add_task(label, total=self.total)
            self._progress.start()
        self._progress.update(self._task, completed=self.current, description=label)
        if self.current >= self.total:
            self.close()

    def close(self) -> None:
        """Stop drawing and clear the bar."""
        if self._progress is not None:
            self._progress.stop()
            self._progress = None
            self._task = None
