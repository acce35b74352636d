"""Progress reporting while reading metadata from a directory of photos."""

from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional

from rich.console import Console
from rich.progress import Progress, TaskID


class ScanProgress:
    """Progress bar state passed down to the metadata scan.

    An inactive instance (no progress bar) accepts the same calls and does
    nothing, so callers never need to check.
    """

    def __init__(self, progress: Optional[Progress] = None, task: Optional[TaskID] = None):
        self.progress = progress
        self.task = task

    @classmethod
    @contextmanager
    def track(cls, console: Console, total: int) -> Iterator["ScanProgress"]:
        """Show a transient progress bar for a scan of total files."""
        with Progress(console=console, transient=True) as progress:
            task = progress.add_task("Reading metadata...", total=total)
            yield cls(progress, task)

    @property
    def is_active(self) -> bool:
        return self.progress is not None and self.task is not None

    def reading(self, path: Path) -> None:
        if self.is_active:
            self.progress.update(self.task, description=f"Reading {path.name}")

    def done(self, steps: int = 1) -> None:
        if self.is_active:
            self.progress.advance(self.task, steps)
