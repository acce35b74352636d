"""
Directory organizing commands.
"""

import os
from datetime import date
from pathlib import Path
from typing import List, Optional

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from .constants import get_console, get_logger
from .date_range import DateRange
from .directory_namer import DirectoryNamer, NameCheck
from .errors import NameConflictError
from .file_operations import FileOperations, is_staged, original_name, staged_path
from .history import HistoryManager
from .photo_set import DateReader, PhotoEntry, PhotoSet
from .plan import OperationKind, Outcome, Plan, PlanReport
from .progress import ScanProgress
from .timestamps import read_creation_date

OUTCOME_STYLES = {
    Outcome.SUCCEEDED: "green",
    Outcome.FAILED: "red",
    Outcome.NOT_ATTEMPTED: "yellow",
}


class FileOrganizer:
    """Commands operating on the photos directly inside one directory."""

    def __init__(self, directory: Path, date_reader: Optional[DateReader] = None,
                 ignore_hidden: bool = True, history_manager: Optional[HistoryManager] = None,
                 console: Optional[Console] = None):
        self.directory = directory
        self.date_reader = date_reader or read_creation_date
        self.history_manager = history_manager
        self.console = console or get_console()
        self.logger = get_logger()
        self.file_ops = FileOperations(ignore_hidden=ignore_hidden)
        self.namer = DirectoryNamer(directory.name)
        self._photos: Optional[PhotoSet] = None

    @property
    def photos(self) -> PhotoSet:
        """Photos of the directory, read on first use."""
        if self._photos is None:
            files = self.file_ops.list_entries(self.directory)
            self.logger.info(f"Reading metadata of {len(files)} files in {self.directory}")
            if self.console.is_terminal and files:
                with ScanProgress.track(self.console, len(files)) as progress:
                    self._photos = PhotoSet.build(files, self.date_reader, progress)
            else:
                self._photos = PhotoSet.build(files, self.date_reader)
        return self._photos

    def date_range(self) -> DateRange:
        return self.photos.range()

    def status(self) -> NameCheck:
        return self.namer.status(self.date_range())

    def check(self, max_interval: int) -> DateRange:
        """Date range of the photos; RangeTooWideError when wider than max_interval."""
        date_range = self.date_range()
        DirectoryNamer.check_interval(date_range, max_interval)
        return date_range

    def list_photos(self) -> List[PhotoEntry]:
        return self.photos.sorted()

    def plan_rename(self, max_interval: int) -> Plan:
        """Plan renaming the directory after the date range of its photos."""
        date_range = self.check(max_interval)
        plan = Plan("rename", self.directory.parent)
        if self.namer.needs_rename(date_range):
            target = self.directory.with_name(self.namer.target_name(date_range))
            plan.add(OperationKind.RENAME, self.directory, target)
        return plan

    def plan_files_rename(self, name: Optional[str] = None) -> Plan:
        """Plan renaming dated files to <base>-<n><ext> in capture order.

        The sequence is zero-padded to the number of digits of the file
        count. When a target name belongs to another file being renamed, all
        files go through a staged name first. Files still under a staged name
        from an interrupted run are renamed straight to their target.
        """
        base = name or self.namer.parsed.suffix or self.directory.name
        dated = self.photos.dated
        width = len(str(len(dated)))

        renames = []
        for index, entry in enumerate(dated, start=1):
            extension = Path(original_name(entry.path)).suffix.lower()
            target = self.directory / f"{base}-{index:0{width}d}{extension}"
            if target != entry.path:
                renames.append((entry.path, target))

        sources = {source for source, _ in renames}
        for source, target in renames:
            if os.path.lexists(target) and target not in sources and not _same_file(source, target):
                raise NameConflictError(target)

        plan = Plan("files-rename", self.directory, skipped=self.photos.skipped)
        if any(target in sources for _, target in renames):
            staged = []
            for source, target in renames:
                if is_staged(source):
                    staged.append((source, target))
                    continue
                temp = staged_path(source)
                plan.add(OperationKind.RENAME, source, temp)
                staged.append((temp, target))
            renames = staged
        for source, target in renames:
            plan.add(OperationKind.RENAME, source, target)
        return plan

    def plan_move_by_days(self) -> Plan:
        """Plan moving dated files into one YYYY-MM-DD subdirectory per day."""
        plan = Plan("move-by-days", self.directory, skipped=self.photos.skipped)
        for day, entries in self.photos.group_by_day().items():
            day_dir = self.day_directory(day)
            if not day_dir.is_dir():
                plan.add(OperationKind.CREATE_DIR, day_dir, day_dir)
            for entry in entries:
                plan.add(OperationKind.MOVE, entry.path, day_dir / entry.name)
        return plan

    def day_directory(self, day: date) -> Path:
        return self.directory / DateRange.single(day).format()

    def run(self, plan: Plan, dry_run: bool = False) -> PlanReport:
        """Preview or execute a plan and record executed plans in the history."""
        if dry_run:
            return plan.preview()

        self.logger.info(f"Executing {plan.command}: {len(plan.operations)} operations")
        report = plan.execute(self.file_ops)
        if self.history_manager is not None:
            self.history_manager.log_plan(report)
        return report

    def print_photos(self, entries: List[PhotoEntry]) -> None:
        table = Table(title=f"Photos in {escape(self.directory.name)}")
        table.add_column("File", style="cyan")
        table.add_column("Created", style="green")

        for entry in entries:
            if entry.is_dated:
                table.add_row(escape(entry.name), entry.timestamp.strftime("%Y-%m-%d %H:%M:%S"))
            else:
                table.add_row(escape(entry.name), "[yellow]no EXIF date (skipped)[/yellow]")

        self.console.print(table)

    def print_plan(self, plan: Plan) -> None:
        """Display the plan; printed the same way for dry and real runs."""
        self.console.print(f"\n[bold]Plan:[/bold] {plan.command} in [blue]{escape(str(plan.directory))}[/blue]")
        self.console.print(f"  Operations: [cyan]{len(plan.operations)}[/cyan]")
        for op in plan.operations:
            if op.kind is OperationKind.CREATE_DIR:
                self.console.print(f"  {op.kind.value:<6} {escape(plan.relative(op.target))}")
            else:
                self.console.print(f"  {op.kind.value:<6} {escape(plan.relative(op.source))} => "
                                   f"{escape(plan.relative(op.target))}")
        for entry in plan.skipped:
            self.console.print(f"  [yellow]skip   {escape(entry.name)} (no EXIF date)[/yellow]")

    def print_report(self, report: PlanReport) -> None:
        """Print the outcome of every operation of an executed or previewed plan."""
        if report.dry_run:
            self.console.print("\n[yellow]Dry run: no changes made[/yellow]")
            return

        table = Table(title="Execution Summary")
        table.add_column("Operation", style="cyan")
        table.add_column("Outcome")

        plan = report.plan
        for result in report.results:
            op = result.operation
            label = f"{op.kind.value} {plan.relative(op.target)}"
            style = OUTCOME_STYLES[result.outcome]
            table.add_row(escape(label), f"[{style}]{result.outcome.value}[/{style}]")

        self.console.print(table)
        self.console.print(f"Succeeded: {report.succeeded}, failed: {report.failed}, "
                           f"not attempted: {report.not_attempted}")
        unfinished = report.unfinished
        if unfinished:
            self.console.print(f"[yellow]{len(unfinished)} files left under a temporary name, "
                               f"run {plan.command} again to finish:[/yellow]")
            for path in unfinished:
                self.console.print(f"  {escape(plan.relative(path))}")


def _same_file(first: Path, second: Path) -> bool:
    try:
        return os.path.samefile(first, second)
    except OSError:
        return False
