"""
Planned filesystem operations and their execution.

Mutating commands first build a complete Plan without touching the
filesystem. A dry run previews the plan; a real run executes it in order and
stops at the first failure, leaving completed operations in place.
"""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING, List, Optional

from .constants import get_logger
from .errors import FilesystemError

if TYPE_CHECKING:
    from .file_operations import FileOperations
    from .photo_set import PhotoEntry


class OperationKind(Enum):
    CREATE_DIR = "mkdir"
    RENAME = "rename"
    MOVE = "move"


class Outcome(Enum):
    PLANNED = "planned"
    SUCCEEDED = "succeeded"
    FAILED = "failed"
    NOT_ATTEMPTED = "not attempted"


@dataclass(frozen=True)
class PlannedOperation:
    """One filesystem mutation; for MOVE, target is the final file path."""

    kind: OperationKind
    source: Path
    target: Path

    def apply(self, file_ops: "FileOperations") -> None:
        if self.kind is OperationKind.CREATE_DIR:
            file_ops.create_dir(self.target)
        elif self.kind is OperationKind.RENAME:
            file_ops.rename_entry(self.source, self.target)
        else:
            file_ops.move_entry(self.source, self.target.parent)


@dataclass
class OperationResult:
    operation: PlannedOperation
    outcome: Outcome
    error: Optional[FilesystemError] = None


@dataclass
class Plan:
    """Ordered operations of one command, relative to a base directory."""

    command: str
    directory: Path
    operations: List[PlannedOperation] = field(default_factory=list)
    skipped: List["PhotoEntry"] = field(default_factory=list)

    def add(self, kind: OperationKind, source: Path, target: Path) -> None:
        self.operations.append(PlannedOperation(kind, source, target))

    @property
    def is_empty(self) -> bool:
        return not self.operations

    def relative(self, path: Path) -> str:
        """Path as shown in reports: relative to the plan directory when inside it."""
        try:
            return str(path.relative_to(self.directory))
        except ValueError:
            return str(path)

    def preview(self) -> "PlanReport":
        """Report for a dry run: every operation stays planned."""
        return PlanReport(self, [OperationResult(op, Outcome.PLANNED) for op in self.operations],
                          dry_run=True)

    def execute(self, file_ops: "FileOperations") -> "PlanReport":
        """Run operations in order, aborting the rest after the first failure."""
        logger = get_logger()
        results = []
        failure = None
        for op in self.operations:
            if failure is not None:
                results.append(OperationResult(op, Outcome.NOT_ATTEMPTED))
                continue
            try:
                op.apply(file_ops)
                results.append(OperationResult(op, Outcome.SUCCEEDED))
            except FilesystemError as e:
                logger.error(f"{op.kind.value} failed: {e}")
                failure = e
                results.append(OperationResult(op, Outcome.FAILED, e))
        return PlanReport(self, results, dry_run=False)


@dataclass
class PlanReport:
    """Per-operation outcome of a previewed or executed plan."""

    plan: Plan
    results: List[OperationResult]
    dry_run: bool

    def count(self, outcome: Outcome) -> int:
        return sum(1 for r in self.results if r.outcome is outcome)

    @property
    def succeeded(self) -> int:
        return self.count(Outcome.SUCCEEDED)

    @property
    def failed(self) -> int:
        return self.count(Outcome.FAILED)

    @property
    def not_attempted(self) -> int:
        return self.count(Outcome.NOT_ATTEMPTED)

    @property
    def error(self) -> Optional[FilesystemError]:
        for result in self.results:
            if result.error is not None:
                return result.error
        return None

    @property
    def unfinished(self) -> List[Path]:
        """Intermediate paths: created by a succeeded step, left by a step that did not run."""
        produced = [r.operation.target for r in self.results
                    if r.outcome is Outcome.SUCCEEDED and r.operation.kind is OperationKind.RENAME]
        pending = {r.operation.source for r in self.results if r.outcome is not Outcome.SUCCEEDED}
        return [path for path in produced if path in pending]

    @property
    def ok(self) -> bool:
        return self.failed == 0
