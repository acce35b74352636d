"""
History of executed operations for photo-dater.
"""

import logging
from datetime import datetime
from pathlib import Path
from typing import Optional, TYPE_CHECKING

from .constants import PROGRAM

if TYPE_CHECKING:
    from .plan import PlanReport


class HistoryManager:
    """Keeps the session log and the history of executed plans.

    Dry runs never write anything under the program root.
    """

    def __init__(self, root_dir: Path, dry_run: bool = False):
        self.root_dir = root_dir
        self.dry_run = dry_run
        self.history_log = self.root_dir / "history.log"
        self.session_log = self.root_dir / f"{PROGRAM}.log"
        self._file_handler: Optional[logging.FileHandler] = None
        self._logger: Optional[logging.Logger] = None

    def setup_session_logger(self, logger: logging.Logger) -> None:
        """Configure logger to also write to the session log file."""
        if self.dry_run or self._file_handler is not None:
            return

        self.root_dir.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(self.session_log, encoding='utf-8')
        file_handler.setLevel(logging.DEBUG)
        formatter = logging.Formatter(
            '%(asctime)s [%(name)s] %(levelname)s: %(message)s'
        )
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)
        self._file_handler = file_handler
        self._logger = logger

    def close(self) -> None:
        """Detach and close the session log handler."""
        if self._file_handler is None:
            return
        self._logger.removeHandler(self._file_handler)
        self._file_handler.close()
        self._file_handler = None

    def log_plan(self, report: "PlanReport") -> None:
        """Append an executed plan to history.log, one line per operation."""
        if self.dry_run or report.dry_run:
            return

        self.root_dir.mkdir(parents=True, exist_ok=True)

        timestamp = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
        status = "SUCCESS" if report.ok else "PARTIAL"
        plan = report.plan
        lines = [
            f"{timestamp} | {status} | {plan.command} | {plan.directory} | "
            f"Succeeded: {report.succeeded} | Failed: {report.failed} | "
            f"Not attempted: {report.not_attempted}\n"
        ]
        for result in report.results:
            op = result.operation
            lines.append(f"    {op.kind.value}: {op.source} -> {op.target} [{result.outcome.value}]\n")

        with open(self.history_log, 'a', encoding='utf-8') as f:
            f.writelines(lines)
