"""
Program constants, exit codes and shared logger/console accessors.
"""

import logging
import shutil
import subprocess
from enum import IntEnum
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

PROGRAM = "photo-dater"

RANGE_SEPARATOR = " - "

# Files that are never treated as photos
NUISANCE_NAMES = (
    ".ds_store", "thumbs.db", "desktop.ini", ".localized"
)

# Suffix used for the intermediate names of a two-phase files-rename
TEMP_SUFFIX = f".{PROGRAM}-tmp"


class ExitCode(IntEnum):
    """Process exit codes, stable across releases."""
    OK = 0
    MISMATCH = 1
    ERROR = 2
    UNMANAGED = 3
    INTERVAL_EXCEEDED = 4


_console: Optional[Console] = None
_console_handler: Optional[RichHandler] = None


def get_console() -> Console:
    """Shared rich console for user-facing output."""
    global _console
    if _console is None:
        _console = Console(soft_wrap=True)
    return _console


def get_logger() -> logging.Logger:
    return logging.getLogger(PROGRAM)


def configure_logging(verbose: bool = False) -> logging.Logger:
    """Attach the console handler once; WARNING and up unless verbose."""
    global _console_handler
    logger = get_logger()
    if _console_handler is None:
        _console_handler = RichHandler(console=get_console(), rich_tracebacks=True,
                                       show_path=False)
        _console_handler.setFormatter(logging.Formatter("%(message)s"))
        logger.addHandler(_console_handler)
        logger.propagate = False
    _console_handler.setLevel(logging.DEBUG if verbose else logging.WARNING)
    logger.setLevel(logging.DEBUG)
    return logger


def check_tool_availability(cmd: str, version_flag: str = "-ver") -> bool:
    """Check whether an external command-line tool can be executed."""
    if shutil.which(cmd) is None:
        return False
    try:
        subprocess.run([cmd, version_flag], capture_output=True, check=True)
        return True
    except (OSError, subprocess.CalledProcessError):
        return False


exiftool_available = check_tool_availability("exiftool", "-ver")
