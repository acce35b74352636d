"""
Exceptions raised by photo-dater.

Parsing outcomes that are legitimate answers (an unmanaged directory name, a
name that does not match its contents) are reported as status values by the
callers; these classes are what crosses module boundaries.
"""

from pathlib import Path
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from .date_range import DateRange


class PhotoDaterError(Exception):
    """Base class for all photo-dater errors."""
    pass


class EmptyInputError(PhotoDaterError):
    """No dated photos to derive a date range from."""

    def __init__(self, message: str = "No photos with EXIF dates found"):
        super().__init__(message)


class NoRangeError(PhotoDaterError):
    """Text does not start with a date range."""

    def __init__(self, text: str):
        self.text = text
        super().__init__(f"No date range at the start of '{text}'")


class RangeTooWideError(PhotoDaterError):
    """Date range spans more days than allowed."""

    def __init__(self, date_range: "DateRange", max_interval: int):
        self.date_range = date_range
        self.max_interval = max_interval
        super().__init__(
            f"Interval from {date_range.start} to {date_range.end} is too large "
            f"({date_range.days} days, allowed {max_interval})"
        )


class FilesystemError(PhotoDaterError):
    """An OS-level error on a specific path."""

    def __init__(self, path: Path, error: OSError):
        self.path = path
        self.error = error
        reason = error.strerror or str(error)
        super().__init__(f"{path}: {reason}")


class MetadataReadError(PhotoDaterError):
    """A file that should hold metadata could not be read at all."""

    def __init__(self, path: Path, error: Optional[Exception] = None):
        self.path = path
        self.error = error
        reason = f": {error}" if error else ""
        super().__init__(f"Could not read metadata from {path}{reason}")


class NameConflictError(PhotoDaterError):
    """A planned target name is already taken by a file outside the plan."""

    def __init__(self, path: Path):
        self.path = path
        super().__init__(f"Target already exists: {path}")
