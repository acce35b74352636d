"""
Photo entries of a directory and the date range they span.
"""

from dataclasses import dataclass
from datetime import date, datetime
from pathlib import Path
from typing import Callable, Dict, Iterable, Iterator, List, Optional

from .constants import get_logger
from .date_range import DateRange
from .errors import EmptyInputError
from .progress import ScanProgress

DateReader = Callable[[Path], Optional[datetime]]


@dataclass(frozen=True)
class PhotoEntry:
    """A file and its capture timestamp, if one was found."""

    path: Path
    timestamp: Optional[datetime] = None

    @property
    def name(self) -> str:
        return self.path.name

    @property
    def date(self) -> Optional[date]:
        return self.timestamp.date() if self.timestamp else None

    @property
    def is_dated(self) -> bool:
        return self.timestamp is not None


class PhotoSet:
    """Entries of one directory, built fresh for every command."""

    def __init__(self, entries: Iterable[PhotoEntry]):
        self.entries: List[PhotoEntry] = list(entries)

    @classmethod
    def build(cls, files: Iterable[Path], date_reader: DateReader,
              progress: Optional[ScanProgress] = None) -> "PhotoSet":
        """Read the timestamp of every file.

        Files without a timestamp are kept as skipped entries. Errors raised
        by date_reader (MetadataReadError) propagate to the caller.
        """
        logger = get_logger()
        progress = progress or ScanProgress()
        entries = []
        for path in files:
            progress.reading(path)
            timestamp = date_reader(path)
            if timestamp is None:
                logger.info(f"No EXIF date found: {path}")
            else:
                logger.debug(f"{path}: created {timestamp}")
            entries.append(PhotoEntry(path, timestamp))
            progress.done()
        return cls(entries)

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self) -> Iterator[PhotoEntry]:
        return iter(self.entries)

    @property
    def dated(self) -> List[PhotoEntry]:
        """Entries with a timestamp, ascending by timestamp then file name."""
        return sorted((e for e in self.entries if e.is_dated),
                      key=lambda e: (e.timestamp, e.name))

    @property
    def skipped(self) -> List[PhotoEntry]:
        """Entries without a timestamp, by file name."""
        return sorted((e for e in self.entries if not e.is_dated), key=lambda e: e.name)

    def sorted(self) -> List[PhotoEntry]:
        """All entries: dated ones in capture order, then the skipped ones."""
        return self.dated + self.skipped

    def range(self) -> DateRange:
        """Date range spanned by the dated entries.

        Raises:
            EmptyInputError: if no entry has a timestamp
        """
        dates = [e.date for e in self.entries if e.is_dated]
        if not dates:
            raise EmptyInputError("No photos with usable dates in directory")
        return DateRange.from_dates(dates)

    def group_by_day(self) -> Dict[date, List[PhotoEntry]]:
        """Dated entries grouped by capture date, in capture order."""
        groups: Dict[date, List[PhotoEntry]] = {}
        for entry in self.dated:
            groups.setdefault(entry.date, []).append(entry)
        return groups
