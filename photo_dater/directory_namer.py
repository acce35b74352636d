"""
Directory names carrying a date range prefix.

A managed directory name is the canonical text of a date range, optionally
followed by a single space and free text (the suffix):

    2025-05-01 - 03 My Photos
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .date_range import DateRange
from .errors import NoRangeError, RangeTooWideError


class NameStatus(Enum):
    MATCH = "match"
    MISMATCH = "mismatch"
    UNMANAGED = "unmanaged"


@dataclass(frozen=True)
class DirectoryName:
    """A directory name split into its date range prefix and suffix."""

    date_range: Optional[DateRange]
    date_text: Optional[str]
    suffix: str

    @classmethod
    def parse(cls, name: str) -> "DirectoryName":
        try:
            date_range, date_text = DateRange.parse_prefix(name)
        except NoRangeError:
            return cls(None, None, name)
        # Drop the single space separating the date text from the suffix
        return cls(date_range, date_text, name[len(date_text) + 1:])

    @property
    def is_managed(self) -> bool:
        return self.date_range is not None


@dataclass(frozen=True)
class NameCheck:
    """Outcome of comparing a directory name with the range of its photos."""

    status: NameStatus
    current: Optional[DateRange]
    expected: DateRange
    target_name: str

    @property
    def covers(self) -> bool:
        """Mismatching name whose range still contains all photo dates."""
        return (self.status is NameStatus.MISMATCH
                and self.current.contains(self.expected))


class DirectoryNamer:
    """Reconciles a directory name with the date range of its contents."""

    def __init__(self, name: str):
        self.name = name
        self.parsed = DirectoryName.parse(name)

    def target_name(self, date_range: DateRange) -> str:
        """Canonical name for date_range, keeping the current suffix.

        An unmanaged name is kept whole as the suffix.
        """
        if not self.parsed.suffix:
            return date_range.format()
        return f"{date_range.format()} {self.parsed.suffix}"

    def status(self, date_range: DateRange) -> NameCheck:
        current = self.parsed.date_range
        if not self.parsed.is_managed:
            status = NameStatus.UNMANAGED
        elif current == date_range:
            status = NameStatus.MATCH
        else:
            status = NameStatus.MISMATCH
        return NameCheck(status, current, date_range, self.target_name(date_range))

    def needs_rename(self, date_range: DateRange) -> bool:
        return self.target_name(date_range) != self.name

    @staticmethod
    def check_interval(date_range: DateRange, max_interval: int) -> None:
        """Raise RangeTooWideError if date_range spans more than max_interval days."""
        if not date_range.fits(max_interval):
            raise RangeTooWideError(date_range, max_interval)
