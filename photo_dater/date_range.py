"""
Inclusive calendar-date ranges and their directory-name text forms.

A range is written in the shortest of four canonical forms:

    2025-05-01                  same day
    2025-05-01 - 03             same month
    2025-05-01 - 06-02          same year
    2025-05-01 - 2026-01-02     different years

Parsing accepts any of the four forms at the start of a text, as long as the
date text is followed by the end of the text or a space.
"""

import re
from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Iterable, Tuple

from .constants import RANGE_SEPARATOR
from .errors import EmptyInputError, NoRangeError

_DATE = r"(\d{4})-(\d{2})-(\d{2})"
_MONTH_DAY = r"(\d{2})-(\d{2})"
_DAY = r"(\d{2})"
_SEP = re.escape(RANGE_SEPARATOR)
_END = r"(?= |\Z)"


class RangeForm(Enum):
    """The canonical text forms, in parse-attempt order (longest first)."""
    FULL = re.compile(_DATE + _SEP + _DATE + _END, re.ASCII)
    SAME_YEAR = re.compile(_DATE + _SEP + _MONTH_DAY + _END, re.ASCII)
    SAME_MONTH = re.compile(_DATE + _SEP + _DAY + _END, re.ASCII)
    SINGLE = re.compile(_DATE + _END, re.ASCII)

    @property
    def pattern(self) -> "re.Pattern[str]":
        return self.value

    def build(self, fields: Tuple[str, ...]) -> Tuple[date, date]:
        """Turn the matched digit groups into (start, end) dates."""
        numbers = [int(f) for f in fields]
        start = date(*numbers[:3])
        if self is RangeForm.SINGLE:
            return start, start
        if self is RangeForm.SAME_MONTH:
            return start, date(start.year, start.month, numbers[3])
        if self is RangeForm.SAME_YEAR:
            return start, date(start.year, numbers[3], numbers[4])
        return start, date(*numbers[3:6])


@dataclass(frozen=True, order=True)
class DateRange:
    """Inclusive range of calendar dates; a single day has start == end."""

    start: date
    end: date

    def __post_init__(self):
        if self.start > self.end:
            raise ValueError(f"Range start {self.start} is after end {self.end}")

    @classmethod
    def from_dates(cls, dates: Iterable[date]) -> "DateRange":
        """Smallest range covering all given dates."""
        dates = list(dates)
        if not dates:
            raise EmptyInputError()
        return cls(min(dates), max(dates))

    @classmethod
    def single(cls, day: date) -> "DateRange":
        return cls(day, day)

    @classmethod
    def parse_prefix(cls, text: str) -> Tuple["DateRange", str]:
        """Parse the date range at the start of text.

        Returns the range and the exact text it was read from. Forms whose
        digits are not a valid calendar date are skipped; a well-formed range
        running backwards is rejected outright.

        Raises:
            NoRangeError: if text does not start with a date range
        """
        for form in RangeForm:
            match = form.pattern.match(text)
            if not match:
                continue
            try:
                start, end = form.build(match.groups())
            except ValueError:
                continue
            if start > end:
                raise NoRangeError(text)
            return cls(start, end), match.group(0)
        raise NoRangeError(text)

    @classmethod
    def parse(cls, text: str) -> "DateRange":
        """Parse a text that consists of a date range only."""
        date_range, matched = cls.parse_prefix(text)
        if matched != text:
            raise NoRangeError(text)
        return date_range

    @property
    def form(self) -> RangeForm:
        """Shortest canonical form able to express this range."""
        if self.start == self.end:
            return RangeForm.SINGLE
        if self.start.year != self.end.year:
            return RangeForm.FULL
        if self.start.month != self.end.month:
            return RangeForm.SAME_YEAR
        return RangeForm.SAME_MONTH

    @property
    def days(self) -> int:
        """Width of the range in whole days; 0 for a single day."""
        return (self.end - self.start).days

    def fits(self, max_days: int) -> bool:
        return self.days <= max_days

    def contains(self, other: "DateRange") -> bool:
        return self.start <= other.start and other.end <= self.end

    def format(self) -> str:
        form = self.form
        text = self.start.isoformat()
        if form is RangeForm.SINGLE:
            return text
        if form is RangeForm.SAME_MONTH:
            end_text = f"{self.end.day:02d}"
        elif form is RangeForm.SAME_YEAR:
            end_text = f"{self.end.month:02d}-{self.end.day:02d}"
        else:
            end_text = self.end.isoformat()
        return f"{text}{RANGE_SEPARATOR}{end_text}"

    def __str__(self) -> str:
        return self.format()
