"""
Test date range formatting, parsing and interval width.
"""

from datetime import date

import pytest

from photo_dater.date_range import DateRange, RangeForm
from photo_dater.errors import EmptyInputError, NoRangeError


def dr(start, end=None):
    return DateRange(date(*start), date(*(end or start)))


class TestFormatting:
    """Test the shortest canonical form is always chosen."""

    @pytest.mark.parametrize("date_range, text, form", [
        (dr((2025, 5, 1)), "2025-05-01", RangeForm.SINGLE),
        (dr((2025, 5, 1), (2025, 5, 2)), "2025-05-01 - 02", RangeForm.SAME_MONTH),
        (dr((2025, 5, 1), (2025, 6, 2)), "2025-05-01 - 06-02", RangeForm.SAME_YEAR),
        (dr((2025, 5, 1), (2025, 6, 1)), "2025-05-01 - 06-01", RangeForm.SAME_YEAR),
        (dr((2025, 5, 1), (2026, 6, 2)), "2025-05-01 - 2026-06-02", RangeForm.FULL),
        (dr((2025, 5, 1), (2026, 5, 1)), "2025-05-01 - 2026-05-01", RangeForm.FULL),
        (dr((2025, 12, 31), (2026, 1, 1)), "2025-12-31 - 2026-01-01", RangeForm.FULL),
    ])
    def test_format(self, date_range, text, form):
        """Test formatting in the shortest form."""
        assert date_range.format() == text
        assert str(date_range) == text
        assert date_range.form is form

    def test_same_day_is_never_dashed(self):
        """Test that a single day has no separator."""
        assert " - " not in dr((2024, 2, 29)).format()

    def test_small_years_are_zero_padded(self):
        """Test four-digit years below 1000."""
        assert dr((999, 1, 2)).format() == "0999-01-02"


class TestParsing:
    """Test parsing of date range prefixes."""

    def test_parse_single(self):
        """Test a single-day prefix."""
        assert DateRange.parse_prefix("2025-05-01 Some name") == (dr((2025, 5, 1)), "2025-05-01")

    def test_parse_same_month(self):
        """Test a same-month prefix and its matched text."""
        date_range, text = DateRange.parse_prefix("2025-05-01 - 03 Some name")
        assert date_range == dr((2025, 5, 1), (2025, 5, 3))
        assert text == "2025-05-01 - 03"

    def test_parse_same_year(self):
        """Test a same-year prefix."""
        date_range, _ = DateRange.parse_prefix("2025-05-01 - 06-01 Some name")
        assert date_range == dr((2025, 5, 1), (2025, 6, 1))

    def test_parse_full(self):
        """Test a prefix spanning years."""
        date_range, _ = DateRange.parse_prefix("2025-05-01 - 2026-06-01 Some name")
        assert date_range == dr((2025, 5, 1), (2026, 6, 1))

    def test_parse_date_only(self):
        """Test parsing a text that is only a range."""
        assert DateRange.parse("2025-05-01 - 03") == dr((2025, 5, 1), (2025, 5, 3))

    def test_non_minimal_spelling_parses_to_same_range(self):
        """Test a longer spelling of a same-month range."""
        date_range, _ = DateRange.parse_prefix("2025-05-01 - 2025-05-03 Trip")
        assert date_range == dr((2025, 5, 1), (2025, 5, 3))

    @pytest.mark.parametrize("text", [
        "Some name without any date",
        "06-01 Name start with number",
        "2025-5-1 Short fields",
        "2025-05-01Glued name",
        "2025/05/01 Slashes",
        "2025-13-01 Bad month",
        "2025-02-30 Bad day",
        "",
    ])
    def test_no_range(self, text):
        """Test texts that do not start with a range."""
        with pytest.raises(NoRangeError):
            DateRange.parse_prefix(text)

    def test_backwards_range_is_rejected(self):
        """Test that an end before the start is rejected."""
        with pytest.raises(NoRangeError):
            DateRange.parse_prefix("2025-05-02 - 2025-05-01 - Interval is not possible")

    def test_separator_without_end_falls_back_to_single_day(self):
        """Test a separator followed by text."""
        date_range, text = DateRange.parse_prefix("2025-05-01 - Name start with separator")
        assert date_range == dr((2025, 5, 1))
        assert text == "2025-05-01"

    def test_invalid_end_falls_back_to_single_day(self):
        """Test an invalid end date."""
        date_range, text = DateRange.parse_prefix("2025-05-01 - 2025-13-01 Name")
        assert date_range == dr((2025, 5, 1))
        assert text == "2025-05-01"

    def test_non_ascii_digits_are_rejected(self):
        """Test that only ASCII digits count."""
        with pytest.raises(NoRangeError):
            DateRange.parse_prefix("٢٠٢٥-05-01 Name")

    def test_parse_rejects_trailing_text(self):
        """Test that parse needs the whole text."""
        with pytest.raises(NoRangeError):
            DateRange.parse("2025-05-01 Name")

    @pytest.mark.parametrize("dates", [
        [date(2025, 5, 1)],
        [date(2025, 5, 3), date(2025, 5, 1)],
        [date(2025, 5, 31), date(2025, 6, 1), date(2025, 5, 20)],
        [date(2024, 12, 31), date(2025, 1, 1)],
        [date(2020, 2, 29), date(2025, 2, 28), date(2022, 7, 4)],
    ])
    def test_round_trip(self, dates):
        """Test that formatted ranges parse back unchanged."""
        date_range = DateRange.from_dates(dates)
        assert DateRange.parse(date_range.format()) == date_range


class TestInterval:
    """Test range construction and width."""

    def test_from_dates_uses_min_and_max(self):
        """Test the smallest range covering all dates."""
        date_range = DateRange.from_dates([date(2025, 5, 3), date(2025, 5, 1), date(2025, 5, 2)])
        assert date_range == dr((2025, 5, 1), (2025, 5, 3))

    def test_from_no_dates(self):
        """Test EmptyInputError without dates."""
        with pytest.raises(EmptyInputError):
            DateRange.from_dates([])

    def test_start_after_end(self):
        """Test that a reversed range cannot be built."""
        with pytest.raises(ValueError):
            DateRange(date(2025, 5, 2), date(2025, 5, 1))

    def test_days(self):
        """Test the width in days."""
        assert dr((2025, 5, 1)).days == 0
        assert dr((2025, 5, 1), (2025, 5, 3)).days == 2
        assert dr((2024, 12, 31), (2025, 1, 1)).days == 1

    def test_fits(self):
        """Test the interval limit."""
        date_range = dr((2025, 5, 1), (2025, 5, 3))
        assert not date_range.fits(0)
        assert not date_range.fits(1)
        assert date_range.fits(2)
        assert date_range.fits(7)

    def test_contains(self):
        """Test range containment."""
        outer = dr((2025, 4, 30), (2025, 5, 3))
        assert outer.contains(dr((2025, 5, 1), (2025, 5, 3)))
        assert outer.contains(outer)
        assert not dr((2025, 5, 1), (2025, 5, 3)).contains(outer)
