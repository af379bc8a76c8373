"""Tests for quarter resolution."""

from datetime import date, datetime

import pytest

from fop_tax.core.calculators.quarters import (
    current_quarter,
    is_in_quarter,
    period_end_month,
    quarter_bounds,
    quarter_display_name,
    quarter_of_date,
)
from fop_tax.core.models import Quarter


class TestQuarterOfDate:
    """Tests for quarter_of_date."""

    @pytest.mark.parametrize(
        "value,expected",
        [
            (date(2025, 1, 1), Quarter.Q1),
            (date(2025, 3, 31), Quarter.Q1),
            (date(2025, 4, 1), Quarter.Q2),
            (date(2025, 6, 30), Quarter.Q2),
            (date(2025, 7, 1), Quarter.Q3),
            (date(2025, 10, 1), Quarter.Q4),
            (date(2025, 12, 31), Quarter.Q4),
        ],
    )
    def test_month_boundaries(self, value, expected):
        """Test the quarter of first and last days of months."""
        assert quarter_of_date(value) == expected


class TestQuarterBounds:
    """Tests for quarter_bounds and is_in_quarter."""

    def test_q1_bounds(self):
        """Test the first and last moments of Q1."""
        start, end = quarter_bounds(2025, 1)
        assert start == datetime(2025, 1, 1)
        assert end == datetime(2025, 3, 31, 23, 59, 59, 999000)

    def test_leap_year_february_not_affecting_q1_end(self):
        """Test that Q1 ends on March 31 in a leap year."""
        start, end = quarter_bounds(2024, Quarter.Q1)
        assert end.day == 31

    def test_q2_ends_on_30th(self):
        """Test that Q2 ends on June 30."""
        _, end = quarter_bounds(2025, Quarter.Q2)
        assert (end.month, end.day) == (6, 30)

    def test_is_in_quarter(self):
        """Test quarter membership of dates."""
        assert is_in_quarter(date(2025, 3, 31), 2025, 1)
        assert not is_in_quarter(date(2025, 4, 1), 2025, 1)
        assert not is_in_quarter(date(2024, 2, 1), 2025, 1)

    def test_is_in_quarter_last_moment(self):
        """Test that the last moment of a quarter is inside it."""
        assert is_in_quarter(datetime(2025, 12, 31, 23, 59, 59), 2025, 4)


class TestHelpers:
    """Tests for display helpers."""

    def test_current_quarter_from_date(self):
        """Test the current quarter for a given day."""
        assert current_quarter(date(2025, 8, 15)) == (2025, Quarter.Q3)

    def test_display_name(self):
        """Test the Ukrainian quarter name."""
        assert quarter_display_name(2025, Quarter.Q2) == "2 квартал 2025"

    def test_period_end_month(self):
        """Test the last month of each quarter."""
        assert [period_end_month(q) for q in range(1, 5)] == [3, 6, 9, 12]
