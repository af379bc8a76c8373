"""Calendar quarter resolution."""

import calendar
from datetime import date, datetime, time

from fop_tax.core.models.enums import Quarter


def quarter_of_date(value: date) -> Quarter:
    """Return the fiscal quarter of a date (Jan-Mar -> Q1, ...)."""
    return Quarter((value.month - 1) // 3 + 1)


def quarter_bounds(year: int, quarter: Quarter | int) -> tuple[datetime, datetime]:
    """Return the closed interval covering a quarter.

    Args:
        year: Calendar year
        quarter: Quarter number

    Returns:
        (first day 00:00:00, last day 23:59:59.999)
    """
    quarter = Quarter(quarter)
    first_month = quarter.end_month - 2
    last_day = calendar.monthrange(year, quarter.end_month)[1]

    start = datetime(year, first_month, 1)
    end = datetime.combine(
        date(year, quarter.end_month, last_day), time(23, 59, 59, 999000)
    )
    return start, end


def is_in_quarter(value: date, year: int, quarter: Quarter | int) -> bool:
    """Check whether a date falls inside the given quarter."""
    start, end = quarter_bounds(year, quarter)
    moment = value if isinstance(value, datetime) else datetime.combine(value, time())
    return start <= moment <= end


def current_quarter(today: date | None = None) -> tuple[int, Quarter]:
    """Return (year, quarter) of today or of the given date."""
    today = today or date.today()
    return today.year, quarter_of_date(today)


def quarter_display_name(year: int, quarter: Quarter | int) -> str:
    """Human-readable period name, e.g. "1 квартал 2025"."""
    return f"{int(quarter)} квартал {year}"


def period_end_month(quarter: Quarter | int) -> int:
    """Last month of a quarter (3, 6, 9 or 12)."""
    return Quarter(quarter).end_month
