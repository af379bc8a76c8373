"""Enumerations for FOP domain models."""

from enum import Enum, IntEnum


class Currency(str, Enum):
    """Payment currencies."""

    UAH = "UAH"
    USD = "USD"
    EUR = "EUR"


LOCAL_CURRENCY = Currency.UAH

FOREIGN_CURRENCIES = (Currency.USD, Currency.EUR)


class Quarter(IntEnum):
    """Fiscal quarter of a calendar year."""

    Q1 = 1
    Q2 = 2
    Q3 = 3
    Q4 = 4

    @property
    def index(self) -> int:
        """Zero-based slot index (Q1 -> 0)."""
        return self.value - 1

    @property
    def end_month(self) -> int:
        """Last calendar month of the quarter (3, 6, 9, 12)."""
        return self.value * 3


class PeriodType(str, Enum):
    """Reporting period type codes used by the tax authority (ДПС)."""

    MONTH = "1"
    QUARTER = "2"
    HALF_YEAR = "3"
    NINE_MONTHS = "4"
    YEAR = "5"
