"""Value formatters for display and for declaration XML."""

from datetime import date
from decimal import Decimal

from fop_tax.shared.money import round2


def format_currency(value: Decimal, symbol: str = "грн") -> str:
    """
    Format decimal as Ukrainian currency.

    Args:
        value: Decimal value to format
        symbol: Currency symbol (default: грн)

    Returns:
        Formatted string like "1 234,56 грн"
    """
    negative = value < 0
    value = abs(round2(value))

    formatted = f"{value:,.2f}"

    # uk-UA uses a (non-breaking) space for thousands and a comma for decimals
    formatted = formatted.replace(",", " ").replace(".", ",")

    result = f"{formatted} {symbol}" if symbol else formatted
    return f"-{result}" if negative else result


def format_amount(value: Decimal) -> str:
    """Format decimal as a uk-UA number without currency symbol."""
    return format_currency(value, symbol="")


def format_percentage(value: Decimal | int, decimals: int = 0) -> str:
    """
    Format a percentage value.

    Args:
        value: Percentage (e.g., 92 for 92%)
        decimals: Number of decimal places

    Returns:
        Formatted string like "92%" or "5,0%"
    """
    formatted = f"{Decimal(value):.{decimals}f}".replace(".", ",")
    return f"{formatted}%"


def format_rate(rate: Decimal) -> str:
    """Format a fractional tax rate (0.05) as a percentage ("5%")."""
    percent = (rate * 100).normalize()
    return f"{percent:f}".replace(".", ",") + "%"


def format_file_size(size_bytes: int) -> str:
    """Format a byte count as a human-readable size ("1.5 KB")."""
    if size_bytes == 0:
        return "0 Bytes"

    units = ["Bytes", "KB", "MB", "GB"]
    index = 0
    size = float(size_bytes)
    while size >= 1024 and index < len(units) - 1:
        size /= 1024
        index += 1

    return f"{round(size, 2):g} {units[index]}"


def format_xml_amount(value: Decimal) -> str:
    """Format money for declaration XML: dot separator, two decimals ("1234.56")."""
    return f"{round2(value):.2f}"


def format_xml_date(value: date) -> str:
    """Format a date for declaration XML as DDMMYYYY."""
    return value.strftime("%d%m%Y")
