"""Money arithmetic helpers.

Every derived monetary value passes through ``round2`` so that UAH amounts,
converted foreign amounts and taxes are rounded at the same cents boundary.
"""

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

ZERO = Decimal("0")
CENT = Decimal("0.01")


def to_decimal(value: Decimal | int | float | str | None) -> Decimal:
    """Convert a number (or numeric string) to Decimal without float noise.

    Args:
        value: Value to convert; None becomes zero

    Returns:
        Decimal representation

    Raises:
        ValueError: If the value is not numeric
    """
    if value is None:
        return ZERO
    if isinstance(value, Decimal):
        result = value
    else:
        try:
            # str() keeps floats like 41.5 exact instead of their binary expansion
            result = Decimal(str(value).strip())
        except InvalidOperation as e:
            raise ValueError(f"Некоректне числове значення: {value!r}") from e
    if not result.is_finite():
        raise ValueError(f"Некоректне числове значення: {value!r}")
    return result


def round2(value: Decimal | int | float | str) -> Decimal:
    """Round to cents using half-up rounding.

    Args:
        value: Amount to round

    Returns:
        Decimal with exactly two decimal places
    """
    return to_decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)


def round_percent(value: Decimal) -> int:
    """Round a percentage to the nearest integer (half-up)."""
    return int(value.quantize(Decimal("1"), rounding=ROUND_HALF_UP))
