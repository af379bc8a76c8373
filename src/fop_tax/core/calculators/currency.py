"""Conversion of payment amounts to UAH."""

import logging
from datetime import date
from decimal import Decimal
from typing import Optional

from fop_tax.core.models.enums import LOCAL_CURRENCY, Currency
from fop_tax.core.models.payment import Payment
from fop_tax.shared.money import round2, to_decimal

log = logging.getLogger(__name__)


def convert_to_local(
    amount: Decimal,
    currency_code: Currency | str,
    rate: Optional[Decimal] = None,
) -> Decimal:
    """Convert an amount to UAH.

    UAH amounts pass through unchanged. When no rate is available (None or
    zero) the raw amount is returned so the payment can still be recorded;
    this is logged as a warning rather than raised.

    Args:
        amount: Amount in the payment currency
        currency_code: Payment currency
        rate: UAH per one unit of the currency

    Returns:
        Amount in UAH, rounded to cents when converted
    """
    amount = to_decimal(amount)
    currency = Currency(currency_code)

    if currency == LOCAL_CURRENCY:
        return amount

    if not rate:
        log.warning("No exchange rate provided for %s, using raw amount", currency.value)
        return amount

    return round2(amount * to_decimal(rate))


def create_payment(
    payment_date: date,
    amount: Decimal,
    currency_code: Currency | str,
    rate: Optional[Decimal] = None,
    counterparty: str = "",
    counterparty_account: str = "",
    description: Optional[str] = None,
) -> Payment:
    """Create a payment with its UAH amount computed once.

    The rate is kept on the payment only for foreign currencies.
    """
    currency = Currency(currency_code)
    amount = to_decimal(amount)
    exchange_rate = to_decimal(rate) if rate and currency != LOCAL_CURRENCY else None

    return Payment(
        date=payment_date,
        currency_code=currency,
        amount=amount,
        amount_local=convert_to_local(amount, currency, exchange_rate),
        exchange_rate=exchange_rate,
        counterparty=counterparty,
        counterparty_account=counterparty_account,
        description=description,
    )
