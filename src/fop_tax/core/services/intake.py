"""Payment intake: manual entry and imported bank statement records."""

import logging
from collections.abc import Iterable
from datetime import date
from decimal import Decimal
from typing import Optional, Protocol

from fop_tax.core.calculators.currency import create_payment
from fop_tax.core.models.enums import LOCAL_CURRENCY, Currency
from fop_tax.core.models.payment import ParsedPayment, Payment

log = logging.getLogger(__name__)


class RateSource(Protocol):
    """Provider of historical exchange rates (UAH per unit)."""

    def fetch_rate(self, currency: Currency, on: date) -> Optional[Decimal]: ...


def payment_from_entry(
    payment_date: date,
    amount: Decimal,
    currency_code: Currency | str,
    rate_source: Optional[RateSource] = None,
    rate: Optional[Decimal] = None,
    counterparty: str = "",
    counterparty_account: str = "",
    description: Optional[str] = None,
) -> Payment:
    """Create a payment from manually entered data.

    An explicit ``rate`` wins; otherwise a foreign-currency rate is looked up
    in ``rate_source`` for the payment date.
    """
    currency = Currency(currency_code)

    if rate is None and currency != LOCAL_CURRENCY and rate_source is not None:
        rate = rate_source.fetch_rate(currency, payment_date)
        if rate is None:
            log.warning(
                "No NBU rate for %s on %s, amount kept unconverted",
                currency.value,
                payment_date.isoformat(),
            )

    return create_payment(
        payment_date,
        amount,
        currency,
        rate=rate,
        counterparty=counterparty,
        counterparty_account=counterparty_account,
        description=description,
    )


def payments_from_parsed(
    parsed: Iterable[ParsedPayment],
    rate_source: RateSource,
) -> list[Payment]:
    """Convert imported records into payments.

    Outgoing records are skipped. Rates are fetched one at a time and only
    once per (currency, date) pair.

    Args:
        parsed: Normalized statement records
        rate_source: Historical rate provider

    Returns:
        Payments in input order
    """
    rates: dict[tuple[Currency, date], Optional[Decimal]] = {}
    payments = []
    skipped = 0

    for record in parsed:
        if not record.is_incoming:
            skipped += 1
            continue

        rate = None
        if record.currency_code != LOCAL_CURRENCY:
            key = (record.currency_code, record.date)
            if key not in rates:
                rates[key] = rate_source.fetch_rate(record.currency_code, record.date)
                if rates[key] is None:
                    log.warning(
                        "No NBU rate for %s on %s, amount kept unconverted",
                        record.currency_code.value,
                        record.date.isoformat(),
                    )
            rate = rates[key]

        payments.append(
            create_payment(
                record.date,
                record.amount,
                record.currency_code,
                rate=rate,
                counterparty=record.counterparty,
                counterparty_account=record.counterparty_account,
                description=record.description,
            )
        )

    if skipped:
        log.info("Skipped %d outgoing records", skipped)

    return payments
