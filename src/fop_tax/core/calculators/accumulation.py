"""Accumulation engine: payments -> per-quarter income and taxes."""

import logging
from collections.abc import Iterable
from decimal import Decimal
from typing import Optional, Protocol

from fop_tax.core.calculators.quarters import quarter_of_date
from fop_tax.core.models.accumulated import AccumulatedData, AccumulatedTaxes
from fop_tax.core.models.amounts import QuarterlyAmounts
from fop_tax.core.models.enums import Quarter
from fop_tax.core.models.payment import Payment
from fop_tax.core.rules.tax_constants import MILITARY_TAX_RATE, SINGLE_TAX_RATE
from fop_tax.shared.money import ZERO, round2

log = logging.getLogger(__name__)


class AccumulatedDataStore(Protocol):
    """Per-year persistence of accumulated data."""

    def load(self, year: int) -> AccumulatedData: ...

    def save(self, data: AccumulatedData) -> None: ...


def derive_quarterly_taxes(
    income_local: QuarterlyAmounts,
    income_foreign: QuarterlyAmounts,
    rate: Decimal,
) -> QuarterlyAmounts:
    """Apply a flat rate to each quarter's combined income, rounding per quarter."""
    return QuarterlyAmounts.from_list(
        [round2(rate * (income_local[q] + income_foreign[q])) for q in Quarter]
    )


def accumulate_payments(
    payments: Iterable[Payment],
    year: int,
    social_contributions: Optional[QuarterlyAmounts] = None,
) -> AccumulatedData:
    """Build the accumulated structure of ``year`` from scratch.

    Payments dated in other years are ignored. UAH payments are bucketed as
    local income, everything else as foreign income (already converted to
    UAH at entry time). Taxes use the fixed group 3 rates.

    Args:
        payments: Complete payment list (not a delta)
        year: Calendar year to accumulate
        social_contributions: ЄСВ slots to carry over unchanged

    Returns:
        Freshly computed AccumulatedData
    """
    local = [ZERO] * 4
    foreign = [ZERO] * 4

    for payment in payments:
        if payment.date.year != year:
            continue
        slot = quarter_of_date(payment.date).index
        if payment.is_foreign:
            foreign[slot] += payment.amount_local
        else:
            local[slot] += payment.amount_local

    income_local = QuarterlyAmounts.from_list(local)
    income_foreign = QuarterlyAmounts.from_list(foreign)

    return AccumulatedData(
        year=year,
        income_local=income_local,
        income_foreign=income_foreign,
        taxes=AccumulatedTaxes(
            single_tax=derive_quarterly_taxes(income_local, income_foreign, SINGLE_TAX_RATE),
            military_tax=derive_quarterly_taxes(
                income_local, income_foreign, MILITARY_TAX_RATE
            ),
            social_contributions=social_contributions or QuarterlyAmounts.zero(),
        ),
    )


class AccumulationEngine:
    """Recomputes and persists a year's accumulated data.

    Every call rebuilds the full structure from the payment list and
    replaces the stored value for that year. Only the ЄСВ slots, which come
    from a separate monthly schedule, are carried over from storage.
    """

    def __init__(self, store: AccumulatedDataStore):
        self.store = store

    def accumulate(self, payments: Iterable[Payment], year: int) -> AccumulatedData:
        """Recompute ``year`` from the complete payment list and persist it."""
        previous = self.store.load(year)
        data = accumulate_payments(
            payments, year, social_contributions=previous.taxes.social_contributions
        )
        log.debug(
            "Accumulated %s: local=%s foreign=%s",
            year,
            data.income_local.values,
            data.income_foreign.values,
        )
        self.store.save(data)
        return data

    def accumulate_years(
        self, payments: Iterable[Payment], years: Iterable[int]
    ) -> dict[int, AccumulatedData]:
        """Recompute several years from the same payment list."""
        payments = list(payments)
        return {year: self.accumulate(payments, year) for year in sorted(set(years))}
