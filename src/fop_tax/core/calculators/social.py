"""ЄСВ (unified social contribution) schedule calculations.

The schedule holds a declared income base and a contribution rate for each
month of a year. Contributions are rounded per month; yearly and quarterly
figures are sums of the rounded monthly amounts.
"""

from decimal import Decimal

from fop_tax.core.models.accumulated import AccumulatedData
from fop_tax.core.models.amounts import QuarterlyAmounts
from fop_tax.core.models.enums import Quarter
from fop_tax.core.models.social import (
    ESVReport,
    ESVSettings,
    MonthContribution,
    MonthESVSettings,
)
from fop_tax.core.rules.tax_constants import (
    ESV_DEFAULT_INCOME_BASE,
    ESV_DEFAULT_RATE,
    MONTHS_IN_YEAR,
)
from fop_tax.shared.money import ZERO, round2, to_decimal


def create_default_esv_settings(year: int) -> ESVSettings:
    """Twelve months at the default base and rate."""
    return ESVSettings(
        year=year,
        monthly_settings=[
            MonthESVSettings(
                month=month,
                income_base=ESV_DEFAULT_INCOME_BASE,
                contribution_rate=ESV_DEFAULT_RATE,
            )
            for month in range(1, MONTHS_IN_YEAR + 1)
        ],
    )


def calculate_month_esv(income_base: Decimal, contribution_rate: Decimal) -> Decimal:
    """Contribution of one month: base * rate%, rounded to cents."""
    return round2(to_decimal(income_base) * to_decimal(contribution_rate) / 100)


def calculate_year_esv(settings: ESVSettings) -> Decimal:
    """Sum of the monthly contributions of a schedule."""
    return sum(
        (
            calculate_month_esv(m.income_base, m.contribution_rate)
            for m in settings.monthly_settings
        ),
        ZERO,
    )


def update_month_settings(
    settings: ESVSettings,
    month: int,
    income_base: Decimal,
    contribution_rate: Decimal,
) -> ESVSettings:
    """Return a copy with one month's base and rate replaced.

    A month missing from the schedule is left missing.
    """
    return update_month_settings_range(
        settings, range(month, month + 1), income_base, contribution_rate
    )


def update_month_settings_from(
    settings: ESVSettings,
    start_month: int,
    income_base: Decimal,
    contribution_rate: Decimal,
) -> ESVSettings:
    """Return a copy with ``start_month`` through December replaced."""
    return update_month_settings_range(
        settings, range(start_month, MONTHS_IN_YEAR + 1), income_base, contribution_rate
    )


def update_month_settings_range(
    settings: ESVSettings,
    months: range,
    income_base: Decimal,
    contribution_rate: Decimal,
) -> ESVSettings:
    """Return a copy with every month in ``months`` replaced."""
    updated = [
        MonthESVSettings(
            month=m.month,
            income_base=to_decimal(income_base),
            contribution_rate=to_decimal(contribution_rate),
        )
        if m.month in months
        else m
        for m in settings.monthly_settings
    ]
    return ESVSettings(year=settings.year, monthly_settings=updated)


def build_esv_report(settings: ESVSettings) -> ESVReport:
    """Build annual annex data from a monthly schedule."""
    months = [
        MonthContribution(
            month=m.month,
            income_base=m.income_base,
            contribution_rate=m.contribution_rate,
            contribution_amount=calculate_month_esv(m.income_base, m.contribution_rate),
        )
        for m in sorted(settings.monthly_settings, key=lambda m: m.month)
    ]

    return ESVReport(
        year=settings.year,
        months=months,
        total_income_base=round2(sum((m.income_base for m in months), ZERO)),
        total_contribution_amount=round2(
            sum((m.contribution_amount for m in months), ZERO)
        ),
    )


def quarterly_social_contributions(settings: ESVSettings) -> QuarterlyAmounts:
    """Contributions summed into quarter slots (months 1-3 -> Q1, ...)."""
    amounts = QuarterlyAmounts.zero()
    for m in settings.monthly_settings:
        quarter = Quarter((m.month - 1) // 3 + 1)
        amounts = amounts.add(quarter, calculate_month_esv(m.income_base, m.contribution_rate))
    return amounts


def apply_social_contributions(data: AccumulatedData, settings: ESVSettings) -> AccumulatedData:
    """Return a copy of ``data`` with ЄСВ slots filled from the schedule."""
    if settings.year != data.year:
        raise ValueError(
            f"Налаштування ЄСВ за {settings.year} рік не відповідають {data.year} року"
        )
    taxes = data.taxes.model_copy(
        update={"social_contributions": quarterly_social_contributions(settings)}
    )
    return data.model_copy(update={"taxes": taxes})
