"""Assembly of quarterly calculations and the F0103309 filing report."""

from decimal import Decimal

from fop_tax.core.calculators.projection import cumulative_view, quarter_view
from fop_tax.core.models.accumulated import AccumulatedData
from fop_tax.core.models.enums import Quarter
from fop_tax.core.models.profile import FOPProfile
from fop_tax.core.models.report import (
    IncomeSection,
    PeriodAmount,
    QuarterlyCalculation,
    ReportingPeriod,
    TaxBalance,
    TaxReport,
    TaxSection,
)
from fop_tax.shared.money import ZERO, round2


def cumulative_income(data: AccumulatedData, through_quarter: int) -> Decimal:
    """Income from Q1 through ``through_quarter``; zero for quarter 0."""
    if through_quarter == 0:
        return ZERO
    return cumulative_view(data, through_quarter).income_total


def cumulative_tax(data: AccumulatedData, through_quarter: int, rate: Decimal) -> Decimal:
    """Tax on cumulative income, rounded once; zero for quarter 0."""
    return round2(rate * cumulative_income(data, through_quarter))


def build_quarterly_calculation(
    profile: FOPProfile,
    data: AccumulatedData,
    quarter: Quarter | int,
) -> QuarterlyCalculation:
    """Compute quarter-only and year-to-date figures for one quarter.

    Taxes are recomputed from income with the profile's rates instead of
    reading the stored per-quarter slots. The amount newly due is the
    cumulative tax minus the cumulative tax through the previous quarter, so
    that the filed figures reconcile exactly across the year's filings.

    The quarter-only tax rounds that quarter's income on its own, so it can
    differ from the amount to pay by a cent: 0.10 UAH in both Q1 and Q2 gives
    a Q2 quarterly tax of 0.01 but nothing to pay, since the cumulative tax
    stays at 0.01.

    Args:
        profile: Taxpayer profile supplying the rates
        data: Accumulated data of the filing year
        quarter: Target quarter

    Returns:
        QuarterlyCalculation
    """
    quarter = Quarter(quarter)
    current = quarter_view(data, quarter)
    cumulative = cumulative_view(data, quarter)

    single_rate = profile.single_tax_rate
    military_rate = profile.military_tax_rate

    cumulative_single = cumulative_tax(data, quarter, single_rate)
    previous_single = cumulative_tax(data, quarter - 1, single_rate)
    cumulative_military = cumulative_tax(data, quarter, military_rate)
    previous_military = cumulative_tax(data, quarter - 1, military_rate)

    return QuarterlyCalculation(
        year=data.year,
        quarter=quarter,
        quarterly_income=current.income_total,
        cumulative_income=cumulative.income_total,
        quarterly_income_local=current.income_local,
        cumulative_income_local=cumulative.income_local,
        quarterly_income_foreign=current.income_foreign,
        cumulative_income_foreign=cumulative.income_foreign,
        quarterly_single_tax=round2(single_rate * current.income_total),
        cumulative_single_tax=cumulative_single,
        previous_single_tax=previous_single,
        single_tax_to_pay=cumulative_single - previous_single,
        quarterly_military_tax=round2(military_rate * current.income_total),
        cumulative_military_tax=cumulative_military,
        previous_military_tax=previous_military,
        military_tax_to_pay=cumulative_military - previous_military,
        quarterly_social_contributions=current.social_contributions,
        cumulative_social_contributions=cumulative.social_contributions,
    )


def build_tax_report(
    profile: FOPProfile,
    data: AccumulatedData,
    quarter: Quarter | int,
) -> TaxReport:
    """Package a quarterly calculation into the declaration structure."""
    calc = build_quarterly_calculation(profile, data, quarter)

    return TaxReport(
        reporting_period=ReportingPeriod(year=calc.year, quarter=calc.quarter),
        income_section=IncomeSection(
            national_currency=PeriodAmount(
                current_quarter=calc.quarterly_income_local,
                cumulative_from_year_start=calc.cumulative_income_local,
            ),
            foreign_currency=PeriodAmount(
                current_quarter=calc.quarterly_income_foreign,
                cumulative_from_year_start=calc.cumulative_income_foreign,
            ),
            total=PeriodAmount(
                current_quarter=calc.quarterly_income,
                cumulative_from_year_start=calc.cumulative_income,
            ),
        ),
        single_tax_section=TaxSection(
            taxable_income=calc.cumulative_income,
            tax_rate=profile.single_tax_rate,
            calculated_tax=calc.cumulative_single_tax,
            previously_paid=calc.previous_single_tax,
            to_pay=calc.single_tax_to_pay,
        ),
        military_tax_section=TaxSection(
            taxable_income=calc.cumulative_income,
            tax_rate=profile.military_tax_rate,
            calculated_tax=calc.cumulative_military_tax,
            previously_paid=calc.previous_military_tax,
            to_pay=calc.military_tax_to_pay,
        ),
    )


def calculate_tax_balance(calculated: Decimal, paid: Decimal) -> TaxBalance:
    """Split the difference between calculated and paid tax into pay/refund."""
    difference = calculated - paid
    return TaxBalance(to_pay=max(ZERO, difference), to_return=max(ZERO, -difference))
