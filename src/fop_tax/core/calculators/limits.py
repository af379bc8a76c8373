"""Simplified-system income ceiling checks."""

from decimal import Decimal

from fop_tax.core.calculators.projection import cumulative_view
from fop_tax.core.models.accumulated import AccumulatedData
from fop_tax.core.models.enums import Quarter
from fop_tax.core.models.profile import FOPProfile
from fop_tax.core.models.report import LimitCheck, QuarterlyCalculation
from fop_tax.core.rules.tax_constants import LIMIT_WARNING_THRESHOLD, YEARLY_INCOME_LIMIT
from fop_tax.shared.formatters import format_currency
from fop_tax.shared.money import round_percent


def within_limit(
    data: AccumulatedData,
    through_quarter: Quarter | int,
    yearly_limit: Decimal = YEARLY_INCOME_LIMIT,
) -> bool:
    """Check cumulative income against the yearly ceiling (inclusive)."""
    return cumulative_view(data, through_quarter).income_total <= yearly_limit


def usage_percent(income: Decimal, yearly_limit: Decimal = YEARLY_INCOME_LIMIT) -> int:
    """Share of the ceiling used by ``income``, rounded to a whole percent."""
    return round_percent(income * 100 / yearly_limit)


def limit_usage_percent(
    data: AccumulatedData,
    through_quarter: Quarter | int,
    yearly_limit: Decimal = YEARLY_INCOME_LIMIT,
) -> int:
    """Percentage of the yearly ceiling used through a quarter; may exceed 100."""
    return usage_percent(cumulative_view(data, through_quarter).income_total, yearly_limit)


def check_tax_limits(calculation: QuarterlyCalculation, profile: FOPProfile) -> LimitCheck:
    """Check a quarterly calculation against the profile's yearly limit.

    Above the limit the result is flagged as exceeded; above 90% of it a
    soft warning is attached while the income is still within limits.
    """
    yearly_limit = profile.yearly_income_limit
    income = calculation.cumulative_income
    percent = usage_percent(income, yearly_limit)

    if income > yearly_limit:
        return LimitCheck(
            within_limits=False,
            limit_exceeded=True,
            usage_percent=percent,
            warning_message=(
                f"Перевищено річний ліміт доходів для {profile.tax_group} групи "
                f"({format_currency(yearly_limit)}). "
                f"Поточний дохід: {format_currency(income)}."
            ),
        )

    if income > yearly_limit * LIMIT_WARNING_THRESHOLD:
        return LimitCheck(
            within_limits=True,
            usage_percent=percent,
            warning_message=(
                "Увага! Досягнуто 90% річного ліміту доходів. "
                f"Залишилось: {format_currency(yearly_limit - income)}."
            ),
        )

    return LimitCheck(within_limits=True, usage_percent=percent)
