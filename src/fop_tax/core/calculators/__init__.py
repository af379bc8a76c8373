"""Tax calculators for FOP group 3."""

from fop_tax.core.calculators.accumulation import (
    AccumulatedDataStore,
    AccumulationEngine,
    accumulate_payments,
)
from fop_tax.core.calculators.currency import convert_to_local, create_payment
from fop_tax.core.calculators.limits import (
    check_tax_limits,
    limit_usage_percent,
    within_limit,
)
from fop_tax.core.calculators.projection import cumulative_view, quarter_view
from fop_tax.core.calculators.quarters import (
    current_quarter,
    is_in_quarter,
    period_end_month,
    quarter_bounds,
    quarter_display_name,
    quarter_of_date,
)
from fop_tax.core.calculators.report_builder import (
    build_quarterly_calculation,
    build_tax_report,
    calculate_tax_balance,
)
from fop_tax.core.calculators.social import (
    apply_social_contributions,
    build_esv_report,
    calculate_month_esv,
    calculate_year_esv,
    create_default_esv_settings,
    quarterly_social_contributions,
    update_month_settings,
    update_month_settings_from,
)

__all__ = [
    "AccumulatedDataStore",
    "AccumulationEngine",
    "accumulate_payments",
    "apply_social_contributions",
    "build_esv_report",
    "build_quarterly_calculation",
    "build_tax_report",
    "calculate_month_esv",
    "calculate_tax_balance",
    "calculate_year_esv",
    "check_tax_limits",
    "convert_to_local",
    "create_default_esv_settings",
    "create_payment",
    "cumulative_view",
    "current_quarter",
    "is_in_quarter",
    "limit_usage_percent",
    "period_end_month",
    "quarter_bounds",
    "quarter_display_name",
    "quarter_of_date",
    "quarter_view",
    "quarterly_social_contributions",
    "update_month_settings",
    "update_month_settings_from",
    "within_limit",
]
