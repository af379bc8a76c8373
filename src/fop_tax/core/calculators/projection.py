"""Quarter-only and cumulative projections of accumulated data."""

from fop_tax.core.models.accumulated import AccumulatedData
from fop_tax.core.models.enums import Quarter
from fop_tax.core.models.report import QuarterView


def quarter_view(data: AccumulatedData, quarter: Quarter | int) -> QuarterView:
    """Figures of a single quarter."""
    quarter = Quarter(quarter)
    return QuarterView(
        income_local=data.income_local[quarter],
        income_foreign=data.income_foreign[quarter],
        single_tax=data.taxes.single_tax[quarter],
        military_tax=data.taxes.military_tax[quarter],
        social_contributions=data.taxes.social_contributions[quarter],
    )


def cumulative_view(data: AccumulatedData, through_quarter: Quarter | int) -> QuarterView:
    """Figures summed from Q1 through ``through_quarter`` inclusive.

    ``through_quarter=4`` gives full-year totals.
    """
    through_quarter = Quarter(through_quarter)
    total = QuarterView()
    for quarter in Quarter:
        if quarter > through_quarter:
            break
        total = total + quarter_view(data, quarter)
    return total
