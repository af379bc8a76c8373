"""Printable HTML previews of the declarations."""

from datetime import date
from typing import Optional

from fop_tax.core.calculators.quarters import quarter_display_name
from fop_tax.core.models.enums import Quarter
from fop_tax.core.models.profile import FOPProfile
from fop_tax.core.models.report import QuarterlyCalculation
from fop_tax.core.models.social import ESVReport
from fop_tax.infrastructure.templates import env as template_env
from fop_tax.shared.validators import mask_tin

DECLARATION_TEMPLATE = "previews/declaration.html"
ESV_TEMPLATE = "previews/esv.html"

MONTH_NAMES = (
    "Січень",
    "Лютий",
    "Березень",
    "Квітень",
    "Травень",
    "Червень",
    "Липень",
    "Серпень",
    "Вересень",
    "Жовтень",
    "Листопад",
    "Грудень",
)


def render_declaration_preview(
    calculation: QuarterlyCalculation,
    profile: FOPProfile,
    fill_date: Optional[date] = None,
    mask_identifiers: bool = False,
) -> str:
    """Render the F0103309 form as a printable A4 HTML page.

    Args:
        calculation: Quarterly figures
        profile: Taxpayer profile
        fill_date: Date printed in the signature block; defaults to today
        mask_identifiers: Hide all but the last digits of the TIN

    Returns:
        HTML document
    """
    fill_date = fill_date or date.today()
    quarter = Quarter(calculation.quarter)

    return template_env.get_template(DECLARATION_TEMPLATE).render(
        calc=calculation,
        profile=profile,
        tin=mask_tin(profile.tin) if mask_identifiers else profile.tin,
        period_name=quarter_display_name(calculation.year, quarter),
        quarter=quarter,
        quarters=list(Quarter),
        location=profile.address.format(),
        kveds=profile.kved.all(),
        fill_date=fill_date.strftime("%d.%m.%Y"),
    )


def render_esv_preview(
    report: ESVReport,
    profile: FOPProfile,
    fill_date: Optional[date] = None,
) -> str:
    """Render the annual ЄСВ annex as a printable HTML page."""
    fill_date = fill_date or date.today()

    return template_env.get_template(ESV_TEMPLATE).render(
        report=report,
        profile=profile,
        months=[(MONTH_NAMES[m.month - 1], m) for m in report.months],
        fill_date=fill_date.strftime("%d.%m.%Y"),
    )
