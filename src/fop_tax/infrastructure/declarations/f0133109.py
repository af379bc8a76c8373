"""F0133109: annual ЄСВ annex to the group 3 declaration."""

import logging
from datetime import date
from typing import Optional

from fop_tax.core.models.enums import PeriodType
from fop_tax.core.models.profile import FOPProfile
from fop_tax.core.models.social import ESVReport
from fop_tax.infrastructure.declarations.common import (
    C_DOC,
    C_DOC_CNT,
    C_DOC_STAN,
    C_DOC_TYPE,
    C_DOC_VER,
    ESV_DOC_SUB,
    MAIN_DOC_SUB,
    SOFTWARE_NAME,
    build_dps_filename,
    format_xml_date,
    parse_tax_office_code,
)
from fop_tax.infrastructure.templates import env as template_env

log = logging.getLogger(__name__)

TEMPLATE_NAME = "declarations/F0133109.xml"

ESV_PERIOD_MONTH = 12


def esv_filename(profile: FOPProfile, report: ESVReport) -> str:
    """Official file name of the annual annex."""
    return build_dps_filename(
        profile, ESV_DOC_SUB, PeriodType.YEAR, ESV_PERIOD_MONTH, report.year
    )


def render_esv_xml(
    report: ESVReport,
    profile: FOPProfile,
    linked_main_filename: str,
    fill_date: Optional[date] = None,
    software: str = SOFTWARE_NAME,
) -> str:
    """Render the annual ЄСВ annex XML.

    The annex always references the main declaration it is attached to.

    Raises:
        TaxOfficeCodeError: If the tax office code is not 4 digits
    """
    tax_office = parse_tax_office_code(profile.tax_office.code)
    fill_date = fill_date or date.today()

    log.debug("Rendering F0133109 for %s", report.year)

    return template_env.get_template(TEMPLATE_NAME).render(
        doc={
            "c_doc": C_DOC,
            "sub": ESV_DOC_SUB,
            "ver": C_DOC_VER,
            "type": C_DOC_TYPE,
            "cnt": C_DOC_CNT,
            "stan": C_DOC_STAN,
        },
        linked={"sub": MAIN_DOC_SUB, "type": "2", "filename": linked_main_filename},
        profile=profile,
        report=report,
        region=tax_office.region,
        district=tax_office.district,
        period_month=ESV_PERIOD_MONTH,
        period_type=PeriodType.YEAR.value,
        period_start=format_xml_date(date(report.year, 1, 1)),
        period_end=format_xml_date(date(report.year, 12, 31)),
        fill_date=format_xml_date(fill_date),
        software=software,
    )
