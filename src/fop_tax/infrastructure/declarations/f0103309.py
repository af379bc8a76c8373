"""F0103309: quarterly declaration of a group 3 single tax payer."""

import logging
from datetime import date
from typing import Optional

from fop_tax.core.models.enums import Quarter
from fop_tax.core.models.profile import FOPProfile
from fop_tax.core.models.report import TaxReport
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
    period_type_for_quarter,
)
from fop_tax.infrastructure.templates import env as template_env

log = logging.getLogger(__name__)

TEMPLATE_NAME = "declarations/F0103309.xml"

# Body flag marking the year-to-date period of the filing
PERIOD_FLAGS = {
    Quarter.Q1: "H1KV",
    Quarter.Q2: "HHY",
    Quarter.Q3: "H3KV",
    Quarter.Q4: "HY",
}


def declaration_filename(profile: FOPProfile, report: TaxReport) -> str:
    """Official file name of the quarterly declaration."""
    quarter = report.reporting_period.quarter
    return build_dps_filename(
        profile,
        MAIN_DOC_SUB,
        period_type_for_quarter(quarter),
        quarter.end_month,
        report.reporting_period.year,
    )


def render_declaration_xml(
    report: TaxReport,
    profile: FOPProfile,
    linked_esv_filename: Optional[str] = None,
    fill_date: Optional[date] = None,
    software: str = SOFTWARE_NAME,
) -> str:
    """Render the declaration XML.

    Args:
        report: Assembled quarterly report
        profile: Taxpayer profile
        linked_esv_filename: File name of the ЄСВ annex filed together
            with this declaration (Q4 only)
        fill_date: Date of filling; defaults to today
        software: Value of the SOFTWARE header tag

    Returns:
        XML text with a windows-1251 prolog; encode with
        ``encode_windows_1251`` before writing

    Raises:
        TaxOfficeCodeError: If the tax office code is not 4 digits
    """
    tax_office = parse_tax_office_code(profile.tax_office.code)
    quarter = report.reporting_period.quarter
    fill_date = fill_date or date.today()

    log.debug("Rendering F0103309 for %s Q%d", report.reporting_period.year, quarter)

    return template_env.get_template(TEMPLATE_NAME).render(
        doc={
            "c_doc": C_DOC,
            "sub": MAIN_DOC_SUB,
            "ver": C_DOC_VER,
            "type": C_DOC_TYPE,
            "cnt": C_DOC_CNT,
            "stan": C_DOC_STAN,
        },
        linked={"sub": ESV_DOC_SUB, "type": "1", "filename": linked_esv_filename},
        profile=profile,
        report=report,
        region=tax_office.region,
        district=tax_office.district,
        period_month=quarter.end_month,
        period_type=period_type_for_quarter(quarter).value,
        period_flag=PERIOD_FLAGS[quarter],
        location=profile.address.format(),
        kveds=profile.kved.all(),
        fill_date=format_xml_date(fill_date),
        software=software,
    )
