"""Helpers shared by the ДПС declaration encoders.

Covers period codes, date and money formatting for XML, the official file
name layout and the windows-1251 byte encoding required by the tax office
intake.
"""

from fop_tax.core.models.enums import PeriodType, Quarter
from fop_tax.core.models.profile import FOPProfile
from fop_tax.shared.formatters import format_xml_amount as format_amount
from fop_tax.shared.formatters import format_xml_date
from fop_tax.shared.validators import TaxOfficeCode, parse_tax_office_code

# Document identity (F01 family, version 9, original filing)
C_DOC = "F01"
C_DOC_VER = "9"
C_DOC_TYPE = "0"
C_DOC_STAN = "1"
C_DOC_CNT = "1"

MAIN_DOC_SUB = "033"
ESV_DOC_SUB = "331"

SOFTWARE_NAME = "ФОП Калькулятор v1.0"

WINDOWS_1251 = "cp1251"

_PERIOD_TYPES = {
    Quarter.Q1: PeriodType.QUARTER,
    Quarter.Q2: PeriodType.HALF_YEAR,
    Quarter.Q3: PeriodType.NINE_MONTHS,
    Quarter.Q4: PeriodType.YEAR,
}

__all__ = [
    "C_DOC",
    "ESV_DOC_SUB",
    "MAIN_DOC_SUB",
    "SOFTWARE_NAME",
    "TaxOfficeCode",
    "build_dps_filename",
    "encode_windows_1251",
    "format_amount",
    "format_xml_date",
    "parse_tax_office_code",
    "period_type_for_quarter",
]


def period_type_for_quarter(quarter: Quarter | int) -> PeriodType:
    """Year-to-date period code of a quarterly filing (Q1 -> 2 ... Q4 -> 5)."""
    return _PERIOD_TYPES[Quarter(quarter)]


def build_dps_filename(
    profile: FOPProfile,
    doc_sub: str,
    period_type: PeriodType | str,
    period_month: int,
    year: int,
) -> str:
    """Build the official ДПС file name of a declaration.

    Layout: C_STI_ORIG, TIN, C_DOC, C_DOC_SUB, C_DOC_VER (2 digits),
    C_DOC_STAN, C_DOC_CNT (8 digits), PERIOD_TYPE, PERIOD_MONTH (2 digits),
    PERIOD_YEAR, C_STI_ORIG, ".xml".

    Example:
        2650 + 1234567890 + F01 + 033 + 09 + 1 + 00000001 + 2 + 03 + 2025
        + 2650 -> "26501234567890F010330910000000120320252650.xml"
    """
    sti = profile.tax_office.code.strip()
    period = period_type.value if isinstance(period_type, PeriodType) else period_type
    parts = [
        sti,
        profile.tin.strip(),
        C_DOC,
        doc_sub,
        C_DOC_VER.zfill(2),
        C_DOC_STAN,
        C_DOC_CNT.zfill(8),
        period,
        f"{period_month:02d}",
        str(year),
        sti,
    ]
    return "".join(parts) + ".xml"


def encode_windows_1251(xml: str) -> bytes:
    """Encode text as windows-1251; unmappable characters become "?"."""
    return xml.encode(WINDOWS_1251, errors="replace")

