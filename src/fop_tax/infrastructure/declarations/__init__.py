"""ДПС XML declaration encoders."""

from fop_tax.infrastructure.declarations.common import (
    build_dps_filename,
    encode_windows_1251,
    format_amount,
    format_xml_date,
    period_type_for_quarter,
)
from fop_tax.infrastructure.declarations.f0103309 import (
    declaration_filename,
    render_declaration_xml,
)
from fop_tax.infrastructure.declarations.f0133109 import esv_filename, render_esv_xml
from fop_tax.infrastructure.declarations.package import (
    FilingDocument,
    FilingPackage,
    build_filing_package,
)

__all__ = [
    "FilingDocument",
    "FilingPackage",
    "build_dps_filename",
    "build_filing_package",
    "declaration_filename",
    "encode_windows_1251",
    "esv_filename",
    "format_amount",
    "format_xml_date",
    "period_type_for_quarter",
    "render_declaration_xml",
    "render_esv_xml",
]
