"""Filing package: the quarterly declaration plus, for Q4, the ЄСВ annex."""

from datetime import date
from typing import Optional

from pydantic import BaseModel, Field

from fop_tax.core.models.enums import Quarter
from fop_tax.core.models.profile import FOPProfile
from fop_tax.core.models.report import TaxReport
from fop_tax.core.models.social import ESVReport
from fop_tax.infrastructure.declarations.common import SOFTWARE_NAME, encode_windows_1251
from fop_tax.infrastructure.declarations.f0103309 import (
    declaration_filename,
    render_declaration_xml,
)
from fop_tax.infrastructure.declarations.f0133109 import esv_filename, render_esv_xml


class FilingDocument(BaseModel):
    """One XML file ready to be written."""

    filename: str
    xml: str
    encoding: str = Field(default="utf-8", description="Byte encoding of the file")

    def to_bytes(self) -> bytes:
        """File contents in the encoding the tax office expects."""
        if self.encoding == "windows-1251":
            return encode_windows_1251(self.xml)
        return self.xml.encode(self.encoding)

    model_config = {"frozen": True}


class FilingPackage(BaseModel):
    """Documents filed together for one reporting period."""

    declaration: FilingDocument
    esv_annex: Optional[FilingDocument] = Field(default=None)

    @property
    def documents(self) -> list[FilingDocument]:
        return [d for d in (self.declaration, self.esv_annex) if d is not None]

    model_config = {"frozen": True}


def build_filing_package(
    profile: FOPProfile,
    report: TaxReport,
    esv_report: Optional[ESVReport] = None,
    fill_date: Optional[date] = None,
    software: str = SOFTWARE_NAME,
) -> FilingPackage:
    """Render all documents of a filing.

    The ЄСВ annex is attached only to the Q4 (annual) declaration. When
    attached, each document references the other's file name.

    Raises:
        TaxOfficeCodeError: If the tax office code is not 4 digits
    """
    fill_date = fill_date or date.today()
    main_filename = declaration_filename(profile, report)

    attach_esv = esv_report is not None and report.reporting_period.quarter == Quarter.Q4
    annex = None
    linked_esv = None

    if attach_esv:
        linked_esv = esv_filename(profile, esv_report)
        annex = FilingDocument(
            filename=linked_esv,
            xml=render_esv_xml(
                esv_report, profile, main_filename, fill_date=fill_date, software=software
            ),
        )

    declaration = FilingDocument(
        filename=main_filename,
        xml=render_declaration_xml(
            report,
            profile,
            linked_esv_filename=linked_esv,
            fill_date=fill_date,
            software=software,
        ),
        encoding="windows-1251",
    )

    return FilingPackage(declaration=declaration, esv_annex=annex)
