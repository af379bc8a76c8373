"""Taxpayer (FOP) profile models."""

import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field

from fop_tax.core.rules.tax_constants import (
    DEFAULT_INSURANCE_CATEGORY_CODE,
    MILITARY_TAX_RATE,
    SINGLE_TAX_RATE,
    TAX_GROUP,
    YEARLY_INCOME_LIMIT,
)


class Address(BaseModel):
    """Registered address of the FOP."""

    region: str = Field(default="", description="Область")
    district: Optional[str] = Field(default=None, description="Район")
    city: str = Field(default="", description="Місто/селище")
    street: str = Field(default="")
    building: str = Field(default="")
    apartment: Optional[str] = Field(default=None)
    postal_code: str = Field(default="", description="5-digit postal code")

    def format(self) -> str:
        """Single-line address as printed on the declaration."""
        house = self.building
        if self.apartment:
            house = f"{house}, кв. {self.apartment}"
        parts = [
            self.postal_code,
            self.region,
            self.district,
            self.city,
            f"{self.street}, {house}" if self.street else house,
        ]
        return ", ".join(p for p in parts if p)


class TaxOffice(BaseModel):
    """Controlling tax authority."""

    code: str = Field(default="", description="4-digit code (region + district)")
    name: str = Field(default="")


class Kved(BaseModel):
    """Economic activity classification (КВЕД) entry."""

    code: str = Field(default="")
    name: str = Field(default="")


class KvedSet(BaseModel):
    """Primary and additional activities."""

    primary: Kved = Field(default_factory=Kved)
    additional: list[Kved] = Field(default_factory=list)

    def all(self) -> list[Kved]:
        """Primary first, then additional entries with a code."""
        entries = [self.primary] if self.primary.code else []
        return entries + [k for k in self.additional if k.code]


class FOPProfile(BaseModel):
    """Taxpayer data used for filing (group 3, non-VAT payer).

    Fields default to blanks so an incomplete profile can be stored and
    validated later.
    """

    full_name: str = Field(default="", description="ПІБ")
    tin: str = Field(default="", description="РНОКПП, 10 digits")
    address: Address = Field(default_factory=Address)
    phone: str = Field(default="")
    email: str = Field(default="")
    tax_office: TaxOffice = Field(default_factory=TaxOffice)
    registration_date: Optional[datetime.date] = Field(default=None)
    kved: KvedSet = Field(default_factory=KvedSet)

    tax_group: int = Field(default=TAX_GROUP)
    is_vat_payer: bool = Field(default=False)
    single_tax_rate: Decimal = Field(default=SINGLE_TAX_RATE, ge=0, le=1)
    military_tax_rate: Decimal = Field(default=MILITARY_TAX_RATE, ge=0, le=1)
    yearly_income_limit: Decimal = Field(default=YEARLY_INCOME_LIMIT, gt=0)
    insurance_category_code: str = Field(
        default=DEFAULT_INSURANCE_CATEGORY_CODE,
        description="ЄСВ payer category for the annual annex",
    )
