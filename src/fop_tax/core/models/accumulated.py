"""Year-to-date accumulation models."""

from decimal import Decimal

from pydantic import BaseModel, Field

from fop_tax.core.models.amounts import QuarterlyAmounts
from fop_tax.core.models.enums import Quarter


class AccumulatedTaxes(BaseModel):
    """Per-quarter tax amounts derived from income."""

    single_tax: QuarterlyAmounts = Field(default_factory=QuarterlyAmounts.zero)
    military_tax: QuarterlyAmounts = Field(default_factory=QuarterlyAmounts.zero)
    social_contributions: QuarterlyAmounts = Field(
        default_factory=QuarterlyAmounts.zero,
        description="ЄСВ per quarter, fed by the monthly contribution schedule",
    )

    model_config = {"frozen": True}


class AccumulatedData(BaseModel):
    """Income and taxes of one calendar year, bucketed by quarter.

    Rebuilt from the full payment list on every change; never patched.
    """

    year: int = Field(..., description="Calendar year")
    income_local: QuarterlyAmounts = Field(
        default_factory=QuarterlyAmounts.zero, description="Income received in UAH"
    )
    income_foreign: QuarterlyAmounts = Field(
        default_factory=QuarterlyAmounts.zero,
        description="Foreign-currency income converted to UAH",
    )
    taxes: AccumulatedTaxes = Field(default_factory=AccumulatedTaxes)

    @classmethod
    def empty(cls, year: int) -> "AccumulatedData":
        """Create an all-zero structure for ``year``."""
        return cls(year=year)

    def income_total(self, quarter: Quarter | int) -> Decimal:
        """Combined UAH and foreign income of one quarter."""
        return self.income_local[quarter] + self.income_foreign[quarter]

    model_config = {"frozen": True}
