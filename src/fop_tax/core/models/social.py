"""ЄСВ (unified social contribution) models."""

from decimal import Decimal

from pydantic import BaseModel, Field

from fop_tax.shared.money import ZERO


class MonthESVSettings(BaseModel):
    """Contribution base and rate of one month."""

    month: int = Field(..., ge=1, le=12)
    income_base: Decimal = Field(..., description="Base, UAH")
    contribution_rate: Decimal = Field(..., description="Rate, percent")


class ESVSettings(BaseModel):
    """Monthly contribution schedule of one year."""

    year: int
    monthly_settings: list[MonthESVSettings] = Field(default_factory=list)

    def for_month(self, month: int) -> MonthESVSettings | None:
        """Settings of ``month`` (1-12), if present."""
        return next((m for m in self.monthly_settings if m.month == month), None)


class MonthContribution(BaseModel):
    """One month line of the ЄСВ annex."""

    month: int
    income_base: Decimal
    contribution_rate: Decimal
    contribution_amount: Decimal

    model_config = {"frozen": True}


class ESVReport(BaseModel):
    """Annual ЄСВ annex data (F0133109)."""

    year: int
    months: list[MonthContribution] = Field(default_factory=list)
    total_income_base: Decimal = Field(default=ZERO)
    total_contribution_amount: Decimal = Field(default=ZERO)

    model_config = {"frozen": True}
