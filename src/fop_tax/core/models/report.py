"""Quarterly calculation and filing report models."""

from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field

from fop_tax.core.models.enums import Quarter
from fop_tax.shared.money import ZERO


class QuarterView(BaseModel):
    """Income and tax figures for one quarter or a cumulative range."""

    income_local: Decimal = Field(default=ZERO)
    income_foreign: Decimal = Field(default=ZERO)
    single_tax: Decimal = Field(default=ZERO)
    military_tax: Decimal = Field(default=ZERO)
    social_contributions: Decimal = Field(default=ZERO)

    @property
    def income_total(self) -> Decimal:
        """UAH plus converted foreign income."""
        return self.income_local + self.income_foreign

    def __add__(self, other: "QuarterView") -> "QuarterView":
        return QuarterView(
            income_local=self.income_local + other.income_local,
            income_foreign=self.income_foreign + other.income_foreign,
            single_tax=self.single_tax + other.single_tax,
            military_tax=self.military_tax + other.military_tax,
            social_contributions=self.social_contributions + other.social_contributions,
        )

    model_config = {"frozen": True}


class QuarterlyCalculation(BaseModel):
    """Report-ready figures for one target quarter.

    ``*_previous`` fields hold the cumulative tax through the previous
    quarter, i.e. the amount already declared in earlier filings of the
    year. ``*_to_pay`` is the increment newly due this quarter.
    """

    year: int
    quarter: Quarter

    # Income
    quarterly_income: Decimal = Field(default=ZERO)
    cumulative_income: Decimal = Field(default=ZERO)
    quarterly_income_local: Decimal = Field(default=ZERO)
    cumulative_income_local: Decimal = Field(default=ZERO)
    quarterly_income_foreign: Decimal = Field(default=ZERO)
    cumulative_income_foreign: Decimal = Field(default=ZERO)

    # Single tax
    quarterly_single_tax: Decimal = Field(default=ZERO)
    cumulative_single_tax: Decimal = Field(default=ZERO)
    previous_single_tax: Decimal = Field(default=ZERO)
    single_tax_to_pay: Decimal = Field(default=ZERO)

    # Military levy
    quarterly_military_tax: Decimal = Field(default=ZERO)
    cumulative_military_tax: Decimal = Field(default=ZERO)
    previous_military_tax: Decimal = Field(default=ZERO)
    military_tax_to_pay: Decimal = Field(default=ZERO)

    # ЄСВ
    quarterly_social_contributions: Decimal = Field(default=ZERO)
    cumulative_social_contributions: Decimal = Field(default=ZERO)

    model_config = {"frozen": True}


class PeriodAmount(BaseModel):
    """Quarter-only and year-to-date value of one form line."""

    current_quarter: Decimal = Field(default=ZERO)
    cumulative_from_year_start: Decimal = Field(default=ZERO)

    model_config = {"frozen": True}


class IncomeSection(BaseModel):
    """Section I of F0103309: income."""

    national_currency: PeriodAmount = Field(default_factory=PeriodAmount)
    foreign_currency: PeriodAmount = Field(default_factory=PeriodAmount)
    total: PeriodAmount = Field(default_factory=PeriodAmount)

    model_config = {"frozen": True}


class TaxSection(BaseModel):
    """Tax liability block of the declaration (single tax or military levy)."""

    taxable_income: Decimal = Field(default=ZERO, description="Cumulative base")
    tax_rate: Decimal = Field(default=ZERO)
    calculated_tax: Decimal = Field(default=ZERO, description="Cumulative tax")
    previously_paid: Decimal = Field(default=ZERO, description="Declared earlier")
    to_pay: Decimal = Field(default=ZERO, description="Newly due")

    model_config = {"frozen": True}


class ReportingPeriod(BaseModel):
    """Year and quarter of a filing."""

    year: int
    quarter: Quarter

    model_config = {"frozen": True}


class TaxReport(BaseModel):
    """Filing structure of the group 3 declaration (F0103309)."""

    reporting_period: ReportingPeriod
    income_section: IncomeSection = Field(default_factory=IncomeSection)
    single_tax_section: TaxSection = Field(default_factory=TaxSection)
    military_tax_section: TaxSection = Field(default_factory=TaxSection)

    model_config = {"frozen": True}


class LimitCheck(BaseModel):
    """Result of the simplified-system income ceiling check."""

    within_limits: bool = Field(default=True)
    limit_exceeded: bool = Field(default=False)
    usage_percent: int = Field(default=0)
    warning_message: Optional[str] = Field(default=None)

    model_config = {"frozen": True}


class TaxBalance(BaseModel):
    """Difference between calculated and paid tax."""

    to_pay: Decimal = Field(default=ZERO)
    to_return: Decimal = Field(default=ZERO)

    model_config = {"frozen": True}
