"""Domain models for FOP tax filing."""

from fop_tax.core.models.accumulated import AccumulatedData, AccumulatedTaxes
from fop_tax.core.models.amounts import QuarterlyAmounts
from fop_tax.core.models.enums import (
    FOREIGN_CURRENCIES,
    LOCAL_CURRENCY,
    Currency,
    PeriodType,
    Quarter,
)
from fop_tax.core.models.payment import ParsedPayment, Payment, new_payment_id
from fop_tax.core.models.profile import Address, FOPProfile, Kved, KvedSet, TaxOffice
from fop_tax.core.models.report import (
    IncomeSection,
    LimitCheck,
    PeriodAmount,
    QuarterlyCalculation,
    QuarterView,
    ReportingPeriod,
    TaxBalance,
    TaxReport,
    TaxSection,
)
from fop_tax.core.models.social import (
    ESVReport,
    ESVSettings,
    MonthContribution,
    MonthESVSettings,
)

__all__ = [
    "AccumulatedData",
    "AccumulatedTaxes",
    "Address",
    "Currency",
    "ESVReport",
    "ESVSettings",
    "FOPProfile",
    "FOREIGN_CURRENCIES",
    "IncomeSection",
    "Kved",
    "KvedSet",
    "LOCAL_CURRENCY",
    "LimitCheck",
    "MonthContribution",
    "MonthESVSettings",
    "ParsedPayment",
    "Payment",
    "PeriodAmount",
    "PeriodType",
    "Quarter",
    "QuarterView",
    "QuarterlyAmounts",
    "QuarterlyCalculation",
    "ReportingPeriod",
    "TaxBalance",
    "TaxOffice",
    "TaxReport",
    "TaxSection",
    "new_payment_id",
]
