"""Business rules and thresholds for FOP tax calculation."""

from fop_tax.core.rules.tax_constants import (
    DEFAULT_INSURANCE_CATEGORY_CODE,
    ESV_DEFAULT_INCOME_BASE,
    ESV_DEFAULT_RATE,
    LIMIT_WARNING_THRESHOLD,
    MILITARY_TAX_RATE,
    MONTHS_IN_YEAR,
    SINGLE_TAX_RATE,
    TAX_GROUP,
    YEARLY_INCOME_LIMIT,
)

__all__ = [
    "DEFAULT_INSURANCE_CATEGORY_CODE",
    "ESV_DEFAULT_INCOME_BASE",
    "ESV_DEFAULT_RATE",
    "LIMIT_WARNING_THRESHOLD",
    "MILITARY_TAX_RATE",
    "MONTHS_IN_YEAR",
    "SINGLE_TAX_RATE",
    "TAX_GROUP",
    "YEARLY_INCOME_LIMIT",
]
