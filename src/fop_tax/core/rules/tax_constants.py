"""Tax constants and limits for FOP simplified-tax group 3.

Values follow the Tax Code of Ukraine as applied in 2025:
- single tax 5% of income for non-VAT payers of group 3
- military levy 1% of income (from January 2025)
- annual income ceiling for group 3
- ЄСВ 22% of the declared monthly base (minimum wage by default)
"""

from decimal import Decimal

# === Group 3 rates ===

TAX_GROUP = 3

# Single tax (єдиний податок), non-VAT payers
SINGLE_TAX_RATE = Decimal("0.05")

# Military levy (військовий збір)
MILITARY_TAX_RATE = Decimal("0.01")

# === Income ceiling ===

# Group 3 yearly income limit (UAH); exactly-at-limit is still within
YEARLY_INCOME_LIMIT = Decimal("12000000")

# Share of the limit after which a soft warning is shown
LIMIT_WARNING_THRESHOLD = Decimal("0.9")

# === ЄСВ (unified social contribution) ===

# Default monthly base (minimum wage, UAH)
ESV_DEFAULT_INCOME_BASE = Decimal("8000")

# Default contribution rate, percent of the base
ESV_DEFAULT_RATE = Decimal("22")

# Payer category reported in the annual annex (R081G1)
DEFAULT_INSURANCE_CATEGORY_CODE = "1"

MONTHS_IN_YEAR = 12
