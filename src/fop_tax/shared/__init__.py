"""Shared utilities for FOP Tax Assistant."""

from fop_tax.shared.money import ZERO, round2, round_percent, to_decimal
from fop_tax.shared.validators import (
    TaxOfficeCode,
    mask_tin,
    parse_tax_office_code,
    check_tax_office_code,
    check_tin,
    validate_email,
    validate_postal_code,
    validate_tin,
)

__all__ = [
    # Money
    "ZERO",
    "round2",
    "round_percent",
    "to_decimal",
    # Validators
    "TaxOfficeCode",
    "mask_tin",
    "parse_tax_office_code",
    "check_tax_office_code",
    "check_tin",
    "validate_email",
    "validate_postal_code",
    "validate_tin",
]
