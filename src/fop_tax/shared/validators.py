"""Data validators for FOP Tax Assistant."""

import re
from typing import NamedTuple

from fop_tax.shared.exceptions import TaxOfficeCodeError

TIN_LENGTH = 10
TAX_OFFICE_CODE_LENGTH = 4
POSTAL_CODE_LENGTH = 5

_EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


class TaxOfficeCode(NamedTuple):
    """Tax office code split into its region and district parts."""

    region: str
    district: str


def validate_tin(tin: str) -> bool:
    """
    Validate a Ukrainian taxpayer identifier (РНОКПП).

    Args:
        tin: Identifier string (surrounding whitespace is ignored)

    Returns:
        True if it is exactly 10 digits, False otherwise
    """
    tin = (tin or "").strip()
    return len(tin) == TIN_LENGTH and tin.isdigit()


def check_tin(tin: str) -> tuple[bool, str]:
    """Validate TIN and return reason if invalid.

    Args:
        tin: Identifier string

    Returns:
        (True, "") if valid
        (False, "reason") if invalid
    """
    tin = (tin or "").strip()

    if not tin:
        return False, "ІПН є обов'язковим"

    if not validate_tin(tin):
        return False, f"ІПН повинен містити {TIN_LENGTH} цифр"

    return True, ""


def parse_tax_office_code(code: str) -> TaxOfficeCode:
    """
    Split a 4-digit tax office code into region and district.

    Args:
        code: Code like "2650"

    Returns:
        TaxOfficeCode(region="26", district="50")

    Raises:
        TaxOfficeCodeError: If the code is not exactly 4 digits
    """
    code = (code or "").strip()
    if not re.fullmatch(r"\d{4}", code):
        raise TaxOfficeCodeError("Код податкової повинен містити 4 цифри")

    return TaxOfficeCode(region=code[:2], district=code[2:])


def check_tax_office_code(code: str) -> tuple[bool, str]:
    """Validate a tax office code and return reason if invalid.

    Missing, wrong-length and malformed codes get different messages.

    Args:
        code: Tax office code

    Returns:
        (True, "") if valid
        (False, "reason") if invalid
    """
    code = (code or "").strip()

    if not code:
        return False, "Код податкової є обов'язковим"

    if len(code) != TAX_OFFICE_CODE_LENGTH:
        return False, f"Код податкової повинен містити {TAX_OFFICE_CODE_LENGTH} цифри"

    try:
        parse_tax_office_code(code)
    except TaxOfficeCodeError:
        return False, (
            "Код податкової має некоректний формат "
            "(очікується 2 цифри області та 2 цифри району)"
        )

    return True, ""


def validate_postal_code(postal_code: str) -> bool:
    """Check that a postal code is exactly 5 digits."""
    postal_code = (postal_code or "").strip()
    return len(postal_code) == POSTAL_CODE_LENGTH and postal_code.isdigit()


def validate_email(email: str) -> bool:
    """Check basic e-mail format (something@domain.tld)."""
    return bool(_EMAIL_RE.match((email or "").strip()))


def mask_tin(tin: str) -> str:
    """Mask TIN for display as ******1234."""
    tin = (tin or "").strip()
    if len(tin) != TIN_LENGTH:
        return "*" * TIN_LENGTH
    return f"{'*' * 6}{tin[6:]}"
