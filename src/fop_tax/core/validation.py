"""Pre-filing validation of reports and the taxpayer profile.

Every check runs; the caller receives the complete list of Ukrainian error
messages and decides whether to proceed. An empty list means valid.
"""

from typing import Optional

from fop_tax.core.models.profile import FOPProfile
from fop_tax.core.models.report import TaxReport
from fop_tax.core.models.social import ESVReport
from fop_tax.core.rules.tax_constants import MONTHS_IN_YEAR
from fop_tax.shared.formatters import format_amount
from fop_tax.shared.validators import (
    check_tax_office_code,
    check_tin,
    validate_email,
    validate_postal_code,
)


def _blank(value: Optional[str]) -> bool:
    return not (value or "").strip()


def _identity_errors(profile: FOPProfile) -> list[str]:
    """Checks shared by both declaration forms."""
    errors = []

    ok, reason = check_tin(profile.tin)
    if not ok:
        errors.append(reason)

    ok, reason = check_tax_office_code(profile.tax_office.code)
    if not ok:
        errors.append(reason)

    if _blank(profile.full_name):
        errors.append("ПІБ є обов'язковим")

    if _blank(profile.kved.primary.code):
        errors.append("Код основного КВЕДу є обов'язковим")

    return errors


def validate_report(report: TaxReport, profile: FOPProfile) -> list[str]:
    """Validate a quarterly report and profile before encoding F0103309.

    Args:
        report: Assembled tax report
        profile: Taxpayer profile

    Returns:
        List of error messages (empty if valid)
    """
    errors = _identity_errors(profile)

    if _blank(profile.kved.primary.name):
        errors.append("Назва основного КВЕДу є обов'язковою")

    income = report.income_section.total.cumulative_from_year_start
    if income <= 0:
        errors.append("Сума доходів повинна бути більшою за 0")

    if income > profile.yearly_income_limit:
        errors.append(
            f"Доходи перевищують ліміт для {profile.tax_group}-ї групи "
            f"({format_amount(profile.yearly_income_limit)} грн)"
        )

    return errors


def validate_esv_report(report: ESVReport, profile: FOPProfile) -> list[str]:
    """Validate annual ЄСВ annex data before encoding F0133109."""
    errors = _identity_errors(profile)

    if len(report.months) != MONTHS_IN_YEAR:
        errors.append("Звіт повинен містити дані за всі 12 місяців")

    for month in report.months:
        if month.income_base < 0:
            errors.append(f"Сума доходу за {month.month} місяць не може бути від'ємною")
        if month.contribution_rate <= 0 or month.contribution_rate > 100:
            errors.append(f"Ставка ЄСВ за {month.month} місяць повинна бути від 0 до 100%")

    return errors


def validate_profile(profile: FOPProfile) -> list[str]:
    """Validate that the profile has everything the declarations need."""
    errors = []

    if _blank(profile.full_name):
        errors.append("ПІБ є обов'язковим")

    ok, reason = check_tin(profile.tin)
    if not ok:
        errors.append(reason)

    address = profile.address
    if _blank(address.region):
        errors.append("Область є обов'язковою")
    if _blank(address.city):
        errors.append("Місто/селище є обов'язковим")
    if _blank(address.street):
        errors.append("Вулиця є обов'язковою")
    if _blank(address.building):
        errors.append("Номер будинку є обов'язковим")

    if _blank(address.postal_code):
        errors.append("Поштовий індекс є обов'язковим")
    elif not validate_postal_code(address.postal_code):
        errors.append("Поштовий індекс повинен містити 5 цифр")

    if _blank(profile.phone):
        errors.append("Телефон є обов'язковим")

    if _blank(profile.email):
        errors.append("Email є обов'язковим")
    elif not validate_email(profile.email):
        errors.append("Некоректний формат email")

    ok, reason = check_tax_office_code(profile.tax_office.code)
    if not ok:
        errors.append(reason)

    if _blank(profile.tax_office.name):
        errors.append("Назва податкової є обов'язковою")

    if _blank(profile.kved.primary.code):
        errors.append("Код основного КВЕДу є обов'язковим")
    if _blank(profile.kved.primary.name):
        errors.append("Назва основного КВЕДу є обов'язковою")

    return errors


def is_profile_complete(profile: Optional[FOPProfile]) -> bool:
    """True when a profile exists and passes ``validate_profile``."""
    if profile is None:
        return False
    return not validate_profile(profile)
