"""Tests for pre-filing validation."""

from decimal import Decimal

from fop_tax.core.calculators.social import build_esv_report, create_default_esv_settings
from fop_tax.core.models import (
    ESVReport,
    FOPProfile,
    IncomeSection,
    MonthContribution,
    PeriodAmount,
    Quarter,
    ReportingPeriod,
    TaxReport,
)
from fop_tax.core.validation import (
    is_profile_complete,
    validate_esv_report,
    validate_profile,
    validate_report,
)


def report_with_income(amount: str) -> TaxReport:
    return TaxReport(
        reporting_period=ReportingPeriod(year=2025, quarter=Quarter.Q1),
        income_section=IncomeSection(
            total=PeriodAmount(
                current_quarter=Decimal(amount),
                cumulative_from_year_start=Decimal(amount),
            )
        ),
    )


class TestValidateReport:
    """Tests for validate_report."""

    def test_valid(self, profile):
        """Test a valid report."""
        assert validate_report(report_with_income("100000"), profile) == []

    def test_zero_income(self, profile):
        """Test that zero income is an error."""
        errors = validate_report(report_with_income("0"), profile)
        assert errors == ["Сума доходів повинна бути більшою за 0"]

    def test_income_above_limit(self, profile):
        """Test that income above the limit is an error."""
        errors = validate_report(report_with_income("12000000.01"), profile)
        assert errors == ["Доходи перевищують ліміт для 3-ї групи (12 000 000,00 грн)"]

    def test_income_at_limit_is_valid(self, profile):
        """Test that income at the limit is valid."""
        assert validate_report(report_with_income("12000000"), profile) == []

    def test_collects_all_errors(self):
        """Test that every failed check is reported at once."""
        errors = validate_report(report_with_income("0"), FOPProfile())
        assert "ІПН є обов'язковим" in errors
        assert "Код податкової є обов'язковим" in errors
        assert "ПІБ є обов'язковим" in errors
        assert "Код основного КВЕДу є обов'язковим" in errors
        assert "Назва основного КВЕДу є обов'язковою" in errors
        assert "Сума доходів повинна бути більшою за 0" in errors

    def test_short_tin(self, profile):
        """Test that a short TIN is an error."""
        broken = profile.model_copy(update={"tin": "12345"})
        errors = validate_report(report_with_income("1"), broken)
        assert errors == ["ІПН повинен містити 10 цифр"]


class TestValidateEsvReport:
    """Tests for validate_esv_report."""

    def test_default_schedule_is_valid(self, profile):
        """Test that the default ЄСВ schedule is valid."""
        report = build_esv_report(create_default_esv_settings(2025))
        assert validate_esv_report(report, profile) == []

    def test_missing_months(self, profile):
        """Test that missing months are reported."""
        report = ESVReport(year=2025, months=[])
        assert validate_esv_report(report, profile) == [
            "Звіт повинен містити дані за всі 12 місяців"
        ]

    def test_bad_month_values(self, profile):
        """Test that bad month values are reported."""
        report = build_esv_report(create_default_esv_settings(2025))
        months = list(report.months)
        months[1] = MonthContribution(
            month=2,
            income_base=Decimal("-1"),
            contribution_rate=Decimal("22"),
            contribution_amount=Decimal("0"),
        )
        months[4] = MonthContribution(
            month=5,
            income_base=Decimal("8000"),
            contribution_rate=Decimal("120"),
            contribution_amount=Decimal("0"),
        )
        errors = validate_esv_report(report.model_copy(update={"months": months}), profile)
        assert errors == [
            "Сума доходу за 2 місяць не може бути від'ємною",
            "Ставка ЄСВ за 5 місяць повинна бути від 0 до 100%",
        ]


class TestValidateProfile:
    """Tests for validate_profile."""

    def test_complete_profile(self, profile):
        """Test a complete profile."""
        assert validate_profile(profile) == []
        assert is_profile_complete(profile) is True

    def test_missing_profile(self):
        """Test that no profile is an error."""
        assert is_profile_complete(None) is False

    def test_empty_profile_lists_every_field(self):
        """Test that an empty profile reports every field."""
        errors = validate_profile(FOPProfile())
        assert len(errors) == 13
        assert "Область є обов'язковою" in errors
        assert "Поштовий індекс є обов'язковим" in errors
        assert "Email є обов'язковим" in errors
        assert "Назва податкової є обов'язковою" in errors

    def test_bad_formats(self, profile):
        """Test that malformed profile fields are reported."""
        broken = profile.model_copy(
            update={
                "email": "not-an-email",
                "address": profile.address.model_copy(update={"postal_code": "123"}),
            }
        )
        assert validate_profile(broken) == [
            "Поштовий індекс повинен містити 5 цифр",
            "Некоректний формат email",
        ]

    def test_incomplete_profile(self, profile):
        """Test an incomplete profile."""
        assert is_profile_complete(profile.model_copy(update={"phone": ""})) is False
