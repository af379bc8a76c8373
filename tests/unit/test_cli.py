"""Tests for the command line interface."""

import json
from decimal import Decimal

import pytest
from typer.testing import CliRunner

from fop_tax import __version__
from fop_tax.cli.app import app
from fop_tax.core.models import Quarter
from fop_tax.infrastructure.storage import (
    AccumulatedDataRepository,
    ESVSettingsRepository,
    JsonFileStore,
    PaymentRepository,
)

runner = CliRunner()


@pytest.fixture
def data_dir(tmp_path):
    return tmp_path / "data"


def invoke(data_dir, *args):
    return runner.invoke(app, ["--data-dir", str(data_dir), *args])


def load_profile(data_dir, profile, tmp_path):
    source = tmp_path / "profile.json"
    source.write_text(profile.model_dump_json(), encoding="utf-8")
    result = invoke(data_dir, "profile", "load", str(source))
    assert result.exit_code == 0, result.output


class TestGeneral:
    """Tests for global options."""

    def test_version(self):
        """Test the --version flag."""
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output


class TestPayments:
    """Tests for payment commands."""

    def test_add_uah(self, data_dir):
        """Test adding a UAH payment."""
        result = invoke(data_dir, "add", "2025-02-10", "100000")

        assert result.exit_code == 0, result.output
        assert "Платіж додано" in result.output
        data = AccumulatedDataRepository(JsonFileStore(data_dir)).load(2025)
        assert data.income_local[Quarter.Q1] == Decimal("100000")

    def test_add_foreign_with_rate(self, data_dir):
        """Test adding a USD payment with an explicit rate."""
        result = invoke(data_dir, "add", "2025-05-10", "1000", "-c", "usd", "-r", "41,5")

        assert result.exit_code == 0, result.output
        (payment,) = PaymentRepository(JsonFileStore(data_dir)).load_all()
        assert payment.amount_local == Decimal("41500.00")
        assert payment.exchange_rate == Decimal("41.5")

    def test_add_invalid_date(self, data_dir):
        """Test that a non-ISO date is rejected."""
        result = invoke(data_dir, "add", "10.02.2025", "100")
        assert result.exit_code != 0

    def test_add_negative_amount(self, data_dir):
        """Test that a negative amount is rejected."""
        result = invoke(data_dir, "add", "2025-02-10", "--", "-5")
        assert result.exit_code != 0
        assert PaymentRepository(JsonFileStore(data_dir)).load_all() == []

    @pytest.mark.parametrize("amount", ["nan", "inf", "Infinity"])
    def test_add_non_finite_amount(self, data_dir, amount):
        """Test that NaN and infinite amounts are rejected as bad parameters."""
        result = invoke(data_dir, "add", "2025-02-10", amount)

        assert result.exit_code == 2
        assert isinstance(result.exception, SystemExit)
        assert PaymentRepository(JsonFileStore(data_dir)).load_all() == []

    def test_list_payments(self, data_dir):
        """Test listing the payments of a year."""
        invoke(data_dir, "add", "2025-02-10", "1000")
        invoke(data_dir, "add", "2025-03-10", "500.50")

        result = invoke(data_dir, "payments", "--year", "2025")

        assert result.exit_code == 0
        assert "1 500,50" in result.output

    def test_list_empty(self, data_dir):
        """Test listing with no payments."""
        result = invoke(data_dir, "payments")
        assert "Платежів немає" in result.output

    def test_delete_by_prefix(self, data_dir):
        """Test deleting a payment by its id prefix."""
        invoke(data_dir, "add", "2025-02-10", "1000")
        (payment,) = PaymentRepository(JsonFileStore(data_dir)).load_all()

        result = invoke(data_dir, "delete", payment.id[:8])

        assert result.exit_code == 0, result.output
        assert PaymentRepository(JsonFileStore(data_dir)).load_all() == []
        data = AccumulatedDataRepository(JsonFileStore(data_dir)).load(2025)
        assert data.income_local.total() == Decimal("0")

    def test_delete_unknown(self, data_dir):
        """Test that an unknown id exits with an error."""
        result = invoke(data_dir, "delete", "nope")
        assert result.exit_code == 1


class TestCalculations:
    """Tests for summary and filing commands."""

    def test_summary(self, data_dir):
        """Test the quarter summary."""
        invoke(data_dir, "add", "2025-02-10", "100000")
        result = invoke(data_dir, "summary", "2025", "1")

        assert result.exit_code == 0, result.output
        assert "Розрахунок єдиного податку" in result.output

    def test_summary_rejects_bad_quarter(self, data_dir):
        """Test that quarter 5 is rejected."""
        result = invoke(data_dir, "summary", "2025", "5")
        assert result.exit_code != 0

    def test_declaration_requires_profile(self, data_dir, tmp_path):
        """Test that filing needs a stored profile."""
        invoke(data_dir, "add", "2025-02-10", "100000")
        result = invoke(data_dir, "declaration", "2025", "1", "-o", str(tmp_path / "out"))

        assert result.exit_code == 1
        assert "Профіль ФОП не заповнено" in result.output

    def test_declaration_blocked_by_validation(self, data_dir, profile, tmp_path):
        """Test that validation errors stop the filing."""
        load_profile(data_dir, profile, tmp_path)
        result = invoke(data_dir, "declaration", "2025", "1", "-o", str(tmp_path / "out"))

        assert result.exit_code == 1
        assert "Сума доходів повинна бути більшою за 0" in result.output
        assert not (tmp_path / "out").exists()

    def test_quarterly_declaration(self, data_dir, profile, tmp_path):
        """Test writing a Q1 declaration file."""
        load_profile(data_dir, profile, tmp_path)
        invoke(data_dir, "add", "2025-02-10", "100000")
        out = tmp_path / "out"

        result = invoke(
            data_dir, "declaration", "2025", "1", "-o", str(out), "--fill-date", "2025-04-20"
        )

        assert result.exit_code == 0, result.output
        (path,) = out.iterdir()
        assert path.name == "10151234567890F010330910000000120320251015.xml"
        content = path.read_bytes().decode("cp1251")
        assert "<R006G3>100000.00</R006G3>" in content
        assert "<D_FILL>20042025</D_FILL>" in content

    def test_annual_declaration_with_esv(self, data_dir, profile, tmp_path):
        """Test that Q4 also writes the ЄСВ annex."""
        load_profile(data_dir, profile, tmp_path)
        invoke(data_dir, "add", "2025-11-10", "100000")
        out = tmp_path / "out"

        result = invoke(data_dir, "declaration", "2025", "4", "-o", str(out))

        assert result.exit_code == 0, result.output
        names = sorted(p.name for p in out.iterdir())
        assert len(names) == 2
        assert any("F01331" in name for name in names)

    def test_annual_declaration_without_esv(self, data_dir, profile, tmp_path):
        """Test that the annex can be left out of Q4."""
        load_profile(data_dir, profile, tmp_path)
        invoke(data_dir, "add", "2025-11-10", "100000")
        out = tmp_path / "out"

        result = invoke(data_dir, "declaration", "2025", "4", "-o", str(out), "--no-esv")

        assert result.exit_code == 0, result.output
        assert len(list(out.iterdir())) == 1

    def test_preview(self, data_dir, profile, tmp_path):
        """Test writing the HTML preview."""
        load_profile(data_dir, profile, tmp_path)
        invoke(data_dir, "add", "2025-02-10", "100000")
        output = tmp_path / "preview.html"

        result = invoke(data_dir, "preview", "2025", "1", "-o", str(output))

        assert result.exit_code == 0, result.output
        assert "100 000,00" in output.read_text(encoding="utf-8")


class TestProfile:
    """Tests for profile commands."""

    def test_show_empty(self, data_dir):
        """Test showing a profile that was never loaded."""
        result = invoke(data_dir, "profile", "show")
        assert "Профіль ще не заповнено" in result.output

    def test_load_invalid(self, data_dir, tmp_path):
        """Test that an invalid profile file is rejected."""
        source = tmp_path / "profile.json"
        source.write_text('{"tax_group": "three"}', encoding="utf-8")

        result = invoke(data_dir, "profile", "load", str(source))

        assert result.exit_code == 1
        assert "Некоректний профіль" in result.output

    def test_load_incomplete_warns(self, data_dir, tmp_path):
        """Test that an incomplete profile loads with a warning."""
        source = tmp_path / "profile.json"
        source.write_text('{"full_name": "Франко Іван"}', encoding="utf-8")

        result = invoke(data_dir, "profile", "load", str(source))

        assert result.exit_code == 0
        assert "ІПН є обов'язковим" in result.output


class TestEsv:
    """Tests for ЄСВ commands."""

    def test_show(self, data_dir):
        """Test showing the ЄСВ schedule."""
        result = invoke(data_dir, "esv", "show", "2025")
        assert result.exit_code == 0
        assert "21 120,00" in result.output

    def test_set_month(self, data_dir):
        """Test changing a single month."""
        result = invoke(data_dir, "esv", "set", "2025", "12", "0")

        assert result.exit_code == 0, result.output
        store = JsonFileStore(data_dir)
        assert ESVSettingsRepository(store).load(2025).for_month(12).income_base == Decimal("0")
        data = AccumulatedDataRepository(store).load(2025)
        assert data.taxes.social_contributions[Quarter.Q4] == Decimal("3520.00")

    def test_set_from_month(self, data_dir):
        """Test changing every month from a start month."""
        invoke(data_dir, "esv", "set", "2025", "10", "10000", "22", "--from")
        settings = ESVSettingsRepository(JsonFileStore(data_dir)).load(2025)
        assert [m.income_base for m in settings.monthly_settings[9:]] == [Decimal("10000")] * 3

    def test_set_invalid_rate(self, data_dir):
        """Test that a rate above 100 is rejected."""
        result = invoke(data_dir, "esv", "set", "2025", "1", "8000", "150")
        assert result.exit_code == 1


class TestBackup:
    """Tests for backup commands."""

    def test_export_and_import(self, data_dir, tmp_path):
        """Test moving data between stores through a backup."""
        invoke(data_dir, "add", "2025-02-10", "1000")
        backup = tmp_path / "backup.json"

        result = invoke(data_dir, "backup", "export", "-o", str(backup))
        assert result.exit_code == 0, result.output
        assert len(json.loads(backup.read_text(encoding="utf-8"))["payments"]) == 1

        other_dir = tmp_path / "other"
        result = invoke(other_dir, "backup", "import", str(backup))

        assert result.exit_code == 0, result.output
        data = AccumulatedDataRepository(JsonFileStore(other_dir)).load(2025)
        assert data.income_local[Quarter.Q1] == Decimal("1000")

    def test_import_recomputes_years_missing_from_backup(self, data_dir, tmp_path):
        """Test that a replaced payment list clears totals of years it no longer covers."""
        invoke(data_dir, "add", "2024-05-10", "5000")
        other_dir = tmp_path / "other"
        invoke(other_dir, "add", "2025-02-01", "100")
        backup = tmp_path / "backup.json"
        invoke(other_dir, "backup", "export", "-o", str(backup))

        result = invoke(data_dir, "backup", "import", str(backup))

        assert result.exit_code == 0, result.output
        store = JsonFileStore(data_dir)
        (payment,) = PaymentRepository(store).load_all()
        assert payment.date.year == 2025
        accumulated = AccumulatedDataRepository(store)
        assert accumulated.load(2024).income_local.total() == Decimal("0")
        assert accumulated.load(2024).taxes.single_tax.total() == Decimal("0")
        assert accumulated.load(2025).income_local[Quarter.Q1] == Decimal("100")

    def test_import_invalid(self, data_dir, tmp_path):
        """Test that a broken backup exits with an error."""
        backup = tmp_path / "backup.json"
        backup.write_text("{broken", encoding="utf-8")
        result = invoke(data_dir, "backup", "import", str(backup))
        assert result.exit_code == 1

    def test_info_and_clear(self, data_dir):
        """Test storage info and clearing the store."""
        invoke(data_dir, "add", "2025-02-10", "1000")

        result = invoke(data_dir, "backup", "info")
        assert result.exit_code == 0
        assert "fop-tax-payments" in result.output

        result = invoke(data_dir, "backup", "clear", "--yes")
        assert result.exit_code == 0
        assert JsonFileStore(data_dir).keys() == []
