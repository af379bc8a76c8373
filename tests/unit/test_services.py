"""Tests for payment intake and the payment ledger."""

from datetime import date
from decimal import Decimal

from fop_tax.core.models import Currency, ParsedPayment, Quarter
from fop_tax.core.services import PaymentLedger, payment_from_entry, payments_from_parsed
from fop_tax.infrastructure.storage import (
    AccumulatedDataRepository,
    InMemoryStore,
    PaymentRepository,
)


class FakeRateSource:
    """Rate source returning fixed rates and counting lookups."""

    def __init__(self, rates=None):
        self.rates = rates or {Currency.USD: Decimal("41.5"), Currency.EUR: Decimal("45")}
        self.calls = []

    def fetch_rate(self, currency, on):
        self.calls.append((currency, on))
        return self.rates.get(currency)


def make_ledger(store=None) -> PaymentLedger:
    store = store or InMemoryStore()
    return PaymentLedger(PaymentRepository(store), AccumulatedDataRepository(store))


class TestPaymentFromEntry:
    """Tests for payment_from_entry."""

    def test_uah_does_not_look_up_rate(self):
        """Test that UAH entries skip the rate lookup."""
        source = FakeRateSource()
        payment = payment_from_entry(date(2025, 1, 5), Decimal("100"), "UAH", rate_source=source)
        assert payment.amount_local == Decimal("100")
        assert source.calls == []

    def test_foreign_rate_looked_up(self):
        """Test that foreign entries fetch the rate of their day."""
        source = FakeRateSource()
        payment = payment_from_entry(date(2025, 1, 5), Decimal("100"), "USD", rate_source=source)
        assert payment.amount_local == Decimal("4150.00")
        assert payment.exchange_rate == Decimal("41.5")
        assert source.calls == [(Currency.USD, date(2025, 1, 5))]

    def test_explicit_rate_wins(self):
        """Test that a given rate skips the lookup."""
        source = FakeRateSource()
        payment = payment_from_entry(
            date(2025, 1, 5), Decimal("100"), "USD", rate_source=source, rate=Decimal("40")
        )
        assert payment.amount_local == Decimal("4000.00")
        assert source.calls == []

    def test_missing_rate_keeps_raw_amount(self, caplog):
        """Test that a failed lookup keeps the raw amount."""
        source = FakeRateSource(rates={})
        with caplog.at_level("WARNING"):
            payment = payment_from_entry(
                date(2025, 1, 5), Decimal("100"), "EUR", rate_source=source
            )
        assert payment.amount_local == Decimal("100")
        assert payment.exchange_rate is None
        assert "No NBU rate" in caplog.text


class TestPaymentsFromParsed:
    """Tests for payments_from_parsed."""

    def test_outgoing_skipped_and_rates_cached(self):
        """Test that outgoing rows are skipped and rates fetched once."""
        records = [
            ParsedPayment(date=date(2025, 2, 3), amount=Decimal("10"), currency_code="USD"),
            ParsedPayment(date=date(2025, 2, 3), amount=Decimal("20"), currency_code="USD"),
            ParsedPayment(date=date(2025, 2, 4), amount=Decimal("30"), currency_code="Гривня"),
            ParsedPayment(
                date=date(2025, 2, 4),
                amount=Decimal("99"),
                currency_code="UAH",
                is_incoming=False,
            ),
        ]
        source = FakeRateSource()

        payments = payments_from_parsed(records, source)

        assert [p.amount_local for p in payments] == [
            Decimal("415.00"),
            Decimal("830.00"),
            Decimal("30"),
        ]
        assert source.calls == [(Currency.USD, date(2025, 2, 3))]

    def test_counterparty_details_kept(self):
        """Test that counterparty fields reach the payment."""
        record = ParsedPayment(
            date=date(2025, 2, 3),
            amount=Decimal("10"),
            counterparty="ТОВ Ромашка",
            counterparty_account="UA213223130000026007233566001",
            description="Оплата за послуги",
        )
        (payment,) = payments_from_parsed([record], FakeRateSource())
        assert payment.counterparty == "ТОВ Ромашка"
        assert payment.description == "Оплата за послуги"


class TestPaymentLedger:
    """Tests for PaymentLedger."""

    def test_add_recomputes_year(self):
        """Test that adding recomputes the payment's year."""
        ledger = make_ledger()
        payment = payment_from_entry(date(2025, 5, 1), Decimal("1000"), "UAH")

        data = ledger.add(payment)

        assert data.income_local[Quarter.Q2] == Decimal("1000")
        assert ledger.accumulated_data(2025) == data
        assert ledger.list_payments() == [payment]

    def test_import_touches_each_year(self):
        """Test that an import recomputes every affected year."""
        ledger = make_ledger()
        result = ledger.import_payments(
            [
                payment_from_entry(date(2024, 12, 31), Decimal("1"), "UAH"),
                payment_from_entry(date(2025, 1, 1), Decimal("2"), "UAH"),
            ]
        )
        assert sorted(result) == [2024, 2025]
        assert result[2024].income_local[Quarter.Q4] == Decimal("1")

    def test_list_sorted_and_filtered(self):
        """Test listing by date and by year."""
        ledger = make_ledger()
        late = payment_from_entry(date(2025, 9, 1), Decimal("1"), "UAH")
        early = payment_from_entry(date(2025, 2, 1), Decimal("1"), "UAH")
        other = payment_from_entry(date(2024, 2, 1), Decimal("1"), "UAH")
        ledger.import_payments([late, early, other])

        assert ledger.list_payments(2025) == [early, late]
        assert ledger.list_payments()[0] == other

    def test_delete(self):
        """Test deleting a payment and recomputing its year."""
        ledger = make_ledger()
        keep = payment_from_entry(date(2025, 1, 1), Decimal("100"), "UAH")
        drop = payment_from_entry(date(2025, 1, 2), Decimal("50"), "UAH")
        ledger.import_payments([keep, drop])

        data = ledger.delete(drop.id)

        assert data.income_local[Quarter.Q1] == Decimal("100")
        assert ledger.list_payments() == [keep]

    def test_delete_unknown_id(self):
        """Test that deleting an unknown id returns None."""
        ledger = make_ledger()
        assert ledger.delete("missing") is None

    def test_state_survives_new_ledger(self):
        """Test that a new ledger sees stored payments."""
        store = InMemoryStore()
        make_ledger(store).add(payment_from_entry(date(2025, 3, 1), Decimal("7"), "UAH"))
        assert make_ledger(store).recompute(2025).income_local[Quarter.Q1] == Decimal("7")
