"""Payment ledger: stored payments kept in sync with accumulated data."""

import logging
from collections.abc import Iterable
from typing import Optional, Protocol

from fop_tax.core.calculators.accumulation import AccumulatedDataStore, AccumulationEngine
from fop_tax.core.models.accumulated import AccumulatedData
from fop_tax.core.models.payment import Payment

log = logging.getLogger(__name__)


class PaymentStore(Protocol):
    """Persistence of the complete payment list."""

    def load_all(self) -> list[Payment]: ...

    def save_all(self, payments: list[Payment]) -> None: ...


class PaymentLedger:
    """Adds, imports and deletes payments.

    Every change recomputes the accumulated data of each affected year from
    the full payment list.
    """

    def __init__(self, payments: PaymentStore, accumulated: AccumulatedDataStore):
        self.payments = payments
        self.accumulated = accumulated
        self.engine = AccumulationEngine(accumulated)

    def list_payments(self, year: Optional[int] = None) -> list[Payment]:
        """Stored payments sorted by date, optionally filtered by year."""
        payments = self.payments.load_all()
        if year is not None:
            payments = [p for p in payments if p.date.year == year]
        return sorted(payments, key=lambda p: p.date)

    def add(self, payment: Payment) -> AccumulatedData:
        """Store one payment and return the recomputed data of its year."""
        return self.import_payments([payment])[payment.date.year]

    def import_payments(self, new_payments: Iterable[Payment]) -> dict[int, AccumulatedData]:
        """Store several payments and recompute every year they touch."""
        new_payments = list(new_payments)
        payments = self.payments.load_all() + new_payments
        self.payments.save_all(payments)
        log.info("Stored %d new payments", len(new_payments))
        return self.engine.accumulate_years(payments, {p.date.year for p in new_payments})

    def delete(self, payment_id: str) -> Optional[AccumulatedData]:
        """Remove a payment by id.

        Returns:
            Recomputed data of the payment's year, or None if no such id
        """
        payments = self.payments.load_all()
        removed = next((p for p in payments if p.id == payment_id), None)
        if removed is None:
            log.warning("Payment %s not found", payment_id)
            return None

        remaining = [p for p in payments if p.id != payment_id]
        self.payments.save_all(remaining)
        return self.engine.accumulate(remaining, removed.date.year)

    def recompute(self, year: int) -> AccumulatedData:
        """Rebuild one year from the stored payments."""
        return self.engine.accumulate(self.payments.load_all(), year)

    def accumulated_data(self, year: int) -> AccumulatedData:
        """Accumulated data of ``year`` as stored."""
        return self.accumulated.load(year)
