"""Application services for FOP Tax Assistant."""

from fop_tax.core.services.intake import RateSource, payment_from_entry, payments_from_parsed
from fop_tax.core.services.ledger import PaymentLedger, PaymentStore

__all__ = [
    "PaymentLedger",
    "PaymentStore",
    "RateSource",
    "payment_from_entry",
    "payments_from_parsed",
]
