"""Payment models."""

import datetime
from decimal import Decimal
from typing import Optional
from uuid import uuid4

from pydantic import BaseModel, Field, field_validator, model_validator

from fop_tax.core.models.enums import LOCAL_CURRENCY, Currency


def new_payment_id() -> str:
    """Generate an opaque unique payment id."""
    return uuid4().hex


def _date_part(value: object) -> object:
    """Drop the time part of ISO datetime strings ("2025-01-15T00:00:00Z")."""
    if isinstance(value, str) and "T" in value:
        return value.split("T", 1)[0]
    return value


class Payment(BaseModel):
    """One incoming payment recorded by the FOP.

    ``amount_local`` is computed once at entry time and is the only amount
    the accumulation engine reads.
    """

    id: str = Field(default_factory=new_payment_id, description="Opaque payment id")
    date: datetime.date = Field(..., description="Transaction date")
    currency_code: Currency = Field(..., description="Payment currency")
    amount: Decimal = Field(..., ge=0, description="Amount in payment currency")
    amount_local: Decimal = Field(..., ge=0, description="Amount in UAH")
    exchange_rate: Optional[Decimal] = Field(
        default=None, description="NBU rate used for conversion"
    )
    counterparty: str = Field(default="", description="Payer name")
    counterparty_account: str = Field(default="", description="Payer account")
    description: Optional[str] = Field(default=None, description="Payment purpose")

    @field_validator("date", mode="before")
    @classmethod
    def parse_iso_date(cls, v: object) -> object:
        """Accept ISO datetime strings from stored data."""
        return _date_part(v)

    @model_validator(mode="after")
    def check_local_amount(self) -> "Payment":
        """UAH payments must carry the same amount in both fields."""
        if self.currency_code == LOCAL_CURRENCY and self.amount_local != self.amount:
            raise ValueError("Для платежу в UAH сума в гривнях має дорівнювати сумі")
        return self

    @property
    def is_foreign(self) -> bool:
        """Whether the payment was received in a foreign currency."""
        return self.currency_code != LOCAL_CURRENCY

    model_config = {"frozen": True}


class ParsedPayment(BaseModel):
    """Normalized payment record produced by a bank statement importer."""

    date: datetime.date = Field(..., description="Transaction date")
    amount: Decimal = Field(..., ge=0, description="Absolute amount")
    currency_code: Currency = Field(default=LOCAL_CURRENCY)
    counterparty: str = Field(default="")
    counterparty_account: str = Field(default="")
    description: Optional[str] = Field(default=None)
    is_incoming: bool = Field(default=True, description="Incoming (credit) payment")

    @field_validator("date", mode="before")
    @classmethod
    def parse_iso_date(cls, v: object) -> object:
        """Accept ISO datetime strings."""
        return _date_part(v)

    @field_validator("currency_code", mode="before")
    @classmethod
    def normalize_currency(cls, v: object) -> object:
        """Map Ukrainian currency names from bank statements to ISO codes."""
        if isinstance(v, str):
            name = v.strip().upper()
            aliases = {
                "ГРИВНЯ": "UAH",
                "ГРН": "UAH",
                "ДОЛАР США": "USD",
                "ДОЛЛАР США": "USD",
                "ЄВРО": "EUR",
            }
            return aliases.get(name, name)
        return v

    model_config = {"frozen": True}
