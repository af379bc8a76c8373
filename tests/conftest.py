"""Pytest configuration and fixtures."""

from datetime import date

import pytest

from fop_tax.core.models import (
    Address,
    FOPProfile,
    Kved,
    KvedSet,
    TaxOffice,
)
from fop_tax.infrastructure.storage import InMemoryStore


@pytest.fixture
def profile() -> FOPProfile:
    """Complete, valid group 3 profile."""
    return FOPProfile(
        full_name="Шевченко Тарас Григорович",
        tin="1234567890",
        address=Address(
            region="Київська область",
            district="Бучанський район",
            city="Буча",
            street="вул. Вокзальна",
            building="12",
            apartment="5",
            postal_code="08292",
        ),
        phone="+380501234567",
        email="taras@example.com",
        tax_office=TaxOffice(code="1015", name="ГУ ДПС у Київській області"),
        registration_date=date(2021, 3, 1),
        kved=KvedSet(
            primary=Kved(code="62.01", name="Комп'ютерне програмування"),
            additional=[Kved(code="62.02", name="Консультування з питань інформатизації")],
        ),
    )


@pytest.fixture
def store() -> InMemoryStore:
    """Empty in-memory key-value store."""
    return InMemoryStore()

