"""National Bank of Ukraine official exchange rate client."""

import logging
from datetime import date
from decimal import Decimal
from typing import Optional

import httpx

from fop_tax.core.models.enums import FOREIGN_CURRENCIES, LOCAL_CURRENCY, Currency
from fop_tax.shared.money import to_decimal

log = logging.getLogger(__name__)

NBU_API_URL = "https://bank.gov.ua/NBUStatService/v1/statdirectory/exchange"


class NBURateClient:
    """Fetches historical official rates (UAH per unit) from the NBU API.

    Any transport, HTTP or payload error is logged and reported as "no rate";
    callers fall back to an unconverted amount. There are no retries.

    Can be used as a context manager to close the underlying HTTP client.
    """

    def __init__(
        self,
        base_url: str = NBU_API_URL,
        timeout: float = 10.0,
        client: Optional[httpx.Client] = None,
    ):
        self.base_url = base_url
        self.client = client or httpx.Client(timeout=timeout)

    def fetch_rate(self, currency: Currency | str, on: date) -> Optional[Decimal]:
        """Official rate of ``currency`` on a date.

        Args:
            currency: Currency code
            on: Rate date

        Returns:
            UAH per unit, 1 for UAH, or None if unavailable
        """
        currency = Currency(currency)
        if currency == LOCAL_CURRENCY:
            return Decimal("1")

        # The API switches to JSON on a bare "json" flag
        url = f"{self.base_url}?valcode={currency.value}&date={on.strftime('%Y%m%d')}&json"

        try:
            response = self.client.get(url)
            response.raise_for_status()
            payload = response.json()
        except (httpx.HTTPError, ValueError) as e:
            log.error("Error fetching NBU rate for %s on %s: %s", currency.value, on, e)
            return None

        if not isinstance(payload, list) or not payload:
            log.warning("NBU returned no rate for %s on %s", currency.value, on)
            return None

        try:
            return to_decimal(payload[0]["rate"])
        except (KeyError, TypeError, ValueError) as e:
            log.error("Unexpected NBU payload for %s on %s: %s", currency.value, on, e)
            return None

    def fetch_rates_for_date(self, on: date) -> dict[Currency, Decimal]:
        """Rates of all supported foreign currencies on a date.

        Currencies without a rate are omitted.
        """
        rates = {}
        for currency in FOREIGN_CURRENCIES:
            rate = self.fetch_rate(currency, on)
            if rate is not None:
                rates[currency] = rate
        return rates

    def close(self) -> None:
        self.client.close()

    def __enter__(self) -> "NBURateClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
