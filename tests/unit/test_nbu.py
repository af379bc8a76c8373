"""Tests for the NBU exchange rate client."""

from datetime import date
from decimal import Decimal

import httpx

from fop_tax.core.models import Currency
from fop_tax.infrastructure.rates import NBURateClient


def make_client(handler) -> NBURateClient:
    return NBURateClient(client=httpx.Client(transport=httpx.MockTransport(handler)))


def rate_handler(rates: dict[str, float]):
    """Respond like the NBU API with the given rates per currency."""
    requests = []

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        code = request.url.params.get("valcode")
        if code not in rates:
            return httpx.Response(200, json=[])
        return httpx.Response(
            200,
            json=[{"cc": code, "rate": rates[code], "exchangedate": "15.01.2025"}],
        )

    handler.requests = requests
    return handler


class TestFetchRate:
    """Tests for NBURateClient.fetch_rate."""

    def test_success(self):
        """Test reading a rate from the NBU response."""
        handler = rate_handler({"USD": 41.5})
        with make_client(handler) as client:
            rate = client.fetch_rate(Currency.USD, date(2025, 1, 15))

        assert rate == Decimal("41.5")
        url = str(handler.requests[0].url)
        assert "valcode=USD" in url
        assert "date=20250115" in url
        assert "json" in handler.requests[0].url.params

    def test_uah_needs_no_request(self):
        """Test that UAH returns 1 without a request."""
        handler = rate_handler({})
        client = make_client(handler)
        assert client.fetch_rate("UAH", date(2025, 1, 15)) == Decimal("1")
        assert handler.requests == []

    def test_empty_response(self, caplog):
        """Test that an empty list gives no rate."""
        with caplog.at_level("WARNING"):
            rate = make_client(rate_handler({})).fetch_rate("EUR", date(2025, 1, 15))
        assert rate is None
        assert "no rate" in caplog.text

    def test_server_error(self):
        """Test that an HTTP error gives no rate."""
        client = make_client(lambda request: httpx.Response(500))
        assert client.fetch_rate("USD", date(2025, 1, 15)) is None

    def test_invalid_json(self):
        """Test that a non-JSON body gives no rate."""
        client = make_client(lambda request: httpx.Response(200, text="<html>"))
        assert client.fetch_rate("USD", date(2025, 1, 15)) is None

    def test_unexpected_payload(self):
        """Test that a payload without a rate gives no rate."""
        client = make_client(lambda request: httpx.Response(200, json=[{"cc": "USD"}]))
        assert client.fetch_rate("USD", date(2025, 1, 15)) is None

    def test_connection_error(self):
        """Test that a network failure gives no rate."""
        def handler(request):
            raise httpx.ConnectError("offline", request=request)

        assert make_client(handler).fetch_rate("USD", date(2025, 1, 15)) is None


class TestFetchRatesForDate:
    """Tests for NBURateClient.fetch_rates_for_date."""

    def test_missing_currencies_omitted(self):
        """Test that currencies without a rate are left out."""
        client = make_client(rate_handler({"USD": 41.25}))
        assert client.fetch_rates_for_date(date(2025, 1, 15)) == {
            Currency.USD: Decimal("41.25")
        }
