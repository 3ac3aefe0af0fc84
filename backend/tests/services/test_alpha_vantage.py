"""Tests for the Alpha Vantage stock price source."""

import httpx
import pytest

from finboard.services.price_providers.alpha_vantage import AlphaVantageSource, _parse_global_quote
from finboard.services.price_providers.base import ProviderError
from tests.helpers import MockResponse, make_mock_client

pytestmark = pytest.mark.asyncio(loop_scope="function")


def _global_quote(price: str, change: str = "0.5000%") -> dict:
    return {"Global Quote": {"01. symbol": "X", "05. price": price, "10. change percent": change}}


class TestParseGlobalQuote:
    def test_valid(self):
        q = _parse_global_quote("AAPL", _global_quote("181.2500", "-1.2000%"))
        assert q.symbol == "AAPL"
        assert q.price == 181.25
        assert q.change_24h == -1.2
        assert q.source == "alphavantage"
        assert q.currency == "USD"

    def test_rate_limit_note(self):
        assert _parse_global_quote("AAPL", {"Note": "Thank you for using Alpha Vantage!"}) is None

    def test_empty_quote(self):
        assert _parse_global_quote("ZZZZ", {"Global Quote": {}}) is None

    def test_non_dict(self):
        assert _parse_global_quote("AAPL", ["unexpected"]) is None


async def test_missing_key_raises_without_request(monkeypatch):
    client = make_mock_client(lambda url, params: MockResponse({}))
    monkeypatch.setattr(httpx, "AsyncClient", client)

    with pytest.raises(ProviderError, match="No API key"):
        await AlphaVantageSource(api_key=None).fetch_quotes(["AAPL"])
    assert client.requests == []


async def test_one_request_per_symbol(monkeypatch):
    prices = {"AAPL": "180.0000", "MSFT": "410.5000"}
    client = make_mock_client(lambda url, params: MockResponse(_global_quote(prices[params["symbol"]])))
    monkeypatch.setattr(httpx, "AsyncClient", client)

    quotes = await AlphaVantageSource(api_key="k").fetch_quotes(["aapl", "MSFT"])

    assert {q.symbol: q.price for q in quotes} == {"AAPL": 180.0, "MSFT": 410.5}
    assert [p["symbol"] for _, p, _ in client.requests] == ["AAPL", "MSFT"]
    assert all(p["function"] == "GLOBAL_QUOTE" and p["apikey"] == "k" for _, p, _ in client.requests)


async def test_failing_symbol_does_not_abort_others(monkeypatch):
    def handler(url, params):
        if params["symbol"] == "BAD":
            raise httpx.ConnectTimeout("timed out")
        if params["symbol"] == "LIMIT":
            return MockResponse({"Note": "rate limited"})
        if params["symbol"] == "DOWN":
            return MockResponse({}, status_code=503)
        return MockResponse(_global_quote("99.0"))

    client = make_mock_client(handler)
    monkeypatch.setattr(httpx, "AsyncClient", client)

    quotes = await AlphaVantageSource(api_key="k").fetch_quotes(["BAD", "LIMIT", "DOWN", "GOOD"])

    assert [q.symbol for q in quotes] == ["GOOD"]
    assert len(client.requests) == 4
