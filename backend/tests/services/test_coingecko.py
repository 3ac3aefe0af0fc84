"""Tests for the CoinGecko crypto price source."""

import httpx
import pytest

from finboard.services.price_providers.base import ProviderError
from finboard.services.price_providers.coingecko import CoinGeckoSource
from tests.helpers import MockResponse, make_mock_client

pytestmark = pytest.mark.asyncio(loop_scope="function")


async def test_maps_ids_back_to_symbols(monkeypatch):
    payload = [
        {"id": "bitcoin", "current_price": 49900.0, "price_change_percentage_24h": 2.4},
        {"id": "solana", "current_price": 150, "price_change_percentage_24h": None},
    ]
    client = make_mock_client(lambda url, params: MockResponse(payload))
    monkeypatch.setattr(httpx, "AsyncClient", client)

    quotes = await CoinGeckoSource().fetch_quotes(["BTC", "SOL"])

    assert {q.symbol: q.price for q in quotes} == {"BTC": 49900.0, "SOL": 150.0}
    assert all(q.source == "coingecko" for q in quotes)
    assert quotes[1].change_24h is None

    _, params, _ = client.requests[0]
    assert params["vs_currency"] == "usd"
    assert params["ids"] == "bitcoin,solana"
    assert params["price_change_percentage"] == "24h"


async def test_unmapped_symbols_are_skipped(monkeypatch):
    payload = [{"id": "ethereum", "current_price": 3000}]
    client = make_mock_client(lambda url, params: MockResponse(payload))
    monkeypatch.setattr(httpx, "AsyncClient", client)

    quotes = await CoinGeckoSource().fetch_quotes(["ETH", "NOTACOIN"])

    assert [q.symbol for q in quotes] == ["ETH"]
    _, params, _ = client.requests[0]
    assert params["ids"] == "ethereum"


async def test_no_mapped_symbols_makes_no_request(monkeypatch):
    client = make_mock_client(lambda url, params: MockResponse([]))
    monkeypatch.setattr(httpx, "AsyncClient", client)

    assert await CoinGeckoSource().fetch_quotes(["NOTACOIN"]) == []
    assert client.requests == []


async def test_rate_limited_raises(monkeypatch):
    client = make_mock_client(lambda url, params: MockResponse({"status": {"error_code": 429}}, status_code=429))
    monkeypatch.setattr(httpx, "AsyncClient", client)

    with pytest.raises(ProviderError, match="HTTP 429"):
        await CoinGeckoSource().fetch_quotes(["BTC"])


async def test_dict_payload_raises(monkeypatch):
    client = make_mock_client(lambda url, params: MockResponse({"error": "boom"}))
    monkeypatch.setattr(httpx, "AsyncClient", client)

    with pytest.raises(ProviderError):
        await CoinGeckoSource().fetch_quotes(["BTC"])
