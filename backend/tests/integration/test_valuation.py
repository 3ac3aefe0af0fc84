import pytest
from unittest.mock import patch

from tests.helpers import FakePriceSource, FakeRateSource, make_provider_set

pytestmark = pytest.mark.asyncio(loop_scope="function")

PROVIDERS = "finboard.services.price_service.get_providers"


def _providers():
    return make_provider_set(
        crypto_primary=FakePriceSource("binance", {"BTC": 60000}, label="Binance"),
        stock_primary=FakePriceSource("yahoo", {"AAPL": 200}, label="Yahoo Finance"),
        fx_primary=FakeRateSource("exchangerate.host", {"EUR": 0.8}, label="ExchangeRate.host"),
    )


async def test_convert(client):
    with patch(PROVIDERS, return_value=_providers()):
        resp = await client.post("/api/valuation/convert", json={
            "amount": 100, "from_currency": "USD", "to_currency": "EUR",
        })

    assert resp.status_code == 200
    data = resp.json()
    assert data["result"] == pytest.approx(80.0)
    assert data["rate_source"] == "exchangerate.host"


async def test_convert_manual_rate_from_settings(client):
    await client.put("/api/settings", json={"data": {"manual_rates": {"ARS": 1000}}})
    with patch(PROVIDERS, return_value=_providers()):
        resp = await client.post("/api/valuation/convert", json={
            "amount": 5000, "from_currency": "ARS", "to_currency": "USD",
        })

    assert resp.json()["result"] == pytest.approx(5.0)


async def test_convert_unknown_currency_rejected(client):
    resp = await client.post("/api/valuation/convert", json={
        "amount": 1, "from_currency": "XXX", "to_currency": "USD",
    })
    assert resp.status_code == 422


async def test_expenses(client):
    with patch(PROVIDERS, return_value=_providers()):
        resp = await client.post("/api/valuation/expenses", json={
            "lines": [
                {"amount": 100, "currency": "USD", "is_paid": True},
                {"amount": 40, "currency": "EUR"},
                {"amount": 0, "currency": "GBP"},
            ],
            "reporting_currency": "USD",
        })

    assert resp.status_code == 200
    data = resp.json()
    assert [c["currency"] for c in data["by_currency"]] == ["USD", "EUR"]
    assert data["combined"]["total"] == pytest.approx(150.0)
    assert data["unconverted"] == []


async def test_portfolio(client):
    with patch(PROVIDERS, return_value=_providers()):
        resp = await client.post("/api/valuation/portfolio", json={
            "lots": [
                {"symbol": "BTC", "kind": "CRYPTO", "quantity": 0.5, "purchase_price": 40000},
                {"symbol": "AAPL", "kind": "STOCK", "quantity": 10, "purchase_price": 150},
                {"symbol": "AAPL", "kind": "STOCK", "quantity": 10, "purchase_price": 250},
            ],
        })

    assert resp.status_code == 200
    data = resp.json()
    assert data["display_currency"] == "USD"
    assert [h["symbol"] for h in data["holdings"]] == ["BTC", "AAPL"]
    aapl = data["holdings"][1]
    assert aapl["lots"] == 2
    assert aapl["avg_price"] == 200.0
    assert aapl["gain_loss"] == 0.0
    assert data["total_value"] == 34000.0
    assert data["total_gain_loss"] == 10000.0
    assert {q["symbol"] for q in data["quotes"]} == {"BTC", "AAPL"}


async def test_portfolio_in_display_currency_setting(client):
    await client.put("/api/settings", json={"data": {"display_currency": "EUR"}})
    with patch(PROVIDERS, return_value=_providers()):
        resp = await client.post("/api/valuation/portfolio", json={
            "lots": [{"symbol": "AAPL", "kind": "STOCK", "quantity": 1, "purchase_price": 100}],
        })

    data = resp.json()
    assert data["display_currency"] == "EUR"
    assert data["total_value"] == 160.0


async def test_dividends(client):
    with patch(PROVIDERS, return_value=_providers()):
        resp = await client.post("/api/valuation/dividends", json={
            "records": [
                {"symbol": "VTI", "amount": 10, "paid_on": "2025-03-10"},
                {"symbol": "VTI", "amount": 4, "paid_on": "2025-03-01", "type": "SPECIAL"},
                {"symbol": "VTI", "amount": 7, "paid_on": "2024-09-10"},
            ],
            "as_of": "2025-03-15",
        })

    assert resp.status_code == 200
    data = resp.json()
    assert data["this_month"]["total"] == 14.0
    assert data["this_month"]["by_type"]["special"] == 4.0
    assert data["last_year"]["total"] == 7.0
    assert data["rate_source"] == "exchangerate.host"
