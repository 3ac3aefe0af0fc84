import pytest

pytestmark = pytest.mark.asyncio(loop_scope="function")


async def test_get_empty(client):
    resp = await client.get("/api/settings")
    assert resp.status_code == 200
    assert resp.json() == {"data": {}}


async def test_put(client):
    payload = {"data": {"display_currency": "EUR", "manual_rates": {"ars": 1350}}}
    resp = await client.put("/api/settings", json=payload)
    assert resp.status_code == 200
    data = resp.json()["data"]
    assert data["display_currency"] == "EUR"
    assert data["manual_rates"] == {"ARS": 1350.0}


async def test_put_get_roundtrip(client):
    await client.put("/api/settings", json={"data": {"display_currency": "BRL"}})
    resp = await client.get("/api/settings")
    assert resp.json()["data"] == {"display_currency": "BRL"}


async def test_put_overwrites(client):
    await client.put("/api/settings", json={"data": {"display_currency": "GBP"}})
    await client.put("/api/settings", json={"data": {"manual_rates": {"CNY": 7.2}}})
    resp = await client.get("/api/settings")
    assert resp.json()["data"] == {"manual_rates": {"CNY": 7.2}}


async def test_put_rejects_unknown_display_currency(client):
    resp = await client.put("/api/settings", json={"data": {"display_currency": "XYZ"}})
    assert resp.status_code == 422


async def test_put_rejects_non_positive_manual_rate(client):
    resp = await client.put("/api/settings", json={"data": {"manual_rates": {"ARS": 0}}})
    assert resp.status_code == 422


async def test_put_rejects_unreasonable_manual_rate(client):
    resp = await client.put("/api/settings", json={"data": {"manual_rates": {"ARS": 1e9}}})
    assert resp.status_code == 422


async def test_put_rejects_unsupported_manual_currency(client):
    resp = await client.put("/api/settings", json={"data": {"manual_rates": {"MXN": 17}}})
    assert resp.status_code == 422


async def test_put_accepts_unknown_keys(client):
    resp = await client.put("/api/settings", json={"data": {"future_setting": True}})
    assert resp.status_code == 200
    assert resp.json()["data"]["future_setting"] is True


async def test_put_rejects_oversized_payload(client):
    resp = await client.put("/api/settings", json={"data": {"notes": "x" * 20_000}})
    assert resp.status_code == 422


async def test_health(client):
    resp = await client.get("/api/health")
    assert resp.json() == {"status": "ok"}
