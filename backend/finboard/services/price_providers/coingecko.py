"""CoinGecko markets client (fallback crypto source)."""

import logging

import httpx

from finboard.schemas.price import PriceQuote
from finboard.services.price_providers.base import NO_CACHE_HEADERS, PriceSource, ProviderError
from finboard.utils import to_float, utc_now

logger = logging.getLogger(__name__)

COINGECKO_MARKETS_URL = "https://api.coingecko.com/api/v3/coins/markets"

# CoinGecko identifies coins by slug, not ticker.
COINGECKO_IDS: dict[str, str] = {
    "BTC": "bitcoin",
    "ETH": "ethereum",
    "BNB": "binancecoin",
    "SOL": "solana",
    "ADA": "cardano",
    "XRP": "ripple",
    "DOT": "polkadot",
    "DOGE": "dogecoin",
    "LINK": "chainlink",
    "MATIC": "matic-network",
}


class CoinGeckoSource(PriceSource):
    name = "coingecko"
    label = "CoinGecko"

    def __init__(self, timeout: float = 10.0, base_url: str = COINGECKO_MARKETS_URL):
        self.timeout = timeout
        self.base_url = base_url

    async def fetch_quotes(self, symbols: list[str]) -> list[PriceQuote]:
        id_to_symbol: dict[str, str] = {}
        unmapped: list[str] = []
        for s in symbols:
            coin_id = COINGECKO_IDS.get(s.upper())
            if coin_id is None:
                unmapped.append(s.upper())
            else:
                id_to_symbol[coin_id] = s.upper()

        if unmapped:
            logger.warning("CoinGecko: no coin id for %s, skipping", ", ".join(unmapped))
        if not id_to_symbol:
            return []

        params = {
            "vs_currency": "usd",
            "ids": ",".join(id_to_symbol),
            "price_change_percentage": "24h",
        }
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            resp = await client.get(self.base_url, params=params, headers=NO_CACHE_HEADERS)

        if resp.status_code != 200:
            raise ProviderError(f"HTTP {resp.status_code}")
        try:
            data = resp.json()
        except ValueError as exc:
            raise ProviderError("malformed JSON payload") from exc
        if not isinstance(data, list):
            raise ProviderError(f"unexpected payload: {repr(data)[:200]}")

        now = utc_now()
        results: list[PriceQuote] = []
        for coin in data:
            if not isinstance(coin, dict):
                continue
            symbol = id_to_symbol.get(coin.get("id", ""))
            price = to_float(coin.get("current_price"))
            if symbol is None or price is None or price <= 0:
                continue
            results.append(PriceQuote(
                symbol=symbol,
                price=price,
                change_24h=to_float(coin.get("price_change_percentage_24h")),
                currency="USD",
                source=self.name,
                fetched_at=now,
            ))

        logger.info("CoinGecko returned %d/%d prices", len(results), len(id_to_symbol))
        return results
