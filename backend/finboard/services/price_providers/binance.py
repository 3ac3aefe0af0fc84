"""Binance spot ticker client (primary crypto source)."""

import json
import logging

import httpx

from finboard.schemas.price import PriceQuote
from finboard.services.price_providers.base import NO_CACHE_HEADERS, PriceSource, ProviderError
from finboard.utils import to_float, utc_now

logger = logging.getLogger(__name__)

BINANCE_TICKER_URL = "https://api.binance.com/api/v3/ticker/24hr"

# Quote asset appended to symbols missing from BINANCE_PAIRS.
QUOTE_SUFFIX = "USDT"

BINANCE_PAIRS: dict[str, str] = {
    "BTC": "BTCUSDT",
    "ETH": "ETHUSDT",
    "BNB": "BNBUSDT",
    "SOL": "SOLUSDT",
    "ADA": "ADAUSDT",
    "XRP": "XRPUSDT",
    "DOT": "DOTUSDT",
    "DOGE": "DOGEUSDT",
    "LINK": "LINKUSDT",
    "MATIC": "MATICUSDT",
}


def to_pair(symbol: str) -> str:
    """Map a ticker to its Binance trading pair (e.g. 'BTC' -> 'BTCUSDT')."""
    symbol = symbol.upper()
    return BINANCE_PAIRS.get(symbol, f"{symbol}{QUOTE_SUFFIX}")


class BinanceSource(PriceSource):
    name = "binance"
    label = "Binance"

    def __init__(self, timeout: float = 10.0, base_url: str = BINANCE_TICKER_URL):
        self.timeout = timeout
        self.base_url = base_url

    async def fetch_quotes(self, symbols: list[str]) -> list[PriceQuote]:
        if not symbols:
            return []

        pair_to_symbol = {to_pair(s): s.upper() for s in symbols}
        params = {"symbols": json.dumps(list(pair_to_symbol), separators=(",", ":"))}

        async with httpx.AsyncClient(timeout=self.timeout) as client:
            resp = await client.get(self.base_url, params=params, headers=NO_CACHE_HEADERS)

        if resp.status_code != 200:
            # One unknown pair makes Binance reject the whole batch with 400
            logger.warning("Binance HTTP %d for pairs %s", resp.status_code, ", ".join(pair_to_symbol))
            raise ProviderError(f"HTTP {resp.status_code}")
        try:
            data = resp.json()
        except ValueError as exc:
            raise ProviderError("malformed JSON payload") from exc
        if not isinstance(data, list):
            raise ProviderError(f"unexpected payload: {repr(data)[:200]}")

        now = utc_now()
        results: list[PriceQuote] = []
        for ticker in data:
            if not isinstance(ticker, dict):
                continue
            symbol = pair_to_symbol.get(ticker.get("symbol", ""))
            price = to_float(ticker.get("lastPrice"))
            if symbol is None or price is None or price <= 0:
                continue
            results.append(PriceQuote(
                symbol=symbol,
                price=price,
                change_24h=to_float(ticker.get("priceChangePercent")),
                currency="USD",
                source=self.name,
                fetched_at=now,
            ))

        logger.info("Binance returned %d/%d prices", len(results), len(symbols))
        return results
