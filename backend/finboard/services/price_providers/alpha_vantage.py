"""Alpha Vantage GLOBAL_QUOTE client (fallback stock/ETF source).

The free tier has no batch endpoint and a tight daily quota, so symbols are
fetched one request at a time and a failing symbol never aborts the rest.
"""

import logging

import httpx

from finboard.schemas.price import PriceQuote
from finboard.services.price_providers.base import NO_CACHE_HEADERS, PriceSource, ProviderError
from finboard.utils import to_float, utc_now

logger = logging.getLogger(__name__)

ALPHA_VANTAGE_URL = "https://www.alphavantage.co/query"


def _parse_global_quote(symbol: str, data) -> PriceQuote | None:
    """Parse one GLOBAL_QUOTE payload. Rate-limit notes and errors yield None."""
    quote = data.get("Global Quote") if isinstance(data, dict) else None
    if not isinstance(quote, dict):
        return None

    price = to_float(quote.get("05. price"))
    if price is None or price <= 0:
        return None

    raw_change = quote.get("10. change percent")
    change = to_float(raw_change.rstrip("%")) if isinstance(raw_change, str) else None

    return PriceQuote(
        symbol=symbol,
        price=price,
        change_24h=change,
        currency="USD",
        source="alphavantage",
        fetched_at=utc_now(),
    )


class AlphaVantageSource(PriceSource):
    name = "alphavantage"
    label = "Alpha Vantage"

    def __init__(self, api_key: str | None, timeout: float = 10.0, base_url: str = ALPHA_VANTAGE_URL):
        self.api_key = api_key
        self.timeout = timeout
        self.base_url = base_url

    async def fetch_quotes(self, symbols: list[str]) -> list[PriceQuote]:
        if not symbols:
            return []
        if not self.api_key:
            raise ProviderError("No API key configured for Alpha Vantage (ALPHA_VANTAGE_API_KEY)")

        results: list[PriceQuote] = []
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            for sym in symbols:
                sym = sym.upper()
                params = {"function": "GLOBAL_QUOTE", "symbol": sym, "apikey": self.api_key}
                try:
                    resp = await client.get(self.base_url, params=params, headers=NO_CACHE_HEADERS)
                    if resp.status_code != 200:
                        logger.warning("Alpha Vantage HTTP %d for %s", resp.status_code, sym)
                        continue
                    quote = _parse_global_quote(sym, resp.json())
                except (httpx.HTTPError, ValueError) as exc:
                    logger.warning("Alpha Vantage request for %s failed: %s", sym, exc)
                    continue

                if quote is None:
                    logger.warning("Alpha Vantage returned no data for %s", sym)
                    continue
                results.append(quote)

        if results:
            logger.info("Alpha Vantage returned %d/%d prices", len(results), len(symbols))
        return results
