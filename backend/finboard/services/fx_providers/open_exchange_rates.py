"""Open Exchange Rates client (fallback FX source).

The free plan only serves a USD-based table, so other bases are derived by
dividing every rate by the requested base's USD rate.
"""

import logging

import httpx

from finboard.constants import SUPPORTED_FX_CURRENCIES
from finboard.schemas.exchange_rate import ExchangeRateSet
from finboard.services.fx_providers.base import RateSource
from finboard.services.price_providers.base import NO_CACHE_HEADERS, ProviderError
from finboard.utils import to_float

logger = logging.getLogger(__name__)

OPEN_EXCHANGE_RATES_URL = "https://openexchangerates.org/api/latest.json"

# Base currency of the table the free plan returns.
TABLE_BASE = "USD"

MISSING_KEY_ERROR = "No API key configured for Open Exchange Rates"


def rebase(rates: dict[str, float], base_currency: str) -> dict[str, float]:
    """Re-express a TABLE_BASE rate table relative to base_currency.

    Raises ProviderError if base_currency is not in the table.
    """
    if base_currency == TABLE_BASE:
        return dict(rates)
    base_rate = rates.get(base_currency)
    if not base_rate:
        raise ProviderError(f"Base currency {base_currency} not found in response")
    return {code: rate / base_rate for code, rate in rates.items()}


class OpenExchangeRatesSource(RateSource):
    name = "openexchangerates"
    label = "Open Exchange Rates"

    def __init__(self, api_key: str | None, timeout: float = 10.0, base_url: str = OPEN_EXCHANGE_RATES_URL):
        self.api_key = api_key
        self.timeout = timeout
        self.base_url = base_url

    async def fetch_rates(self, base_currency: str = "USD") -> ExchangeRateSet:
        if not self.api_key:
            logger.warning("Open Exchange Rates: no API key configured (OPEN_EXCHANGE_RATES_API_KEY)")
            return self.failure(base_currency.upper(), MISSING_KEY_ERROR)
        return await super().fetch_rates(base_currency)

    async def _fetch(self, base_currency: str) -> dict[str, float]:
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            resp = await client.get(
                self.base_url, params={"app_id": self.api_key}, headers=NO_CACHE_HEADERS,
            )

        if resp.status_code != 200:
            raise ProviderError(f"HTTP {resp.status_code}")
        data = resp.json()
        raw_rates = data.get("rates") if isinstance(data, dict) else None
        if not isinstance(raw_rates, dict):
            raise ProviderError(f"unexpected payload: {repr(data)[:200]}")

        table = {}
        for code, value in raw_rates.items():
            rate = to_float(value)
            if rate is not None and rate > 0:
                table[code.upper()] = rate
        table.setdefault(TABLE_BASE, 1.0)

        rebased = rebase(table, base_currency)
        rates = {c: rebased[c] for c in SUPPORTED_FX_CURRENCIES if c in rebased}
        rates[base_currency] = 1.0
        return rates
