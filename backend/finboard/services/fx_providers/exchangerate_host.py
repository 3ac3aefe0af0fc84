"""ExchangeRate.host client (primary FX source, no key required)."""

import httpx

from finboard.constants import SUPPORTED_FX_CURRENCIES
from finboard.services.fx_providers.base import RateSource
from finboard.services.price_providers.base import NO_CACHE_HEADERS, ProviderError
from finboard.utils import to_float

EXCHANGERATE_HOST_URL = "https://api.exchangerate.host/latest"


class ExchangeRateHostSource(RateSource):
    name = "exchangerate.host"
    label = "ExchangeRate.host"

    def __init__(self, timeout: float = 10.0, base_url: str = EXCHANGERATE_HOST_URL):
        self.timeout = timeout
        self.base_url = base_url

    async def _fetch(self, base_currency: str) -> dict[str, float]:
        targets = [c for c in SUPPORTED_FX_CURRENCIES if c != base_currency]
        params = {"base": base_currency, "symbols": ",".join(targets)}

        async with httpx.AsyncClient(timeout=self.timeout) as client:
            resp = await client.get(self.base_url, params=params, headers=NO_CACHE_HEADERS)

        if resp.status_code != 200:
            raise ProviderError(f"HTTP {resp.status_code}")
        data = resp.json()
        if not isinstance(data, dict):
            raise ProviderError(f"unexpected payload: {repr(data)[:200]}")
        if data.get("success") is False:
            raise ProviderError("returned success: false")

        raw_rates = data.get("rates")
        rates: dict[str, float] = {}
        if isinstance(raw_rates, dict):
            for code, value in raw_rates.items():
                rate = to_float(value)
                if rate is not None and rate > 0:
                    rates[code.upper()] = rate

        if not rates:
            raise ProviderError(f"no rates returned for base {base_currency}")

        rates[base_currency] = 1.0
        return rates
