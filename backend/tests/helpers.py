"""Shared test helpers: fake provider sources and a stand-in httpx client."""

from finboard.schemas.exchange_rate import ExchangeRateSet
from finboard.schemas.price import PriceQuote
from finboard.services.fx_providers.base import RateSource
from finboard.services.price_providers.base import PriceSource, ProviderError
from finboard.services.providers import ProviderSet


def make_quote(symbol: str, price: float, source: str = "test", change: float | None = None,
               currency: str = "USD") -> PriceQuote:
    return PriceQuote(symbol=symbol, price=price, change_24h=change, currency=currency, source=source)


class FakePriceSource(PriceSource):
    """In-memory PriceSource that records every symbol batch it is asked for."""

    def __init__(self, name: str, prices: dict[str, float] | None = None,
                 error: str | None = None, label: str | None = None, currency: str = "USD"):
        self.name = name
        self.label = label or name.title()
        self.prices = prices or {}
        self.error = error
        self.currency = currency
        self.calls: list[list[str]] = []

    async def fetch_quotes(self, symbols: list[str]) -> list[PriceQuote]:
        self.calls.append(list(symbols))
        if self.error:
            raise ProviderError(self.error)
        return [
            make_quote(s, self.prices[s], source=self.name, currency=self.currency)
            for s in symbols if s in self.prices
        ]


class FakeRateSource(RateSource):
    """RateSource returning a fixed table, or failing with ``error``."""

    def __init__(self, name: str, rates: dict[str, float] | None = None,
                 error: str | None = None, label: str | None = None):
        self.name = name
        self.label = label or name
        self.rates = rates or {}
        self.error = error
        self.calls: list[str] = []

    async def _fetch(self, base_currency: str) -> dict[str, float]:
        self.calls.append(base_currency)
        if self.error:
            raise ProviderError(self.error)
        return {**self.rates, base_currency: 1.0}


def make_provider_set(**overrides) -> ProviderSet:
    defaults = {
        "crypto_primary": FakePriceSource("binance", label="Binance"),
        "crypto_fallback": FakePriceSource("coingecko", label="CoinGecko"),
        "stock_primary": FakePriceSource("yahoo", label="Yahoo Finance"),
        "stock_fallback": FakePriceSource("alphavantage", label="Alpha Vantage"),
        "fx_primary": FakeRateSource("exchangerate.host", label="ExchangeRate.host"),
        "fx_fallback": FakeRateSource("openexchangerates", label="Open Exchange Rates"),
    }
    defaults.update(overrides)
    return ProviderSet(**defaults)


def make_rate_set(rates: dict[str, float], base: str = "USD", source: str = "test") -> ExchangeRateSet:
    return ExchangeRateSet(success=True, base_currency=base, rates={**rates, base: 1.0}, source=source)


class MockResponse:
    def __init__(self, payload=None, status_code: int = 200, text: str | None = None):
        self._payload = payload
        self.status_code = status_code
        self.text = text if text is not None else ""

    def json(self):
        if self._payload is None:
            raise ValueError("No JSON object could be decoded")
        return self._payload


def make_mock_client(handler):
    """Create a mock httpx.AsyncClient class whose ``get`` delegates to ``handler``.

    ``handler(url, params)`` returns a MockResponse or raises. Every request
    is appended to the returned class's ``requests`` list as (url, params, headers).
    """

    class MockClient:
        requests: list[tuple[str, dict, dict]] = []

        def __init__(self, **kwargs):
            self.kwargs = kwargs

        async def get(self, url, params=None, headers=None):
            MockClient.requests.append((url, dict(params or {}), dict(headers or {})))
            return handler(url, params or {})

        async def __aenter__(self):
            return self

        async def __aexit__(self, *args):
            pass

    return MockClient
