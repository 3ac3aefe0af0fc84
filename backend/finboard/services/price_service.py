"""Unified fetch façade: routes assets to the right failover pair."""

import asyncio
import logging

from finboard.constants import AssetKind
from finboard.schemas.exchange_rate import ExchangeRateSet
from finboard.schemas.price import AssetRequest, FetchPricesResult, PriceQuote
from finboard.services.failover import FailoverResult, fetch_rates_with_fallback, fetch_with_fallback
from finboard.services.price_providers import PriceSource
from finboard.services.providers import ProviderSet, get_providers

logger = logging.getLogger(__name__)


def _quote_key(quote: PriceQuote) -> str:
    return quote.symbol


async def _fetch_kind(
    symbols: list[str], primary: PriceSource, fallback: PriceSource,
) -> FailoverResult[PriceQuote]:
    return await fetch_with_fallback(
        symbols,
        primary.fetch_quotes,
        fallback.fetch_quotes,
        key=_quote_key,
        primary_label=primary.label,
        fallback_label=fallback.label,
    )


def _partition(assets: list[AssetRequest]) -> tuple[list[str], list[str]]:
    """Split assets into (crypto, stock/etf) symbol lists, de-duplicated in order."""
    crypto: dict[str, None] = {}
    stocks: dict[str, None] = {}
    for asset in assets:
        target = crypto if asset.kind == AssetKind.CRYPTO else stocks
        target[asset.symbol.upper()] = None
    return list(crypto), list(stocks)


async def fetch_prices(
    assets: list[AssetRequest], providers: ProviderSet | None = None,
) -> FetchPricesResult:
    """Fetch prices for a mixed asset list.

    Crypto goes Binance -> CoinGecko, stocks and ETFs go Yahoo -> Alpha
    Vantage; both chains run concurrently. Never raises.
    """
    crypto_symbols, stock_symbols = _partition(assets)
    if not crypto_symbols and not stock_symbols:
        return FetchPricesResult(success=False, prices=[], errors=[])

    providers = providers or get_providers()
    outcomes = await asyncio.gather(
        _fetch_kind(crypto_symbols, providers.crypto_primary, providers.crypto_fallback),
        _fetch_kind(stock_symbols, providers.stock_primary, providers.stock_fallback),
        return_exceptions=True,
    )

    prices: list[PriceQuote] = []
    errors: list[str] = []
    aggregator_errors: list[str] = []
    for label, outcome in zip(("Crypto", "Stock"), outcomes):
        if isinstance(outcome, BaseException):
            logger.error("%s fetch completely failed: %s", label, outcome)
            aggregator_errors.append(f"{label} fetch failed: {outcome}")
            continue
        prices.extend(outcome.items)
        errors.extend(outcome.errors)

    errors = aggregator_errors + errors
    logger.info("Price fetch complete: %d prices fetched", len(prices))
    if errors:
        logger.warning("Price fetch errors: %s", "; ".join(errors))

    return FetchPricesResult(success=len(prices) > 0, prices=prices, errors=errors)


async def fetch_exchange_rates(
    base_currency: str = "USD", providers: ProviderSet | None = None,
) -> ExchangeRateSet:
    """Fetch rates for base_currency (ExchangeRate.host -> Open Exchange Rates)."""
    providers = providers or get_providers()
    logger.info("Fetching exchange rates for base %s", base_currency)
    return await fetch_rates_with_fallback(base_currency, providers.fx_primary, providers.fx_fallback)
