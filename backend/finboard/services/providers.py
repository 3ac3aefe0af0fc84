"""Provider registry: builds the primary/fallback source pairs from settings."""

import logging
from dataclasses import dataclass

from finboard.config import Settings, settings
from finboard.services.fx_providers import ExchangeRateHostSource, OpenExchangeRatesSource, RateSource
from finboard.services.price_providers import (
    AlphaVantageSource,
    BinanceSource,
    CoinGeckoSource,
    PriceSource,
    YahooSource,
)

logger = logging.getLogger(__name__)

__all__ = ["ProviderSet", "build_providers", "init_providers", "get_providers"]


@dataclass(frozen=True)
class ProviderSet:
    crypto_primary: PriceSource
    crypto_fallback: PriceSource
    stock_primary: PriceSource
    stock_fallback: PriceSource
    fx_primary: RateSource
    fx_fallback: RateSource


def build_providers(cfg: Settings) -> ProviderSet:
    """Instantiate every source, injecting credentials and timeouts from cfg."""
    return ProviderSet(
        crypto_primary=BinanceSource(timeout=cfg.http_timeout),
        crypto_fallback=CoinGeckoSource(timeout=cfg.http_timeout),
        stock_primary=YahooSource(),
        stock_fallback=AlphaVantageSource(api_key=cfg.alpha_vantage_api_key, timeout=cfg.http_timeout),
        fx_primary=ExchangeRateHostSource(timeout=cfg.http_timeout),
        fx_fallback=OpenExchangeRatesSource(
            api_key=cfg.open_exchange_rates_api_key, timeout=cfg.http_timeout,
        ),
    )


_instance: ProviderSet | None = None


def init_providers(cfg: Settings = settings) -> ProviderSet:
    """Build the provider set from configuration (called once at startup)."""
    global _instance
    _instance = build_providers(cfg)
    if not cfg.alpha_vantage_api_key:
        logger.warning("ALPHA_VANTAGE_API_KEY not set; stock fallback disabled")
    if not cfg.open_exchange_rates_api_key:
        logger.warning("OPEN_EXCHANGE_RATES_API_KEY not set; FX fallback disabled")
    return _instance


def get_providers() -> ProviderSet:
    """Return the active provider set, building it on first use."""
    if _instance is None:
        return init_providers()
    return _instance
