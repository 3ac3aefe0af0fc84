from finboard.services.price_providers.alpha_vantage import AlphaVantageSource
from finboard.services.price_providers.base import PriceSource, ProviderError
from finboard.services.price_providers.binance import BinanceSource
from finboard.services.price_providers.coingecko import CoinGeckoSource
from finboard.services.price_providers.yahoo import YahooSource

__all__ = [
    "PriceSource",
    "ProviderError",
    "BinanceSource",
    "CoinGeckoSource",
    "YahooSource",
    "AlphaVantageSource",
]
