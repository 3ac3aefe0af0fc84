from finboard.services.fx_providers.base import RateSource
from finboard.services.fx_providers.exchangerate_host import ExchangeRateHostSource
from finboard.services.fx_providers.open_exchange_rates import OpenExchangeRatesSource

__all__ = ["RateSource", "ExchangeRateHostSource", "OpenExchangeRatesSource"]
