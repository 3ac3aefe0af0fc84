from fastapi import APIRouter, HTTPException, Query

from finboard.constants import SUPPORTED_FX_CURRENCIES
from finboard.schemas.exchange_rate import ExchangeRateSet
from finboard.schemas.price import FetchPricesRequest, FetchPricesResult
from finboard.services import price_service

router = APIRouter(prefix="/api", tags=["prices"])


@router.post("/prices", response_model=FetchPricesResult, summary="Fetch latest prices for assets")
async def fetch_prices(body: FetchPricesRequest):
    """Fetch the latest price of each asset from the external providers.

    Crypto assets are priced by Binance with CoinGecko as fallback; stocks and
    ETFs by Yahoo Finance with Alpha Vantage as fallback. Symbols the primary
    source misses are retried against the fallback. Provider failures never
    fail the request: they are reported in `errors`, and `success` is false
    only when no price at all could be fetched.
    """
    return await price_service.fetch_prices(body.assets)


@router.get("/exchange-rates", response_model=ExchangeRateSet, summary="Fetch exchange rates for a base currency")
async def fetch_exchange_rates(
    base: str = Query("USD", min_length=3, max_length=3, description="ISO 4217 base currency"),
):
    """Fetch rates for every supported currency relative to `base`.

    ExchangeRate.host is tried first; if it fails the whole set comes from
    Open Exchange Rates and `source` is suffixed with `(fallback)`.
    """
    base = base.upper()
    if base not in SUPPORTED_FX_CURRENCIES:
        raise HTTPException(422, f"Unsupported base currency {base}. Supported: {', '.join(SUPPORTED_FX_CURRENCIES)}")
    return await price_service.fetch_exchange_rates(base)
