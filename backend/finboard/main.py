import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from finboard.database import engine
from finboard.routers import prices, settings as settings_router, valuation
from finboard.services.providers import init_providers

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    providers = init_providers()
    logger.info(
        "Providers ready: crypto %s -> %s, stocks %s -> %s, fx %s -> %s",
        providers.crypto_primary.name, providers.crypto_fallback.name,
        providers.stock_primary.name, providers.stock_fallback.name,
        providers.fx_primary.name, providers.fx_fallback.name,
    )

    yield

    await engine.dispose()


app = FastAPI(
    title="Finboard",
    summary="Price and exchange-rate aggregation for a personal finance tracker.",
    description=(
        "Finboard fetches asset prices and currency exchange rates from several "
        "external providers and turns them into dashboard summaries.\n\n"
        "**Key concepts:**\n"
        "- Every data kind has a primary and a fallback provider. Crypto: Binance, "
        "then CoinGecko. Stocks/ETFs: Yahoo Finance, then Alpha Vantage. Exchange "
        "rates: ExchangeRate.host, then Open Exchange Rates.\n"
        "- Prices are snapshots fetched on demand and never cached.\n"
        "- Provider failures are reported in an `errors` list instead of failing "
        "the request.\n"
        "- ARS and CNY are not quoted by the rate providers; they are converted with "
        "user-configured manual rates stored in settings.\n"
    ),
    version="1.0.0",
    lifespan=lifespan,
    openapi_tags=[
        {
            "name": "prices",
            "description": "Latest asset prices and exchange rates, with primary/fallback provider failover.",
        },
        {
            "name": "valuation",
            "description": "Currency conversion, expense totals, portfolio valuation and dividend summaries in a display currency.",
        },
        {
            "name": "settings",
            "description": "Display currency and manual exchange rates for currencies the providers do not cover.",
        },
        {
            "name": "system",
            "description": "Health checks and operational endpoints.",
        },
    ],
)

app.include_router(prices.router)
app.include_router(valuation.router)
app.include_router(settings_router.router)


@app.get("/api/health", summary="Health check", tags=["system"])
async def health():
    """Return `{\"status\": \"ok\"}` when the service is running."""
    return {"status": "ok"}
