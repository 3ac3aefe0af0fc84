"""Yahoo Finance quote source via yahooquery (primary stock/ETF source)."""

import logging

from yahooquery import Ticker

from finboard.schemas.price import PriceQuote
from finboard.services.price_providers.base import PriceSource, ProviderError
from finboard.utils import async_threadable, to_float, utc_now

logger = logging.getLogger(__name__)

# Yahoo quotes some exchanges in a subunit: raw code -> (display code, divisor)
SUBUNIT_CURRENCIES: dict[str, tuple[str, int]] = {
    "GBp": ("GBP", 100),
    "GBX": ("GBP", 100),
    "ILA": ("ILS", 100),
    "ZAc": ("ZAR", 100),
}


def resolve_currency(info: dict) -> tuple[str, int]:
    """Return (display_code, divisor) for a Yahoo price info dict, defaulting to USD."""
    raw = info.get("currency")
    if not raw:
        return ("USD", 1)
    return SUBUNIT_CURRENCIES.get(raw, (raw.upper(), 1))


def _batch_error(price_data) -> str | None:
    """Return a message when Yahoo rejected the batch as a whole, else None.

    yahooquery answers a failed request either with a non-dict payload or
    with an error string in place of every symbol's data.
    """
    if not isinstance(price_data, dict):
        return repr(price_data)[:200]
    if price_data.get("error"):
        return str(price_data["error"])[:200]
    if price_data and all(isinstance(v, str) for v in price_data.values()):
        return next(iter(price_data.values()))[:200]
    return None


def _has_invalid_crumb(price_data) -> bool:
    """Check if Yahoo rejected the crumb for all symbols."""
    return isinstance(price_data, dict) and bool(price_data) and all(
        isinstance(v, str) and "Invalid Crumb" in v
        for v in price_data.values()
    )


def _parse_price_data(symbols: list[str], price_data: dict) -> list[PriceQuote]:
    """Build quotes from Yahoo price data, skipping symbols without a usable price."""
    now = utc_now()
    results: list[PriceQuote] = []
    missing: list[str] = []

    for sym in symbols:
        info = price_data.get(sym)
        if not isinstance(info, dict):
            missing.append(sym)
            continue

        currency, divisor = resolve_currency(info)
        price = to_float(info.get("regularMarketPrice"))
        if price is not None:
            price /= divisor
        if price is None or price <= 0:
            missing.append(sym)
            continue

        change_pct = to_float(info.get("regularMarketChangePercent"))

        results.append(PriceQuote(
            symbol=sym,
            price=price,
            # yahooquery reports the change as a fraction (0.0082 = 0.82%)
            change_24h=round(change_pct * 100, 2) if change_pct is not None else None,
            currency=currency,
            source="yahoo",
            fetched_at=now,
        ))

    if missing:
        logger.warning(
            "Yahoo returned no usable price for %d/%d symbols: %s",
            len(missing), len(symbols), ", ".join(missing[:10]),
        )
    return results


@async_threadable
def batch_fetch_quotes(symbols: list[str]) -> list[PriceQuote]:
    """Fetch current quotes for multiple symbols in one batch call.

    Raises ProviderError when Yahoo rejects the whole batch.
    """
    if not symbols:
        return []

    price_data = Ticker(symbols).price

    # Retry once with a fresh session if Yahoo rejected the crumb
    if _has_invalid_crumb(price_data):
        logger.warning(
            "Yahoo rejected crumb for all %d symbols, retrying with fresh session",
            len(symbols),
        )
        price_data = Ticker(symbols).price

    error = _batch_error(price_data)
    if error is not None:
        raise ProviderError(error)

    return _parse_price_data(symbols, price_data)


class YahooSource(PriceSource):
    name = "yahoo"
    label = "Yahoo Finance"

    async def fetch_quotes(self, symbols: list[str]) -> list[PriceQuote]:
        return await batch_fetch_quotes([s.upper() for s in symbols])
