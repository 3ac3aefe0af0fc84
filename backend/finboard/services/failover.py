"""Primary/fallback orchestration shared by every price and rate kind.

Prices use a per-item failover: whatever the primary source could not
resolve is retried against the fallback. Exchange rates swap the whole
result to the fallback when the primary fails.

Nothing in this module raises: every provider failure is logged and turned
into a diagnostic string.
"""

import logging
from dataclasses import dataclass, field
from typing import Awaitable, Callable, Generic, TypeVar

from finboard.schemas.exchange_rate import ExchangeRateSet
from finboard.services.fx_providers import RateSource

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass
class FailoverResult(Generic[T]):
    items: list[T] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)

    @property
    def success(self) -> bool:
        return bool(self.items)


async def _attempt(
    label: str, fetch: Callable[[list[str]], Awaitable[list[T]]], keys: list[str], errors: list[str],
) -> list[T]:
    try:
        return await fetch(keys)
    except Exception as exc:
        logger.warning("%s failed for %s: %s", label, ", ".join(keys), exc)
        errors.append(f"{label}: {exc}")
        return []


async def fetch_with_fallback(
    requested: list[str],
    primary: Callable[[list[str]], Awaitable[list[T]]],
    fallback: Callable[[list[str]], Awaitable[list[T]]],
    key: Callable[[T], str],
    primary_label: str = "primary",
    fallback_label: str = "fallback",
) -> FailoverResult[T]:
    """Fetch ``requested`` from ``primary``, retrying its gaps with ``fallback``.

    Keys are compared upper-cased. Fallback items outside the gap set are
    dropped, so every key appears at most once in the merged result.
    """
    requested = list(dict.fromkeys(k.upper() for k in requested))
    result: FailoverResult[T] = FailoverResult()
    if not requested:
        return result

    result.items = await _attempt(primary_label, primary, requested, result.errors)

    found = {key(item).upper() for item in result.items}
    missing = [k for k in requested if k not in found]
    if not missing:
        return result

    logger.info(
        "%s: missing %d/%d, trying %s fallback",
        primary_label, len(missing), len(requested), fallback_label,
    )
    result.errors.append(f"{primary_label}: Failed to fetch {', '.join(missing)}")

    fallback_label = f"{fallback_label} fallback"
    recovered = await _attempt(fallback_label, fallback, missing, result.errors)

    pending = set(missing)
    for item in recovered:
        k = key(item).upper()
        if k in pending:
            pending.discard(k)
            result.items.append(item)

    if pending:
        still_missing = [k for k in missing if k in pending]
        result.errors.append(f"{fallback_label}: Failed to fetch {', '.join(still_missing)}")
    else:
        logger.info("%s recovered all %d symbols", fallback_label, len(missing))

    return result


async def _rates_attempt(source: RateSource, base_currency: str) -> ExchangeRateSet:
    try:
        return await source.fetch_rates(base_currency)
    except Exception as exc:
        logger.exception("%s raised for base %s", source.label, base_currency)
        return source.failure(base_currency, f"{source.label}: {exc}")


def _usable(rate_set: ExchangeRateSet) -> bool:
    return rate_set.success and bool(rate_set.rates)


async def fetch_rates_with_fallback(
    base_currency: str, primary: RateSource, fallback: RateSource,
) -> ExchangeRateSet:
    """Fetch rates from ``primary``; on failure take the whole set from ``fallback``."""
    base_currency = base_currency.upper()

    primary_result = await _rates_attempt(primary, base_currency)
    if _usable(primary_result):
        return primary_result

    logger.info("%s failed, trying %s fallback", primary.label, fallback.label)
    fallback_result = await _rates_attempt(fallback, base_currency)
    errors = primary_result.errors + fallback_result.errors

    if _usable(fallback_result):
        return fallback_result.model_copy(update={
            "source": f"{fallback_result.source} (fallback)",
            "errors": errors,
        })

    logger.error("All exchange rate sources failed for base %s", base_currency)
    return ExchangeRateSet(
        success=False,
        base_currency=base_currency,
        rates={},
        source="none",
        errors=errors,
    )
