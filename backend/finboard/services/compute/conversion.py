"""Currency conversion through a base-currency rate table."""

from finboard.schemas.exchange_rate import ExchangeRateSet


def _resolve_rate(currency: str, rates: dict[str, float], base_currency: str) -> float | None:
    if currency == base_currency:
        return 1.0
    return rates.get(currency)


def convert_currency(
    amount: float,
    from_currency: str,
    to_currency: str,
    rates: dict[str, float],
    base_currency: str,
) -> float | None:
    """Convert ``amount`` from one currency to another via ``base_currency``.

    ``rates`` holds units of each currency per one unit of base. Returns None
    when either side has no rate; same-currency conversion never needs one.
    """
    if from_currency == to_currency:
        return amount

    from_rate = _resolve_rate(from_currency, rates, base_currency)
    to_rate = _resolve_rate(to_currency, rates, base_currency)
    if not from_rate or to_rate is None:
        return None

    amount_in_base = amount / from_rate
    return amount_in_base * to_rate


def apply_manual_rates(rate_set: ExchangeRateSet, manual_rates: dict[str, float]) -> ExchangeRateSet:
    """Add user-configured USD rates for currencies the providers did not return.

    ``manual_rates`` maps a currency to units per one USD. Provider rates
    always take precedence. When the set is not USD-based the manual rate is
    re-expressed through the provider's USD rate; without one it is skipped.
    """
    base = rate_set.base_currency
    usd_rate = 1.0 if base == "USD" else rate_set.rates.get("USD")
    if not manual_rates or usd_rate is None:
        return rate_set

    rates = dict(rate_set.rates)
    for code, per_usd in manual_rates.items():
        if code == base or code in rates:
            continue
        rates[code] = per_usd * usd_rate
    return rate_set.model_copy(update={"rates": rates})
