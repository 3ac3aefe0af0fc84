"""Portfolio valuation: holdings, gain/loss and allocation in a display currency."""

from dataclasses import dataclass

from finboard.constants import AssetKind
from finboard.schemas.price import PriceQuote
from finboard.schemas.valuation import HoldingValuation, InvestmentLot, PortfolioValuation
from finboard.services.compute.conversion import convert_currency


@dataclass
class _Holding:
    symbol: str
    kind: AssetKind
    quantity: float = 0.0
    lots: int = 0
    cost: float | None = 0.0  # display currency; None once any lot fails to convert


def _round(val: float | None, digits: int = 2) -> float | None:
    return round(val, digits) if val is not None else None


def aggregate_lots(
    lots: list[InvestmentLot], display_currency: str, rates: dict[str, float], base_currency: str,
) -> tuple[dict[str, _Holding], list[str]]:
    """Group lots by symbol, converting each lot's cost into display_currency.

    Returns (holdings keyed by symbol, currencies that could not be converted).
    """
    holdings: dict[str, _Holding] = {}
    unconverted: list[str] = []

    for lot in lots:
        symbol = lot.symbol.upper()
        holding = holdings.setdefault(symbol, _Holding(symbol=symbol, kind=lot.kind))
        holding.quantity += lot.quantity
        holding.lots += 1

        cost = convert_currency(
            lot.quantity * lot.purchase_price, lot.purchase_currency,
            display_currency, rates, base_currency,
        )
        if cost is None:
            if lot.purchase_currency not in unconverted:
                unconverted.append(lot.purchase_currency)
            holding.cost = None
        elif holding.cost is not None:
            holding.cost += cost

    return holdings, unconverted


def value_portfolio(
    lots: list[InvestmentLot],
    quotes: list[PriceQuote],
    display_currency: str,
    rates: dict[str, float],
    base_currency: str,
) -> PortfolioValuation:
    """Value every holding at its latest quote and roll up portfolio totals.

    Totals only include holdings whose value and cost basis are both known,
    so gain/loss is never computed against a partial cost basis.
    """
    holdings, unconverted = aggregate_lots(lots, display_currency, rates, base_currency)
    quote_map = {q.symbol.upper(): q for q in quotes}

    results: list[HoldingValuation] = []
    unpriced: list[str] = []
    total_value = 0.0
    total_cost = 0.0
    value_by_kind: dict[str, float] = {k.value: 0.0 for k in AssetKind}

    for holding in holdings.values():
        quote = quote_map.get(holding.symbol)
        price = None
        if quote is None:
            unpriced.append(holding.symbol)
        else:
            price = convert_currency(quote.price, quote.currency, display_currency, rates, base_currency)
            if price is None and quote.currency not in unconverted:
                unconverted.append(quote.currency)

        value = holding.quantity * price if price is not None else None
        cost = holding.cost
        gain = value - cost if value is not None and cost is not None else None
        gain_pct = (gain / cost) * 100 if gain is not None and cost else None

        if value is not None and cost is not None:
            total_value += value
            total_cost += cost
            value_by_kind[holding.kind.value] += value

        results.append(HoldingValuation(
            symbol=holding.symbol,
            kind=holding.kind,
            quantity=holding.quantity,
            lots=holding.lots,
            avg_price=_round(cost / holding.quantity, 4) if cost is not None else None,
            cost_basis=_round(cost),
            current_price=_round(price, 4),
            current_value=_round(value),
            gain_loss=_round(gain),
            gain_loss_percent=_round(gain_pct),
            change_24h=quote.change_24h if quote else None,
            price_source=quote.source if quote else None,
        ))

    results.sort(key=lambda h: h.current_value or 0.0, reverse=True)
    total_gain = total_value - total_cost
    allocation = {
        kind: round(val / total_value * 100, 2) if total_value > 0 else 0.0
        for kind, val in value_by_kind.items()
    }

    return PortfolioValuation(
        display_currency=display_currency,
        holdings=results,
        total_value=round(total_value, 2),
        total_cost_basis=round(total_cost, 2),
        total_gain_loss=round(total_gain, 2),
        total_gain_loss_percent=round(total_gain / total_cost * 100, 2) if total_cost > 0 else 0.0,
        allocation=allocation,
        unpriced=unpriced,
        unconverted=unconverted,
    )
