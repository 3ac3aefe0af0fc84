"""Paid/unpaid expense totals per currency and in a reporting currency."""

from finboard.schemas.valuation import CurrencyTotals, ExpenseLine, ExpenseTotals
from finboard.services.compute.conversion import convert_currency


def _totals(currency: str, paid: float, unpaid: float) -> CurrencyTotals:
    return CurrencyTotals(
        currency=currency,
        paid=round(paid, 2),
        unpaid=round(unpaid, 2),
        total=round(paid + unpaid, 2),
    )


def sum_by_currency(lines: list[ExpenseLine]) -> dict[str, tuple[float, float]]:
    """Return {currency: (paid, unpaid)} in first-seen order."""
    sums: dict[str, tuple[float, float]] = {}
    for line in lines:
        paid, unpaid = sums.get(line.currency, (0.0, 0.0))
        if line.is_paid:
            paid += line.amount
        else:
            unpaid += line.amount
        sums[line.currency] = (paid, unpaid)
    return sums


def summarize_expenses(
    lines: list[ExpenseLine],
    reporting_currency: str,
    rates: dict[str, float],
    base_currency: str,
) -> ExpenseTotals:
    """Compute same-currency subtotals plus a combined reporting-currency total.

    Currencies with nothing paid and nothing unpaid are omitted. A currency
    that cannot be converted stays in ``by_currency`` but is excluded from
    ``combined`` and listed in ``unconverted``.
    """
    by_currency: list[CurrencyTotals] = []
    unconverted: list[str] = []
    combined_paid = 0.0
    combined_unpaid = 0.0

    for currency, (paid, unpaid) in sum_by_currency(lines).items():
        if paid == 0 and unpaid == 0:
            continue
        by_currency.append(_totals(currency, paid, unpaid))

        paid_conv = convert_currency(paid, currency, reporting_currency, rates, base_currency)
        unpaid_conv = convert_currency(unpaid, currency, reporting_currency, rates, base_currency)
        if paid_conv is None or unpaid_conv is None:
            unconverted.append(currency)
            continue
        combined_paid += paid_conv
        combined_unpaid += unpaid_conv

    return ExpenseTotals(
        by_currency=by_currency,
        combined=_totals(reporting_currency, combined_paid, combined_unpaid),
        unconverted=unconverted,
    )
