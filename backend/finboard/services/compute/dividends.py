"""Dividend summary: YTD, current month and last year in a display currency."""

from datetime import date

from finboard.constants import DividendType
from finboard.schemas.valuation import DividendPeriod, DividendRecord, DividendSummary
from finboard.services.compute.conversion import convert_currency

_TYPE_FIELD = {
    DividendType.REGULAR: "regular",
    DividendType.SPECIAL: "special",
    DividendType.CAPITAL_GAIN: "capital_gain",
}


def _add(period: DividendPeriod, record: DividendRecord, amount: float) -> None:
    period.total += amount
    field = _TYPE_FIELD[record.type]
    setattr(period.by_type, field, getattr(period.by_type, field) + amount)


def _rounded(period: DividendPeriod) -> DividendPeriod:
    return DividendPeriod(
        total=round(period.total, 2),
        by_type={k: round(v, 2) for k, v in period.by_type.model_dump().items()},
    )


def summarize_dividends(
    records: list[DividendRecord],
    display_currency: str,
    rates: dict[str, float],
    base_currency: str,
    today: date | None = None,
) -> DividendSummary:
    today = today or date.today()
    ytd, this_month, last_year = DividendPeriod(), DividendPeriod(), DividendPeriod()
    unconverted: list[str] = []

    for record in records:
        paid = record.paid_on
        in_ytd = paid.year == today.year and paid <= today
        in_month = in_ytd and paid.month == today.month
        in_last_year = paid.year == today.year - 1
        if not (in_ytd or in_last_year):
            continue

        amount = convert_currency(record.amount, record.currency, display_currency, rates, base_currency)
        if amount is None:
            if record.currency not in unconverted:
                unconverted.append(record.currency)
            continue

        if in_ytd:
            _add(ytd, record, amount)
        if in_month:
            _add(this_month, record, amount)
        if in_last_year:
            _add(last_year, record, amount)

    return DividendSummary(
        display_currency=display_currency,
        ytd=_rounded(ytd),
        this_month=_rounded(this_month),
        last_year=_rounded(last_year),
        unconverted=unconverted,
    )
