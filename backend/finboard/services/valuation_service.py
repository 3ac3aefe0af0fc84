"""Valuation business logic: fetch rates/prices, then run the compute engine."""

import asyncio
import logging

from sqlalchemy.ext.asyncio import AsyncSession

from finboard.config import settings
from finboard.schemas.exchange_rate import ExchangeRateSet
from finboard.schemas.price import AssetRequest
from finboard.schemas.valuation import (
    ConvertRequest,
    ConvertResponse,
    DividendSummaryRequest,
    DividendSummaryResponse,
    ExpenseSummaryRequest,
    ExpenseSummaryResponse,
    PortfolioRequest,
    PortfolioResponse,
)
from finboard.services.compute.conversion import apply_manual_rates, convert_currency
from finboard.services.compute.dividends import summarize_dividends
from finboard.services.compute.portfolio import value_portfolio
from finboard.services.compute.totals import summarize_expenses
from finboard.services.price_service import fetch_exchange_rates, fetch_prices
from finboard.services.settings_service import get_rate_preferences

logger = logging.getLogger(__name__)


async def _rates_for(manual_rates: dict[str, float]) -> ExchangeRateSet:
    rate_set = await fetch_exchange_rates(settings.fx_base_currency)
    return apply_manual_rates(rate_set, manual_rates)


async def convert(db: AsyncSession, body: ConvertRequest) -> ConvertResponse:
    _, manual = await get_rate_preferences(db)
    rate_set = await _rates_for(manual)
    result = convert_currency(
        body.amount, body.from_currency, body.to_currency,
        rate_set.rates, rate_set.base_currency,
    )
    return ConvertResponse(
        amount=body.amount,
        from_currency=body.from_currency,
        to_currency=body.to_currency,
        result=result,
        rate_source=rate_set.source,
    )


async def expense_summary(db: AsyncSession, body: ExpenseSummaryRequest) -> ExpenseSummaryResponse:
    display, manual = await get_rate_preferences(db)
    reporting = body.reporting_currency or display
    rate_set = await _rates_for(manual)

    totals = summarize_expenses(body.lines, reporting, rate_set.rates, rate_set.base_currency)
    if totals.unconverted:
        logger.warning("Expense totals: no rate for %s", ", ".join(totals.unconverted))
    return ExpenseSummaryResponse(
        **totals.model_dump(), rate_source=rate_set.source, errors=rate_set.errors,
    )


async def portfolio_valuation(db: AsyncSession, body: PortfolioRequest) -> PortfolioResponse:
    display, manual = await get_rate_preferences(db)
    display = body.display_currency or display

    assets = [AssetRequest(symbol=lot.symbol, kind=lot.kind) for lot in body.lots]
    prices, rate_set = await asyncio.gather(
        fetch_prices(assets),
        _rates_for(manual),
    )
    valuation = value_portfolio(
        body.lots, prices.prices, display, rate_set.rates, rate_set.base_currency,
    )
    return PortfolioResponse(
        **valuation.model_dump(),
        quotes=prices.prices,
        errors=prices.errors + rate_set.errors,
    )


async def dividend_summary(db: AsyncSession, body: DividendSummaryRequest) -> DividendSummaryResponse:
    display, manual = await get_rate_preferences(db)
    display = body.display_currency or display
    rate_set = await _rates_for(manual)

    summary = summarize_dividends(
        body.records, display, rate_set.rates, rate_set.base_currency, today=body.as_of,
    )
    return DividendSummaryResponse(
        **summary.model_dump(), rate_source=rate_set.source, errors=rate_set.errors,
    )
