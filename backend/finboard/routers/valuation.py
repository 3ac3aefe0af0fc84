from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from finboard.database import get_db
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
from finboard.services import valuation_service

router = APIRouter(prefix="/api/valuation", tags=["valuation"])


@router.post("/convert", response_model=ConvertResponse, summary="Convert an amount between currencies")
async def convert(body: ConvertRequest, db: AsyncSession = Depends(get_db)):
    """Convert `amount` using freshly fetched rates plus the configured manual rates.

    `result` is null when no rate is available for either currency.
    """
    return await valuation_service.convert(db, body)


@router.post("/expenses", response_model=ExpenseSummaryResponse, summary="Paid/unpaid expense totals")
async def expense_summary(body: ExpenseSummaryRequest, db: AsyncSession = Depends(get_db)):
    """Sum expense lines per currency and as one combined total in the reporting currency.

    Currencies with nothing paid or unpaid are omitted. Currencies without a
    rate are listed in `unconverted` and left out of the combined total.
    """
    return await valuation_service.expense_summary(db, body)


@router.post("/portfolio", response_model=PortfolioResponse, summary="Value investment lots at current prices")
async def portfolio(body: PortfolioRequest, db: AsyncSession = Depends(get_db)):
    """Aggregate lots into holdings and value them in the display currency.

    Prices and rates are fetched concurrently. Holdings without a quote are
    listed in `unpriced` and report null value fields.
    """
    return await valuation_service.portfolio_valuation(db, body)


@router.post("/dividends", response_model=DividendSummaryResponse, summary="Dividend totals by period and type")
async def dividends(body: DividendSummaryRequest, db: AsyncSession = Depends(get_db)):
    """Year-to-date, current-month and last-year dividend totals with a per-type breakdown."""
    return await valuation_service.dividend_summary(db, body)
