import datetime

from pydantic import BaseModel, Field

from finboard.constants import AssetKind, CurrencyCode, DividendType
from finboard.schemas.price import PriceQuote


# --- currency conversion ---


class ConvertRequest(BaseModel):
    amount: float = Field(description="Amount to convert")
    from_currency: CurrencyCode = Field(description="Currency of the amount")
    to_currency: CurrencyCode = Field(description="Target currency")


class ConvertResponse(BaseModel):
    amount: float
    from_currency: str
    to_currency: str
    result: float | None = Field(description="Converted amount, or null when a rate is unavailable")
    rate_source: str = Field(description="Source of the exchange rates used")


# --- expenses ---


class ExpenseLine(BaseModel):
    amount: float = Field(ge=0, description="Monthly expense amount")
    currency: CurrencyCode = Field(description="Expense currency")
    is_paid: bool = Field(default=False, description="Whether this month's instance has been paid")


class CurrencyTotals(BaseModel):
    currency: str
    paid: float
    unpaid: float
    total: float


class ExpenseTotals(BaseModel):
    by_currency: list[CurrencyTotals] = Field(description="Same-currency subtotals; all-zero currencies omitted")
    combined: CurrencyTotals = Field(description="Equivalent totals expressed in the reporting currency")
    unconverted: list[str] = Field(default_factory=list, description="Currencies left out of the combined total")


class ExpenseSummaryRequest(BaseModel):
    lines: list[ExpenseLine] = Field(default_factory=list)
    reporting_currency: CurrencyCode | None = Field(default=None, description="Defaults to the configured display currency")


# --- portfolio ---


class InvestmentLot(BaseModel):
    symbol: str = Field(min_length=1, max_length=20, description="Ticker symbol")
    kind: AssetKind
    quantity: float = Field(gt=0, description="Units bought in this lot")
    purchase_price: float = Field(ge=0, description="Price per unit at purchase")
    purchase_currency: CurrencyCode = Field(default="USD", description="Currency the lot was bought in")


class HoldingValuation(BaseModel):
    symbol: str
    kind: AssetKind
    quantity: float
    lots: int = Field(description="Number of lots aggregated into this holding")
    avg_price: float | None = Field(description="Weighted average purchase price in the display currency")
    cost_basis: float | None = Field(description="Total cost in the display currency")
    current_price: float | None = Field(description="Latest price in the display currency")
    current_value: float | None
    gain_loss: float | None
    gain_loss_percent: float | None
    change_24h: float | None = None
    price_source: str | None = None


class PortfolioValuation(BaseModel):
    display_currency: str
    holdings: list[HoldingValuation]
    total_value: float
    total_cost_basis: float
    total_gain_loss: float
    total_gain_loss_percent: float
    allocation: dict[str, float] = Field(description="Percent of total value per asset kind")
    unpriced: list[str] = Field(default_factory=list, description="Symbols without a current quote")
    unconverted: list[str] = Field(default_factory=list, description="Currencies that could not be converted")


class PortfolioRequest(BaseModel):
    lots: list[InvestmentLot] = Field(default_factory=list, max_length=1000)
    display_currency: CurrencyCode | None = None


class PortfolioResponse(PortfolioValuation):
    quotes: list[PriceQuote] = Field(default_factory=list)
    errors: list[str] = Field(default_factory=list)


# --- dividends ---


class DividendRecord(BaseModel):
    symbol: str = Field(min_length=1, max_length=20)
    amount: float = Field(ge=0, description="Amount received")
    currency: CurrencyCode = "USD"
    type: DividendType = DividendType.REGULAR
    paid_on: datetime.date


class DividendBreakdown(BaseModel):
    regular: float = 0.0
    special: float = 0.0
    capital_gain: float = 0.0


class DividendPeriod(BaseModel):
    total: float = 0.0
    by_type: DividendBreakdown = Field(default_factory=DividendBreakdown)


class DividendSummary(BaseModel):
    display_currency: str
    ytd: DividendPeriod
    this_month: DividendPeriod
    last_year: DividendPeriod
    unconverted: list[str] = Field(default_factory=list)


class DividendSummaryRequest(BaseModel):
    records: list[DividendRecord] = Field(default_factory=list)
    display_currency: CurrencyCode | None = None
    as_of: datetime.date | None = Field(default=None, description="Reference date; defaults to today")


class RatedResponse(BaseModel):
    """Mixin fields reporting where the rates behind a summary came from."""

    rate_source: str
    errors: list[str] = Field(default_factory=list)


class ExpenseSummaryResponse(ExpenseTotals, RatedResponse):
    pass


class DividendSummaryResponse(DividendSummary, RatedResponse):
    pass
