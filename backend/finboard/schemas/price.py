import datetime

from pydantic import BaseModel, Field, field_validator

from finboard.constants import AssetKind
from finboard.utils import utc_now


class AssetRequest(BaseModel):
    symbol: str = Field(min_length=1, max_length=20, description="Ticker symbol (e.g. BTC, AAPL)")
    kind: AssetKind = Field(description="Asset kind: CRYPTO, STOCK or ETF")

    @field_validator("symbol")
    @classmethod
    def normalize_symbol(cls, v: str) -> str:
        return v.strip().upper()


class PriceQuote(BaseModel):
    symbol: str = Field(description="Upper-cased ticker symbol as requested")
    price: float = Field(gt=0, description="Latest traded price")
    change_24h: float | None = Field(default=None, description="24-hour percent change")
    currency: str = Field(default="USD", description="ISO 4217 currency of the price")
    source: str = Field(description="Provider identifier (e.g. binance, yahoo)")
    fetched_at: datetime.datetime = Field(default_factory=utc_now, description="UTC time of the fetch")

    @field_validator("symbol")
    @classmethod
    def uppercase_symbol(cls, v: str) -> str:
        return v.upper()


class FetchPricesRequest(BaseModel):
    assets: list[AssetRequest] = Field(default_factory=list, max_length=200, description="Assets to price")


class FetchPricesResult(BaseModel):
    success: bool = Field(description="True when at least one price was fetched")
    prices: list[PriceQuote] = Field(default_factory=list, description="Merged quotes from all providers")
    errors: list[str] = Field(default_factory=list, description="Diagnostics collected from every provider attempt")
