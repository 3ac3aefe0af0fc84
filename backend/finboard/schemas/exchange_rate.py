import datetime

from pydantic import BaseModel, Field

from finboard.utils import utc_now


class ExchangeRateSet(BaseModel):
    success: bool = Field(description="True when rates were fetched")
    base_currency: str = Field(description="ISO 4217 code every rate is relative to")
    rates: dict[str, float] = Field(
        default_factory=dict,
        description="Units of each currency per one unit of base_currency (base included at 1)",
    )
    source: str = Field(description='Provider identifier, "<name> (fallback)" or "none"')
    fetched_at: datetime.datetime = Field(default_factory=utc_now, description="UTC time of the fetch")
    errors: list[str] = Field(default_factory=list, description="Diagnostics in the order they occurred")
