"""Shared currency and asset-kind constants."""

from enum import Enum
from typing import Literal


class AssetKind(str, Enum):
    CRYPTO = "CRYPTO"
    STOCK = "STOCK"
    ETF = "ETF"


class DividendType(str, Enum):
    REGULAR = "REGULAR"
    SPECIAL = "SPECIAL"
    CAPITAL_GAIN = "CAPITAL_GAIN"


# Currencies the FX providers can quote. ARS and CNY are application
# currencies too, but they are only reachable through manual rates.
SUPPORTED_FX_CURRENCIES: tuple[str, ...] = (
    "USD", "EUR", "GBP", "JPY", "CAD", "AUD", "CHF", "BRL",
)

# Every currency a record may be denominated in.
APP_CURRENCIES: tuple[str, ...] = SUPPORTED_FX_CURRENCIES + ("CNY", "ARS")

CurrencyCode = Literal["USD", "EUR", "GBP", "JPY", "CAD", "AUD", "CHF", "BRL", "CNY", "ARS"]

# Default USD→ARS rate used until the user configures one.
DEFAULT_MANUAL_RATES: dict[str, float] = {"ARS": 1200.0}

# Upper bound accepted for a manually configured rate.
MAX_MANUAL_RATE = 100_000.0
