import json

from pydantic import BaseModel, Field, field_validator

from finboard.constants import APP_CURRENCIES, MAX_MANUAL_RATE, CurrencyCode

MAX_SETTINGS_BYTES = 16_384  # 16 KB


class FinanceSettingsData(BaseModel):
    """Typed settings document.

    ``manual_rates`` maps a currency code to units per one USD. It covers
    currencies the rate providers do not quote (ARS, CNY); a provider rate
    always wins over a manual one. Unknown keys are preserved via
    extra="allow".
    """

    display_currency: CurrencyCode | None = None
    manual_rates: dict[str, float] | None = None

    model_config = {"extra": "allow"}

    @field_validator("manual_rates")
    @classmethod
    def validate_manual_rates(cls, v: dict[str, float] | None) -> dict[str, float] | None:
        if v is None:
            return v
        cleaned: dict[str, float] = {}
        for code, rate in v.items():
            code = code.upper()
            if code not in APP_CURRENCIES:
                raise ValueError(f"unsupported currency {code!r}")
            if rate <= 0:
                raise ValueError(f"exchange rate for {code} must be a positive number")
            if rate > MAX_MANUAL_RATE:
                raise ValueError(f"exchange rate for {code} seems unreasonably high")
            cleaned[code] = rate
        return cleaned


class SettingsResponse(BaseModel):
    data: dict = Field(description="Settings object with typed keys (see FinanceSettingsData)")

    model_config = {"from_attributes": True}


class SettingsUpdate(BaseModel):
    data: FinanceSettingsData = Field(description="Settings object, validated against FinanceSettingsData")

    @field_validator("data", mode="before")
    @classmethod
    def limit_payload_size(cls, v: dict | FinanceSettingsData) -> dict | FinanceSettingsData:
        raw = v if isinstance(v, dict) else v.model_dump(exclude_none=True)
        size = len(json.dumps(raw, separators=(",", ":")))
        if size > MAX_SETTINGS_BYTES:
            raise ValueError(f"settings payload too large ({size} bytes, max {MAX_SETTINGS_BYTES})")
        return v
