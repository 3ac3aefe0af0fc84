from sqlalchemy.ext.asyncio import AsyncSession

from finboard.constants import DEFAULT_MANUAL_RATES
from finboard.repositories.settings_repo import SettingsRepository
from finboard.schemas.settings import SettingsResponse

DEFAULT_DISPLAY_CURRENCY = "USD"


async def get_settings(db: AsyncSession) -> SettingsResponse:
    row = await SettingsRepository(db).get()
    if not row:
        return SettingsResponse(data={})
    return row


async def update_settings(db: AsyncSession, data: dict):
    return await SettingsRepository(db).upsert(data)


async def get_rate_preferences(db: AsyncSession) -> tuple[str, dict[str, float]]:
    """Return (display_currency, manual_rates), filling in defaults for unset keys."""
    row = await SettingsRepository(db).get()
    data = (row.data or {}) if row else {}
    display = data.get("display_currency") or DEFAULT_DISPLAY_CURRENCY
    manual = {**DEFAULT_MANUAL_RATES, **(data.get("manual_rates") or {})}
    return display, manual
