from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    database_url: str = "postgresql+asyncpg://finboard:finboard@db:5432/finboard"
    alpha_vantage_api_key: str | None = None
    open_exchange_rates_api_key: str | None = None
    http_timeout: float = 10.0
    fx_base_currency: str = "USD"

    model_config = {"env_prefix": ""}


settings = Settings()
