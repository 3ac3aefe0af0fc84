"""Abstract base class for exchange-rate sources."""

import logging
from abc import ABC, abstractmethod

import httpx

from finboard.schemas.exchange_rate import ExchangeRateSet
from finboard.services.price_providers.base import ProviderError

logger = logging.getLogger(__name__)


class RateSource(ABC):
    """Client for one external exchange-rate API.

    Subclasses implement ``_fetch`` and raise ProviderError on failure;
    ``fetch_rates`` turns every expected failure into an unsuccessful
    ExchangeRateSet so callers never see a provider exception.
    """

    name: str
    label: str

    @abstractmethod
    async def _fetch(self, base_currency: str) -> dict[str, float]:
        """Return rates relative to base_currency (base included at 1)."""

    def failure(self, base_currency: str, error: str) -> ExchangeRateSet:
        return ExchangeRateSet(
            success=False,
            base_currency=base_currency,
            rates={},
            source=self.name,
            errors=[error],
        )

    async def fetch_rates(self, base_currency: str = "USD") -> ExchangeRateSet:
        base_currency = base_currency.upper()
        try:
            rates = await self._fetch(base_currency)
        except (ProviderError, httpx.HTTPError, ValueError) as exc:
            logger.warning("%s failed for base %s: %s", self.label, base_currency, exc)
            return self.failure(base_currency, f"{self.label}: {exc}")

        logger.info("%s: fetched %d rates for base %s", self.label, len(rates), base_currency)
        return ExchangeRateSet(
            success=True,
            base_currency=base_currency,
            rates=rates,
            source=self.name,
        )
