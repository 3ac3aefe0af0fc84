"""Abstract base class for price data sources."""

from abc import ABC, abstractmethod

from finboard.schemas.price import PriceQuote

# Prices must reflect the moment of the request; ask every hop not to cache.
NO_CACHE_HEADERS = {
    "Accept": "application/json",
    "Cache-Control": "no-cache",
    "Pragma": "no-cache",
}


class ProviderError(Exception):
    """A provider call failed as a whole (transport, status, payload or config)."""


class PriceSource(ABC):
    """Client for one external price API.

    ``name`` is the identifier stamped on every quote (``PriceQuote.source``);
    ``label`` is the human-readable name used in diagnostics.
    """

    name: str
    label: str

    @abstractmethod
    async def fetch_quotes(self, symbols: list[str]) -> list[PriceQuote]:
        """Fetch quotes for upper-cased symbols.

        Symbols the provider cannot resolve are simply absent from the
        result. Raises ProviderError when the whole batch fails.
        """
