"""
Abstract Exchange Rate Provider

DESIGN DECISION: This library is not an exchange rate service. Rates
come from somewhere else (a public API, the finance backend, a test
fixture) through this one-method interface.

Providers only fetch. Caching, persistence and the fallback rate are
the repository's job.
"""

from abc import ABC, abstractmethod

from money_l10n.models.currency import ExchangeRate


class RateFetchError(Exception):
    """Raised when a provider cannot produce a rate."""
    pass


class ExchangeRateProvider(ABC):
    """
    Abstract interface for exchange rate sources.

    Any source (HTTP API, backend endpoint, fixed value) must
    implement this method.
    """

    @abstractmethod
    async def fetch_rate(self) -> ExchangeRate:
        """
        Fetch the current USD -> VND rate.

        Returns:
            A fresh ExchangeRate

        Raises:
            RateFetchError: If no valid rate could be obtained
        """
        pass

    async def close(self) -> None:
        """Release any connections the provider holds. Default: nothing to release."""
        pass


class FixedRateProvider(ExchangeRateProvider):
    """Always answers with the same rate. For offline use and tests."""

    def __init__(self, usd_to_vnd: float):
        self._usd_to_vnd = usd_to_vnd

    async def fetch_rate(self) -> ExchangeRate:
        return ExchangeRate(usd_to_vnd=self._usd_to_vnd)
