"""
Exchange Rate Services Package

Provides the provider interface, the HTTP provider and the caching
repository.
"""

from money_l10n.services.rates.http_provider import (
    RATES_PATH,
    HttpExchangeRateProvider,
    parse_rate_payload,
)
from money_l10n.services.rates.interface import (
    ExchangeRateProvider,
    FixedRateProvider,
    RateFetchError,
)
from money_l10n.services.rates.repository import ExchangeRateRepository

__all__ = [
    # Interface
    "ExchangeRateProvider",
    # Exceptions
    "RateFetchError",
    # Implementations
    "FixedRateProvider",
    "HttpExchangeRateProvider",
    "RATES_PATH",
    "parse_rate_payload",
    # Repository
    "ExchangeRateRepository",
]
