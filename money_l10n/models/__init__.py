"""
Data Models Package

This package contains all Pydantic models used by the localization pipeline.
"""

from money_l10n.models.currency import (
    AmountToken,
    Currency,
    CurrencyDisplay,
    CurrencyPreference,
    ExchangeRate,
)
from money_l10n.models.events import (
    LocalizationEvent,
    LocalizationEventBuilder,
    LocalizationEventType,
    LocalizationSeverity,
)
from money_l10n.models.translation import (
    CacheEntry,
    ProtectedMessage,
)

__all__ = [
    # Currency models
    "AmountToken",
    "Currency",
    "CurrencyDisplay",
    "CurrencyPreference",
    "ExchangeRate",
    # Event models
    "LocalizationEvent",
    "LocalizationEventBuilder",
    "LocalizationEventType",
    "LocalizationSeverity",
    # Translation models
    "CacheEntry",
    "ProtectedMessage",
]
