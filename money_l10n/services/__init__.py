"""Services package."""

from money_l10n.services.currency import (
    ConversionError,
    InvalidRateError,
    ParseError,
)
from money_l10n.services.messages import MessageCurrencyRewriter
from money_l10n.services.rates import (
    ExchangeRateProvider,
    ExchangeRateRepository,
    FixedRateProvider,
    HttpExchangeRateProvider,
    RateFetchError,
)
from money_l10n.services.storage import (
    InMemoryKeyValueStore,
    JsonFileKeyValueStore,
    KeyValueStore,
    StorageError,
)
from money_l10n.services.translation import (
    BudgetNotificationTranslator,
    GeminiTranslator,
    IdentityTranslator,
    MessageLocalizer,
    SymbolGuard,
    TranslationCache,
    TranslationError,
    Translator,
)

__all__ = [
    # Currency
    "ConversionError",
    "InvalidRateError",
    "ParseError",
    "MessageCurrencyRewriter",
    # Rates
    "ExchangeRateProvider",
    "ExchangeRateRepository",
    "FixedRateProvider",
    "HttpExchangeRateProvider",
    "RateFetchError",
    # Storage
    "InMemoryKeyValueStore",
    "JsonFileKeyValueStore",
    "KeyValueStore",
    "StorageError",
    # Translation
    "BudgetNotificationTranslator",
    "GeminiTranslator",
    "IdentityTranslator",
    "MessageLocalizer",
    "SymbolGuard",
    "TranslationCache",
    "TranslationError",
    "Translator",
]
