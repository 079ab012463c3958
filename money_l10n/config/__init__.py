"""Configuration package."""

from money_l10n.config.settings import (
    DEFAULT_USD_TO_VND,
    AppSettings,
    CurrencySettings,
    GeminiSettings,
    Settings,
    TranslationSettings,
    get_settings,
    validate_all_settings,
)

__all__ = [
    "DEFAULT_USD_TO_VND",
    "AppSettings",
    "CurrencySettings",
    "GeminiSettings",
    "Settings",
    "TranslationSettings",
    "get_settings",
    "validate_all_settings",
]
