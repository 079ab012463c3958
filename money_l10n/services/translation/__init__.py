"""
Translation Services Package

Glyph protection, the translation cache, translator engines, the
message localizer and rule-based budget notification translation.
"""

from money_l10n.services.translation.budget_notifications import (
    BUDGET_NOTIFICATION_RULES,
    BudgetNotificationTranslator,
    NotificationRule,
)
from money_l10n.services.translation.cache import TranslationCache
from money_l10n.services.translation.language import (
    contains_vietnamese,
    is_vietnamese_language,
)
from money_l10n.services.translation.localizer import MessageLocalizer
from money_l10n.services.translation.symbol_guard import (
    CURRENCY_PLACEHOLDERS,
    SymbolGuard,
)
from money_l10n.services.translation.translator import (
    EmptyTranslationError,
    GeminiTranslator,
    IdentityTranslator,
    TranslationError,
    Translator,
)

__all__ = [
    # Interface
    "Translator",
    # Implementations
    "GeminiTranslator",
    "IdentityTranslator",
    # Exceptions
    "TranslationError",
    "EmptyTranslationError",
    # Pipeline
    "CURRENCY_PLACEHOLDERS",
    "SymbolGuard",
    "TranslationCache",
    "MessageLocalizer",
    # Budget notifications
    "BUDGET_NOTIFICATION_RULES",
    "BudgetNotificationTranslator",
    "NotificationRule",
    # Language detection
    "contains_vietnamese",
    "is_vietnamese_language",
]
