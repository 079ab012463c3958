"""
Money L10n

Currency-aware message localization for a VND/USD personal finance
client.

DESIGN PRINCIPLES:
1. VND is canonical; USD exists only at display time
2. Currency correctness is guaranteed, translation is best-effort
3. Currency glyphs survive translation byte-for-byte
4. Every recovered failure is logged
5. Storage and translation engines are swappable
"""

from money_l10n.api import (
    aclose_default_components,
    get_default_components,
    localize_budget_notification,
    localize_currency_only,
    localize_message,
    localize_translation_only,
    rewrite_message_currency,
    translate_budget_notification,
)
from money_l10n.models.currency import Currency, CurrencyPreference, ExchangeRate
from money_l10n.orchestrator import AppComponents, create_app_components
from money_l10n.services.currency import (
    format_amount,
    format_for_input,
    format_usd,
    format_vnd,
    parse_amount,
    usd_to_vnd,
    vnd_to_usd,
)

__version__ = "1.0.0"

__all__ = [
    # Amounts
    "parse_amount",
    "format_amount",
    "format_vnd",
    "format_usd",
    "format_for_input",
    "vnd_to_usd",
    "usd_to_vnd",
    # Messages
    "rewrite_message_currency",
    "localize_message",
    "localize_currency_only",
    "localize_translation_only",
    "translate_budget_notification",
    "localize_budget_notification",
    # Models
    "Currency",
    "CurrencyPreference",
    "ExchangeRate",
    # Wiring
    "AppComponents",
    "create_app_components",
    "aclose_default_components",
    "get_default_components",
]
