"""Message scanning and currency rewriting."""

from money_l10n.services.messages.rewriter import (
    MessageCurrencyRewriter,
)
from money_l10n.services.messages.tokens import (
    BARE_INTEGER,
    CANONICAL_DECIMAL,
    TOKEN_PATTERNS,
    USD_SYMBOL,
    VND_SYMBOL,
    VND_WORD,
    TokenPattern,
    extract_amount_tokens,
    scan_tokens,
)

__all__ = [
    "MessageCurrencyRewriter",
    # Token patterns
    "BARE_INTEGER",
    "CANONICAL_DECIMAL",
    "TOKEN_PATTERNS",
    "USD_SYMBOL",
    "VND_SYMBOL",
    "VND_WORD",
    "TokenPattern",
    "extract_amount_tokens",
    "scan_tokens",
]
