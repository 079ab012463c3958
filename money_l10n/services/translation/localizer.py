"""
Message Localizer

Ties the currency rewriter, the symbol guard, the translation cache and
a translator together.

Full pipeline, always in this order:
1. Rewrite currency  (numerals are language-independent; do them first)
2. Protect glyphs    (₫ / $ -> placeholders)
3. Translate         (cache first; the translator only on a miss)
4. Restore glyphs

Reordering breaks amounts: translating before step 1 would let the
translator reflow numbers, and restoring before step 3 would expose
glyphs to it.

FAILURE SEMANTICS:
- Translation is best-effort: if the translator fails, the caller gets
  the currency-correct, untranslated message
- Currency correctness is not best-effort: step 1 always runs
- The cache is written only after a successful translation, so a call
  cancelled mid-translation leaves nothing behind
"""

from typing import Optional

from money_l10n.audit import AuditLogger, get_audit_logger, get_logger
from money_l10n.models.events import LocalizationEventBuilder
from money_l10n.services.currency.conversion import RateLike
from money_l10n.services.messages import MessageCurrencyRewriter
from money_l10n.services.translation.cache import TranslationCache
from money_l10n.services.translation.language import contains_vietnamese
from money_l10n.services.translation.symbol_guard import SymbolGuard
from money_l10n.services.translation.translator import Translator


logger = get_logger(__name__)


class MessageLocalizer:
    """
    Formats currency in messages and translates them.

    All collaborators are injected so tests can swap in a fake
    translator and an in-memory cache.
    """

    def __init__(
        self,
        translator: Translator,
        cache: TranslationCache,
        rewriter: Optional[MessageCurrencyRewriter] = None,
        symbol_guard: Optional[SymbolGuard] = None,
        language: str = "vi",
        source_language: str = "en",
        audit_logger: Optional[AuditLogger] = None,
    ):
        """
        Args:
            translator: Engine that translates source_language -> language
            cache: Translation cache
            rewriter: Currency rewriter (default: fallback rate from settings)
            symbol_guard: Glyph protector
            language: The user's UI language
            source_language: Language the backend writes messages in
            audit_logger: Where failures are reported
        """
        self._audit_logger = audit_logger or get_audit_logger()
        self._translator = translator
        self._cache = cache
        self._rewriter = rewriter or MessageCurrencyRewriter(audit_logger=self._audit_logger)
        self._symbol_guard = symbol_guard or SymbolGuard(audit_logger=self._audit_logger)
        self._language = language
        self._source_language = source_language

    @property
    def translation_enabled(self) -> bool:
        return self._language.lower() != self._source_language.lower()

    def _needs_translation(self, message: str) -> bool:
        if not self.translation_enabled or not message.strip():
            return False
        # Already localized upstream; never translate twice
        if self._language.lower().startswith("vi") and contains_vietnamese(message):
            return False
        return True

    async def localize_message(
        self,
        message: str,
        is_vnd: bool,
        rate: RateLike = None,
    ) -> str:
        """
        Format currency amounts, then translate.

        Args:
            message: Backend message, e.g. "You need to save 500000.00"
            is_vnd: User's display currency (True for VND, False for USD)
            rate: Current exchange rate (None uses the fallback rate)

        Returns:
            Formatted and (when possible) translated message
        """
        formatted = self.localize_currency_only(message, is_vnd, rate)
        return await self.localize_translation_only(formatted)

    def localize_currency_only(
        self,
        message: str,
        is_vnd: bool,
        rate: RateLike = None,
    ) -> str:
        """Currency conversion and formatting without translation."""
        return self._rewriter.rewrite(message, is_vnd, rate)

    async def localize_translation_only(self, message: str) -> str:
        """Translation with glyph protection, without touching amounts."""
        if not self._needs_translation(message):
            return message

        protected = self._symbol_guard.protect(message)

        translated = self._cache.get(protected.text)
        if translated is not None:
            self._audit_logger.log(
                LocalizationEventBuilder.translation_cache_hit(
                    self._cache.key_for(protected.text)
                )
            )
        else:
            try:
                translated = await self._translator.translate(protected.text)
            except Exception as e:
                self._audit_logger.log(
                    LocalizationEventBuilder.translation_failed(message, str(e))
                )
                return message

            if not isinstance(translated, str) or not translated.strip():
                self._audit_logger.log(
                    LocalizationEventBuilder.translation_failed(
                        message, "translator returned no text"
                    )
                )
                return message

            self._cache.put(protected.text, translated)
            self._audit_logger.log(
                LocalizationEventBuilder.translation_completed(
                    len(protected.text), len(translated)
                )
            )

        restored = self._symbol_guard.restore(translated, protected.placeholder_map)
        logger.debug("message_localized", original=message, localized=restored)
        return restored
