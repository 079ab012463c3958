"""
Component Wiring for Money L10n

This module builds the localization pipeline from settings:

    KeyValueStore -> TranslationCache ┐
    Translator ───────────────────────┼-> MessageLocalizer
    MessageCurrencyRewriter ──────────┘
    MessageCurrencyRewriter -> BudgetNotificationTranslator
    ExchangeRateProvider + KeyValueStore -> ExchangeRateRepository

DESIGN DECISION: Components never reach for globals. Everything is
injected here, so tests build their own graph with fakes and an app
builds exactly one.

Missing configuration degrades instead of failing: without a Gemini key
the localizer runs with the identity translator, and without a cache
path translations are cached in memory only.
"""

from typing import NamedTuple, Optional

from money_l10n.audit import AuditLogger, get_logger
from money_l10n.config import get_settings
from money_l10n.services.messages import MessageCurrencyRewriter
from money_l10n.services.rates import (
    ExchangeRateProvider,
    ExchangeRateRepository,
    HttpExchangeRateProvider,
)
from money_l10n.services.storage import (
    InMemoryKeyValueStore,
    JsonFileKeyValueStore,
    KeyValueStore,
)
from money_l10n.services.translation import (
    BudgetNotificationTranslator,
    GeminiTranslator,
    IdentityTranslator,
    MessageLocalizer,
    SymbolGuard,
    TranslationCache,
    Translator,
)


logger = get_logger(__name__)


def _base_language(code: str) -> str:
    return code.lower().replace("_", "-").split("-")[0]


class AppComponents(NamedTuple):
    """Everything create_app_components() builds."""
    store: KeyValueStore
    rewriter: MessageCurrencyRewriter
    translator: Translator
    localizer: MessageLocalizer
    notification_translator: BudgetNotificationTranslator
    rate_repository: ExchangeRateRepository
    audit_logger: AuditLogger

    async def aclose(self) -> None:
        """Close the rate provider's HTTP client."""
        await self.rate_repository.close()


def _create_translator(use_gemini: bool, source_language: str, target_language: str) -> Translator:
    if not use_gemini:
        return IdentityTranslator()
    try:
        return GeminiTranslator(
            source_language=source_language,
            target_language=target_language,
        )
    except Exception as e:
        # Gemini not configured - continue without translation
        logger.warning("translator_not_configured", error=str(e))
        return IdentityTranslator()


def create_app_components(
    use_gemini: bool = True,
    cache_store: Optional[KeyValueStore] = None,
    rate_provider: Optional[ExchangeRateProvider] = None,
) -> AppComponents:
    """
    Factory function to create all application components.

    Args:
        use_gemini: Whether to translate with Gemini.
                    Set to False for testing without an API key.
        cache_store: Storage for translations, rates and preferences
                     (default: JSON file if configured, else memory)
        rate_provider: Exchange rate source (default: the public HTTP API)

    Returns:
        AppComponents
    """
    settings = get_settings()
    currency_settings = settings.currency
    translation_settings = settings.translation
    app_settings = settings.app

    audit_logger = AuditLogger()

    if cache_store is None:
        if translation_settings.cache_path:
            cache_store = JsonFileKeyValueStore(translation_settings.cache_path)
        else:
            cache_store = InMemoryKeyValueStore()

    rewriter = MessageCurrencyRewriter(
        fallback_rate=currency_settings.fallback_usd_to_vnd,
        audit_logger=audit_logger,
    )

    # The engine translates into target_language only; other UI languages stay untranslated
    translator = _create_translator(
        use_gemini
        and translation_settings.needs_translation
        and _base_language(app_settings.app_language) == _base_language(translation_settings.target_language),
        translation_settings.source_language,
        translation_settings.target_language,
    )
    # Identity output must never land in the translation cache
    localizer_language = (
        translation_settings.source_language
        if isinstance(translator, IdentityTranslator)
        else app_settings.app_language
    )

    localizer = MessageLocalizer(
        translator=translator,
        cache=TranslationCache(
            cache_store,
            key_prefix=translation_settings.cache_key_prefix,
            audit_logger=audit_logger,
        ),
        rewriter=rewriter,
        symbol_guard=SymbolGuard(audit_logger=audit_logger),
        language=localizer_language,
        source_language=translation_settings.source_language,
        audit_logger=audit_logger,
    )

    notification_translator = BudgetNotificationTranslator(
        rewriter=rewriter,
        fallback_rate=currency_settings.fallback_usd_to_vnd,
        language=app_settings.app_language,
        audit_logger=audit_logger,
    )

    rate_repository = ExchangeRateRepository(
        provider=rate_provider or HttpExchangeRateProvider(currency_settings),
        store=cache_store,
        settings=currency_settings,
        audit_logger=audit_logger,
    )

    logger.info(
        "components_created",
        language=app_settings.app_language,
        translator=type(translator).__name__,
        store=type(cache_store).__name__,
    )

    return AppComponents(
        store=cache_store,
        rewriter=rewriter,
        translator=translator,
        localizer=localizer,
        notification_translator=notification_translator,
        rate_repository=rate_repository,
        audit_logger=audit_logger,
    )
