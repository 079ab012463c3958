"""
Public Entry Points

Module-level functions over one shared, lazily built set of components.
Applications that need their own wiring (tests, several languages in
one process) call create_app_components() directly instead.
"""

from functools import lru_cache
from typing import Optional

from money_l10n.orchestrator import AppComponents, create_app_components
from money_l10n.services.currency.conversion import RateLike


@lru_cache()
def get_default_components() -> AppComponents:
    """
    Get the shared components (cached).

    Call get_default_components.cache_clear() after changing settings.
    """
    return create_app_components()


async def aclose_default_components() -> None:
    """Close the shared components, if built, and forget them."""
    if get_default_components.cache_info().currsize:
        await get_default_components().aclose()
    get_default_components.cache_clear()


def rewrite_message_currency(message: str, is_vnd: bool, rate: RateLike = None) -> str:
    """Rewrite every amount in ``message`` in the display currency."""
    return get_default_components().rewriter.rewrite(message, is_vnd, rate)


async def localize_message(message: str, is_vnd: bool, rate: RateLike = None) -> str:
    """Format currency amounts, then translate into the app language."""
    return await get_default_components().localizer.localize_message(message, is_vnd, rate)


def localize_currency_only(message: str, is_vnd: bool, rate: RateLike = None) -> str:
    return get_default_components().localizer.localize_currency_only(message, is_vnd, rate)


async def localize_translation_only(message: str) -> str:
    return await get_default_components().localizer.localize_translation_only(message)


def translate_budget_notification(message: str, is_vnd: bool, rate: RateLike = None) -> str:
    """Rule-based English -> Vietnamese translation of a budget notification."""
    return get_default_components().notification_translator.translate(message, is_vnd, rate)


def localize_budget_notification(
    message: str,
    is_vnd: bool,
    rate: RateLike = None,
    language: Optional[str] = None,
) -> str:
    """Budget notification in the app language with amounts in the display currency."""
    return get_default_components().notification_translator.localize(message, is_vnd, rate, language)
