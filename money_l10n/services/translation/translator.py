"""
Translation Capability

DESIGN DECISION: The localizer only sees the Translator interface.
Which engine sits behind it (an LLM, an on-device model, nothing at all)
is a wiring decision, and tests pass a fake.

The Gemini translator is a TRANSLATOR, not an editor:
- It must keep the currency placeholders and every number untouched
- It must not add explanations, quotes or extra sentences
An empty answer is a failure, not a translation.
"""

from abc import ABC, abstractmethod
from typing import Optional

import google.generativeai as genai
from tenacity import (
    retry,
    retry_if_not_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from money_l10n.config import GeminiSettings, get_settings


LANGUAGE_NAMES = {
    "en": "English",
    "vi": "Vietnamese",
}


class TranslationError(Exception):
    """Base exception for translation errors."""
    pass


class EmptyTranslationError(TranslationError):
    """The engine answered with no text."""
    pass


class Translator(ABC):
    """An opaque ``translate(text) -> text`` capability. May be slow."""

    @abstractmethod
    async def translate(self, text: str) -> str:
        """
        Translate one message.

        Raises:
            TranslationError: If the engine is unavailable or fails
        """
        pass


class IdentityTranslator(Translator):
    """Returns text unchanged. Used when no engine is configured."""

    async def translate(self, text: str) -> str:
        return text


class GeminiTranslator(Translator):
    """
    Translates notification messages with Gemini.

    Transport errors are retried; an empty answer is not.
    """

    def __init__(
        self,
        settings: Optional[GeminiSettings] = None,
        source_language: str = "en",
        target_language: str = "vi",
    ):
        self._settings = settings or get_settings().gemini
        self._source_language = source_language
        self._target_language = target_language
        self._configure_genai()

    def _configure_genai(self):
        """Configure Google Generative AI."""
        genai.configure(api_key=self._settings.api_key)
        self._model = genai.GenerativeModel(
            model_name=self._settings.model_name,
            generation_config={
                "temperature": self._settings.temperature,
                "max_output_tokens": self._settings.max_tokens,
            }
        )

    def _build_prompt(self, text: str) -> str:
        source = LANGUAGE_NAMES.get(self._source_language, self._source_language)
        target = LANGUAGE_NAMES.get(self._target_language, self._target_language)
        return f"""Translate this personal finance app notification from {source} to {target}.

Rules:
- Keep the words VNDCURRENCY and USDCURRENCY exactly as written, in the same place next to their numbers
- Keep every number, percentage and emoji exactly as written
- Reply with the translated text only: no quotes, no notes

Notification:
{text}"""

    @retry(
        retry=retry_if_not_exception_type(EmptyTranslationError),
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, min=2, max=10),
        reraise=True,
    )
    async def translate(self, text: str) -> str:
        """
        Translate ``text`` into the target language.

        Raises:
            EmptyTranslationError: If the model returns no text
            TranslationError: If the request keeps failing
        """
        try:
            response = await self._model.generate_content_async(self._build_prompt(text))
            translated = (response.text or "").strip()
        except Exception as e:
            raise TranslationError(f"Gemini translation failed: {e}") from e

        if not translated:
            raise EmptyTranslationError("Gemini returned an empty translation")
        return translated
