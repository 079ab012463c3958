"""
Configuration Management for Money L10n

Uses pydantic-settings for type-safe configuration from environment variables.

DESIGN DECISION: All configuration is centralized here.
This makes it easy to see what external dependencies exist and
ensures all required configuration is validated at startup.
"""

from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


# Used whenever no live exchange rate is available
DEFAULT_USD_TO_VND = 24000.0


class CurrencySettings(BaseSettings):
    """Currency display and exchange rate configuration."""

    model_config = SettingsConfigDict(
        env_prefix="CURRENCY_",
        extra="ignore"
    )

    fallback_usd_to_vnd: float = Field(
        default=DEFAULT_USD_TO_VND,
        gt=0,
        description="VND per 1 USD when no live rate is available"
    )
    default_is_vnd: bool = Field(
        default=True,
        description="Display currency for users who never chose one"
    )
    rate_cache_ttl_seconds: int = Field(
        default=3600,
        ge=0,
        description="How long a fetched exchange rate stays fresh"
    )
    exchange_api_base_url: str = Field(
        default="https://cdn.jsdelivr.net/npm/@fawazahmed0/currency-api@latest",
        description="Base URL of the public exchange rate API"
    )
    exchange_api_timeout_seconds: float = Field(
        default=10.0,
        gt=0,
        description="HTTP timeout for exchange rate requests"
    )

    @field_validator('exchange_api_base_url')
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")


class TranslationSettings(BaseSettings):
    """Message translation configuration."""

    model_config = SettingsConfigDict(
        env_prefix="TRANSLATION_",
        extra="ignore"
    )

    source_language: str = Field(
        default="en",
        description="Language backend messages are written in"
    )
    target_language: str = Field(
        default="vi",
        description="Language messages are translated into"
    )
    cache_path: Optional[str] = Field(
        default=None,
        description="JSON file for the persistent translation cache (memory only if unset)"
    )
    cache_key_prefix: str = Field(
        default="trans_",
        min_length=1,
        description="Prefix for translation cache keys"
    )

    @field_validator('cache_path')
    @classmethod
    def validate_cache_path(cls, v: Optional[str]) -> Optional[str]:
        """Warn if the cache directory doesn't exist (but don't fail - it might be created later)."""
        if v and not Path(v).parent.exists():
            import warnings
            warnings.warn(
                f"Translation cache directory not found for {v}. "
                "It will be created on first write."
            )
        return v

    @property
    def needs_translation(self) -> bool:
        return self.source_language.lower() != self.target_language.lower()


class GeminiSettings(BaseSettings):
    """Gemini LLM configuration."""

    model_config = SettingsConfigDict(
        env_prefix="GEMINI_",
        extra="ignore"
    )

    api_key: str = Field(
        ...,
        description="Gemini API key"
    )
    model_name: str = Field(
        default="gemini-1.5-flash",
        description="Gemini model to use"
    )
    max_tokens: int = Field(
        default=1024,
        ge=100,
        le=8192,
        description="Maximum tokens in response"
    )
    temperature: float = Field(
        default=0.0,
        ge=0.0,
        le=1.0,
        description="Model temperature (lower = more deterministic)"
    )


class AppSettings(BaseSettings):
    """
    Main application settings.

    Loads configuration from environment variables and .env file.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    # Environment
    app_environment: str = Field(
        default="development",
        description="Application environment"
    )
    debug_mode: bool = Field(
        default=False,
        description="Enable debug mode"
    )
    app_language: str = Field(
        default="en",
        description="UI language of the client (e.g. 'en', 'vi')"
    )

    @property
    def is_vietnamese(self) -> bool:
        return self.app_language.lower().startswith("vi")


class Settings(BaseSettings):
    """
    Root settings container.

    Aggregates all sub-settings for easy access.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    # Sub-settings are loaded lazily so a missing Gemini key
    # doesn't stop the currency components from working

    @property
    def currency(self) -> CurrencySettings:
        return CurrencySettings()

    @property
    def translation(self) -> TranslationSettings:
        return TranslationSettings()

    @property
    def gemini(self) -> GeminiSettings:
        return GeminiSettings()

    @property
    def app(self) -> AppSettings:
        return AppSettings()


@lru_cache()
def get_settings() -> Settings:
    """
    Get application settings (cached).

    Uses LRU cache to ensure settings are only loaded once.
    Call get_settings.cache_clear() to reload if needed.
    """
    return Settings()


def validate_all_settings() -> dict[str, bool]:
    """
    Validate all settings are properly configured.

    Returns a dict of {setting_name: is_valid}.
    Useful for startup checks.
    """
    results = {}

    settings = get_settings()

    for name in ("currency", "translation", "gemini", "app"):
        try:
            _ = getattr(settings, name)
            results[name] = True
        except Exception as e:
            results[name] = False
            results[f"{name}_error"] = str(e)

    return results
