"""
Tests for Money L10n

Test strategy:
1. Unit tests for individual components (models, parsers, formatters)
2. Integration tests for the pipeline (with fake translators and stores)
3. No real API calls in tests (use fakes and mock transports)
"""

import pytest
from datetime import datetime, timezone

from money_l10n.models.currency import (
    AmountToken,
    Currency,
    CurrencyDisplay,
    CurrencyPreference,
    ExchangeRate,
)
from money_l10n.models.events import (
    LocalizationEvent,
    LocalizationEventBuilder,
    LocalizationEventType,
    LocalizationSeverity,
)
from money_l10n.models.translation import CacheEntry, ProtectedMessage


class TestCurrencyModels:
    """Tests for currency-related Pydantic models."""

    def test_currency_from_flag(self):
        """Test the is_vnd flag maps onto the enum."""
        assert Currency.from_flag(True) == Currency.VND
        assert Currency.from_flag(False) == Currency.USD

    def test_currency_symbols(self):
        """Test each currency carries its glyph."""
        assert Currency.VND.symbol == "₫"
        assert Currency.USD.symbol == "$"
        assert Currency.VND.is_vnd
        assert not Currency.USD.is_vnd

    def test_exchange_rate_creation(self):
        """Test ExchangeRate model creation."""
        rate = ExchangeRate(usd_to_vnd=25000)
        assert rate.usd_to_vnd == 25000
        assert rate.vnd_to_usd == pytest.approx(1 / 25000)
        assert rate.fetched_at.tzinfo is not None

    def test_exchange_rate_rejects_zero(self):
        """Test that a zero rate is rejected."""
        with pytest.raises(ValueError):
            ExchangeRate(usd_to_vnd=0)

    def test_exchange_rate_rejects_negative(self):
        """Test that a negative rate is rejected."""
        with pytest.raises(ValueError):
            ExchangeRate(usd_to_vnd=-24000)

    def test_exchange_rate_rejects_infinity(self):
        """Test that a non-finite rate is rejected."""
        with pytest.raises(ValueError):
            ExchangeRate(usd_to_vnd=float("inf"))

    def test_exchange_rate_is_frozen(self):
        """Test that a rate can't be changed after creation."""
        rate = ExchangeRate(usd_to_vnd=25000)
        with pytest.raises(ValueError):
            rate.usd_to_vnd = 1

    def test_exchange_rate_default(self):
        """Test the documented fallback rate."""
        assert ExchangeRate.default().usd_to_vnd == 24000.0

    def test_currency_preference_defaults_to_vnd(self):
        """Test users who never chose see VND."""
        preference = CurrencyPreference()
        assert preference.is_vnd is True
        assert preference.currency == Currency.VND

    def test_currency_preference_usd(self):
        """Test USD preference."""
        assert CurrencyPreference(is_vnd=False).currency == Currency.USD

    def test_currency_display(self):
        """Test CurrencyDisplay holds all display fields."""
        display = CurrencyDisplay(
            amount=17.0,
            formatted_amount="$17.00",
            currency_code="USD",
            symbol="$",
        )
        assert display.formatted_amount == "$17.00"


class TestAmountToken:
    """Tests for AmountToken."""

    def test_amount_token_creation(self):
        """Test AmountToken model creation."""
        token = AmountToken(
            raw_text="$5.00",
            value=5.0,
            source_is_vnd=False,
            span=(6, 11),
        )
        assert token.source_currency == Currency.USD
        assert token.span == (6, 11)

    def test_amount_token_span_must_match_text(self):
        """Test that the span length must equal the raw text length."""
        with pytest.raises(ValueError, match="span length"):
            AmountToken(
                raw_text="$5.00",
                value=5.0,
                source_is_vnd=False,
                span=(0, 3),
            )

    def test_amount_token_rejects_reversed_span(self):
        """Test that end can't come before start."""
        with pytest.raises(ValueError):
            AmountToken(
                raw_text="5000",
                value=5000.0,
                source_is_vnd=True,
                span=(10, 6),
            )

    def test_amount_token_rejects_nan(self):
        """Test that a NaN value is rejected."""
        with pytest.raises(ValueError):
            AmountToken(
                raw_text="5000",
                value=float("nan"),
                source_is_vnd=True,
                span=(0, 4),
            )


class TestTranslationModels:
    """Tests for translation models."""

    def test_protected_message_without_placeholders(self):
        """Test a message with no glyphs."""
        message = ProtectedMessage(text="Budget completed")
        assert message.placeholder_map == {}
        assert not message.has_placeholders

    def test_protected_message_with_placeholders(self):
        """Test a message with a protected glyph."""
        message = ProtectedMessage(
            text="Spent USDCURRENCY5",
            placeholder_map={"USDCURRENCY": "$"},
        )
        assert message.has_placeholders

    def test_cache_entry_requires_key(self):
        """Test that an empty cache key is rejected."""
        with pytest.raises(ValueError):
            CacheEntry(key="", value="Xin chào")


class TestLocalizationEvents:
    """Tests for localization event models."""

    def test_event_creation(self):
        """Test LocalizationEvent model creation."""
        event = LocalizationEvent(
            event_type=LocalizationEventType.RATE_FETCHED,
            description="Rate fetched",
        )
        assert event.severity == LocalizationSeverity.INFO
        assert event.timestamp.tzinfo == timezone.utc

    def test_event_to_log_dict(self):
        """Test conversion to log dict."""
        event = LocalizationEvent(
            timestamp=datetime(2024, 12, 1, tzinfo=timezone.utc),
            event_type=LocalizationEventType.STORAGE_ERROR,
            severity=LocalizationSeverity.ERROR,
            description="Storage failed",
            error_message="disk full",
        )
        log_dict = event.to_log_dict()
        assert log_dict["event_type"] == "storage_error"
        assert log_dict["severity"] == "error"
        assert log_dict["timestamp"] == "2024-12-01T00:00:00+00:00"
        assert log_dict["error_message"] == "disk full"

    def test_builder_rate_fallback_used(self):
        """Test the fallback rate event."""
        event = LocalizationEventBuilder.rate_fallback_used(24000.0, "no exchange rate loaded")
        assert event.event_type == LocalizationEventType.RATE_FALLBACK_USED
        assert event.severity == LocalizationSeverity.WARNING
        assert event.details["fallback_usd_to_vnd"] == 24000.0

    def test_builder_translation_failed_truncates_message(self):
        """Test long messages are truncated in event details."""
        event = LocalizationEventBuilder.translation_failed("x" * 500, "timeout")
        assert len(event.details["message"]) == 200
        assert event.error_message == "timeout"

    def test_builder_placeholder_missing(self):
        """Test the lost placeholder event."""
        event = LocalizationEventBuilder.placeholder_missing(["USDCURRENCY"], "Đã chi 5")
        assert event.event_type == LocalizationEventType.PLACEHOLDER_MISSING
        assert event.details["placeholders"] == ["USDCURRENCY"]


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
