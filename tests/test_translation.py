"""
Tests for glyph protection, the translation cache and the message localizer.

The translator is always a fake: no real API calls in tests.
"""

import asyncio
import hashlib

import pytest

from money_l10n.models.currency import ExchangeRate
from money_l10n.models.events import LocalizationEventType
from money_l10n.services.storage import InMemoryKeyValueStore, KeyValueStore, StorageError
from money_l10n.services.translation import (
    IdentityTranslator,
    MessageLocalizer,
    SymbolGuard,
    TranslationCache,
    TranslationError,
    Translator,
    contains_vietnamese,
    is_vietnamese_language,
)


RATE = ExchangeRate(usd_to_vnd=25000)
BUDGET_MESSAGE = "You have spent 425000.00 of your budget 500000.00 (85%)"


class RecordingAuditLogger:
    """Collects events instead of logging them."""

    def __init__(self):
        self.events = []

    def log(self, event):
        self.events.append(event)
        return True

    def types(self):
        return [event.event_type for event in self.events]


class PhraseTranslator(Translator):
    """Replaces known English phrases; counts calls."""

    PHRASES = {
        "You have spent": "Bạn đã chi tiêu",
        "of your budget": "trong ngân sách",
        "Paid": "Đã trả",
    }

    def __init__(self):
        self.calls = []

    async def translate(self, text: str) -> str:
        self.calls.append(text)
        for english, vietnamese in self.PHRASES.items():
            text = text.replace(english, vietnamese)
        return text


class FixedTranslator(Translator):
    """Returns a fixed answer or raises a fixed error."""

    def __init__(self, result="", error=None):
        self.result = result
        self.error = error
        self.calls = 0

    async def translate(self, text: str) -> str:
        self.calls += 1
        if self.error is not None:
            raise self.error
        return self.result


class BrokenStore(KeyValueStore):
    """A store whose every operation fails."""

    def get(self, key):
        raise StorageError("disk unavailable")

    def put(self, key, value):
        raise StorageError("disk unavailable")


@pytest.fixture
def audit():
    return RecordingAuditLogger()


def make_localizer(translator, audit, store=None, language="vi"):
    return MessageLocalizer(
        translator=translator,
        cache=TranslationCache(store if store is not None else InMemoryKeyValueStore(), audit_logger=audit),
        language=language,
        audit_logger=audit,
    )


class TestSymbolGuard:
    """Tests for currency glyph protection."""

    def test_protect_both_glyphs(self):
        """Test each glyph is swapped for its placeholder."""
        protected = SymbolGuard().protect("Spent $50 and 100000₫")
        assert protected.text == "Spent USDCURRENCY50 and 100000VNDCURRENCY"
        assert protected.placeholder_map == {"VNDCURRENCY": "₫", "USDCURRENCY": "$"}

    def test_only_present_glyphs_mapped(self):
        """Test glyphs absent from the text are not in the map."""
        protected = SymbolGuard().protect("Spent $50")
        assert protected.placeholder_map == {"USDCURRENCY": "$"}

    def test_no_glyphs(self):
        """Test plain text is returned with an empty map."""
        protected = SymbolGuard().protect("Budget completed")
        assert protected.text == "Budget completed"
        assert not protected.has_placeholders

    @pytest.mark.parametrize("text", [
        "Spent $50 and 100000₫",
        "$1 $2 $3",
        "₫₫ and $",
        "Nothing to protect",
    ])
    def test_round_trip(self, text):
        """Test protect then restore gives the original text back."""
        guard = SymbolGuard()
        protected = guard.protect(text)
        assert guard.restore(protected.text, protected.placeholder_map) == text

    def test_restore_is_case_insensitive(self):
        """Test a translator that lowercases placeholders is tolerated."""
        guard = SymbolGuard()
        assert guard.restore("Đã chi usdcurrency5", {"USDCURRENCY": "$"}) == "Đã chi $5"

    def test_missing_placeholder_logged(self, audit):
        """Test a lost placeholder is logged and the text kept."""
        guard = SymbolGuard(audit_logger=audit)
        assert guard.restore("Đã chi 5", {"USDCURRENCY": "$"}) == "Đã chi 5"
        assert audit.types() == [LocalizationEventType.PLACEHOLDER_MISSING]

    def test_placeholder_collision_leaves_glyph(self):
        """Test a glyph is not protected when its placeholder is already in the text."""
        protected = SymbolGuard().protect("USDCURRENCY costs $5")
        assert protected.text == "USDCURRENCY costs $5"
        assert protected.placeholder_map == {}


class TestTranslationCache:
    """Tests for the content-addressed translation cache."""

    def test_key_is_sha256(self):
        """Test keys are the prefix plus the SHA-256 of the source."""
        cache = TranslationCache(InMemoryKeyValueStore())
        expected = "trans_" + hashlib.sha256("Hello".encode("utf-8")).hexdigest()
        assert cache.key_for("Hello") == expected

    def test_key_is_stable(self):
        """Test the same source maps to the same key in any cache."""
        first = TranslationCache(InMemoryKeyValueStore())
        second = TranslationCache(InMemoryKeyValueStore())
        assert first.key_for("Budget completed") == second.key_for("Budget completed")

    def test_miss_then_hit(self):
        """Test a stored translation is returned."""
        cache = TranslationCache(InMemoryKeyValueStore())
        assert cache.get("Hello") is None
        cache.put("Hello", "Xin chào")
        assert cache.get("Hello") == "Xin chào"

    def test_get_entry(self):
        """Test entries carry their key."""
        cache = TranslationCache(InMemoryKeyValueStore())
        cache.put("Hello", "Xin chào")
        entry = cache.get_entry("Hello")
        assert entry.key == cache.key_for("Hello")
        assert entry.value == "Xin chào"

    def test_custom_prefix(self):
        """Test the key prefix is configurable."""
        cache = TranslationCache(InMemoryKeyValueStore(), key_prefix="t_")
        assert cache.key_for("Hello").startswith("t_")

    def test_storage_errors_degrade(self, audit):
        """Test a broken store reads as a miss and drops writes."""
        cache = TranslationCache(BrokenStore(), audit_logger=audit)
        cache.put("Hello", "Xin chào")
        assert cache.get("Hello") is None
        assert audit.types() == [
            LocalizationEventType.STORAGE_ERROR,
            LocalizationEventType.STORAGE_ERROR,
        ]


class TestLanguageDetection:
    """Tests for Vietnamese detection."""

    def test_vietnamese_text(self):
        """Test Vietnamese letters are detected."""
        assert contains_vietnamese("Bạn đã chi tiêu")
        assert contains_vietnamese("đồng")

    def test_english_text(self):
        """Test plain English is not Vietnamese."""
        assert not contains_vietnamese("You have spent $5")

    def test_dong_suffix_is_not_vietnamese(self):
        """Test an amount ending in đ doesn't count as Vietnamese."""
        assert not contains_vietnamese("Paid 50000đ")

    def test_language_codes(self):
        """Test language code matching ignores region and case."""
        assert is_vietnamese_language("vi")
        assert is_vietnamese_language("vi-VN")
        assert is_vietnamese_language("VI_vn")
        assert not is_vietnamese_language("en")


class TestMessageLocalizer:
    """Tests for the full localization pipeline."""

    @pytest.mark.asyncio
    async def test_end_to_end(self, audit):
        """Test currency is rewritten, translated and glyphs restored."""
        translator = PhraseTranslator()
        localizer = make_localizer(translator, audit)

        result = await localizer.localize_message(BUDGET_MESSAGE, is_vnd=False, rate=RATE)

        assert result == "Bạn đã chi tiêu $17.00 trong ngân sách $20.00 (85%)"
        assert translator.calls == [
            "You have spent USDCURRENCY17.00 of your budget USDCURRENCY20.00 (85%)"
        ]

    @pytest.mark.asyncio
    async def test_end_to_end_vnd(self, audit):
        """Test the dong glyph survives translation."""
        localizer = make_localizer(PhraseTranslator(), audit)
        result = await localizer.localize_message(BUDGET_MESSAGE, is_vnd=True, rate=RATE)
        assert result == "Bạn đã chi tiêu 425.000₫ trong ngân sách 500.000₫ (85%)"

    @pytest.mark.asyncio
    async def test_cache_hit_skips_translator(self, audit):
        """Test the second identical message is served from cache."""
        translator = PhraseTranslator()
        localizer = make_localizer(translator, audit)

        first = await localizer.localize_message(BUDGET_MESSAGE, False, RATE)
        second = await localizer.localize_message(BUDGET_MESSAGE, False, RATE)

        assert first == second
        assert len(translator.calls) == 1
        assert LocalizationEventType.TRANSLATION_CACHE_HIT in audit.types()

    @pytest.mark.asyncio
    async def test_cache_shared_across_localizers(self, audit):
        """Test a persisted translation is reused by a new localizer."""
        store = InMemoryKeyValueStore()
        await make_localizer(PhraseTranslator(), audit, store).localize_message(BUDGET_MESSAGE, False, RATE)

        translator = PhraseTranslator()
        await make_localizer(translator, audit, store).localize_message(BUDGET_MESSAGE, False, RATE)
        assert translator.calls == []

    @pytest.mark.asyncio
    async def test_translator_failure_returns_formatted_message(self, audit):
        """Test a failing translator leaves currency-correct English."""
        store = InMemoryKeyValueStore()
        translator = FixedTranslator(error=TranslationError("quota exceeded"))
        localizer = make_localizer(translator, audit, store)

        result = await localizer.localize_message(BUDGET_MESSAGE, False, RATE)

        assert result == "You have spent $17.00 of your budget $20.00 (85%)"
        assert LocalizationEventType.TRANSLATION_FAILED in audit.types()
        assert len(store) == 0

    @pytest.mark.asyncio
    async def test_unexpected_error_returns_formatted_message(self, audit):
        """Test any translator exception is recovered."""
        localizer = make_localizer(FixedTranslator(error=RuntimeError("boom")), audit)
        result = await localizer.localize_message("Saved 50000.00", False, RATE)
        assert result == "Saved $2.00"

    @pytest.mark.asyncio
    async def test_empty_translation_is_failure(self, audit):
        """Test a blank answer is not cached or returned."""
        store = InMemoryKeyValueStore()
        localizer = make_localizer(FixedTranslator(result="   "), audit, store)

        result = await localizer.localize_message("Saved 50000.00", False, RATE)

        assert result == "Saved $2.00"
        assert len(store) == 0

    @pytest.mark.asyncio
    async def test_cancellation_propagates(self, audit):
        """Test a cancelled call raises and leaves no cache entry."""
        store = InMemoryKeyValueStore()
        localizer = make_localizer(FixedTranslator(error=asyncio.CancelledError()), audit, store)

        with pytest.raises(asyncio.CancelledError):
            await localizer.localize_message("Saved 50000.00", False, RATE)
        assert len(store) == 0

    @pytest.mark.asyncio
    async def test_vietnamese_message_not_translated(self, audit):
        """Test text that is already Vietnamese skips the translator."""
        translator = PhraseTranslator()
        localizer = make_localizer(translator, audit)

        result = await localizer.localize_translation_only("Bạn đã chi 50.000₫")

        assert result == "Bạn đã chi 50.000₫"
        assert translator.calls == []

    @pytest.mark.asyncio
    async def test_dong_suffix_still_translated(self, audit):
        """Test an English message with a đ amount is translated."""
        translator = PhraseTranslator()
        localizer = make_localizer(translator, audit)
        assert await localizer.localize_translation_only("Paid 50000đ") == "Đã trả 50000đ"

    @pytest.mark.asyncio
    async def test_same_language_not_translated(self, audit):
        """Test an English UI only gets currency formatting."""
        translator = PhraseTranslator()
        localizer = make_localizer(translator, audit, language="en")

        result = await localizer.localize_message(BUDGET_MESSAGE, False, RATE)

        assert result == "You have spent $17.00 of your budget $20.00 (85%)"
        assert translator.calls == []
        assert not localizer.translation_enabled

    @pytest.mark.asyncio
    async def test_lost_placeholder_logged(self, audit):
        """Test a translator that drops a placeholder doesn't break the call."""
        localizer = make_localizer(FixedTranslator(result="Đã chi 2.00"), audit)

        result = await localizer.localize_message("Saved 50000.00", False, RATE)

        assert result == "Đã chi 2.00"
        assert LocalizationEventType.PLACEHOLDER_MISSING in audit.types()

    @pytest.mark.asyncio
    async def test_cache_failure_still_translates(self, audit):
        """Test a broken cache store doesn't stop translation."""
        localizer = make_localizer(PhraseTranslator(), audit, store=BrokenStore())
        result = await localizer.localize_translation_only("Paid $5.00")
        assert result == "Đã trả $5.00"

    def test_currency_only(self, audit):
        """Test the synchronous currency step alone."""
        localizer = make_localizer(PhraseTranslator(), audit)
        assert localizer.localize_currency_only(BUDGET_MESSAGE, False, RATE) == (
            "You have spent $17.00 of your budget $20.00 (85%)"
        )

    @pytest.mark.asyncio
    async def test_identity_translator(self):
        """Test the identity translator returns its input."""
        assert await IdentityTranslator().translate("Hello") == "Hello"


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
