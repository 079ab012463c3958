"""
Localization Event Models

Every recovered failure in the pipeline is recorded as an event.
Nothing in this package raises to the UI layer, so these events are the
only place a fallback (default rate, untranslated text, visible
placeholder) shows up.

DESIGN DECISION: Events are write-only. They go to the structured log
and are never read back by the pipeline.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, Field


class LocalizationEventType(str, Enum):
    """Types of events we record."""
    # Exchange rates
    RATE_FETCHED = "rate_fetched"
    RATE_FETCH_FAILED = "rate_fetch_failed"
    RATE_FALLBACK_USED = "rate_fallback_used"

    # Currency rewriting
    AMOUNT_PARSE_FAILED = "amount_parse_failed"

    # Translation
    TRANSLATION_CACHE_HIT = "translation_cache_hit"
    TRANSLATION_COMPLETED = "translation_completed"
    TRANSLATION_FAILED = "translation_failed"
    PLACEHOLDER_MISSING = "placeholder_missing"

    # Storage
    STORAGE_ERROR = "storage_error"


class LocalizationSeverity(str, Enum):
    """Severity level for events."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class LocalizationEvent(BaseModel):
    """A single pipeline event."""

    timestamp: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="When the event occurred (UTC)"
    )
    event_type: LocalizationEventType = Field(
        ...,
        description="Type of event"
    )
    severity: LocalizationSeverity = Field(
        default=LocalizationSeverity.INFO,
        description="Event severity"
    )
    description: str = Field(
        ...,
        max_length=500,
        description="Human-readable description of what happened"
    )
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional event-specific data"
    )
    error_message: Optional[str] = None

    def to_log_dict(self) -> dict:
        """
        Convert to a dictionary suitable for structured logging.
        """
        return {
            "timestamp": self.timestamp.isoformat(),
            "event_type": self.event_type.value,
            "severity": self.severity.value,
            "description": self.description,
            "details": self.details,
            "error_message": self.error_message,
        }


class LocalizationEventBuilder:
    """
    Helper class to build events with common patterns.

    Usage:
        event = LocalizationEventBuilder.rate_fallback_used(24000.0, "no rate loaded")
        event = LocalizationEventBuilder.translation_failed("Spent $5", error)
    """

    @staticmethod
    def rate_fetched(usd_to_vnd: float, source: str) -> LocalizationEvent:
        return LocalizationEvent(
            event_type=LocalizationEventType.RATE_FETCHED,
            description=f"Exchange rate updated: 1 USD = {usd_to_vnd} VND",
            details={
                "usd_to_vnd": usd_to_vnd,
                "source": source,
            },
        )

    @staticmethod
    def rate_fetch_failed(error_message: str) -> LocalizationEvent:
        return LocalizationEvent(
            event_type=LocalizationEventType.RATE_FETCH_FAILED,
            severity=LocalizationSeverity.WARNING,
            description="Failed to fetch exchange rates",
            error_message=error_message,
        )

    @staticmethod
    def rate_fallback_used(fallback: float, reason: str) -> LocalizationEvent:
        return LocalizationEvent(
            event_type=LocalizationEventType.RATE_FALLBACK_USED,
            severity=LocalizationSeverity.WARNING,
            description=f"Using fallback exchange rate {fallback}",
            details={
                "fallback_usd_to_vnd": fallback,
                "reason": reason,
            },
        )

    @staticmethod
    def amount_parse_failed(raw_text: str, reason: str = "could not parse") -> LocalizationEvent:
        return LocalizationEvent(
            event_type=LocalizationEventType.AMOUNT_PARSE_FAILED,
            severity=LocalizationSeverity.DEBUG,
            description=f"Amount token left as-is: {reason}",
            details={
                "raw_text": raw_text,
                "reason": reason,
            },
        )

    @staticmethod
    def translation_cache_hit(cache_key: str) -> LocalizationEvent:
        return LocalizationEvent(
            event_type=LocalizationEventType.TRANSLATION_CACHE_HIT,
            severity=LocalizationSeverity.DEBUG,
            description="Translation served from cache",
            details={
                "cache_key": cache_key,
            },
        )

    @staticmethod
    def translation_completed(source_length: int, translated_length: int) -> LocalizationEvent:
        return LocalizationEvent(
            event_type=LocalizationEventType.TRANSLATION_COMPLETED,
            description="Message translated",
            details={
                "source_length": source_length,
                "translated_length": translated_length,
            },
        )

    @staticmethod
    def translation_failed(message: str, error_message: str) -> LocalizationEvent:
        return LocalizationEvent(
            event_type=LocalizationEventType.TRANSLATION_FAILED,
            severity=LocalizationSeverity.WARNING,
            description="Translation failed; returning untranslated message",
            details={
                "message": message[:200],
            },
            error_message=error_message,
        )

    @staticmethod
    def placeholder_missing(placeholders: list[str], text: str) -> LocalizationEvent:
        return LocalizationEvent(
            event_type=LocalizationEventType.PLACEHOLDER_MISSING,
            severity=LocalizationSeverity.WARNING,
            description=f"{len(placeholders)} currency placeholder(s) lost during translation",
            details={
                "placeholders": placeholders,
                "text": text[:200],
            },
        )

    @staticmethod
    def storage_error(operation: str, key: str, error_message: str) -> LocalizationEvent:
        return LocalizationEvent(
            event_type=LocalizationEventType.STORAGE_ERROR,
            severity=LocalizationSeverity.ERROR,
            description=f"Key-value storage {operation} failed",
            details={
                "operation": operation,
                "key": key,
            },
            error_message=error_message,
        )
