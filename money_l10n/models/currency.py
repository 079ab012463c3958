"""
Currency Data Models for Money L10n

These models define the schemas for amounts and rates flowing through
the localization pipeline.

DESIGN DECISION: VND is the canonical currency. The backend stores and
sends every amount in VND; USD only ever exists at display time.
Nothing in these models converts stored values in place.
"""

from datetime import datetime, timezone
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, model_validator

from money_l10n.config.settings import DEFAULT_USD_TO_VND


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


# =============================================================================
# ENUMS - Finite set of valid values
# =============================================================================

class Currency(str, Enum):
    """
    Supported display currencies.

    DESIGN DECISION: Only two currencies exist in this client.
    The rest of the code passes an ``is_vnd`` flag around; this enum
    is the place that flag is turned into codes and glyphs.
    """
    VND = "VND"
    USD = "USD"

    @property
    def symbol(self) -> str:
        return "₫" if self is Currency.VND else "$"

    @property
    def is_vnd(self) -> bool:
        return self is Currency.VND

    @classmethod
    def from_flag(cls, is_vnd: bool) -> "Currency":
        return cls.VND if is_vnd else cls.USD


# =============================================================================
# RATES AND PREFERENCES
# =============================================================================

class ExchangeRate(BaseModel):
    """
    How many VND one USD buys.

    Supplied by an external provider and immutable once built.
    A missing rate is never an error: callers fall back to
    DEFAULT_USD_TO_VND (see services.currency.conversion.resolve_rate).
    """
    model_config = ConfigDict(frozen=True)

    usd_to_vnd: float = Field(
        ...,
        gt=0,
        allow_inf_nan=False,
        description="VND per 1 USD"
    )
    fetched_at: datetime = Field(
        default_factory=_utcnow,
        description="When the rate was obtained (UTC)"
    )

    @property
    def vnd_to_usd(self) -> float:
        """USD per 1 VND."""
        return 1.0 / self.usd_to_vnd

    @classmethod
    def default(cls) -> "ExchangeRate":
        """The documented fallback rate."""
        return cls(usd_to_vnd=DEFAULT_USD_TO_VND)


class CurrencyPreference(BaseModel):
    """User's display currency choice. VND unless the user picked USD."""
    model_config = ConfigDict(frozen=True)

    is_vnd: bool = True

    @property
    def currency(self) -> Currency:
        return Currency.from_flag(self.is_vnd)


# =============================================================================
# MESSAGE SCANNING
# =============================================================================

class AmountToken(BaseModel):
    """
    One monetary amount found inside a message.

    Ephemeral: produced by a scan and consumed by the same rewrite pass.
    ``span`` uses Python slice semantics over the scanned string.
    """
    model_config = ConfigDict(frozen=True)

    raw_text: str = Field(
        ...,
        min_length=1,
        description="Matched substring, including any currency glyph or word"
    )
    value: float = Field(
        ...,
        allow_inf_nan=False,
        description="Parsed amount in the source currency"
    )
    source_is_vnd: bool = Field(
        ...,
        description="Whether the token was written in VND"
    )
    span: tuple[int, int] = Field(
        ...,
        description="(start, end) offsets of raw_text in the message"
    )

    @model_validator(mode='after')
    def validate_span(self) -> 'AmountToken':
        start, end = self.span
        if start < 0 or end < start:
            raise ValueError("Token span must be a non-negative, ordered range")
        if end - start != len(self.raw_text):
            raise ValueError("Token span length must match raw_text")
        return self

    @property
    def source_currency(self) -> Currency:
        return Currency.from_flag(self.source_is_vnd)


class CurrencyDisplay(BaseModel):
    """An amount together with everything a screen needs to show it."""

    amount: float
    formatted_amount: str
    currency_code: str
    symbol: str
