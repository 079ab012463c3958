"""
Currency Conversion

Stateless VND <-> USD conversion with a caller-supplied rate
(VND per 1 USD).

DESIGN DECISION: The low-level functions REJECT a non-positive or
non-finite rate with InvalidRateError instead of dividing by zero.
Pipeline code never calls them with a raw rate; it goes through
resolve_rate(), which swaps a missing or invalid rate for the
documented fallback and logs that it did.

Conversion is display-time only. Stored amounts stay in VND.
"""

import math
from functools import lru_cache
from typing import Callable, Optional, Union

from money_l10n.audit import AuditLogger, get_audit_logger
from money_l10n.config.settings import DEFAULT_USD_TO_VND
from money_l10n.models.currency import ExchangeRate
from money_l10n.models.events import LocalizationEventBuilder


RateLike = Union[ExchangeRate, float, int, None]


class ConversionError(Exception):
    """Base exception for conversion errors."""
    pass


class InvalidRateError(ConversionError):
    """Exchange rate is zero, negative or not a finite number."""

    def __init__(self, rate):
        self.rate = rate
        super().__init__(f"Invalid exchange rate: {rate!r} (must be a positive number)")


def _is_valid_rate(rate) -> bool:
    if isinstance(rate, bool) or not isinstance(rate, (int, float)):
        return False
    return math.isfinite(rate) and rate > 0


def _check_rate(rate: float) -> float:
    if not _is_valid_rate(rate):
        raise InvalidRateError(rate)
    return float(rate)


def vnd_to_usd(vnd_amount: float, rate: float) -> float:
    """Convert VND to USD. Raises InvalidRateError for rate <= 0."""
    return vnd_amount / _check_rate(rate)


def usd_to_vnd(usd_amount: float, rate: float) -> float:
    """Convert USD to VND. Raises InvalidRateError for rate <= 0."""
    return usd_amount * _check_rate(rate)


def convert(
    amount: float,
    source_is_vnd: bool,
    target_is_vnd: bool,
    rate: float,
) -> float:
    """Convert between the two currencies; same-currency amounts pass through."""
    if source_is_vnd and not target_is_vnd:
        return vnd_to_usd(amount, rate)
    if not source_is_vnd and target_is_vnd:
        return usd_to_vnd(amount, rate)
    return amount


def resolve_rate(
    rate: RateLike,
    fallback: float = DEFAULT_USD_TO_VND,
    audit_logger: Optional[AuditLogger] = None,
) -> float:
    """
    Turn whatever rate the caller has into a usable VND-per-USD float.

    Absent or invalid rates resolve to ``fallback``. Rates may simply
    not have loaded yet, so this is logged, not raised.
    """
    if isinstance(rate, ExchangeRate):
        return rate.usd_to_vnd

    if _is_valid_rate(rate):
        return float(rate)

    fallback = _check_rate(fallback)
    reason = "no exchange rate loaded" if rate is None else f"invalid rate {rate!r}"
    (audit_logger or get_audit_logger()).log(
        LocalizationEventBuilder.rate_fallback_used(fallback, reason)
    )
    return fallback


def lazy_rate(
    rate: RateLike,
    fallback: float = DEFAULT_USD_TO_VND,
    audit_logger: Optional[AuditLogger] = None,
) -> Callable[[], float]:
    """
    Defer resolve_rate() until a conversion actually needs the rate.

    Messages whose amounts are already in the display currency then
    never log a fallback they didn't use.
    """
    @lru_cache(maxsize=None)
    def _resolve() -> float:
        return resolve_rate(rate, fallback, audit_logger)

    return _resolve
