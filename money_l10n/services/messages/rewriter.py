"""
Message Currency Rewriter

Finds amounts embedded in natural-language messages and rewrites each
one in the user's display currency.

    rewrite("You have spent 425000.00 of your budget 500000.00 (85%)",
            is_vnd=False, rate=ExchangeRate(usd_to_vnd=25000))
    -> "You have spent $17.00 of your budget $20.00 (85%)"

Passes run one after another, each over the output of the previous one:
1. Canonical decimals ("425000.00"), which the backend always sends in VND
2. The token passes from tokens.TOKEN_PATTERNS ($, ₫/đ, VND, bare integers)

The passes target different literal shapes, and every pass emits amounts
in a shape the later passes read back to the same value, so a rewritten
amount is never converted twice.

A token whose number doesn't parse, or whose converted value can't be
formatted, is left exactly as it was.
The rewriter is a pure string transform.
"""

import re
from typing import Callable, Optional

from money_l10n.audit import AuditLogger, get_audit_logger, get_logger
from money_l10n.config.settings import DEFAULT_USD_TO_VND
from money_l10n.models.currency import AmountToken
from money_l10n.models.events import LocalizationEventBuilder
from money_l10n.services.currency import (
    convert,
    format_amount,
    lazy_rate,
    parse_amount,
)
from money_l10n.services.currency.conversion import RateLike
from money_l10n.services.messages.tokens import (
    CANONICAL_DECIMAL,
    TOKEN_PATTERNS,
    TokenPattern,
    scan_tokens,
    split_trailing_separators,
)


logger = get_logger(__name__)


class MessageCurrencyRewriter:
    """
    Rewrites amount tokens inside messages.

    Stateless apart from its configuration; safe to share between
    threads and coroutines.
    """

    def __init__(
        self,
        fallback_rate: float = DEFAULT_USD_TO_VND,
        audit_logger: Optional[AuditLogger] = None,
    ):
        """
        Args:
            fallback_rate: VND per USD used when no rate is supplied
            audit_logger: Where unparseable tokens and fallbacks are reported
        """
        self._fallback_rate = fallback_rate
        self._audit_logger = audit_logger or get_audit_logger()

    def _rate(self, rate: RateLike) -> Callable[[], float]:
        return lazy_rate(rate, self._fallback_rate, self._audit_logger)

    def _replace(
        self,
        message: str,
        pattern: TokenPattern,
        is_vnd: bool,
        rate: Callable[[], float],
    ) -> str:
        def _substitute(match: "re.Match[str]") -> str:
            number, trailing = split_trailing_separators(match.group(1))
            if match.end(1) != match.end():
                trailing = ""
            amount = parse_amount(number)
            if amount is None:
                self._audit_logger.log(
                    LocalizationEventBuilder.amount_parse_failed(match.group(0))
                )
                return match.group(0)

            if pattern.source_is_vnd == is_vnd:
                converted = amount
            else:
                converted = convert(amount, pattern.source_is_vnd, is_vnd, rate())
            try:
                formatted = format_amount(converted, is_vnd)
            except (ValueError, ArithmeticError) as e:
                self._audit_logger.log(
                    LocalizationEventBuilder.amount_parse_failed(match.group(0), reason=str(e))
                )
                return match.group(0)
            return formatted + trailing

        return pattern.regex.sub(_substitute, message)

    def format_currency_in_message(
        self,
        message: str,
        is_vnd: bool,
        rate: RateLike = None,
    ) -> str:
        """
        Rewrite only raw canonical decimals ("50000.00").

        Percentages are never touched: "87.50%" stays "87.50%".
        Returns the message unchanged if it has no such amounts.
        """
        if not CANONICAL_DECIMAL.regex.search(message):
            logger.debug("no_canonical_amounts", message=message)
            return message
        return self._replace(message, CANONICAL_DECIMAL, is_vnd, self._rate(rate))

    def rewrite(
        self,
        message: str,
        is_vnd: bool,
        rate: RateLike = None,
    ) -> str:
        """
        Rewrite every amount in the message in the display currency.

        Args:
            message: Message text, usually from the backend
            is_vnd: True to display VND, False to display USD
            rate: ExchangeRate, VND-per-USD float, or None for the fallback

        Returns:
            The message with each amount converted and reformatted
        """
        resolve = self._rate(rate)
        result = message
        if CANONICAL_DECIMAL.regex.search(result):
            result = self._replace(result, CANONICAL_DECIMAL, is_vnd, resolve)
        for pattern in TOKEN_PATTERNS:
            result = self._replace(result, pattern, is_vnd, resolve)

        if result != message:
            logger.debug("message_rewritten", original=message, rewritten=result)
        return result

    def scan(self, message: str) -> list[AmountToken]:
        """Amount tokens the token passes would rewrite, in reading order."""
        return scan_tokens(message, TOKEN_PATTERNS)
