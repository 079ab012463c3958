"""
Budget Notification Translator

Rule-based English -> Vietnamese translation for the fixed set of budget
status sentences the backend emits ("You have spent X of your budget Y
(Z%)", "Budget limit exceeded", "3 days left", ...).

DESIGN DECISION: Generic machine translation of terse status strings
("Warning: 87% of budget") reads badly. A small rule table trades
generality for precise, natural Vietnamese on sentences we know.

RULES:
- Rules are tried in table order and the FIRST match wins; a later rule
  is never consulted once an earlier one matches. Put specific shapes
  before general ones ("Warning ... % of budget" before "...% ... used").
- A message that already contains Vietnamese is returned unchanged.
- A message no rule recognizes is returned unchanged. We never guess.

Amounts used in templates are converted to the display currency and
formatted before substitution, so the output needs no further rewriting.
"""

import re
from typing import Callable, NamedTuple, Optional

from money_l10n.audit import AuditLogger, get_audit_logger, get_logger
from money_l10n.config.settings import DEFAULT_USD_TO_VND
from money_l10n.models.currency import AmountToken
from money_l10n.models.events import LocalizationEventBuilder
from money_l10n.services.currency import convert, format_amount, lazy_rate
from money_l10n.services.currency.conversion import RateLike
from money_l10n.services.messages import MessageCurrencyRewriter
from money_l10n.services.messages.tokens import extract_amount_tokens
from money_l10n.services.translation.language import (
    contains_vietnamese,
    is_vietnamese_language,
)


logger = get_logger(__name__)

_PERCENTAGE = re.compile(r"(?<![0-9.])([0-9]+(?:\.[0-9]+)?)%")
_DAYS_LEFT = re.compile(r"(\d+)\s*days?\s*left")
_PERCENT_USED = re.compile(r"\d+%.*used")
_BARE_DOLLAR_AMOUNT = re.compile(r"\$[0-9,]+\.?[0-9]*")


class NotificationContext:
    """
    Values pulled out of one message, extracted on first use.

    ``amounts`` are already in the display currency and formatted. An
    amount that can't be formatted keeps its original text.
    """

    def __init__(
        self,
        message: str,
        is_vnd: bool,
        rate: Callable[[], float],
        audit_logger: Optional[AuditLogger] = None,
    ):
        self.message = message
        self._is_vnd = is_vnd
        self._rate = rate
        self._audit_logger = audit_logger or get_audit_logger()
        self._amounts: Optional[list[str]] = None

    @property
    def amounts(self) -> list[str]:
        if self._amounts is None:
            self._amounts = [self._format(token) for token in extract_amount_tokens(self.message)]
        return self._amounts

    def _display_value(self, value: float, source_is_vnd: bool) -> float:
        if source_is_vnd == self._is_vnd:
            return value
        return convert(value, source_is_vnd, self._is_vnd, self._rate())

    def _format(self, token: AmountToken) -> str:
        try:
            return format_amount(self._display_value(token.value, token.source_is_vnd), self._is_vnd)
        except (ValueError, ArithmeticError) as e:
            self._audit_logger.log(
                LocalizationEventBuilder.amount_parse_failed(token.raw_text, reason=str(e))
            )
            return token.raw_text

    @property
    def percentage(self) -> Optional[str]:
        """Percentage as written, e.g. "85" or "87.50"."""
        match = _PERCENTAGE.search(self.message)
        return match.group(1) if match else None

    @property
    def percentage_value(self) -> Optional[float]:
        percentage = self.percentage
        return float(percentage) if percentage is not None else None

    @property
    def days(self) -> Optional[int]:
        match = _DAYS_LEFT.search(self.message)
        return int(match.group(1)) if match else None


class NotificationRule(NamedTuple):
    """A message shape and how to say it in Vietnamese."""
    name: str
    matches: Callable[[str], bool]
    render: Callable[[NotificationContext], str]


# =============================================================================
# RENDERERS
# =============================================================================

def _render_spent_of_budget(ctx: NotificationContext) -> str:
    amounts, percentage = ctx.amounts, ctx.percentage
    if len(amounts) >= 2 and percentage is not None:
        return f"💰 Bạn đã chi tiêu {amounts[0]} trong tổng ngân sách {amounts[1]} ({percentage}%)"
    if len(amounts) >= 2:
        return f"💰 Bạn đã chi tiêu {amounts[0]} trong tổng ngân sách {amounts[1]}"
    if percentage is not None:
        return f"📊 Bạn đã sử dụng {percentage}% ngân sách"
    return "💰 Bạn đã chi tiêu một phần ngân sách"


def _render_limit_exceeded(ctx: NotificationContext) -> str:
    amounts = ctx.amounts
    if len(amounts) >= 2:
        return f"🚨 Vượt giới hạn! Chi tiêu: {amounts[0]}, Hạn mức: {amounts[1]}"
    if len(amounts) == 1:
        return f"🚨 Vượt giới hạn ngân sách: {amounts[0]}"
    return "🚨 Đã vượt quá giới hạn ngân sách"


def _render_warning(ctx: NotificationContext) -> str:
    if ctx.percentage is not None:
        return f"⚠️ Cảnh báo: Đã dùng {ctx.percentage}% ngân sách"
    return "⚠️ Cảnh báo: Chi tiêu cao"


def _render_critical(ctx: NotificationContext) -> str:
    if ctx.percentage is not None:
        return f"🚨 Nguy hiểm: Đã dùng {ctx.percentage}% ngân sách"
    return "🚨 Mức chi tiêu nguy hiểm"


def _render_nearly_maxed(ctx: NotificationContext) -> str:
    amounts = ctx.amounts
    if len(amounts) >= 2:
        return f"⚡ Gần hết hạn mức: {amounts[0]} / {amounts[1]}"
    return "⚡ Gần đạt giới hạn ngân sách"


def _render_days_left(ctx: NotificationContext) -> str:
    days = ctx.days
    if days is None:
        return ctx.message
    if days <= 1:
        return f"⏰ Còn {days} ngày - Sắp hết hạn!"
    if days <= 3:
        return f"⏳ Còn {days} ngày - Gần hết hạn"
    if days <= 7:
        return f"📅 Còn {days} ngày"
    return f"📆 Còn {days} ngày"


# (lowest percentage, icon, note), highest first
_USAGE_LEVELS = (
    (95, "🔥", "Gần cạn kiệt!"),
    (90, "🚨", "Nguy hiểm!"),
    (80, "⚠️", "Cần cẩn trọng"),
    (70, "📊", "Chú ý"),
    (50, "📈", "Tốt"),
)


def _render_percent_used(ctx: NotificationContext) -> str:
    percentage, value = ctx.percentage, ctx.percentage_value
    if percentage is None:
        return ctx.message
    for threshold, icon, note in _USAGE_LEVELS:
        if value >= threshold:
            return f"{icon} Đã dùng {percentage}% - {note}"
    return f"💚 Đã dùng {percentage}% - Còn nhiều"


def _render_bare_amount(ctx: NotificationContext) -> str:
    amounts = ctx.amounts
    return f"💰 Chi tiêu: {amounts[0] if amounts else ctx.message}"


def _fixed(text: str) -> Callable[[NotificationContext], str]:
    return lambda _ctx: text


def _contains(*needles: str) -> Callable[[str], bool]:
    return lambda message: any(needle in message for needle in needles)


def _contains_all(*needles: str) -> Callable[[str], bool]:
    return lambda message: all(needle in message for needle in needles)


# =============================================================================
# RULE TABLE - first match wins
# =============================================================================

BUDGET_NOTIFICATION_RULES: tuple[NotificationRule, ...] = (
    NotificationRule("spent_of_budget", _contains_all("You have spent", "of your budget"), _render_spent_of_budget),
    NotificationRule("limit_exceeded", _contains("Budget limit exceeded", "over budget"), _render_limit_exceeded),
    NotificationRule("on_track", _contains("on track"), _fixed("✅ Đúng kế hoạch - Chi tiêu hợp lý")),
    NotificationRule("under_budget", _contains("Under budget"), _fixed("💚 Dưới ngân sách - Tiết kiệm tốt!")),
    NotificationRule("minimal_spending", _contains("Minimal spending"), _fixed("💎 Chi tiêu tối thiểu")),
    NotificationRule("not_started", _contains("not started"), _fixed("🕐 Ngân sách chưa bắt đầu")),
    NotificationRule("budget_completed", _contains("Budget completed"), _fixed("✅ Ngân sách đã hoàn thành")),
    NotificationRule("warning", _contains_all("Warning", "% of budget"), _render_warning),
    NotificationRule("critical", _contains_all("Critical", "% of budget"), _render_critical),
    NotificationRule("nearly_maxed", _contains("Nearly maxed", "nearly exceeded"), _render_nearly_maxed),
    NotificationRule("days_left", _contains("days left", "day left"), _render_days_left),
    NotificationRule("percent_used", lambda message: bool(_PERCENT_USED.search(message)), _render_percent_used),
    NotificationRule("bare_amount", lambda message: bool(_BARE_DOLLAR_AMOUNT.fullmatch(message)), _render_bare_amount),
)


class BudgetNotificationTranslator:
    """Translates budget notifications with BUDGET_NOTIFICATION_RULES."""

    def __init__(
        self,
        rules: tuple[NotificationRule, ...] = BUDGET_NOTIFICATION_RULES,
        rewriter: Optional[MessageCurrencyRewriter] = None,
        fallback_rate: float = DEFAULT_USD_TO_VND,
        language: str = "vi",
        audit_logger: Optional[AuditLogger] = None,
    ):
        self._rules = rules
        self._language = language
        self._fallback_rate = fallback_rate
        self._audit_logger = audit_logger or get_audit_logger()
        self._rewriter = rewriter or MessageCurrencyRewriter(
            fallback_rate=fallback_rate,
            audit_logger=self._audit_logger,
        )

    def match_rule(self, message: str) -> Optional[NotificationRule]:
        """The first rule recognizing the message, if any."""
        for rule in self._rules:
            if rule.matches(message):
                return rule
        return None

    def translate(
        self,
        message: str,
        is_vnd: bool,
        rate: RateLike = None,
    ) -> str:
        """
        Translate an English budget notification into Vietnamese.

        Returns the message unchanged if it is already Vietnamese or no
        rule recognizes it.
        """
        if contains_vietnamese(message):
            return message

        rule = self.match_rule(message)
        if rule is None:
            logger.debug("notification_unrecognized", message=message)
            return message

        ctx = NotificationContext(
            message,
            is_vnd,
            lazy_rate(rate, self._fallback_rate, self._audit_logger),
            audit_logger=self._audit_logger,
        )
        translated = rule.render(ctx)
        logger.debug("notification_translated", rule=rule.name, translated=translated)
        return translated

    def localize(
        self,
        message: str,
        is_vnd: bool,
        rate: RateLike = None,
        language: Optional[str] = None,
    ) -> str:
        """
        Notification text for the user's language and currency.

        Vietnamese UI: rule-based translation. Any other language keeps
        the English text. ``language`` defaults to the one this translator
        was built for. Amounts left in the result are then converted to
        the display currency.
        """
        text = message
        if is_vietnamese_language(language or self._language):
            text = self.translate(message, is_vnd, rate)
        return self._rewriter.rewrite(text, is_vnd, rate)
