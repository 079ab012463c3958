"""
Amount Token Patterns

The literal shapes a monetary amount takes inside backend messages.
Shared by the currency rewriter and the budget notification rules so
both agree on what counts as an amount.

Token passes, in the order they are applied:
    $1,234.56        USD symbol    (source: USD)
    1,234₫ / 1234đ   VND symbol    (source: VND)
    1,234 VND        VND word      (source: VND)
    1234567          bare integer  (source: VND, 4+ digits)

The numeric part of a token is read with parse_amount(), so
"1.500.000₫" is 1500000 dong and "$1,234.50" is 1234.5 dollars.

The bare-integer pass assumes anything with four or more digits is a
VND amount. It can misfire on a USD figure that lost its "$" upstream
or on a year; backend message formats are not specified tightly
enough to do better, so the heuristic is kept as is.
"""

import re
from typing import NamedTuple, Optional, Pattern

from money_l10n.models.currency import AmountToken
from money_l10n.services.currency.amounts import parse_amount


class TokenPattern(NamedTuple):
    """One amount shape. Group 1 is always the numeric part."""
    name: str
    regex: Pattern[str]
    source_is_vnd: bool


# Digits with comma groups and any number of dot groups, so that
# "2.500.000₫" is one amount and "$5." stops before the full stop
_NUMBER = r"([0-9][0-9,]*(?:\.[0-9]+)*)"

USD_SYMBOL = TokenPattern("usd_symbol", re.compile(r"\$" + _NUMBER), False)
VND_SYMBOL = TokenPattern("vnd_symbol", re.compile(_NUMBER + r"[₫đ]"), True)
VND_WORD = TokenPattern("vnd_word", re.compile(_NUMBER + r"\s*VND\b"), True)
BARE_INTEGER = TokenPattern("bare_integer", re.compile(r"\b([0-9]{4,}(?:,[0-9]{3})*)\b"), True)

TOKEN_PATTERNS: tuple[TokenPattern, ...] = (
    USD_SYMBOL,
    VND_SYMBOL,
    VND_WORD,
    BARE_INTEGER,
)

# Raw backend decimals such as "425000.00" (canonical VND).
# Percentages ("87.50%") and numbers already tagged with a glyph,
# a currency word or a grouping separator are not amounts here.
CANONICAL_DECIMAL = TokenPattern(
    "canonical_decimal",
    re.compile(r"(?<![0-9.,$])\b([0-9]+\.[0-9]{2})\b(?!\s*%)(?!\s*(?:[₫đ]|VND))"),
    True,
)

# Any glyph- or word-tagged amount, in one pass
TAGGED_AMOUNT = re.compile(
    "|".join(pattern.regex.pattern for pattern in (USD_SYMBOL, VND_SYMBOL, VND_WORD))
)


def split_trailing_separators(number: str) -> tuple[str, str]:
    """
    Split sentence punctuation off a captured number.

    "5," in "$5, then" is the amount 5 followed by a comma, not a
    grouping separator.
    """
    stripped = number.rstrip(".,")
    return stripped, number[len(stripped):]


def _token_from_match(
    match: "re.Match[str]",
    group: int,
    source_is_vnd: bool,
) -> Optional[AmountToken]:
    number, trailing = split_trailing_separators(match.group(group))
    value = parse_amount(number)
    if value is None:
        return None
    start, end = match.span()
    if trailing and match.end(group) == end:
        end -= len(trailing)
    return AmountToken(
        raw_text=match.string[start:end],
        value=value,
        source_is_vnd=source_is_vnd,
        span=(start, end),
    )


def _overlaps(span: tuple[int, int], taken: list[tuple[int, int]]) -> bool:
    return any(span[0] < end and start < span[1] for start, end in taken)


def scan_tokens(
    message: str,
    patterns: tuple[TokenPattern, ...] = TOKEN_PATTERNS,
) -> list[AmountToken]:
    """
    Find every amount token in a message.

    When two patterns claim overlapping text, the earlier pattern wins.
    Tokens whose number does not parse are skipped.
    Results are ordered by position.
    """
    tokens: list[AmountToken] = []
    taken: list[tuple[int, int]] = []
    for pattern in patterns:
        for match in pattern.regex.finditer(message):
            token = _token_from_match(match, 1, pattern.source_is_vnd)
            if token is None or _overlaps(token.span, taken):
                continue
            tokens.append(token)
            taken.append(token.span)
    return sorted(tokens, key=lambda token: token.span[0])


def extract_amount_tokens(message: str) -> list[AmountToken]:
    """
    Amounts for notification templates, in reading order.

    Glyph- or word-tagged amounts first; raw canonical decimals fill in
    where the message carries untagged backend values.
    """
    tokens: list[AmountToken] = []
    for match in TAGGED_AMOUNT.finditer(message):
        group = next(i for i in (1, 2, 3) if match.group(i) is not None)
        token = _token_from_match(match, group, source_is_vnd=group != 1)
        if token is not None:
            tokens.append(token)

    taken = [token.span for token in tokens]
    for token in scan_tokens(message, (CANONICAL_DECIMAL,)):
        if not _overlaps(token.span, taken):
            tokens.append(token)

    return sorted(tokens, key=lambda token: token.span[0])
