"""
Amount Parsing

Parses free-form amount strings typed by users or sent by the backend.

The same character is overloaded between the two supported locales:
- USD writes "1,234.56" (comma groups, dot decimal, at most 2 cents digits)
- VND writes "1.234.567" (dot groups, never a fraction)

DESIGN DECISION: A dot followed by exactly one or two trailing digits is
read as a decimal point. Anything else with a dot is VND grouping.
VND amounts are always integral, so this is the only local signal that
tells cents from thousands without a currency hint.

    parse_amount("1.50")   -> 1.5     (USD reading, always)
    parse_amount("1.500")  -> 1500.0  (VND reading)
"""

import math
import re
from typing import Optional

from money_l10n.audit import get_logger


logger = get_logger(__name__)

CURRENCY_GLYPHS = ("₫", "$")

_USD_DECIMAL = re.compile(r".*\.[0-9]{1,2}")
_PLAIN_NUMBER = re.compile(r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)")


class ParseError(ValueError):
    """Input has no recognizable numeric content."""

    def __init__(self, text: Optional[str], message: str = "No parseable amount"):
        self.text = text
        super().__init__(f"{message}: {text!r}")


def _strip_glyphs(text: str) -> str:
    for glyph in CURRENCY_GLYPHS:
        text = text.replace(glyph, "")
    return text.strip()


def parse_amount_strict(text: str) -> float:
    """
    Parse an amount string into a float.

    Raises:
        ParseError: If the cleaned string holds no parseable number
    """
    if text is None:
        raise ParseError(text)

    cleaned = _strip_glyphs(text)

    if _USD_DECIMAL.fullmatch(cleaned):
        grammar = "usd"
        candidate = cleaned.replace(",", "")
    elif "." in cleaned:
        grammar = "vnd"
        candidate = cleaned.replace(".", "")
    else:
        grammar = "plain"
        candidate = cleaned.replace(",", "")

    if not _PLAIN_NUMBER.fullmatch(candidate):
        raise ParseError(text)

    value = float(candidate)
    if not math.isfinite(value):
        raise ParseError(text, "Amount out of range")

    logger.debug("amount_parsed", text=text, grammar=grammar, value=value)
    return value


def parse_amount(text: str) -> Optional[float]:
    """
    Parse an amount string, returning None when nothing parseable is found.

    Callers use None to fall back to showing the raw text.
    """
    try:
        return parse_amount_strict(text)
    except ParseError:
        logger.debug("amount_parse_failed", text=text)
        return None


def is_valid_amount(text: str) -> bool:
    """True if the text parses to a strictly positive amount."""
    value = parse_amount(text)
    return value is not None and value > 0
