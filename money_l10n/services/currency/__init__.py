"""Currency parsing, formatting and conversion."""

from money_l10n.services.currency.amounts import (
    ParseError,
    is_valid_amount,
    parse_amount,
    parse_amount_strict,
)
from money_l10n.services.currency.conversion import (
    ConversionError,
    InvalidRateError,
    convert,
    lazy_rate,
    resolve_rate,
    usd_to_vnd,
    vnd_to_usd,
)
from money_l10n.services.currency.formatting import (
    currency_code,
    currency_symbol,
    format_amount,
    format_for_input,
    format_usd,
    format_vnd,
    to_display,
)

__all__ = [
    # Parsing
    "ParseError",
    "is_valid_amount",
    "parse_amount",
    "parse_amount_strict",
    # Conversion
    "ConversionError",
    "InvalidRateError",
    "convert",
    "lazy_rate",
    "resolve_rate",
    "usd_to_vnd",
    "vnd_to_usd",
    # Formatting
    "currency_code",
    "currency_symbol",
    "format_amount",
    "format_for_input",
    "format_usd",
    "format_vnd",
    "to_display",
]
