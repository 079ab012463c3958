"""
Amount Formatting

Renders canonical amounts for display.

    format_vnd(1234567)    -> "1.234.567₫"
    format_vnd(-5000)      -> "-5.000₫"
    format_usd(1234.5)     -> "$1,234.50"
    format_usd(-3)         -> "-$3.00"

Each format uses the grouping character its parse branch accepts,
so parse_amount(format_amount(x, is_vnd)) gives x back
(to the cent for USD, to the dong for VND).
"""

import math
from decimal import ROUND_HALF_UP, Decimal, localcontext

from money_l10n.models.currency import Currency, CurrencyDisplay


_WHOLE = Decimal("1")
_CENTS = Decimal("0.01")


def _quantize(amount: float, exponent: Decimal) -> Decimal:
    if not math.isfinite(amount):
        raise ValueError(f"Cannot format non-finite amount: {amount!r}")
    value = Decimal(str(amount))
    # Room for every integer digit plus the cents
    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, value.adjusted() + 4)
        return value.quantize(exponent, rounding=ROUND_HALF_UP)


def _vnd_digits(amount: float) -> tuple[str, str]:
    value = _quantize(amount, _WHOLE)
    sign = "-" if value < 0 else ""
    return sign, f"{abs(value):,f}".replace(",", ".")


def _usd_digits(amount: float) -> tuple[str, str]:
    value = _quantize(amount, _CENTS)
    sign = "-" if value < 0 else ""
    return sign, f"{abs(value):,.2f}"


def format_vnd(amount: float) -> str:
    """Dot-grouped whole dong with a trailing ₫; sign before the digits."""
    sign, digits = _vnd_digits(amount)
    return f"{sign}{digits}₫"


def format_usd(amount: float) -> str:
    """Comma-grouped dollars with exactly two decimals; sign before the $."""
    sign, digits = _usd_digits(amount)
    return f"{sign}${digits}"


def format_amount(amount: float, is_vnd: bool) -> str:
    """Format an amount in the display currency."""
    return format_vnd(amount) if is_vnd else format_usd(amount)


def format_for_input(amount: float, is_vnd: bool) -> str:
    """
    Format an amount for an editable text field.

    Same grouping as format_amount but without the currency glyph,
    so the value can be typed over and parsed again.
    """
    sign, digits = _vnd_digits(amount) if is_vnd else _usd_digits(amount)
    return f"{sign}{digits}"


def currency_symbol(is_vnd: bool) -> str:
    return Currency.from_flag(is_vnd).symbol


def currency_code(is_vnd: bool) -> str:
    return Currency.from_flag(is_vnd).value


def to_display(amount: float, is_vnd: bool) -> CurrencyDisplay:
    """Bundle an amount with its formatted text, code and symbol."""
    return CurrencyDisplay(
        amount=amount,
        formatted_amount=format_amount(amount, is_vnd),
        currency_code=currency_code(is_vnd),
        symbol=currency_symbol(is_vnd),
    )
