"""Presentation helpers — raw floats to display strings.

``format_result`` implements the calculator display policy. The number,
currency and percent helpers cover the grouped en-US style used by result
panels elsewhere.
"""

from __future__ import annotations

import math
from decimal import Decimal
from typing import Optional

from scicalc.config import SCIENTIFIC_DIGITS, SCIENTIFIC_LOWER, SCIENTIFIC_UPPER, SIGNIFICANT_DIGITS
from scicalc.errors import CalculatorError

_CURRENCY_SYMBOLS: dict[str, str] = {
    "USD": "$",
    "EUR": "€",
    "GBP": "£",
    "INR": "₹",
    "JPY": "¥",
}

# Currencies without minor units.
_ZERO_DECIMAL_CURRENCIES = ("JPY",)


def round_significant(value: float, digits: int = SIGNIFICANT_DIGITS) -> float:
    """Round to ``digits`` significant digits to hide floating-point noise."""
    return float(f"{value:.{digits}g}")


def _positional(value: float) -> str:
    """Render a float without exponent and without a trailing ``.0``."""
    text = format(Decimal(repr(value)), "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    if text == "-0":
        text = "0"
    return text


def format_result(value: float) -> str:
    """Format an evaluation result for the calculator display.

    Magnitudes of 1e12 and above, or nonzero magnitudes below 1e-9, use
    scientific notation with 9 digits after the point. Everything else is
    rounded to 15 significant digits and shown positionally.
    """
    if math.isnan(value):
        return "Error"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"

    magnitude = abs(value)
    if magnitude >= SCIENTIFIC_UPPER or (value != 0 and magnitude < SCIENTIFIC_LOWER):
        return f"{value:.{SCIENTIFIC_DIGITS}e}"
    return _positional(round_significant(value))


def display_error(error: CalculatorError) -> str:
    """Display state for a failure: "Infinity" for division by zero, else "Error"."""
    return error.display


def format_number(value: float, max_fraction_digits: int = 3) -> str:
    """Group thousands and keep at most ``max_fraction_digits`` decimals."""
    text = f"{value:,.{max_fraction_digits}f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    if text == "-0":
        text = "0"
    return text


def format_currency(value: float, currency: str = "USD", fraction_digits: Optional[int] = None) -> str:
    """Format a money amount, e.g. ``$1,234.56`` or ``-$12.00``.

    Unknown currency codes are written as a prefix: ``CHF 1,234.00``.
    """
    code = currency.upper()
    if fraction_digits is None:
        fraction_digits = 0 if code in _ZERO_DECIMAL_CURRENCIES else 2

    amount = f"{abs(value):,.{fraction_digits}f}"
    negative = value < 0 and float(amount.replace(",", "")) != 0
    symbol = _CURRENCY_SYMBOLS.get(code, f"{code} ")
    return f"{'-' if negative else ''}{symbol}{amount}"


def format_percent(value: float, max_fraction_digits: int = 2) -> str:
    """Format a value already expressed in percent units: ``12.5%``."""
    return f"{format_number(value, max_fraction_digits)}%"
