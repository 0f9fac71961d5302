"""Display formatting for calculator results (German locale, euros)."""

from __future__ import annotations

import math
from decimal import ROUND_HALF_UP, Decimal

NBSP = "\u00a0"
FALLBACK_EUR = "€0.00"
DE_SEPARATORS = str.maketrans(",.", ".,")


def format_eur(amount) -> str:
    """
    1234.56 -> "1.234,56 €" (non-breaking space before the symbol).
    Missing or non-finite amounts render as the fallback.
    """
    if amount is None or isinstance(amount, bool):
        return FALLBACK_EUR
    try:
        value = float(amount)
    except (TypeError, ValueError):
        return FALLBACK_EUR
    if not math.isfinite(value):
        return FALLBACK_EUR

    cents = Decimal(repr(value)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
    sign = "-" if cents < 0 else ""
    grouped = f"{abs(cents):,.2f}".translate(DE_SEPARATORS)
    return f"{sign}{grouped}{NBSP}€"


def format_percent(rate: float, decimals: int = 2) -> str:
    # rate is a decimal fraction: 0.035 -> "3.50%"
    return f"{rate * 100:.{decimals}f}%"
