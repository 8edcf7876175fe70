from __future__ import annotations

from datetime import date
from decimal import Decimal

_CURRENCY_SYMBOLS = {"USD": "$"}


def format_money(amount: Decimal, currency: str) -> str:
    """Human-readable amount used in audit summaries, e.g. ``$1,250.00``."""
    symbol = _CURRENCY_SYMBOLS.get(currency)
    text = f"{Decimal(amount):,.2f}"
    if symbol:
        return f"{symbol}{text}"
    return f"{currency} {text}"


def month_label(yyyy_mm: str) -> str:
    """``2025-12`` -> ``December 2025``; unparseable input is returned as is."""
    try:
        year_s, month_s = yyyy_mm.split("-")
        return date(int(year_s), int(month_s), 1).strftime("%B %Y")
    except (ValueError, AttributeError):
        return yyyy_mm
