from __future__ import annotations

import math
from typing import Iterable

DASH = "—"


def fmt_currency(value: float) -> str:
    """US dollar amount with two decimals; non-finite values show as $0.00."""
    v = value if math.isfinite(value) else 0.0
    sign = "-" if v < 0 else ""
    return f"{sign}${abs(v):,.2f}"


def fmt_number(value: float, digits: int = 2) -> str:
    """Number with at most ``digits`` decimals and thousands separators.

    Trailing zeros are dropped (14.50 -> "14.5"); non-finite values show as a dash.
    """
    if not math.isfinite(value):
        return DASH
    text = f"{value:,.{digits}f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    if text in ("-0", ""):
        text = "0"
    return text


def fmt_percent(value: float) -> str:
    return f"{fmt_number(value, 2)}%"


def fmt_years(value: float) -> str:
    if not math.isfinite(value):
        return DASH
    return f"{fmt_number(value, 2)} years"


def discount_factor(rate: float, year: int) -> float:
    return 1.0 / (1.0 + rate) ** year


def npv(rate: float, cashflows: Iterable[float]) -> float:
    """Net present value for a series of cashflows CF_t at t=0..N.

    NPV = sum(CF_t / (1 + rate)^t)
    """
    total = 0.0
    for t, cf in enumerate(cashflows):
        total += cf * discount_factor(rate, t)
    return total
