from __future__ import annotations

import math


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def format_duration(months: int) -> str:
    if months < 1:
        return "Less than 1 month"
    if months == 1:
        return "1 month"
    if months <= 3:
        return f"{months} months"
    if months <= 6:
        return f"{months} months ({round_half_up(months / 3)} quarters)"
    if months <= 12:
        return f"{months} months"

    years, remaining = divmod(months, 12)
    if remaining == 0:
        return "1 year" if years == 1 else f"{years} years"
    year_label = "year" if years == 1 else "years"
    month_label = "month" if remaining == 1 else "months"
    return f"{years} {year_label} {remaining} {month_label}"


def format_money(amount: float, currency: str = "USD") -> str:
    symbol = "$" if currency == "USD" else f"{currency} "
    return f"{symbol}{amount:,.0f}"
