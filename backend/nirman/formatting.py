"""Formatting helpers for estimate output.

Amounts are shown the way Indian clients read them: rupee symbol with
lakh/crore digit grouping (``'₹12,34,567'``) or the compact lakh/crore
form (``'₹12.35 L'``, ``'₹1.20 Cr'``).
"""

from __future__ import annotations

_LAKH = 100_000
_CRORE = 10_000_000


def group_indian(amount: int) -> str:
    """Group digits as 12,34,56,789 (last three, then pairs)."""
    sign = "-" if amount < 0 else ""
    digits = str(abs(amount))
    if len(digits) <= 3:
        return sign + digits
    head, tail = digits[:-3], digits[-3:]
    pairs: list[str] = []
    while len(head) > 2:
        pairs.insert(0, head[-2:])
        head = head[:-2]
    if head:
        pairs.insert(0, head)
    return sign + ",".join([*pairs, tail])


def format_inr(amount: float) -> str:
    """Format a rupee amount without paise, e.g. '₹40,05,549'."""
    return f"₹{group_indian(round(amount))}"


def format_inr_compact(amount: float) -> str:
    """Format a rupee amount in crore/lakh where that reads better.

    - Amounts >= 1 crore: '₹X.XX Cr'
    - Amounts >= 1 lakh: '₹X.XX L'
    - Below 1 lakh: full grouping
    """
    if amount >= _CRORE:
        return f"₹{amount / _CRORE:.2f} Cr"
    if amount >= _LAKH:
        return f"₹{amount / _LAKH:.2f} L"
    return format_inr(amount)


def format_area(area: float, unit: str) -> str:
    """'1,000 sqft' style area label."""
    return f"{area:,.0f} {unit}"


def format_months(months: float) -> str:
    """'1 month', '6.5 months'."""
    label = f"{months:g}"
    return f"{label} month" if months == 1 else f"{label} months"
