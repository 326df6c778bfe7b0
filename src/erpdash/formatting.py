from __future__ import annotations

from datetime import datetime
from typing import Optional


def _indian_grouping(digits: str) -> str:
    # 1234567 -> 12,34,567
    if len(digits) <= 3:
        return digits
    head, tail = digits[:-3], digits[-3:]
    groups: list[str] = []
    while len(head) > 2:
        groups.insert(0, head[-2:])
        head = head[:-2]
    if head:
        groups.insert(0, head)
    return ",".join(groups + [tail])


def format_currency(amount: float) -> str:
    sign = "-" if amount < 0 else ""
    whole, frac = f"{abs(float(amount)):.2f}".split(".")
    return f"{sign}₹{_indian_grouping(whole)}.{frac}"


def format_date(value: datetime) -> str:
    return value.strftime("%d %b %Y")


def format_datetime(value: datetime) -> str:
    return value.strftime("%d %b %Y, %I:%M %p")


def days_ago(value: datetime, now: Optional[datetime] = None) -> str:
    now = now or datetime.now()
    diff_days = int(abs((now - value).total_seconds()) // 86400)
    if diff_days == 0:
        return "Today"
    if diff_days == 1:
        return "Yesterday"
    return f"{diff_days} days ago"
