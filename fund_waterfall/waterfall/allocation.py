"""
Pure helpers shared by the waterfall tiers: pro-rata allocation and
day-count arithmetic for preferred return accrual.
"""

from __future__ import annotations

import datetime
from typing import Hashable, Mapping, TypeVar, Union

from fund_waterfall.config import settings

DateLike = Union[str, datetime.date, datetime.datetime]
K = TypeVar("K", bound=Hashable)


def allocate_proportionally(amount: float, weights: Mapping[K, float]) -> dict[K, float]:
    """
    Split ``amount`` across the keys of ``weights`` pro rata.

    Keys with a zero or negative weight receive 0. If no key has a positive
    weight every key receives 0 and the amount is left for the caller to
    account for. Shares are unrounded; they sum to ``amount`` within float
    epsilon.
    """
    positive = {k: w for k, w in weights.items() if w > 0}
    total_weight = sum(positive.values())
    if total_weight <= 0 or amount == 0:
        return {k: 0.0 for k in weights}
    return {k: (amount * positive[k] / total_weight) if k in positive else 0.0 for k in weights}


def parse_iso_date(value: DateLike) -> datetime.date:
    """
    Parse an ISO 8601 date or timestamp into a date.

    Accepts "2024-03-31", "2024-03-31T12:00:00Z" and date/datetime objects.
    Raises ValueError for anything else.
    """
    if isinstance(value, datetime.datetime):
        return value.date()
    if isinstance(value, datetime.date):
        return value
    if not isinstance(value, str):
        raise ValueError(f"Expected an ISO 8601 date string, got {type(value).__name__}")
    text = value.strip()
    try:
        return datetime.date.fromisoformat(text)
    except ValueError:
        pass
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        return datetime.datetime.fromisoformat(text).date()
    except ValueError:
        raise ValueError(f"Invalid ISO 8601 date: {value!r}") from None


def years_between(start: DateLike, end: DateLike, days_per_year: float | None = None) -> float:
    """Fractional years from start to end, clamped at zero when end precedes start."""
    basis = settings.days_per_year if days_per_year is None else days_per_year
    if basis <= 0:
        raise ValueError(f"Day-count basis must be positive, got {basis!r}")
    days = (parse_iso_date(end) - parse_iso_date(start)).days
    return max(0, days) / basis
