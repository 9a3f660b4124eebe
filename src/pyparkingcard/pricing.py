"""Discount-aware price computation."""

from __future__ import annotations

from collections.abc import Mapping
from datetime import datetime
from typing import Any

from .models import DurationSelection, ParkingSpace, PriceBreakdown, PriceQuote
from .util import coerce_number, parse_timestamp, round_half_up

_DISCOUNT_FIELDS = ("percent", "value", "amount")


def parse_discount_percent(raw: Any) -> float:
    """Return the discount percentage clamped to ``[0, 100]``."""
    if raw is None or isinstance(raw, bool):
        return 0.0
    if isinstance(raw, str):
        number = coerce_number(raw.replace("%", ""))
    elif isinstance(raw, int | float):
        number = coerce_number(raw)
    elif isinstance(raw, Mapping):
        number = None
        for key in _DISCOUNT_FIELDS:
            value = raw.get(key)
            if value is not None:
                number = coerce_number(value)
                break
    else:
        number = None
    if number is None:
        return 0.0
    return max(0.0, min(100.0, number))


def compute_price_breakdown(base_price: Any, discount: Any = None) -> PriceBreakdown:
    base = coerce_number(base_price) or 0.0
    percent = parse_discount_percent(discount)
    rounded_base = round_half_up(base, 2)
    discounted = round_half_up(base * (1 - percent / 100), 2)
    # A discount that rounds away must not show a badge without savings.
    has_discount = percent > 0 and discounted < rounded_base
    return PriceBreakdown(
        base_price=rounded_base,
        discount_percent=percent,
        discounted_price=discounted,
        has_discount=has_discount,
    )


def price_for_space(space: ParkingSpace) -> PriceBreakdown:
    if space.price_override is not None:
        return space.price_override
    return compute_price_breakdown(space.base_price, space.discount)


def compute_duration_hours(
    start: str | datetime | None,
    end: str | datetime | None,
) -> float | None:
    start_dt = parse_timestamp(start)
    end_dt = parse_timestamp(end)
    if start_dt is None or end_dt is None or end_dt <= start_dt:
        return None
    minutes = (end_dt - start_dt).total_seconds() / 60
    return minutes / 60


def duration_hours_for(duration: DurationSelection | None) -> float | None:
    if duration is None:
        return None
    return compute_duration_hours(duration.start_time, duration.end_time)


def quote(breakdown: PriceBreakdown, duration: DurationSelection | None = None) -> PriceQuote:
    per_unit = breakdown.per_unit
    hours = duration_hours_for(duration)
    total = round_half_up(per_unit * hours, 2) if hours else None
    return PriceQuote(per_unit=per_unit, duration_hours=hours, total=total)
