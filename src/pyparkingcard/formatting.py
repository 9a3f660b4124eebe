"""Display helpers for the summary card."""

from __future__ import annotations

import math
from collections.abc import Callable
from dataclasses import dataclass

from .const import ANONYMOUS_AUTHOR, DEFAULT_CURRENCY_SYMBOL, NO_COMMENT, UNKNOWN_DATE
from .models import PriceQuote, Review, ReviewAuthor
from .util import parse_timestamp, round_half_up

Formatter = Callable[[float, int], str]


def _group_digits(digits: str, *, indian: bool) -> str:
    if len(digits) <= 3:
        return digits
    if not indian:
        head_len = len(digits) % 3 or 3
        parts = [digits[:head_len]]
        parts.extend(digits[i : i + 3] for i in range(head_len, len(digits), 3))
        return ",".join(parts)
    head, tail = digits[:-3], digits[-3:]
    groups: list[str] = []
    while len(head) > 2:
        groups.insert(0, head[-2:])
        head = head[:-2]
    if head:
        groups.insert(0, head)
    return ",".join([*groups, tail])


@dataclass(frozen=True, slots=True)
class CurrencyFormatter:
    """Format amounts as currency, en-IN rupees by default."""

    symbol: str = DEFAULT_CURRENCY_SYMBOL
    indian_grouping: bool = True

    def __call__(self, value: float, decimals: int = 2) -> str:
        if not math.isfinite(value):
            value = 0.0
        rounded = round_half_up(value, decimals)
        sign = "-" if rounded < 0 else ""
        text = f"{abs(rounded):.{decimals}f}"
        whole, _, fraction = text.partition(".")
        grouped = _group_digits(whole, indian=self.indian_grouping)
        amount = f"{grouped}.{fraction}" if fraction else grouped
        return f"{sign}{self.symbol}{amount}"


def format_rating(average: float) -> str:
    if not math.isfinite(average):
        return "0.0"
    return f"{round_half_up(average, 1):.1f}"


def star_states(rating: float) -> tuple[str, ...]:
    """Five star slots: ``full``, ``half`` or ``empty``."""
    if not math.isfinite(rating):
        rating = 0.0
    full = math.floor(rating)
    half = rating % 1 >= 0.5
    states = []
    for index in range(5):
        if index < full:
            states.append("full")
        elif index == full and half:
            states.append("half")
        else:
            states.append("empty")
    return tuple(states)


def format_percent(percent: float) -> str:
    if float(percent).is_integer():
        return str(int(percent))
    return f"{percent:g}"


def format_discount_badge(percent: float) -> str:
    return f"{format_percent(percent)}% OFF"


def review_count_label(count: int) -> str:
    suffix = "" if count == 1 else "s"
    return f"Based on {count} review{suffix}"


def review_author_label(review: Review) -> str:
    if isinstance(review.author, ReviewAuthor) and review.author.name:
        return review.author.name
    return ANONYMOUS_AUTHOR


def review_comment_label(review: Review) -> str:
    return review.comment or NO_COMMENT


def review_date_label(review: Review) -> str:
    parsed = parse_timestamp(review.created_at)
    if parsed is None:
        return UNKNOWN_DATE
    return parsed.date().isoformat()


def duration_label(hours: float | None) -> str | None:
    if not hours:
        return None
    return f"{round_half_up(hours, 1):.1f} hrs"


def booking_amount_label(price_quote: PriceQuote, formatter: Formatter) -> str:
    if price_quote.total:
        return formatter(price_quote.total, 0)
    return f"{formatter(price_quote.per_unit, 0)}/hr"
