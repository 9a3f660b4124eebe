"""Normalization of rating responses into a summary and review list."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any

from .const import ANONYMOUS_AUTHOR
from .models import RatingSummary, Review, ReviewAuthor
from .util import coerce_id, coerce_number, timestamp_millis


@dataclass(frozen=True, slots=True)
class RatingStats:
    average: float
    count: int


@dataclass(frozen=True, slots=True)
class RatingsAsArray:
    records: list[Any]


@dataclass(frozen=True, slots=True)
class RatingsWithStats:
    records: list[Any] = field(default_factory=list)
    stats: RatingStats | None = None


@dataclass(frozen=True, slots=True)
class UnrecognizedRatings:
    pass


RatingsPayload = RatingsAsArray | RatingsWithStats | UnrecognizedRatings


def _is_sequence(value: Any) -> bool:
    return isinstance(value, Sequence) and not isinstance(value, str | bytes)


def _is_real_number(value: Any) -> bool:
    return isinstance(value, int | float) and not isinstance(value, bool)


def _parse_stats(raw: Any) -> RatingStats | None:
    if not isinstance(raw, Mapping):
        return None
    avg, count = raw.get("avg"), raw.get("count")
    # Stats only apply when the server sends at least one real number.
    if not (_is_real_number(avg) or _is_real_number(count)):
        return None
    average = coerce_number(avg) or 0.0
    return RatingStats(average=average, count=max(0, int(coerce_number(count) or 0)))


def classify_payload(data: Any) -> RatingsPayload:
    """Decide the response shape once, at the boundary."""
    if _is_sequence(data):
        return RatingsAsArray(records=list(data))
    if isinstance(data, Mapping):
        records = data.get("ratings")
        stats = _parse_stats(data.get("stats"))
        if _is_sequence(records) or stats is not None:
            return RatingsWithStats(
                records=list(records) if _is_sequence(records) else [],
                stats=stats,
            )
    return UnrecognizedRatings()


def _records(payload: RatingsPayload) -> list[Any]:
    if isinstance(payload, RatingsAsArray | RatingsWithStats):
        return payload.records
    return []


def _score(record: Any) -> float:
    if not isinstance(record, Mapping):
        return 0.0
    return coerce_number(record.get("score")) or 0.0


def summarize(payload: RatingsPayload, cached_rating: float) -> RatingSummary:
    if isinstance(payload, RatingsWithStats) and payload.stats is not None:
        return RatingSummary(average=payload.stats.average, count=payload.stats.count)
    records = _records(payload)
    if not records:
        return RatingSummary(average=cached_rating, count=0)
    total = sum(_score(record) for record in records)
    return RatingSummary(average=total / len(records), count=len(records))


def _author(raw: Any) -> ReviewAuthor | str | None:
    if isinstance(raw, str):
        return raw
    if isinstance(raw, Mapping):
        name = raw.get("name") or raw.get("fullName") or raw.get("email") or ANONYMOUS_AUTHOR
        return ReviewAuthor(name=str(name), id=coerce_id(raw.get("_id")))
    return None


def normalize_review(record: Any) -> Review:
    if not isinstance(record, Mapping):
        record = {}
    created_at = record.get("createdAt")
    comment = record.get("comment")
    return Review(
        id=coerce_id(record.get("_id")),
        score=_score(record),
        comment=comment if isinstance(comment, str) else "",
        author=_author(record.get("fromUser")),
        created_at=created_at if isinstance(created_at, str) and created_at else None,
    )


def normalize_reviews(records: Sequence[Any]) -> list[Review]:
    """Map raw records to reviews ordered newest first; undated reviews last."""
    reviews = [normalize_review(record) for record in records]
    return sorted(reviews, key=lambda review: timestamp_millis(review.created_at), reverse=True)


def aggregate_ratings(data: Any, cached_rating: float) -> tuple[RatingSummary, list[Review]]:
    payload = classify_payload(data)
    return summarize(payload, cached_rating), normalize_reviews(_records(payload))
