"""Manual live check for the ratings endpoint.

Run from the repository root with:
  PYTHONPATH=src PARKINGCARD_API_BASE=... PARKINGCARD_SPACE_ID=... \
  python scripts/ratings_live_check.py

Optional environment variables:
  PARKINGCARD_TOKEN
  PARKINGCARD_TIMEOUT
  PARKINGCARD_RETRY_COUNT

The script prints review authors only as "named" or "anonymous".
"""

from __future__ import annotations

import asyncio
import os
import sys

from pyparkingcard import CardConfig, Client, ConfigError, PyParkingCardError, Review
from pyparkingcard.formatting import format_rating, review_count_label
from pyparkingcard.models import ReviewAuthor
from pyparkingcard.ratings import aggregate_ratings


def _require_env(name: str) -> str:
    value = os.getenv(name)
    if not value:
        print(f"Missing required environment variable: {name}", file=sys.stderr)
        raise SystemExit(2)
    return value


def _format_review(review: Review) -> str:
    author = "named" if isinstance(review.author, ReviewAuthor) else "anonymous"
    created_at = review.created_at or "-"
    return f"{review.id or '-'} | {review.score:g} | {author} | {created_at}"


async def main() -> int:
    space_id = _require_env("PARKINGCARD_SPACE_ID")
    token = os.getenv("PARKINGCARD_TOKEN")
    try:
        config = CardConfig.from_env()
    except ConfigError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 2

    try:
        async with Client(config, token=token) as client:
            data = await client.ratings_api().fetch_ratings(space_id)
    except PyParkingCardError as exc:
        print(f"Error: {exc.__class__.__name__}: {exc}", file=sys.stderr)
        return 1

    summary, reviews = aggregate_ratings(data, 0.0)
    print(f"Space: {space_id}")
    print(f"Rating: {format_rating(summary.average)} ({review_count_label(summary.count)})")
    for review in reviews:
        print(f"- {_format_review(review)}")
    return 0


if __name__ == "__main__":
    raise SystemExit(asyncio.run(main()))
