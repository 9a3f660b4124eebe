"""Race-safe rating aggregation keyed by the selected parking space."""

from __future__ import annotations

import asyncio
import contextlib
import logging
from collections.abc import Callable

from .api import RatingsFetcher
from .models import RatingState, RatingSummary
from .ratings import aggregate_ratings

_LOGGER = logging.getLogger(__name__)


def fallback_state(space_id: str | None, cached_rating: float, *, loading: bool) -> RatingState:
    return RatingState(
        space_id=space_id,
        summary=RatingSummary(average=cached_rating, count=0),
        reviews=[],
        loading=loading,
    )


class RatingAggregator:
    """Keep one rating subscription alive for the current selection.

    Every call to :meth:`observe` starts a new generation. A fetch only writes
    state when its generation is still the current one, so a slow response
    for a previous selection can never overwrite a newer one. The in-flight
    task of the previous generation is cancelled as well.
    """

    def __init__(
        self,
        fetcher: RatingsFetcher,
        *,
        on_change: Callable[[RatingState], None] | None = None,
    ) -> None:
        self._fetcher = fetcher
        self._on_change = on_change
        self._generation = 0
        self._task: asyncio.Task[None] | None = None
        self._state = fallback_state(None, 0.0, loading=False)

    @property
    def state(self) -> RatingState:
        return self._state

    @property
    def generation(self) -> int:
        return self._generation

    def observe(self, space_id: str | None, *, cached_rating: float = 0.0) -> asyncio.Task[None] | None:
        """Switch the subscription to ``space_id`` and start its fetch."""
        self._generation += 1
        generation = self._generation
        self._cancel_task()
        self._set_state(fallback_state(space_id, cached_rating, loading=bool(space_id)))
        if not space_id:
            return None
        self._task = asyncio.create_task(
            self._load(generation, space_id, cached_rating),
            name=f"pyparkingcard-ratings-{space_id}-{generation}",
        )
        return self._task

    async def close(self) -> None:
        """Tear down the subscription without a further state update."""
        self._generation += 1
        task = self._task
        self._cancel_task()
        if task is not None and not task.done():
            with contextlib.suppress(asyncio.CancelledError):
                await task

    async def _load(self, generation: int, space_id: str, cached_rating: float) -> None:
        try:
            data = await self._fetcher.fetch_ratings(space_id)
        except Exception as exc:
            if generation != self._generation:
                return
            _LOGGER.warning("Failed to load ratings for %s: %s", space_id, exc)
            self._set_state(fallback_state(space_id, cached_rating, loading=False))
            return
        if generation != self._generation:
            _LOGGER.debug("Discarding stale ratings for %s", space_id)
            return
        summary, reviews = aggregate_ratings(data, cached_rating)
        self._set_state(
            RatingState(space_id=space_id, summary=summary, reviews=reviews, loading=False)
        )

    def _cancel_task(self) -> None:
        if self._task is not None and not self._task.done():
            self._task.cancel()
        self._task = None

    def _set_state(self, state: RatingState) -> None:
        self._state = state
        if self._on_change is not None:
            self._on_change(state)
