"""Summary card composition."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass

from .aggregator import RatingAggregator
from .const import DEFAULT_STREET, DEFAULT_TITLE
from .eligibility import BookingEligibilityGate
from .exceptions import ValidationError
from .formatting import (
    CurrencyFormatter,
    Formatter,
    booking_amount_label,
    duration_label,
    format_discount_badge,
    format_rating,
    review_author_label,
    review_comment_label,
    review_count_label,
    review_date_label,
    star_states,
)
from .images import ImageResolver
from .models import (
    BookingRequest,
    DurationSelection,
    GateOutcome,
    ParkingSpace,
    PriceBreakdown,
    PriceQuote,
    RatingState,
    Review,
)
from .pricing import price_for_space
from .pricing import quote as quote_price

_LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ReviewLine:
    author: str
    comment: str
    date: str
    score: float

    @classmethod
    def from_review(cls, review: Review) -> ReviewLine:
        return cls(
            author=review_author_label(review),
            comment=review_comment_label(review),
            date=review_date_label(review),
            score=review.score,
        )


@dataclass(frozen=True, slots=True)
class CardView:
    title: str
    address: str
    image_url: str
    image_index: int
    image_count: int
    rating_text: str
    rating_count: int
    review_count_text: str
    reviews: tuple[ReviewLine, ...]
    stars: tuple[str, ...]
    discount_badge: str | None
    base_price_text: str
    price_text: str
    booking_amount_text: str
    duration_text: str | None
    is_favorite: bool
    loading: bool


class SummaryCard:
    """Summary of the selected parking space with a booking entry point."""

    def __init__(
        self,
        aggregator: RatingAggregator,
        image_resolver: ImageResolver,
        gate: BookingEligibilityGate,
        *,
        formatter: Formatter | None = None,
    ) -> None:
        self._aggregator = aggregator
        self._image_resolver = image_resolver
        self._gate = gate
        self._formatter = formatter or CurrencyFormatter()
        self._space: ParkingSpace | None = None
        self._duration: DurationSelection | None = None
        self._price: PriceBreakdown | None = None
        self._quote: PriceQuote | None = None
        self._images: list[str] = []
        self._image_index = 0
        self._is_favorite = False

    @property
    def space(self) -> ParkingSpace | None:
        return self._space

    @property
    def duration(self) -> DurationSelection | None:
        return self._duration

    @property
    def price(self) -> PriceBreakdown | None:
        return self._price

    @property
    def quote(self) -> PriceQuote | None:
        return self._quote

    @property
    def images(self) -> list[str]:
        return list(self._images)

    @property
    def image_index(self) -> int:
        return self._image_index

    @property
    def rating(self) -> RatingState:
        return self._aggregator.state

    @property
    def is_favorite(self) -> bool:
        return self._is_favorite

    def select(
        self,
        space: ParkingSpace | None,
        *,
        duration: DurationSelection | None = None,
    ) -> asyncio.Task[None] | None:
        """Show ``space``; ratings are only refetched when its id changes."""
        previous = self._space
        self._space = space
        self._duration = duration
        if space is None:
            self._price = None
            self._quote = None
            self._images = []
            self._image_index = 0
            if previous is None:
                return None
            return self._aggregator.observe(None)

        id_changed = previous is None or previous.id != space.id
        # Unsaved spaces have no id to compare; treat another record as a switch.
        if not id_changed and not space.id and previous is not space:
            id_changed = True
        if id_changed or previous.photos != space.photos:
            images = self._image_resolver.resolve(space.photos)
            if id_changed or images != self._images:
                self._image_index = 0
            self._images = images
        self._price = price_for_space(space)
        self._quote = quote_price(self._price, duration)
        if not id_changed:
            return None
        _LOGGER.debug("Summary card switched to %s", space.id or "<unsaved>")
        return self._aggregator.observe(space.id or None, cached_rating=space.rating)

    def set_duration(self, duration: DurationSelection | None) -> None:
        self._duration = duration
        if self._price is not None:
            self._quote = quote_price(self._price, duration)

    def next_image(self) -> int:
        if self._images:
            self._image_index = (self._image_index + 1) % len(self._images)
        return self._image_index

    def previous_image(self) -> int:
        if self._images:
            self._image_index = (self._image_index - 1) % len(self._images)
        return self._image_index

    def toggle_favorite(self) -> bool:
        self._is_favorite = not self._is_favorite
        return self._is_favorite

    def book(self) -> GateOutcome:
        space, price_quote = self._require_selection()
        request = BookingRequest(space_id=space.id, quote=price_quote, duration=self._duration)
        return self._gate.attempt(request)

    def view(self) -> CardView:
        space, price_quote = self._require_selection()
        price = self._price
        if price is None:
            raise ValidationError("No parking space is selected.")
        rating = self._aggregator.state
        fmt = self._formatter
        street = space.street or DEFAULT_STREET
        return CardView(
            title=space.title or DEFAULT_TITLE,
            address=f"{street}, {space.city or ''}",
            image_url=self._images[self._image_index],
            image_index=self._image_index,
            image_count=len(self._images),
            rating_text=format_rating(rating.summary.average),
            rating_count=rating.summary.count,
            review_count_text=review_count_label(rating.summary.count),
            reviews=tuple(ReviewLine.from_review(review) for review in rating.reviews),
            stars=star_states(rating.summary.average),
            discount_badge=format_discount_badge(price.discount_percent)
            if price.has_discount
            else None,
            base_price_text=fmt(price.base_price, 0 if price.has_discount else 2),
            price_text=fmt(price.per_unit, 2),
            booking_amount_text=booking_amount_label(price_quote, fmt),
            duration_text=duration_label(price_quote.duration_hours),
            is_favorite=self._is_favorite,
            loading=rating.loading,
        )

    async def close(self) -> None:
        await self._aggregator.close()

    def _require_selection(self) -> tuple[ParkingSpace, PriceQuote]:
        if self._space is None or self._quote is None:
            raise ValidationError("No parking space is selected.")
        return self._space, self._quote
