"""Public data models."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from datetime import datetime
from enum import StrEnum
from typing import Any

from .util import coerce_id, coerce_number


@dataclass(frozen=True, slots=True)
class PriceBreakdown:
    base_price: float
    discount_percent: float
    discounted_price: float
    has_discount: bool

    @property
    def per_unit(self) -> float:
        return self.discounted_price if self.has_discount else self.base_price


@dataclass(frozen=True, slots=True)
class PriceQuote:
    per_unit: float
    duration_hours: float | None
    total: float | None


@dataclass(frozen=True, slots=True)
class DurationSelection:
    start_time: str | datetime | None = None
    end_time: str | datetime | None = None


@dataclass(frozen=True, slots=True)
class ParkingSpace:
    """A parking space record as delivered by the remote data source."""

    id: str
    title: str | None = None
    street: str | None = None
    city: str | None = None
    base_price: Any = None
    discount: Any = None
    rating: float = 0.0
    photos: Any = None
    longitude: float = 0.0
    latitude: float = 0.0
    price_override: PriceBreakdown | None = None

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> ParkingSpace:
        address = data.get("address")
        if not isinstance(address, Mapping):
            address = {}
        longitude, latitude = _coordinates(data.get("location"))
        base_price = _first_present(data, "priceParking", "pricePerHour", "price")
        discount = _first_present(data, "discount", "discountPercent")
        return cls(
            id=coerce_id(_first_present(data, "_id", "id")) or "",
            title=data.get("title") or None,
            street=address.get("street") or None,
            city=address.get("city") or None,
            base_price=base_price,
            discount=discount,
            rating=coerce_number(data.get("rating")) or 0.0,
            photos=data.get("photos"),
            longitude=longitude,
            latitude=latitude,
            price_override=_price_override(data.get("__price")),
        )


@dataclass(frozen=True, slots=True)
class RatingSummary:
    average: float
    count: int


@dataclass(frozen=True, slots=True)
class ReviewAuthor:
    name: str
    id: str | None = None


@dataclass(frozen=True, slots=True)
class Review:
    id: str | None
    score: float
    comment: str
    author: ReviewAuthor | str | None
    created_at: str | None


@dataclass(frozen=True, slots=True)
class RatingState:
    space_id: str | None
    summary: RatingSummary
    reviews: list[Review] = field(default_factory=list)
    loading: bool = False


@dataclass(frozen=True, slots=True)
class UserRecord:
    id: str
    is_verified: bool = False
    phone_verified: bool | None = None

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> UserRecord:
        phone_verified = data.get("phoneVerified")
        return cls(
            id=coerce_id(_first_present(data, "_id", "id")) or "",
            is_verified=bool(data.get("isVerified")),
            phone_verified=phone_verified if isinstance(phone_verified, bool) else None,
        )


class EligibilityState(StrEnum):
    UNAUTHENTICATED = "unauthenticated"
    UNVERIFIED_IDENTITY = "unverified_identity"
    PHONE_UNVERIFIED = "phone_unverified"
    ELIGIBLE = "eligible"


@dataclass(frozen=True, slots=True)
class BookingRequest:
    space_id: str
    quote: PriceQuote
    duration: DurationSelection | None = None


@dataclass(frozen=True, slots=True)
class BookingHandoff:
    space_id: str
    user_id: str
    start_time: str | datetime | None
    end_time: str | datetime | None
    total_amount: float | None
    per_hour: float
    duration_hours: float | None

    def as_state(self) -> dict[str, Any]:
        """Return the navigation payload handed to the booking flow."""
        return {
            "spaceId": self.space_id,
            "userId": self.user_id,
            "startTime": self.start_time,
            "endTime": self.end_time,
            "totalAmount": self.total_amount,
            "perHour": self.per_hour,
            "durationHours": self.duration_hours,
        }


@dataclass(frozen=True, slots=True)
class GateOutcome:
    state: EligibilityState
    handoff: BookingHandoff | None = None
    message: str | None = None

    @property
    def allowed(self) -> bool:
        return self.state is EligibilityState.ELIGIBLE


@dataclass(frozen=True, slots=True)
class PhoneVerificationFlow:
    on_close: Callable[[], None]
    on_success: Callable[[], GateOutcome]


def _first_present(data: Mapping[str, Any], *keys: str) -> Any:
    for key in keys:
        value = data.get(key)
        if value is not None:
            return value
    return None


def _coordinates(location: Any) -> tuple[float, float]:
    if not isinstance(location, Mapping):
        return 0.0, 0.0
    coordinates = location.get("coordinates")
    if not isinstance(coordinates, list | tuple):
        return 0.0, 0.0
    longitude = coerce_number(coordinates[0]) if len(coordinates) > 0 else None
    latitude = coerce_number(coordinates[1]) if len(coordinates) > 1 else None
    return longitude or 0.0, latitude or 0.0


def _price_override(raw: Any) -> PriceBreakdown | None:
    if isinstance(raw, PriceBreakdown):
        return raw
    if not isinstance(raw, Mapping):
        return None
    base_price = coerce_number(raw.get("basePrice"))
    discounted_price = coerce_number(raw.get("discountedPrice"))
    if base_price is None or discounted_price is None:
        return None
    return PriceBreakdown(
        base_price=base_price,
        discount_percent=coerce_number(raw.get("discountPercent")) or 0.0,
        discounted_price=discounted_price,
        has_discount=raw.get("hasDiscount") is True,
    )
