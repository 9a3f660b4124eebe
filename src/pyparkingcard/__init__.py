"""pyParkingCard package."""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version

from .aggregator import RatingAggregator
from .api import RatingsApi
from .card import CardView, ReviewLine, SummaryCard
from .client import Client
from .config import CardConfig
from .eligibility import BookingEligibilityGate, evaluate_eligibility
from .exceptions import (
    ApiError,
    AuthError,
    ConfigError,
    NetworkError,
    PyParkingCardError,
    ValidationError,
)
from .images import ImageResolver, resolve_images
from .models import (
    BookingHandoff,
    BookingRequest,
    DurationSelection,
    EligibilityState,
    GateOutcome,
    ParkingSpace,
    PhoneVerificationFlow,
    PriceBreakdown,
    PriceQuote,
    RatingState,
    RatingSummary,
    Review,
    ReviewAuthor,
    UserRecord,
)
from .pricing import compute_duration_hours, compute_price_breakdown

try:
    __version__ = version("pyparkingcard")
except PackageNotFoundError:  # pragma: no cover - not installed
    __version__ = "0.0.0"

__all__ = [
    "ApiError",
    "AuthError",
    "BookingEligibilityGate",
    "BookingHandoff",
    "BookingRequest",
    "CardConfig",
    "CardView",
    "Client",
    "ConfigError",
    "DurationSelection",
    "EligibilityState",
    "GateOutcome",
    "ImageResolver",
    "NetworkError",
    "ParkingSpace",
    "PhoneVerificationFlow",
    "PriceBreakdown",
    "PriceQuote",
    "PyParkingCardError",
    "RatingAggregator",
    "RatingState",
    "RatingSummary",
    "RatingsApi",
    "Review",
    "ReviewAuthor",
    "ReviewLine",
    "SummaryCard",
    "UserRecord",
    "ValidationError",
    "__version__",
    "compute_duration_hours",
    "compute_price_breakdown",
    "evaluate_eligibility",
    "resolve_images",
]
