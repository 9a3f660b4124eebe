"""Client facade wiring the card components to one HTTP session."""

from __future__ import annotations

from collections.abc import Callable

import aiohttp

from .aggregator import RatingAggregator
from .api import RatingsApi
from .card import SummaryCard
from .config import CardConfig
from .eligibility import BookingActions, BookingEligibilityGate
from .formatting import CurrencyFormatter, Formatter
from .images import ImageResolver
from .models import RatingState, UserRecord


class Client:
    """Facade building summary cards that share one session."""

    def __init__(
        self,
        config: CardConfig,
        session: aiohttp.ClientSession | None = None,
        *,
        token: str | None = None,
    ) -> None:
        self._config = config
        self._session = session
        self._owns_session = session is None
        self._timeout = aiohttp.ClientTimeout(total=config.timeout_seconds)
        self._api: RatingsApi | None = None
        self._token = token

    @property
    def config(self) -> CardConfig:
        return self._config

    async def __aenter__(self) -> Client:
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_session and self._session is not None:
            await self._session.close()
            self._session = None
            self._api = None

    def set_token(self, token: str | None) -> None:
        self._token = token
        if self._api is not None:
            self._api.set_token(token)

    def ratings_api(self) -> RatingsApi:
        if self._api is None:
            self._api = RatingsApi(
                self._ensure_session(),
                base_url=self._config.api_base,
                token=self._token,
                timeout=self._timeout,
                retry_count=self._config.retry_count,
            )
        return self._api

    def image_resolver(self) -> ImageResolver:
        return ImageResolver(
            self._config.api_base,
            cloud_name=self._config.cloud_name,
            placeholder_url=self._config.placeholder_url,
        )

    def create_card(
        self,
        user_source: Callable[[], UserRecord | None],
        actions: BookingActions,
        *,
        formatter: Formatter | None = None,
        on_rating_change: Callable[[RatingState], None] | None = None,
    ) -> SummaryCard:
        gate = BookingEligibilityGate(
            user_source,
            actions,
            login_path=self._config.login_path,
            booking_path=self._config.booking_path,
        )
        aggregator = RatingAggregator(self.ratings_api(), on_change=on_rating_change)
        return SummaryCard(
            aggregator,
            self.image_resolver(),
            gate,
            formatter=formatter or CurrencyFormatter(symbol=self._config.currency_symbol),
        )

    def _ensure_session(self) -> aiohttp.ClientSession:
        if self._session is None:
            self._session = aiohttp.ClientSession(timeout=self._timeout)
        return self._session
