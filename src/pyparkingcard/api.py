"""HTTP access to the ratings API."""

from __future__ import annotations

import logging
from typing import Any, Protocol
from urllib.parse import quote

import aiohttp

from .const import DEFAULT_HEADERS, DEFAULT_TIMEOUT_SECONDS, RATINGS_ENDPOINT
from .exceptions import ApiError, AuthError, NetworkError, ValidationError
from .util import normalize_base_url

_LOGGER = logging.getLogger(__name__)
_DEFAULT_TIMEOUT = aiohttp.ClientTimeout(total=DEFAULT_TIMEOUT_SECONDS)


class RatingsFetcher(Protocol):
    async def fetch_ratings(self, space_id: str) -> Any:
        """Return the raw ratings payload for a parking space."""


class RatingsApi:
    """Fetch rating records for parking spaces."""

    def __init__(
        self,
        session: aiohttp.ClientSession,
        *,
        base_url: str,
        token: str | None = None,
        timeout: aiohttp.ClientTimeout | None = None,
        retry_count: int = 0,
    ) -> None:
        if session is None:
            raise ValidationError("Session is required.")
        self._session = session
        self._base_url = normalize_base_url(base_url)
        self._token = token
        self._timeout = timeout or _DEFAULT_TIMEOUT
        self._retry_count = max(0, retry_count)

    @property
    def base_url(self) -> str:
        return self._base_url

    def set_token(self, token: str | None) -> None:
        """Replace the bearer token used for subsequent requests."""
        self._token = token

    async def fetch_ratings(self, space_id: str) -> Any:
        if not isinstance(space_id, str) or not space_id.strip():
            raise ValidationError("space_id must be a non-empty string.")
        _LOGGER.debug("Ratings fetch for %s started", space_id)
        path = RATINGS_ENDPOINT.format(space_id=quote(space_id.strip(), safe=""))
        data = await self._request_json("GET", path)
        _LOGGER.debug("Ratings fetch for %s completed", space_id)
        return data

    def _build_url(self, path: str) -> str:
        if not isinstance(path, str) or not path:
            raise ValidationError("Path must be a non-empty string.")
        if path.startswith("http://") or path.startswith("https://"):
            raise ValidationError("Use relative paths when building API requests.")
        normalized_path = path if path.startswith("/") else f"/{path}"
        return f"{self._base_url}{normalized_path}"

    def _build_headers(self) -> dict[str, str]:
        headers = dict(DEFAULT_HEADERS)
        if self._token:
            headers["Authorization"] = f"Bearer {self._token}"
        return headers

    async def _request_json(self, method: str, path: str, **kwargs: Any) -> Any:
        url = self._build_url(path)
        return await self._request(method, url, headers=self._build_headers(), **kwargs)

    async def _request(self, method: str, url: str, **kwargs: Any) -> Any:
        retries = self._retry_count if method.upper() == "GET" else 0
        attempts = retries + 1
        timeout = kwargs.pop("timeout", None) or self._timeout
        for attempt in range(attempts):
            try:
                async with self._session.request(
                    method,
                    url,
                    timeout=timeout,
                    **kwargs,
                ) as response:
                    self._raise_for_status(response)
                    try:
                        return await response.json()
                    except (aiohttp.ContentTypeError, ValueError) as exc:
                        raise ApiError("Response did not contain valid JSON.") from exc
            except (aiohttp.ClientError, TimeoutError) as exc:
                if attempt >= attempts - 1:
                    raise NetworkError("Network request failed.") from exc
                _LOGGER.debug("Retrying %s %s after %s", method, url, exc.__class__.__name__)
        raise ApiError("Request failed.")

    def _raise_for_status(self, response: aiohttp.ClientResponse) -> None:
        if 200 <= response.status < 300:
            return
        if response.status in (401, 403):
            raise AuthError("Authentication failed.")
        raise ApiError(f"Ratings request failed with status {response.status}.")
