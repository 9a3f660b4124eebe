"""Card configuration."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass

from .const import (
    BOOKING_PATH,
    DEFAULT_CURRENCY_SYMBOL,
    DEFAULT_PLACEHOLDER_URL,
    DEFAULT_TIMEOUT_SECONDS,
    ENV_API_BASE,
    ENV_CLOUD_NAME,
    ENV_PLACEHOLDER_URL,
    ENV_RETRY_COUNT,
    ENV_TIMEOUT,
    LOGIN_PATH,
)
from .exceptions import ConfigError, ValidationError
from .util import normalize_base_url


@dataclass(frozen=True, slots=True)
class CardConfig:
    api_base: str
    cloud_name: str | None = None
    placeholder_url: str = DEFAULT_PLACEHOLDER_URL
    currency_symbol: str = DEFAULT_CURRENCY_SYMBOL
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS
    retry_count: int = 0
    login_path: str = LOGIN_PATH
    booking_path: str = BOOKING_PATH

    def __post_init__(self) -> None:
        try:
            normalized = normalize_base_url(self.api_base)
        except ValidationError as exc:
            raise ConfigError("api_base must be a non-empty URL.") from exc
        object.__setattr__(self, "api_base", normalized)
        if self.timeout_seconds <= 0:
            raise ConfigError("timeout_seconds must be positive.")
        if self.retry_count < 0:
            raise ConfigError("retry_count must not be negative.")

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> CardConfig:
        """Build a configuration from ``PARKINGCARD_*`` environment variables."""
        env = os.environ if environ is None else environ
        api_base = env.get(ENV_API_BASE)
        if not api_base:
            raise ConfigError(f"Missing required environment variable: {ENV_API_BASE}")
        return cls(
            api_base=api_base,
            cloud_name=env.get(ENV_CLOUD_NAME) or None,
            placeholder_url=env.get(ENV_PLACEHOLDER_URL) or DEFAULT_PLACEHOLDER_URL,
            timeout_seconds=_parse_float(env.get(ENV_TIMEOUT), ENV_TIMEOUT, DEFAULT_TIMEOUT_SECONDS),
            retry_count=_parse_int(env.get(ENV_RETRY_COUNT), ENV_RETRY_COUNT, 0),
        )


def _parse_float(value: str | None, name: str, default: float) -> float:
    if value is None or not value.strip():
        return default
    try:
        return float(value)
    except ValueError as exc:
        raise ConfigError(f"{name} must be a number.") from exc


def _parse_int(value: str | None, name: str, default: int) -> int:
    if value is None or not value.strip():
        return default
    try:
        return int(value.strip())
    except ValueError as exc:
        raise ConfigError(f"{name} must be an integer.") from exc
