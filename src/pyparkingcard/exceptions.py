"""Library exceptions."""

from __future__ import annotations


class PyParkingCardError(Exception):
    """Base exception for the library."""

    error_type = "unknown"
    default_error_code: str | None = None

    def __init__(
        self,
        message: str | None = None,
        *,
        error_code: str | None = None,
        detail: str | None = None,
        user_message: str | None = None,
    ) -> None:
        text = message if message is not None else detail
        super().__init__(text or "")
        self.error_code = error_code if error_code is not None else self.default_error_code
        self.detail = detail if detail is not None else message
        self.user_message = user_message


class AuthError(PyParkingCardError):
    """Raised when the API rejects the bearer credential."""

    error_type = "auth"
    default_error_code = "auth_error"


class NetworkError(PyParkingCardError):
    """Raised when network communication fails."""

    error_type = "network"
    default_error_code = "network_error"


class ValidationError(PyParkingCardError):
    """Raised when inputs fail validation."""

    error_type = "validation"
    default_error_code = "validation_error"


class ApiError(PyParkingCardError):
    """Raised when the API returns an error status or an unreadable body."""

    error_type = "api"
    default_error_code = "api_error"


class ConfigError(PyParkingCardError):
    """Raised when configuration is missing or invalid."""

    error_type = "config"
    default_error_code = "config_error"
