"""Error taxonomy for selection validation and provider fetches."""

from enum import StrEnum


class InvalidWeekday(ValueError):
    """Raised when a weekday name is not one of the seven English names."""

    def __init__(self, name: str):
        super().__init__(f"Unknown weekday: {name!r}")
        self.name = name


class InvalidHour(ValueError):
    """Raised for an hour outside 0-23 or an empty hour range."""


class EmptyLocation(ValueError):
    """Raised for a blank or whitespace-only location."""

    def __init__(self) -> None:
        super().__init__("Location must not be empty")


class FetchErrorKind(StrEnum):
    BAD_LOCATION = "bad_location"
    AUTH_ERROR = "auth_error"
    RATE_LIMITED = "rate_limited"
    UPSTREAM_ERROR = "upstream_error"
    NETWORK_ERROR = "network_error"


class FetchError(Exception):
    """Raised by the forecast provider client."""

    kind: FetchErrorKind = FetchErrorKind.UPSTREAM_ERROR

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class BadLocationError(FetchError):
    kind = FetchErrorKind.BAD_LOCATION


class AuthError(FetchError):
    kind = FetchErrorKind.AUTH_ERROR


class RateLimitedError(FetchError):
    kind = FetchErrorKind.RATE_LIMITED


class UpstreamError(FetchError):
    kind = FetchErrorKind.UPSTREAM_ERROR


class NetworkError(FetchError):
    kind = FetchErrorKind.NETWORK_ERROR


class PayloadDecodeError(UpstreamError):
    """Raised when the provider JSON cannot be decoded into a forecast."""


class FetchFailed(Exception):
    """Wraps a provider error surfaced by the orchestrator."""

    def __init__(self, cause: FetchError):
        super().__init__(cause.message)
        self.cause = cause

    @property
    def kind(self) -> FetchErrorKind:
        return self.cause.kind

    @property
    def message(self) -> str:
        return self.cause.message
