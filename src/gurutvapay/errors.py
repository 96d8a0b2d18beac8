"""Exception hierarchy for the GuruTvapay client."""

from __future__ import annotations

from typing import Optional

_SNIPPET_LIMIT = 500


def _snippet(body: str) -> str:
    if len(body) <= _SNIPPET_LIMIT:
        return body
    return body[:_SNIPPET_LIMIT] + "..."


class GuruTvapayError(Exception):
    """Base class for every error raised by this package."""


class ConfigurationError(GuruTvapayError):
    """Raised when the client is missing configuration an operation needs."""


class AuthenticationError(GuruTvapayError):
    """Raised when a login exchange does not yield a usable access token."""


class HttpError(GuruTvapayError):
    """A non-2xx response from the API."""

    def __init__(self, status_code: int, body: str = "", url: Optional[str] = None) -> None:
        self.status_code = status_code
        self.body = body
        self.url = url
        super().__init__(self._describe())

    def _describe(self) -> str:
        return f"HTTP {self.status_code}: {_snippet(self.body)}"


class AuthError(HttpError):
    """401/403 from the API. Never retried."""

    def _describe(self) -> str:
        return f"AuthError: {self.status_code} {_snippet(self.body)}"


class NotFoundError(HttpError):
    def _describe(self) -> str:
        return f"NotFound: {self.url}"


class RateLimitError(HttpError):
    """429 after the retry budget ran out, or without a Retry-After hint."""

    def __init__(
        self,
        status_code: int,
        body: str = "",
        url: Optional[str] = None,
        retry_after: Optional[float] = None,
    ) -> None:
        self.retry_after = retry_after
        super().__init__(status_code, body, url)

    def _describe(self) -> str:
        return f"RateLimit: {_snippet(self.body)}"


class TransportError(GuruTvapayError):
    """Network failure or attempt timeout that outlived the retry budget."""

    def __init__(self, message: str, cause: Optional[BaseException] = None, url: Optional[str] = None) -> None:
        self.cause = cause
        self.url = url
        super().__init__(message)


__all__ = [
    "GuruTvapayError",
    "ConfigurationError",
    "AuthenticationError",
    "HttpError",
    "AuthError",
    "NotFoundError",
    "RateLimitError",
    "TransportError",
]
