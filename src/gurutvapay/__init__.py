"""GuruTvapay Python SDK."""

from .auth import Token
from .client import GuruTvapayClient
from .config import ClientConfig
from .errors import (
    AuthError,
    AuthenticationError,
    ConfigurationError,
    GuruTvapayError,
    HttpError,
    NotFoundError,
    RateLimitError,
    TransportError,
)
from .webhooks import sign_webhook, verify_webhook

__all__ = [
    "GuruTvapayClient",
    "ClientConfig",
    "Token",
    "GuruTvapayError",
    "ConfigurationError",
    "AuthenticationError",
    "AuthError",
    "NotFoundError",
    "RateLimitError",
    "HttpError",
    "TransportError",
    "sign_webhook",
    "verify_webhook",
]
