"""Bearer credential selection for outgoing requests."""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Callable, Dict, Optional

from .config import ClientConfig

# Tokens this close to expiry are treated as already expired.
EXPIRY_MARGIN_SECONDS = 10.0


@dataclass(frozen=True)
class Token:
    access_token: str
    expires_at: float

    def is_valid(self, now: float) -> bool:
        return now < self.expires_at - EXPIRY_MARGIN_SECONDS


class AuthProvider:
    """Decides which Authorization header, if any, a request carries.

    The provider owns the cached token. ``store`` replaces it wholesale, so
    concurrent logins resolve as last write wins; callers that need stricter
    behaviour serialize their own logins.
    """

    def __init__(self, config: ClientConfig, *, clock: Callable[[], float] = time.time) -> None:
        self._config = config
        self._clock = clock
        self._token: Optional[Token] = None

    @property
    def token(self) -> Optional[Token]:
        return self._token

    def store(self, token: Token) -> None:
        self._token = token

    def clear(self) -> None:
        self._token = None

    def headers(self) -> Dict[str, str]:
        if self._config.api_key:
            return {"Authorization": f"Bearer {self._config.api_key}"}
        token = self._token
        if token is not None and token.is_valid(self._clock()):
            return {"Authorization": f"Bearer {token.access_token}"}
        return {}


__all__ = ["AuthProvider", "Token", "EXPIRY_MARGIN_SECONDS"]
