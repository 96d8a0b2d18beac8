"""Configuration objects for the GuruTvapay Python client."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Dict, Mapping, Optional

from .errors import ConfigurationError

DEFAULT_ROOT = "https://api.gurutvapay.com"
ENV_PREFIXES: Dict[str, str] = {"uat": "/uat_mode", "live": "/live"}


@dataclass(frozen=True)
class ClientConfig:
    env: str = "uat"
    api_key: Optional[str] = None
    client_id: Optional[str] = None
    client_secret: Optional[str] = None
    root: str = DEFAULT_ROOT
    timeout: float = 30.0
    max_retries: int = 3
    backoff_factor: float = 0.5
    user_agent: str = "gurutvapay-python/0.1.0"
    headers: Dict[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if self.env not in ENV_PREFIXES:
            raise ConfigurationError("env must be 'uat' or 'live'")
        if self.timeout <= 0:
            raise ConfigurationError("timeout must be positive")
        if self.max_retries < 0:
            raise ConfigurationError("max_retries must not be negative")
        if self.backoff_factor < 0:
            raise ConfigurationError("backoff_factor must not be negative")
        object.__setattr__(self, "root", self.root.rstrip("/"))

    @property
    def env_prefix(self) -> str:
        return ENV_PREFIXES[self.env]

    @property
    def has_oauth_credentials(self) -> bool:
        return bool(self.client_id and self.client_secret)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "ClientConfig":
        values = os.environ if environ is None else environ

        def number(key: str, default: str, cast):
            raw = values.get(key, default)
            try:
                return cast(raw)
            except ValueError as exc:
                raise ConfigurationError(f"{key} must be a number, got '{raw}'") from exc

        return cls(
            env=values.get("GURUTVA_ENV", "uat").strip().lower(),
            api_key=values.get("GURUTVA_API_KEY") or None,
            client_id=values.get("GURUTVA_CLIENT_ID") or None,
            client_secret=values.get("GURUTVA_CLIENT_SECRET") or None,
            root=values.get("GURUTVA_ROOT", DEFAULT_ROOT),
            timeout=number("GURUTVA_TIMEOUT", "30", float),
            max_retries=number("GURUTVA_MAX_RETRIES", "3", int),
            backoff_factor=number("GURUTVA_BACKOFF_FACTOR", "0.5", float),
        )


__all__ = ["ClientConfig", "DEFAULT_ROOT", "ENV_PREFIXES"]
