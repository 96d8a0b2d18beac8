"""Async Python client for the GuruTvapay payments API."""

from __future__ import annotations

import asyncio
import logging
import time
from typing import Any, Callable, Dict, Mapping, Optional, Union

import httpx
from pydantic import ValidationError

from .auth import AuthProvider, Token
from .config import ClientConfig
from .dispatcher import RetryDispatcher, Sleep
from .errors import AuthenticationError, ConfigurationError
from .models import CreatePaymentRequest, LoginResponse
from .transport import Body, FormBody, JsonBody, RawBody, RequestSpec, build_url
from .webhooks import verify_webhook

logger = logging.getLogger("gurutvapay.client")


class GuruTvapayClient:
    def __init__(
        self,
        config: Optional[ClientConfig] = None,
        *,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        sleep: Sleep = asyncio.sleep,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._config = config or ClientConfig()
        self._clock = clock
        self._client = httpx.AsyncClient(timeout=self._config.timeout, transport=transport)
        self._auth = AuthProvider(self._config, clock=clock)
        self._dispatcher = RetryDispatcher(
            self._client,
            timeout=self._config.timeout,
            max_retries=self._config.max_retries,
            backoff_factor=self._config.backoff_factor,
            sleep=sleep,
        )

    @classmethod
    def from_env(cls, **kwargs: Any) -> "GuruTvapayClient":
        return cls(ClientConfig.from_env(), **kwargs)

    async def __aenter__(self) -> "GuruTvapayClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    @property
    def config(self) -> ClientConfig:
        return self._config

    @property
    def token(self) -> Optional[Token]:
        return self._auth.token

    def _env_url(self, path: str) -> str:
        return f"{self._config.root}{self._config.env_prefix}{path}"

    def _headers(self, *extra: Optional[Mapping[str, str]]) -> httpx.Headers:
        headers = httpx.Headers({"User-Agent": self._config.user_agent})
        headers.update(self._config.headers)
        for mapping in extra:
            if mapping:
                headers.update(mapping)
        return headers

    async def login_with_password(self, username: str, password: str, grant_type: str = "password") -> Token:
        if not self._config.has_oauth_credentials:
            raise ConfigurationError("client_id and client_secret required")
        spec = RequestSpec(
            method="POST",
            url=self._env_url("/login"),
            headers=self._headers(),
            body=FormBody(
                {
                    "grant_type": grant_type,
                    "username": username,
                    "password": password,
                    "client_id": self._config.client_id,
                    "client_secret": self._config.client_secret,
                }
            ),
        )
        result = await self._dispatcher.dispatch(spec)
        if not isinstance(result, dict):
            raise AuthenticationError("Login failed: unexpected response shape")
        try:
            login = LoginResponse.model_validate(result)
        except ValidationError as exc:
            raise AuthenticationError(f"Login failed: {exc}") from exc
        if not login.access_token:
            raise AuthenticationError("Login failed: no access_token in response")

        token = Token(access_token=login.access_token, expires_at=login.expiry(self._clock()))
        self._auth.store(token)
        logger.info("Logged in to env=%s token expires_at=%s", self._config.env, token.expires_at)
        return token

    async def create_payment(
        self,
        *,
        amount: Union[int, float],
        merchant_order_id: str,
        channel: str = "web",
        purpose: str = "Online Payment",
        customer: Optional[Dict[str, Any]] = None,
        expires_in: Optional[int] = None,
        metadata: Optional[Dict[str, Any]] = None,
        idempotency_key: Optional[str] = None,
        extra_headers: Optional[Mapping[str, str]] = None,
    ) -> Any:
        payment = CreatePaymentRequest(
            amount=amount,
            merchant_order_id=merchant_order_id,
            channel=channel,
            purpose=purpose,
            customer=customer or {},
            expires_in=expires_in,
            metadata=metadata,
        )
        idempotency = {"Idempotency-Key": idempotency_key} if idempotency_key else None
        spec = RequestSpec(
            method="POST",
            url=f"{self._config.root}/initiate-payment",
            headers=self._headers(self._auth.headers(), idempotency, extra_headers),
            body=JsonBody(payment.to_payload()),
        )
        return await self._dispatcher.dispatch(spec)

    async def transaction_status(self, merchant_order_id: str) -> Any:
        spec = RequestSpec(
            method="POST",
            url=self._env_url("/transaction-status"),
            headers=self._headers(self._auth.headers()),
            body=FormBody({"merchantOrderId": merchant_order_id}),
        )
        return await self._dispatcher.dispatch(spec)

    async def transaction_list(self, limit: int = 50, page: int = 0) -> Any:
        spec = RequestSpec(
            method="GET",
            url=self._env_url("/transaction-list"),
            headers=self._headers(self._auth.headers()),
            params={"limit": limit, "page": page},
        )
        return await self._dispatcher.dispatch(spec)

    async def request(
        self,
        method: str,
        path_or_url: str,
        *,
        headers: Optional[Mapping[str, str]] = None,
        params: Optional[Mapping[str, Any]] = None,
        data: Optional[Union[str, bytes, Mapping[str, Any]]] = None,
        json_body: Any = None,
    ) -> Any:
        """Send an arbitrary API call through the retrying dispatcher.

        Relative paths are resolved against the configured root. ``json_body``
        and ``data`` are mutually exclusive; string or bytes ``data`` is sent
        as-is with a form content type unless ``headers`` override it.
        """
        if json_body is not None and data is not None:
            raise ValueError("pass either json_body or data, not both")
        body: Optional[Body] = None
        if json_body is not None:
            body = JsonBody(json_body)
        elif isinstance(data, (str, bytes)):
            body = RawBody(data)
        elif data is not None:
            body = FormBody(data)

        spec = RequestSpec(
            method=method,
            url=build_url(self._config.root, path_or_url),
            headers=self._headers(self._auth.headers(), headers),
            params=params,
            body=body,
        )
        return await self._dispatcher.dispatch(spec)

    verify_webhook = staticmethod(verify_webhook)

    async def aclose(self) -> None:
        await self._client.aclose()


__all__ = ["GuruTvapayClient"]
