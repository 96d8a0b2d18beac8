"""Retrying HTTP dispatch with per-attempt deadlines and exponential backoff.

One logical call runs as a bounded loop of attempts. Each attempt gets its own
deadline; the response is classified and either returned, raised, or retried
after a deterministic backoff:

* 2xx: decoded JSON, or ``{"raw": text}`` when the body is not JSON.
* 401/403, 404 and any other 4xx: raised on the first occurrence.
* 429: retried only when the server sent ``Retry-After``; the wait is the larger
  of the hint and the exponential delay.
* 5xx and transport failures (including the deadline firing): retried.

At most ``max_retries + 1`` attempts are made.
"""

from __future__ import annotations

import asyncio
import json
import logging
import math
from typing import Any, Awaitable, Callable, Optional

import httpx

from .errors import AuthError, HttpError, NotFoundError, RateLimitError, TransportError
from .transport import RequestSpec

logger = logging.getLogger("gurutvapay.dispatch")

Sleep = Callable[[float], Awaitable[None]]


def backoff_delay(backoff_factor: float, attempt: int) -> float:
    """Seconds to wait after ``attempt`` (1-based) attempts have been made."""
    return backoff_factor * (2 ** (attempt - 1))


def parse_retry_after(value: Optional[str]) -> Optional[float]:
    if value is None:
        return None
    try:
        seconds = float(value.strip())
    except ValueError:
        return None
    if not math.isfinite(seconds) or seconds < 0:
        return None
    return seconds


def decode_body(text: str) -> Any:
    try:
        return json.loads(text)
    except ValueError:
        return {"raw": text}


class RetryDispatcher:
    def __init__(
        self,
        client: httpx.AsyncClient,
        *,
        timeout: float,
        max_retries: int,
        backoff_factor: float,
        sleep: Sleep = asyncio.sleep,
    ) -> None:
        self._client = client
        self._timeout = timeout
        self._max_retries = max_retries
        self._backoff_factor = backoff_factor
        self._sleep = sleep

    def _has_budget(self, attempt: int) -> bool:
        return attempt <= self._max_retries

    async def _attempt(self, spec: RequestSpec) -> httpx.Response:
        # wait_for cancels the exchange and releases its timer on every exit path
        return await asyncio.wait_for(self._client.send(spec.to_httpx()), timeout=self._timeout)

    async def _backoff(self, spec: RequestSpec, attempt: int, delay: float, reason: str) -> None:
        logger.warning(
            "Retrying %s %s after attempt=%s reason=%s delay=%.3fs",
            spec.method,
            spec.url,
            attempt,
            reason,
            delay,
        )
        await self._sleep(delay)

    async def dispatch(self, spec: RequestSpec) -> Any:
        attempt = 0
        while True:
            attempt += 1
            try:
                response = await self._attempt(spec)
            except (httpx.RequestError, asyncio.TimeoutError) as exc:
                if self._has_budget(attempt):
                    reason = "timeout" if isinstance(exc, asyncio.TimeoutError) else type(exc).__name__
                    await self._backoff(spec, attempt, backoff_delay(self._backoff_factor, attempt), reason)
                    continue
                logger.error("Request %s %s failed after %s attempts: %r", spec.method, spec.url, attempt, exc)
                if isinstance(exc, asyncio.TimeoutError):
                    message = f"Request timed out after {self._timeout}s"
                else:
                    message = f"Transport failure: {exc}"
                raise TransportError(message, cause=exc, url=spec.url) from exc

            status = response.status_code
            if response.is_success:
                return decode_body(response.text)

            body = response.text
            if status in (401, 403):
                raise AuthError(status, body, spec.url)
            if status == 404:
                raise NotFoundError(status, body, spec.url)
            if status == 429:
                header = response.headers.get("Retry-After")
                retry_after = parse_retry_after(header)
                if header and self._has_budget(attempt):
                    delay = backoff_delay(self._backoff_factor, attempt)
                    if retry_after is not None:
                        delay = max(retry_after, delay)
                    await self._backoff(spec, attempt, delay, "status=429")
                    continue
                logger.error("Rate limited on %s %s after %s attempts", spec.method, spec.url, attempt)
                raise RateLimitError(status, body, spec.url, retry_after=retry_after)
            if status >= 500 and self._has_budget(attempt):
                await self._backoff(spec, attempt, backoff_delay(self._backoff_factor, attempt), f"status={status}")
                continue

            logger.error("Request %s %s failed status=%s body=%s", spec.method, spec.url, status, body[:200])
            raise HttpError(status, body, spec.url)


__all__ = ["RetryDispatcher", "backoff_delay", "decode_body", "parse_retry_after"]
