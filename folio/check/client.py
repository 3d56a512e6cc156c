"""HTTP client for link checking, with rate limiting and retry logic.

Link checks only need status codes, so this uses the standard library and
runs blocking requests in a worker thread.
"""

from __future__ import annotations

import asyncio
import http.client
import time
import urllib.error
import urllib.request
from dataclasses import dataclass
from datetime import UTC, datetime
from email.utils import parsedate_to_datetime
from typing import Any
from urllib.parse import urlsplit

from ..config import CONNECT_TIMEOUT, MAX_RETRIES, RATE_LIMIT, READ_TIMEOUT, USER_AGENT

# Failures worth another attempt. InvalidURL is an HTTPException too, but never retried.
RETRYABLE_ERRORS = (OSError, http.client.HTTPException)


@dataclass(frozen=True)
class HTTPError(Exception):
    """Raised when retries are exhausted on a retryable status."""

    url: str
    status_code: int
    headers: dict[str, str]

    def __str__(self) -> str:  # pragma: no cover - trivial
        return f"HTTP {self.status_code} for {self.url}"


@dataclass(frozen=True)
class Response:
    status: int
    url: str
    headers: dict[str, str]


class _Bucket:
    __slots__ = ("tokens", "last_update")

    def __init__(self, tokens: float):
        self.tokens = tokens
        self.last_update = time.monotonic()


class HostRateLimiter:
    """Token bucket per host; links to different hosts do not share a budget."""

    def __init__(self, rate: float = RATE_LIMIT, burst: float | None = None):
        if rate <= 0:
            raise ValueError("rate must be > 0")
        self.rate = float(rate)
        self.burst = float(burst if burst is not None else rate)
        self._buckets: dict[str, _Bucket] = {}
        self._lock = asyncio.Lock()

    async def acquire(self, url: str) -> None:
        """Wait until the host of ``url`` has a token available."""
        host = urlsplit(url).netloc.lower()
        while True:
            async with self._lock:
                bucket = self._buckets.setdefault(host, _Bucket(self.burst))
                now = time.monotonic()
                bucket.tokens = min(self.burst, bucket.tokens + (now - bucket.last_update) * self.rate)
                bucket.last_update = now

                if bucket.tokens >= 1.0:
                    bucket.tokens -= 1.0
                    return

                wait_time = (1.0 - bucket.tokens) / self.rate

            await asyncio.sleep(wait_time)


class LinkClient:
    """Async status-code client: HEAD first, GET when HEAD is not allowed."""

    def __init__(
        self,
        user_agent: str = USER_AGENT,
        rate_limit: float = RATE_LIMIT,
        max_retries: int = MAX_RETRIES,
        backoff: float = 1.0,
    ):
        self.user_agent = user_agent
        self._rate_limiter = HostRateLimiter(rate_limit)
        self._max_retries = max(1, int(max_retries))
        self._backoff = backoff

    async def status(self, url: str) -> Response:
        """Final response for ``url`` after redirects and retries."""
        resp = await self._fetch_with_retry(url, "HEAD")
        if resp.status in (405, 501):
            resp = await self._fetch_with_retry(url, "GET")
        return resp

    async def __aenter__(self) -> "LinkClient":
        return self

    async def __aexit__(self, *args: Any) -> None:
        return None

    async def _fetch_with_retry(self, url: str, method: str) -> Response:
        backoff = self._backoff

        for attempt in range(1, self._max_retries + 1):
            await self._rate_limiter.acquire(url)
            try:
                resp = await asyncio.to_thread(self._fetch_sync, url, method)
            except http.client.InvalidURL:
                raise
            except RETRYABLE_ERRORS:
                if attempt >= self._max_retries:
                    raise
                await asyncio.sleep(backoff)
                backoff = min(backoff * 2.0, 10.0)
                continue

            # Retry on rate limit or server errors; 501 means "method not supported".
            if resp.status == 429 or (resp.status >= 500 and resp.status != 501):
                if attempt >= self._max_retries:
                    raise HTTPError(url=url, status_code=resp.status, headers=resp.headers)
                retry_after = parse_retry_after(resp.headers)
                await asyncio.sleep(retry_after if retry_after is not None else backoff)
                backoff = min(backoff * 2.0, 10.0)
                continue

            return resp

        raise RuntimeError("unreachable")

    def _fetch_sync(self, url: str, method: str) -> Response:
        # urllib only has a single timeout, so we pick the larger of connect/read.
        timeout = max(float(CONNECT_TIMEOUT), float(READ_TIMEOUT))
        req = urllib.request.Request(url, headers={"User-Agent": self.user_agent}, method=method)

        try:
            with urllib.request.urlopen(req, timeout=timeout) as resp:
                return Response(
                    status=int(getattr(resp, "status", 200)),
                    url=resp.geturl(),
                    headers={k: v for k, v in resp.headers.items()},
                )
        except urllib.error.HTTPError as e:
            headers = {k: v for k, v in (e.headers.items() if e.headers else [])}
            return Response(status=int(e.code or 0), url=e.geturl() or url, headers=headers)


def parse_retry_after(headers: dict[str, str], now: datetime | None = None) -> float | None:
    """Seconds to wait from a ``Retry-After`` header (delta-seconds or HTTP-date).

    Capped at 30 seconds.
    """
    value = (headers.get("Retry-After") or "").strip()
    if not value:
        return None
    try:
        seconds = float(value)
    except ValueError:
        try:
            when = parsedate_to_datetime(value)
        except (TypeError, ValueError):
            return None
        if when.tzinfo is None:
            when = when.replace(tzinfo=UTC)
        seconds = (when - (now or datetime.now(UTC))).total_seconds()
    return max(0.0, min(seconds, 30.0))
