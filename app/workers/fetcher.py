"""Async HTTP page fetcher.

Responsible solely for retrieving the HTML body of a URL.  Every failure is
raised as :class:`FetchError` carrying a tagged :class:`FetchFailure`, so the
caller never has to inspect httpx exceptions itself.

Uses httpx.AsyncClient which is meant to be long-lived and reused.
A single shared client is managed by the module; see ``get_http_client``
and ``close_http_client`` for lifecycle hooks.
"""

from __future__ import annotations

import errno
import logging
import random
import socket
from typing import Optional

import httpx
from tenacity import (
    before_sleep_log,
    retry,
    retry_if_exception_type,
    wait_exponential,
)

from app.core.config import settings
from app.models.metadata.failure import FetchFailure, NetworkCode

logger = logging.getLogger(__name__)

USER_AGENTS = [
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/125.0.0.0 Safari/537.36",
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/125.0.0.0 Safari/537.36",
    "Mozilla/5.0 (X11; Linux x86_64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/124.0.0.0 Safari/537.36",
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64; rv:126.0) Gecko/20100101 Firefox/126.0",
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10.15; rv:126.0) Gecko/20100101 Firefox/126.0",
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/605.1.15 (KHTML, like Gecko) Version/17.4 Safari/605.1.15",
]

_ACCEPT = "text/html,application/xhtml+xml,application/xml;q=0.9,image/webp,image/apng,*/*;q=0.8"

# Fragments of resolver / socket error text, used when no OSError is chained.
_UNRESOLVABLE_HINTS = (
    "name or service not known",
    "nodename nor servname",
    "getaddrinfo failed",
    "temporary failure in name resolution",
    "no address associated with hostname",
)
_REFUSED_HINTS = ("connection refused", "actively refused")
_TIMED_OUT_HINTS = ("timed out",)

# Module-level shared client
_http_client: Optional[httpx.AsyncClient] = None


def get_http_client() -> httpx.AsyncClient:
    """Return the shared AsyncClient.  Creates one if missing."""
    global _http_client  # noqa: PLW0603
    if _http_client is None or _http_client.is_closed:
        _http_client = httpx.AsyncClient(
            timeout=httpx.Timeout(settings.http_timeout),
            follow_redirects=True,
            max_redirects=settings.http_max_redirects,
            verify=settings.http_verify_ssl,
        )
    return _http_client


async def close_http_client() -> None:
    """Close the shared AsyncClient gracefully."""
    global _http_client  # noqa: PLW0603
    if _http_client is not None and not _http_client.is_closed:
        await _http_client.aclose()
        _http_client = None
        logger.info("HTTP client closed.")


class FetchError(Exception):
    """Raised when the target page cannot be retrieved."""

    def __init__(self, failure: FetchFailure) -> None:
        super().__init__(failure.message)
        self.failure = failure


def build_request_headers() -> dict[str, str]:
    """Browser-like request headers with a rotated User-Agent."""
    return {
        "User-Agent": random.choice(USER_AGENTS),
        "Accept": _ACCEPT,
        "Accept-Language": settings.http_accept_language,
        "DNT": "1",
        "Upgrade-Insecure-Requests": "1",
    }


def _network_code(exc: BaseException) -> NetworkCode | None:
    """Find the socket-level reason behind a connect failure."""
    seen: set[int] = set()
    current: BaseException | None = exc
    while current is not None and id(current) not in seen:
        seen.add(id(current))
        if isinstance(current, socket.gaierror):
            return NetworkCode.HOST_UNRESOLVABLE
        if isinstance(current, ConnectionRefusedError):
            return NetworkCode.CONNECTION_REFUSED
        if isinstance(current, TimeoutError) or getattr(current, "errno", None) == errno.ETIMEDOUT:
            return NetworkCode.TIMED_OUT
        current = current.__cause__ or current.__context__

    text = str(exc).lower()
    if any(hint in text for hint in _UNRESOLVABLE_HINTS):
        return NetworkCode.HOST_UNRESOLVABLE
    if any(hint in text for hint in _REFUSED_HINTS):
        return NetworkCode.CONNECTION_REFUSED
    if any(hint in text for hint in _TIMED_OUT_HINTS):
        return NetworkCode.TIMED_OUT
    return None


def failure_from_exception(exc: Exception) -> FetchFailure:
    """Translate an httpx exception into a tagged ``FetchFailure``."""
    message = str(exc) or exc.__class__.__name__
    # connect, read, write and pool timeouts are all the client budget firing
    if isinstance(exc, httpx.TimeoutException):
        return FetchFailure.aborted(message)
    if isinstance(exc, httpx.ConnectError):
        code = _network_code(exc)
        if code is not None:
            return FetchFailure.network(code, message)
    return FetchFailure.other(message)


@retry(
    retry=retry_if_exception_type((httpx.ConnectError, httpx.ConnectTimeout)),
    stop=lambda rs: rs.attempt_number >= settings.http_max_retries + 1,
    wait=wait_exponential(multiplier=0.5, min=0.5, max=10),
    before_sleep=before_sleep_log(logger, logging.WARNING),
    reraise=True,
)
async def _get_with_retry(url: str) -> httpx.Response:
    """Single GET attempt; tenacity retries on connect failures when enabled."""
    client = get_http_client()
    return await client.get(url, headers=build_request_headers())


async def fetch_page(url: str) -> str:
    """Fetch *url* and return its body text.

    Any non-2xx final response is a failure.  The ``stop`` condition of the
    retry policy reads ``settings.http_max_retries`` per attempt, so patches
    in tests work as expected.

    Raises:
        FetchError: on any transport failure or non-2xx upstream status.
    """
    try:
        response = await _get_with_retry(url)
    except (httpx.HTTPError, httpx.InvalidURL) as exc:
        raise FetchError(failure_from_exception(exc)) from exc

    if not response.is_success:
        raise FetchError(
            FetchFailure.upstream(
                response.status_code,
                f"Request failed with status code {response.status_code}",
            )
        )
    return response.text
