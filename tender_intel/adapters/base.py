"""Base adapter interface and shared HTTP session for procurement sources."""

import logging
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List, Optional

import httpx
from tenacity import (
    retry,
    stop_after_attempt,
    wait_exponential,
    retry_if_exception_type,
    retry_if_not_exception_type,
    before_sleep_log,
)

logger = logging.getLogger(__name__)

# Standard per-call timeout for all adapters
ADAPTER_TIMEOUT = httpx.Timeout(30.0)

DEFAULT_MAX_PAGES = 5

DEFAULT_HEADERS = {
    "User-Agent": (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
        "AppleWebKit/537.36 (KHTML, like Gecko) "
        "Chrome/121.0.0.0 Safari/537.36"
    ),
    "Accept-Language": "en-GB,en;q=0.9",
    "Accept": "application/json, text/html;q=0.9, application/rss+xml;q=0.9, */*;q=0.8",
}

# Shared query list for keyword sweeps across every source
FALLBACK_KEYWORDS = (
    "supply of electricity",
    "electricity supply",
    "power purchase agreement",
    "licensed electricity supplier",
    "electricity procurement",
)


class RetryableStatusError(Exception):
    """Raised on 429 / 5xx so tenacity retries."""

    def __init__(self, status_code: int, url: str):
        super().__init__(f"status={status_code} url={url}")
        self.status_code = status_code


class SourceUnavailableError(Exception):
    """Raised when every query an adapter attempted has failed."""


def adapter_retry():
    """Retry decorator for adapter HTTP calls: 3 attempts, exponential backoff.

    A timeout fails the query at once; only connection errors, 429 and 5xx
    are retried.
    """
    return retry(
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, min=1, max=10),
        retry=(
            retry_if_exception_type((httpx.TransportError, RetryableStatusError))
            & retry_if_not_exception_type(httpx.TimeoutException)
        ),
        before_sleep=before_sleep_log(logger, logging.WARNING),
        reraise=True,
    )


def days_ago_iso(days: int, now: Optional[datetime] = None) -> str:
    """Date string (YYYY-MM-DD) for `days` days before now."""
    now = now or datetime.now(timezone.utc)
    return (now - timedelta(days=days)).date().isoformat()


class SourceSession:
    """One HTTP client per adapter run.

    Every query goes through get_json/get_text. A failed query (timeout,
    transport error, non-2xx, unparseable body) is logged and returns None so
    it contributes zero notices. The session counts attempted and failed
    queries so the adapter can tell partial failure from total failure.
    """

    def __init__(
        self,
        source_name: str,
        timeout: httpx.Timeout = ADAPTER_TIMEOUT,
        headers: Optional[Dict[str, str]] = None,
    ):
        self.source_name = source_name
        self.attempted = 0
        self.failed = 0
        self._client = httpx.AsyncClient(
            timeout=timeout,
            headers=headers or DEFAULT_HEADERS,
            follow_redirects=True,
        )

    async def __aenter__(self) -> "SourceSession":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self._client.aclose()

    @property
    def all_failed(self) -> bool:
        return self.attempted > 0 and self.failed == self.attempted

    @adapter_retry()
    async def _send(self, url: str, params: Optional[Dict[str, Any]]) -> httpx.Response:
        response = await self._client.get(url, params=params)
        if response.status_code == 429 or response.status_code >= 500:
            raise RetryableStatusError(response.status_code, url)
        response.raise_for_status()
        return response

    async def _get(self, url: str, params: Optional[Dict[str, Any]]) -> Optional[httpx.Response]:
        self.attempted += 1
        start = time.monotonic()
        try:
            response = await self._send(url, params)
        except (httpx.HTTPError, RetryableStatusError) as exc:
            self.failed += 1
            logger.warning(
                "query_failed source=%s url=%s duration_ms=%.0f error='%s'",
                self.source_name,
                url,
                (time.monotonic() - start) * 1000,
                exc,
            )
            return None

        logger.debug(
            "query_complete source=%s url=%s status=%d duration_ms=%.0f",
            self.source_name,
            response.url,
            response.status_code,
            (time.monotonic() - start) * 1000,
        )
        return response

    async def get_json(self, url: str, params: Optional[Dict[str, Any]] = None) -> Optional[Any]:
        response = await self._get(url, params)
        if response is None:
            return None
        try:
            return response.json()
        except ValueError as exc:
            self.failed += 1
            logger.warning(
                "query_failed source=%s url=%s error='invalid JSON: %s'",
                self.source_name,
                url,
                exc,
            )
            return None

    async def get_text(self, url: str, params: Optional[Dict[str, Any]] = None) -> Optional[str]:
        response = await self._get(url, params)
        if response is None:
            return None
        return response.text


@dataclass
class SourceRun:
    """Outcome of one adapter run, folded by the orchestrator."""

    items: List[Any] = field(default_factory=list)
    ok: bool = True
    error: Optional[str] = None


class BaseAdapter(ABC):
    """Abstract base class for procurement source adapters."""

    # Health-only adapters report ok on success even when they find nothing
    health_only: bool = False

    def __init__(self, timeout: float = 30.0, max_pages: int = DEFAULT_MAX_PAGES):
        self.timeout = httpx.Timeout(timeout)
        self.max_pages = max_pages

    @property
    @abstractmethod
    def source_name(self) -> str:
        """Source identifier reported in SourceHealth."""
        pass

    @abstractmethod
    async def collect(self, session: SourceSession, days: int) -> List[Any]:
        """Fetch and normalize notices published in the last `days` days.

        Individual query failures are absorbed by the session; implementations
        return whatever they managed to collect.
        """
        pass

    def open_session(self) -> SourceSession:
        return SourceSession(self.source_name, timeout=self.timeout)

    async def run(self, days: int) -> SourceRun:
        """Collect with full error handling - never raises.

        This is the entry point callers should use for partial-failure isolation.
        """
        start = time.monotonic()
        try:
            async with self.open_session() as session:
                items = await self.collect(session, days)
                if session.all_failed:
                    raise SourceUnavailableError(
                        f"all {session.attempted} queries failed"
                    )
        except Exception as exc:
            logger.error(
                "fetch_complete source=%s result=failure error='%s' duration_ms=%.0f",
                self.source_name,
                exc,
                (time.monotonic() - start) * 1000,
            )
            return SourceRun(items=[], ok=False, error=str(exc))

        logger.info(
            "fetch_complete source=%s result=success count=%d duration_ms=%.0f",
            self.source_name,
            len(items),
            (time.monotonic() - start) * 1000,
        )
        return SourceRun(items=items, ok=True)
