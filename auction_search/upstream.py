# auction_search/upstream.py
"""HTTP client for the upstream auction service.

Fetches items changed since a watermark. Transport failures, 5xx/408 responses
and 404 (service not up yet) are retried with a fixed delay until they succeed or the client is stopped; anything
else that goes wrong surfaces as :class:`UpstreamError`.
"""
import threading
from datetime import datetime
from typing import List, Optional
from urllib.parse import urljoin

import requests
from pydantic import TypeAdapter, ValidationError
from requests import Response, Session

from .schemas import ItemIn
from .utils import as_utc, logger, retry

RETRY_STATUSES = frozenset({404, 408})

_ITEMS = TypeAdapter(List[ItemIn])


class UpstreamError(Exception):
    """Raised for upstream failures that retrying will not fix."""


class TransientUpstreamError(Exception):
    """Raised for responses worth retrying (not ready yet, server errors)."""

    def __init__(self, status_code: int, url: str):
        super().__init__(f"upstream returned {status_code} for {url}")
        self.status_code = status_code


RETRYABLE = (TransientUpstreamError, requests.ConnectionError, requests.Timeout)


class UpstreamClient:
    def __init__(
        self,
        *,
        base_url: str,
        items_path: str = "/items",
        retry_delay: float = 3.0,
        timeout: float | None = None,
        session: Session | None = None,
        sleep=None,
        stop: threading.Event | None = None,
    ) -> None:
        self.url = urljoin(base_url.rstrip("/") + "/", items_path.lstrip("/"))
        self.timeout = timeout
        self.session = session or requests.Session()
        # setting `stop` ends a running retry loop with UpstreamError
        self.stop = stop or threading.Event()
        self._sleep = sleep or self.stop.wait
        self._get = retry(RETRYABLE, tries=None, delay=retry_delay, backoff=1, sleep=self._pause)(self._get_once)

    @classmethod
    def from_settings(cls, settings, **kwargs) -> "UpstreamClient":
        return cls(
            base_url=settings.upstream_base_url,
            items_path=settings.upstream_items_path,
            retry_delay=settings.upstream_retry_delay,
            timeout=settings.upstream_timeout,
            **kwargs,
        )

    def fetch_since(self, watermark: Optional[datetime] = None) -> List[ItemIn]:
        """Return every item updated after `watermark`, or all items when it is None."""
        date = as_utc(watermark).isoformat() if watermark else ""
        response = self._get({"date": date})
        try:
            payload = response.json()
        except ValueError as e:
            raise UpstreamError(f"response from {self.url} is not JSON: {e}") from e
        try:
            return _ITEMS.validate_python(payload)
        except ValidationError as e:
            raise UpstreamError(f"unexpected item payload from {self.url}: {e}") from e

    def _get_once(self, params) -> Response:
        response = self.session.get(self.url, params=params, timeout=self.timeout)
        status = response.status_code
        if status in RETRY_STATUSES or status >= 500:
            raise TransientUpstreamError(status, self.url)
        if status >= 400:
            raise UpstreamError(f"upstream returned {status} for {self.url}")
        logger.debug("GET %s date=%r -> %s", self.url, params.get("date"), status)
        return response

    def _pause(self, delay):
        self._sleep(delay)
        if self.stop.is_set():
            raise UpstreamError(f"fetch from {self.url} cancelled")
