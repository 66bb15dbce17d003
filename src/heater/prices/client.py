"""Price feed client interface and its HTTP implementation.

The cache depends only on ``PriceClient``; the transport stays here.
"""

import asyncio
import http.client
import json
import urllib.error
import urllib.request
from abc import ABC, abstractmethod
from typing import Any

from heater.exceptions import DecodeError, FetchError
from heater.logging import get_logger

logger = get_logger(__name__)


class PriceClient(ABC):
    """Abstract source of day-ahead price schedule documents."""

    @abstractmethod
    async def fetch_schedule(self, url: str) -> dict[str, Any]:
        """Fetch the raw schedule document from ``url``.

        Raises:
            FetchError: The feed could not be reached or returned an error.
            DecodeError: The response body is not a JSON object.
        """
        ...


class HttpPriceClient(PriceClient):
    """Fetches schedules over HTTP(S) with stdlib urllib.

    The blocking request runs in a worker thread so the event loop (and the
    price cache lock) is never held during network I/O.

    Args:
        timeout: Socket timeout in seconds for each request.
    """

    def __init__(self, timeout: float = 30.0) -> None:
        self._timeout = timeout

    async def fetch_schedule(self, url: str) -> dict[str, Any]:
        body = await asyncio.to_thread(self._get, url)
        try:
            document = json.loads(body)
        except ValueError as e:
            raise DecodeError(f"price feed returned invalid JSON: {e}") from e
        if not isinstance(document, dict):
            raise DecodeError(f"price feed returned {type(document).__name__}, expected object")
        return document

    def _get(self, url: str) -> bytes:
        headers = {"Accept": "application/json", "User-Agent": "price-heater/1.0"}
        req = urllib.request.Request(url, headers=headers)

        try:
            with urllib.request.urlopen(req, timeout=self._timeout) as resp:
                status = resp.status
                # urlopen raises HTTPError for 4xx/5xx; this catches a 1xx/3xx that gets through
                if not 200 <= status < 300:
                    raise FetchError(f"unexpected response code: {status}")
                return resp.read()
        except urllib.error.HTTPError as e:
            raise FetchError(f"unexpected response code: {e.code}") from e
        except (urllib.error.URLError, http.client.HTTPException, OSError) as e:
            logger.debug("price_feed_request_failed", url=url, error=str(e))
            raise FetchError(f"price feed request failed: {e}") from e
