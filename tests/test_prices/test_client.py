"""Tests for HttpPriceClient with urllib mocked out (no real network calls)."""

import http.client
import io
import urllib.error
from unittest.mock import MagicMock, patch

import pytest

from heater.exceptions import DecodeError, FetchError
from heater.prices.client import HttpPriceClient

URL = "https://prices.example/api/day-ahead"


def _response(body: bytes, status: int = 200) -> MagicMock:
    resp = MagicMock()
    resp.status = status
    resp.read.return_value = body
    resp.__enter__.return_value = resp
    resp.__exit__.return_value = False
    return resp


class TestHttpPriceClient:
    @pytest.mark.asyncio
    async def test_returns_parsed_document(self) -> None:
        body = b'{"today": null, "tomorrow": null}'
        with patch("urllib.request.urlopen", return_value=_response(body)) as urlopen:
            document = await HttpPriceClient(timeout=5.0).fetch_schedule(URL)

        assert document == {"today": None, "tomorrow": None}
        request = urlopen.call_args.args[0]
        assert request.full_url == URL
        assert request.get_header("Accept") == "application/json"
        assert urlopen.call_args.kwargs["timeout"] == 5.0

    @pytest.mark.asyncio
    async def test_non_2xx_status_raises_fetch_error(self) -> None:
        with patch("urllib.request.urlopen", return_value=_response(b"{}", status=304)):
            with pytest.raises(FetchError, match="304"):
                await HttpPriceClient().fetch_schedule(URL)

    @pytest.mark.asyncio
    async def test_http_error_raises_fetch_error(self) -> None:
        error = urllib.error.HTTPError(URL, 503, "Service Unavailable", {}, io.BytesIO(b""))
        with patch("urllib.request.urlopen", side_effect=error):
            with pytest.raises(FetchError, match="503"):
                await HttpPriceClient().fetch_schedule(URL)

    @pytest.mark.asyncio
    async def test_connection_error_raises_fetch_error(self) -> None:
        with patch("urllib.request.urlopen", side_effect=urllib.error.URLError("refused")):
            with pytest.raises(FetchError):
                await HttpPriceClient().fetch_schedule(URL)

    @pytest.mark.asyncio
    async def test_timeout_raises_fetch_error(self) -> None:
        with patch("urllib.request.urlopen", side_effect=TimeoutError("timed out")):
            with pytest.raises(FetchError):
                await HttpPriceClient().fetch_schedule(URL)

    @pytest.mark.asyncio
    async def test_truncated_body_raises_fetch_error(self) -> None:
        resp = _response(b"")
        resp.read.side_effect = http.client.IncompleteRead(b"{", 10)
        with patch("urllib.request.urlopen", return_value=resp):
            with pytest.raises(FetchError, match="request failed"):
                await HttpPriceClient().fetch_schedule(URL)

    @pytest.mark.asyncio
    async def test_invalid_json_raises_decode_error(self) -> None:
        with patch("urllib.request.urlopen", return_value=_response(b"<html>oops</html>")):
            with pytest.raises(DecodeError):
                await HttpPriceClient().fetch_schedule(URL)

    @pytest.mark.asyncio
    async def test_non_object_json_raises_decode_error(self) -> None:
        with patch("urllib.request.urlopen", return_value=_response(b"[1, 2, 3]")):
            with pytest.raises(DecodeError):
                await HttpPriceClient().fetch_schedule(URL)
