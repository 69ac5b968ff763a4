"""Tests for the scanner snapshot provider."""

import io
import json
from unittest.mock import MagicMock, patch
from urllib.error import HTTPError, URLError
from urllib.parse import parse_qs, urlparse

import pytest

from sigscan_app.config.defaults import ScannerParams
from sigscan_app.data.provider import ScannerSnapshotProvider
from sigscan_app.errors import SnapshotFetchError


def response(payload) -> MagicMock:
    body = payload if isinstance(payload, bytes) else json.dumps(payload).encode("utf-8")
    mock = MagicMock()
    mock.read.return_value = body
    mock.__enter__.return_value = mock
    return mock


def http_error(code: int) -> HTTPError:
    return HTTPError("https://scanner.example", code, "error", {}, io.BytesIO(b""))


@pytest.fixture
def provider() -> ScannerSnapshotProvider:
    return ScannerSnapshotProvider(ScannerParams(retry_attempts=2, retry_delay_seconds=0.5))


class TestBuildUrl:
    """Request URL construction"""

    def test_query(self, provider):
        url = urlparse(provider.build_url("CRYPTO:BTCUSD"))
        query = parse_qs(url.query)

        assert f"{url.scheme}://{url.netloc}{url.path}" == "https://scanner.tradingview.com/symbol"
        assert query["symbol"] == ["CRYPTO:BTCUSD"]
        assert query["no_404"] == ["true"]
        fields = query["fields"][0].split(",")
        assert "RSI|15" in fields
        assert "Pivot.M.Classic.Middle|15" in fields

    def test_interval(self):
        provider = ScannerSnapshotProvider(interval="60")
        assert "RSI|60" in parse_qs(urlparse(provider.build_url("X")).query)["fields"][0]


class TestFetch:
    """Fetching with retries"""

    @patch("sigscan_app.data.provider.time.sleep")
    @patch("sigscan_app.data.provider.urlopen")
    def test_success(self, mock_urlopen, mock_sleep, provider):
        mock_urlopen.return_value = response({"RSI|15": 41.2, "close|15": 100.0})

        snapshot = provider.fetch("CRYPTO:BTCUSD")

        assert snapshot == {"RSI|15": 41.2, "close|15": 100.0}
        mock_sleep.assert_not_called()

    @patch("sigscan_app.data.provider.time.sleep")
    @patch("sigscan_app.data.provider.urlopen")
    def test_retries_server_errors(self, mock_urlopen, mock_sleep, provider):
        mock_urlopen.side_effect = [http_error(502), URLError("reset"), response({"close|15": 1.0})]

        assert provider.fetch("CRYPTO:BTCUSD") == {"close|15": 1.0}
        assert mock_urlopen.call_count == 3
        assert mock_sleep.call_count == 2
        mock_sleep.assert_called_with(0.5)

    @patch("sigscan_app.data.provider.time.sleep")
    @patch("sigscan_app.data.provider.urlopen")
    def test_gives_up(self, mock_urlopen, mock_sleep, provider):
        mock_urlopen.side_effect = http_error(503)

        with pytest.raises(SnapshotFetchError) as exc_info:
            provider.fetch("CRYPTO:BTCUSD")

        assert exc_info.value.symbol == "CRYPTO:BTCUSD"
        assert exc_info.value.status == 503
        assert mock_urlopen.call_count == 3
        assert str(exc_info.value).startswith("failed to retrieve snapshot")

    @patch("sigscan_app.data.provider.time.sleep")
    @patch("sigscan_app.data.provider.urlopen")
    def test_client_error_not_retried(self, mock_urlopen, mock_sleep, provider):
        mock_urlopen.side_effect = http_error(404)

        with pytest.raises(SnapshotFetchError):
            provider.fetch("BOGUS:SYMBOL")

        assert mock_urlopen.call_count == 1
        mock_sleep.assert_not_called()

    @patch("sigscan_app.data.provider.time.sleep")
    @patch("sigscan_app.data.provider.urlopen")
    def test_invalid_json(self, mock_urlopen, mock_sleep, provider):
        mock_urlopen.return_value = response(b"<html>")

        with pytest.raises(SnapshotFetchError, match="invalid JSON"):
            provider.fetch("CRYPTO:BTCUSD")

    @patch("sigscan_app.data.provider.time.sleep")
    @patch("sigscan_app.data.provider.urlopen")
    def test_non_object_payload(self, mock_urlopen, mock_sleep, provider):
        mock_urlopen.return_value = response([1, 2, 3])

        with pytest.raises(SnapshotFetchError, match="expected object"):
            provider.fetch("CRYPTO:BTCUSD")

    @patch("sigscan_app.data.provider.time.sleep")
    @patch("sigscan_app.data.provider.urlopen")
    def test_invalid_encoding(self, mock_urlopen, mock_sleep):
        provider = ScannerSnapshotProvider(ScannerParams(retry_attempts=0))
        mock_urlopen.return_value = response(b'{"RSI|15": "\xff"}')

        with pytest.raises(SnapshotFetchError, match="invalid encoding") as exc_info:
            provider.fetch("CRYPTO:BTCUSD")

        assert exc_info.value.symbol == "CRYPTO:BTCUSD"
        assert isinstance(exc_info.value.__cause__, UnicodeDecodeError)
        mock_sleep.assert_not_called()

    @patch("sigscan_app.data.provider.time.sleep")
    @patch("sigscan_app.data.provider.urlopen")
    def test_no_retries_configured(self, mock_urlopen, mock_sleep):
        provider = ScannerSnapshotProvider(ScannerParams(retry_attempts=0))
        mock_urlopen.side_effect = URLError("unreachable")

        with pytest.raises(SnapshotFetchError) as exc_info:
            provider.fetch("CRYPTO:BTCUSD")

        assert exc_info.value.status is None
        assert mock_urlopen.call_count == 1
        mock_sleep.assert_not_called()
