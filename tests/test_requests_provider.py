"""Tests for RequestsSearchProvider (infra/requests_provider.py).

``requests.get`` is patched — no internet access.  These tests verify
call forwarding and the mapping of requests failures onto
:class:`ApiStatusError` / :class:`TransportError`.
"""

from __future__ import annotations

from unittest.mock import MagicMock, patch

import pytest
import requests

from sandybox.exceptions import ApiStatusError, TransportError
from sandybox.infra.requests_provider import RequestsSearchProvider

URL = "https://api.duckduckgo.com/"
PARAMS = {"q": "python", "format": "json"}
HEADERS = {"Accept": "application/json"}


def _response(*, status: int = 200, reason: str = "OK", body: object = None) -> MagicMock:
    resp = MagicMock()
    resp.status_code = status
    resp.reason = reason
    resp.ok = 200 <= status < 400
    resp.url = URL
    resp.json.return_value = body
    return resp


class TestGetJson:
    @patch("requests.get")
    def test_returns_decoded_body(self, mock_get: MagicMock) -> None:
        mock_get.return_value = _response(body={"Heading": "Python"})

        body = RequestsSearchProvider().get_json(URL, PARAMS, HEADERS, 5.0)

        assert body == {"Heading": "Python"}
        mock_get.assert_called_once_with(
            URL, params=PARAMS, headers=HEADERS, timeout=5.0,
        )

    @patch("requests.get")
    def test_null_body_is_returned_as_is(self, mock_get: MagicMock) -> None:
        mock_get.return_value = _response(body=None)

        assert RequestsSearchProvider().get_json(URL, PARAMS, HEADERS, 5.0) is None

    @patch("requests.get")
    def test_non_ok_status_raises_api_status_error(self, mock_get: MagicMock) -> None:
        mock_get.return_value = _response(status=429, reason="Too Many Requests")

        with pytest.raises(ApiStatusError) as exc_info:
            RequestsSearchProvider().get_json(URL, PARAMS, HEADERS, 5.0)

        assert exc_info.value.status_code == 429
        assert exc_info.value.reason == "Too Many Requests"

    @patch("requests.get")
    def test_connection_error_raises_transport_error(self, mock_get: MagicMock) -> None:
        original = requests.ConnectionError("Network error")
        mock_get.side_effect = original

        with pytest.raises(TransportError, match="Network error") as exc_info:
            RequestsSearchProvider().get_json(URL, PARAMS, HEADERS, 5.0)

        assert exc_info.value.__cause__ is original

    @patch("requests.get")
    def test_timeout_raises_transport_error(self, mock_get: MagicMock) -> None:
        mock_get.side_effect = requests.Timeout()

        with pytest.raises(TransportError, match="Timeout"):
            RequestsSearchProvider().get_json(URL, PARAMS, HEADERS, 5.0)

    @patch("requests.get")
    def test_undecodable_body_raises_transport_error(self, mock_get: MagicMock) -> None:
        resp = _response()
        resp.json.side_effect = ValueError("Expecting value")
        mock_get.return_value = resp

        with pytest.raises(TransportError, match="not valid JSON"):
            RequestsSearchProvider().get_json(URL, PARAMS, HEADERS, 5.0)


class TestSession:
    def test_session_used_when_given(self) -> None:
        session = MagicMock()
        session.get.return_value = _response(body={})

        with patch("requests.get") as mock_get:
            RequestsSearchProvider(session).get_json(URL, PARAMS, HEADERS, 1.0)

        session.get.assert_called_once()
        mock_get.assert_not_called()
