"""Tests for SearchService (core/search_service.py).

The :class:`SearchProvider` dependency is **mocked** — no internet
access, no requests invocation.  These tests verify:

* Query validation happens before any provider call
* Request parameters and headers
* Exception mapping (provider errors → error values, never raised)
* Raw-dict → domain-model parsing
* Sanitizing, length capping, empty-result filtering and image stripping
"""

from __future__ import annotations

from typing import Any
from unittest.mock import MagicMock

import pytest

from sandybox.config import Settings
from sandybox.core.models import (
    ErrorCode,
    RelatedTopic,
    RelatedTopicGroup,
    SearchError,
    SearchOptions,
    SearchResponse,
)
from sandybox.core.search_service import SearchService
from sandybox.exceptions import ApiStatusError, TransportError


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _fake_provider(body: Any) -> MagicMock:
    """Return a mock SearchProvider.

    If *body* is an exception, ``get_json`` raises it; otherwise it is
    returned as the decoded body.
    """
    provider = MagicMock()
    if isinstance(body, Exception):
        provider.get_json.side_effect = body
    else:
        provider.get_json.return_value = body
    return provider


def _sample_body(**overrides: Any) -> dict[str, Any]:
    """Trimmed-down instant-answer body for ``python``."""
    body: dict[str, Any] = {
        "Abstract": "Python is a high-level programming language.",
        "AbstractSource": "Wikipedia",
        "AbstractText": "Python is a high-level programming language.",
        "AbstractURL": "https://en.wikipedia.org/wiki/Python_(programming_language)",
        "Answer": "",
        "AnswerType": "",
        "Definition": "",
        "DefinitionSource": "",
        "DefinitionURL": "",
        "Entity": "programming language",
        "Heading": "Python (programming language)",
        "Image": "/i/python.png",
        "ImageHeight": 270,
        "ImageIsLogo": 1,
        "ImageWidth": "270",
        "Infobox": {
            "content": [
                {
                    "data_type": "string",
                    "label": "Designed by",
                    "value": "Guido van Rossum",
                    "wiki_order": 0,
                },
            ],
            "meta": [
                {"data_type": "string", "label": "article_title", "value": "Python"},
            ],
        },
        "Redirect": "",
        "RelatedTopics": [
            {
                "FirstURL": "https://duckduckgo.com/Guido_van_Rossum",
                "Icon": {"Height": "", "URL": "/i/guido.jpg", "Width": ""},
                "Result": "<a href=\"...\">Guido van Rossum</a>",
                "Text": "Guido van Rossum - Dutch programmer",
            },
            {
                "Name": "See also",
                "Topics": [
                    {
                        "FirstURL": "https://duckduckgo.com/CPython",
                        "Icon": {"Height": "", "URL": "", "Width": ""},
                        "Result": "<a>CPython</a>",
                        "Text": "CPython",
                    },
                ],
            },
            "not-a-dict",
        ],
        "Results": [],
        "Type": "A",
        "meta": {"id": "wikipedia_fathead", "name": "Wikipedia", "description": "Wikipedia"},
    }
    body.update(overrides)
    return body


# ---------------------------------------------------------------------------
# search — validation
# ---------------------------------------------------------------------------

class TestSearchValidation:
    @pytest.mark.parametrize("query", ["", "   ", None, 123])
    def test_invalid_query_returns_error(self, query: Any) -> None:
        provider = _fake_provider(_sample_body())
        result = SearchService(provider).search(query)

        assert isinstance(result, SearchError)
        assert result.error == ErrorCode.INVALID_QUERY
        assert result.status_code == 400
        assert "non-empty string" in result.message
        provider.get_json.assert_not_called()


# ---------------------------------------------------------------------------
# search — request construction
# ---------------------------------------------------------------------------

class TestSearchRequest:
    def test_default_params_and_headers(self) -> None:
        provider = _fake_provider(_sample_body())
        SearchService(provider).search("  python  ")

        provider.get_json.assert_called_once_with(
            "https://api.duckduckgo.com/",
            {"q": "python", "format": "json", "no_html": "1", "skip_disambig": "1"},
            {"Accept": "application/json", "User-Agent": "SandyBox-Integration/1.0"},
            10.0,
        )

    def test_optional_params_appended(self) -> None:
        params = SearchService.build_params(
            "python", SearchOptions(t="sandybox", callback="cb"),
        )
        assert params["t"] == "sandybox"
        assert params["callback"] == "cb"

    def test_empty_optional_params_skipped(self) -> None:
        params = SearchService.build_params("python", SearchOptions(t="", callback=None))
        assert "t" not in params
        assert "callback" not in params

    def test_settings_override_endpoint_and_agent(self) -> None:
        provider = _fake_provider(_sample_body())
        settings = Settings(
            search_endpoint="http://localhost:9000/",
            user_agent="test-agent",
            http_timeout=2.5,
        )
        SearchService(provider, settings).search("python")

        url, _params, headers, timeout = provider.get_json.call_args.args
        assert url == "http://localhost:9000/"
        assert headers["User-Agent"] == "test-agent"
        assert timeout == 2.5


# ---------------------------------------------------------------------------
# search — error mapping
# ---------------------------------------------------------------------------

class TestSearchErrors:
    def test_api_status_error(self) -> None:
        svc = SearchService(_fake_provider(ApiStatusError(429, "Too Many Requests")))
        result = svc.search("python")

        assert isinstance(result, SearchError)
        assert result.error == ErrorCode.API_ERROR
        assert result.status_code == 429
        assert "Too Many Requests" in result.message
        assert "429" in result.message

    def test_transport_error(self) -> None:
        svc = SearchService(_fake_provider(TransportError("Network error")))
        result = svc.search("python")

        assert isinstance(result, SearchError)
        assert result.error == ErrorCode.NETWORK_ERROR
        assert result.status_code == 500
        assert "Network error" in result.message

    def test_unexpected_exception_is_network_error(self) -> None:
        svc = SearchService(_fake_provider(RuntimeError("kaboom")))
        result = svc.search("python")

        assert isinstance(result, SearchError)
        assert result.error == ErrorCode.NETWORK_ERROR
        assert result.message == "kaboom"

    def test_exception_without_message_gets_default(self) -> None:
        svc = SearchService(_fake_provider(RuntimeError()))
        result = svc.search("python")

        assert isinstance(result, SearchError)
        assert result.message == "Unknown network error occurred"

    @pytest.mark.parametrize("body", [None, [], "text", 0])
    def test_non_object_body_is_invalid_response(self, body: Any) -> None:
        result = SearchService(_fake_provider(body)).search("python")

        assert isinstance(result, SearchError)
        assert result.error == ErrorCode.INVALID_RESPONSE
        assert result.status_code == 500


# ---------------------------------------------------------------------------
# search — parsing
# ---------------------------------------------------------------------------

class TestSearchParsing:
    def test_parses_scalar_fields(self) -> None:
        result = SearchService(_fake_provider(_sample_body())).search("python")

        assert isinstance(result, SearchResponse)
        assert result.ok
        assert result.heading == "Python (programming language)"
        assert result.abstract_source == "Wikipedia"
        assert result.type == "A"
        assert result.image_height == 270
        assert result.image_width == 270
        assert result.image_is_logo == 1
        assert result.meta["name"] == "Wikipedia"
        assert result.raw["Entity"] == "programming language"

    def test_parses_topics_and_groups(self) -> None:
        result = SearchService(_fake_provider(_sample_body())).search("python")

        assert isinstance(result, SearchResponse)
        assert len(result.related_topics) == 2
        first, group = result.related_topics
        assert isinstance(first, RelatedTopic)
        assert first.icon.url == "/i/guido.jpg"
        assert isinstance(group, RelatedTopicGroup)
        assert group.name == "See also"
        assert group.topics[0].text == "CPython"

    def test_parses_infobox(self) -> None:
        result = SearchService(_fake_provider(_sample_body())).search("python")

        assert isinstance(result, SearchResponse)
        assert result.infobox is not None
        assert result.infobox.content[0].label == "Designed by"
        assert result.infobox.content[0].wiki_order == 0
        assert result.infobox.meta[0].wiki_order is None

    def test_empty_string_infobox_is_none(self) -> None:
        body = _sample_body(Infobox="")
        result = SearchService(_fake_provider(body)).search("python")

        assert isinstance(result, SearchResponse)
        assert result.infobox is None

    def test_empty_object_parses_to_defaults(self) -> None:
        result = SearchService(_fake_provider({})).search("python")

        assert isinstance(result, SearchResponse)
        assert result.heading == ""
        assert result.related_topics == ()
        assert result.image_height == 0

    def test_unparseable_numbers_become_zero(self) -> None:
        body = _sample_body(ImageHeight="", ImageWidth="wide", ImageIsLogo=None)
        result = SearchService(_fake_provider(body)).search("python")

        assert isinstance(result, SearchResponse)
        assert (result.image_height, result.image_width, result.image_is_logo) == (0, 0, 0)


# ---------------------------------------------------------------------------
# search_with_validation
# ---------------------------------------------------------------------------

class TestSearchWithValidation:
    def test_too_long_query_rejected(self) -> None:
        provider = _fake_provider(_sample_body())
        result = SearchService(provider).search_with_validation("a" * 201)

        assert isinstance(result, SearchError)
        assert result.error == ErrorCode.QUERY_TOO_LONG
        assert result.status_code == 400
        assert "200 characters" in result.message
        provider.get_json.assert_not_called()

    def test_length_measured_after_sanitizing(self) -> None:
        provider = _fake_provider(_sample_body())
        query = "<" + "a" * 200 + ">"
        result = SearchService(provider).search_with_validation(query)

        assert isinstance(result, SearchResponse)

    def test_angle_brackets_removed_before_request(self) -> None:
        provider = _fake_provider(_sample_body())
        SearchService(provider).search_with_validation("  <b>python</b>  ")

        params = provider.get_json.call_args.args[1]
        assert params["q"] == "bpython/b"

    def test_brackets_only_becomes_invalid_query(self) -> None:
        provider = _fake_provider(_sample_body())
        result = SearchService(provider).search_with_validation("<>")

        assert isinstance(result, SearchError)
        assert result.error == ErrorCode.INVALID_QUERY

    def test_non_string_does_not_raise(self) -> None:
        result = SearchService(_fake_provider(_sample_body())).search_with_validation(None)

        assert isinstance(result, SearchError)
        assert result.error == ErrorCode.INVALID_QUERY


# ---------------------------------------------------------------------------
# search_with_filtering
# ---------------------------------------------------------------------------

class TestSearchWithFiltering:
    def test_errors_pass_through(self) -> None:
        svc = SearchService(_fake_provider(ApiStatusError(503, "Service Unavailable")))
        result = svc.search_with_filtering("python", filter_empty_results=True)

        assert isinstance(result, SearchError)
        assert result.error == ErrorCode.API_ERROR

    def test_empty_result_rejected_when_filtering(self) -> None:
        body = _sample_body(Abstract="", RelatedTopics=[])
        result = SearchService(_fake_provider(body)).search_with_filtering(
            "xyzzy", filter_empty_results=True,
        )

        assert isinstance(result, SearchError)
        assert result.error == ErrorCode.NO_RESULTS
        assert result.status_code == 404

    def test_empty_result_kept_without_filtering(self) -> None:
        body = _sample_body(Abstract="", RelatedTopics=[])
        result = SearchService(_fake_provider(body)).search_with_filtering("xyzzy")

        assert isinstance(result, SearchResponse)

    def test_topics_alone_are_not_empty(self) -> None:
        body = _sample_body(Abstract="")
        result = SearchService(_fake_provider(body)).search_with_filtering(
            "python", filter_empty_results=True,
        )

        assert isinstance(result, SearchResponse)

    def test_images_stripped_by_default(self) -> None:
        result = SearchService(_fake_provider(_sample_body())).search_with_filtering("python")

        assert isinstance(result, SearchResponse)
        assert result.image == ""
        assert (result.image_height, result.image_width, result.image_is_logo) == (0, 0, 0)
        assert result.heading == "Python (programming language)"

    def test_images_kept_when_requested(self) -> None:
        result = SearchService(_fake_provider(_sample_body())).search_with_filtering(
            "python", include_images=True,
        )

        assert isinstance(result, SearchResponse)
        assert result.image == "/i/python.png"
        assert result.image_height == 270
