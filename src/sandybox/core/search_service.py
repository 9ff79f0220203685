"""Instant-answer search service.

Depends on a :class:`~sandybox.core.protocols.SearchProvider` injected
at construction time, keeping the core free of any HTTP imports.

Guarantees
----------
* Every public method returns a :data:`~sandybox.core.models.SearchResult`
  and never raises.
* Invalid queries are rejected before the provider is called.
"""

from __future__ import annotations

import dataclasses
import logging
from collections.abc import Mapping
from typing import Any

from sandybox.config import Settings
from sandybox.core.models import (
    ErrorCode,
    Icon,
    Infobox,
    InfoboxEntry,
    RelatedTopic,
    RelatedTopicGroup,
    SearchError,
    SearchOptions,
    SearchResponse,
    SearchResult,
)
from sandybox.core.protocols import SearchProvider
from sandybox.core.validation import check_query_length, sanitize_query, validate_query
from sandybox.exceptions import ApiStatusError

logger = logging.getLogger(__name__)


class SearchService:
    """Stateless service wrapping the instant-answer API.

    Parameters
    ----------
    provider:
        Any object satisfying the :class:`SearchProvider` protocol.
    settings:
        Endpoint, user agent and timeout.  Defaults to ``Settings()``.
    """

    def __init__(self, provider: SearchProvider, settings: Settings | None = None) -> None:
        self._provider: SearchProvider = provider
        self._settings: Settings = settings or Settings()

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def search(self, query: Any, options: SearchOptions | None = None) -> SearchResult:
        """Query the API for *query*."""
        invalid = validate_query(query)
        if invalid is not None:
            return invalid

        params = self.build_params(query, options)
        headers = {
            "Accept": "application/json",
            "User-Agent": self._settings.user_agent,
        }
        logger.debug("Searching %s for %r", self._settings.search_endpoint, params["q"])

        try:
            body = self._provider.get_json(
                self._settings.search_endpoint,
                params,
                headers,
                self._settings.http_timeout,
            )
        except ApiStatusError as exc:
            logger.warning("Search API replied %s %s", exc.status_code, exc.reason)
            return SearchError(
                error=ErrorCode.API_ERROR,
                message=(
                    f"DuckDuckGo API returned status {exc.status_code}: {exc.reason}"
                ),
                status_code=exc.status_code,
            )
        except Exception as exc:
            logger.warning("Search request failed: %s", exc)
            return SearchError(
                error=ErrorCode.NETWORK_ERROR,
                message=str(exc) or "Unknown network error occurred",
                status_code=500,
            )

        if not isinstance(body, dict):
            return SearchError(
                error=ErrorCode.INVALID_RESPONSE,
                message="Invalid response format from DuckDuckGo API",
                status_code=500,
            )

        return self.parse_response(body)

    def search_with_validation(
        self, query: Any, options: SearchOptions | None = None
    ) -> SearchResult:
        """Sanitize *query* and enforce the length cap before searching."""
        if not isinstance(query, str):
            return validate_query(query)  # type: ignore[return-value]

        sanitized = sanitize_query(query)
        too_long = check_query_length(sanitized)
        if too_long is not None:
            return too_long

        return self.search(sanitized, options)

    def search_with_filtering(
        self,
        query: Any,
        options: SearchOptions | None = None,
        *,
        filter_empty_results: bool = False,
        include_images: bool = False,
    ) -> SearchResult:
        """Search, optionally rejecting empty answers and blanking images."""
        result = self.search(query, options)
        if isinstance(result, SearchError):
            return result

        if filter_empty_results and result.is_empty:
            return SearchError(
                error=ErrorCode.NO_RESULTS,
                message="No results found for the given query",
                status_code=404,
            )

        if not include_images:
            result = dataclasses.replace(
                result,
                image="",
                image_height=0,
                image_width=0,
                image_is_logo=0,
            )

        return result

    # ------------------------------------------------------------------
    # Request construction (pure)
    # ------------------------------------------------------------------

    @staticmethod
    def build_params(query: str, options: SearchOptions | None = None) -> dict[str, str]:
        params = {
            "q": query.strip(),
            "format": "json",
            "no_html": "1",
            "skip_disambig": "1",
        }
        if options is not None:
            if options.t:
                params["t"] = options.t
            if options.callback:
                params["callback"] = options.callback
        return params

    # ------------------------------------------------------------------
    # Raw-dict → domain-model parsers (pure)
    # ------------------------------------------------------------------

    @classmethod
    def parse_response(cls, body: Mapping[str, Any]) -> SearchResponse:
        """Convert a decoded API body into a :class:`SearchResponse`."""
        meta = body.get("meta")
        return SearchResponse(
            abstract=_text(body.get("Abstract")),
            abstract_source=_text(body.get("AbstractSource")),
            abstract_text=_text(body.get("AbstractText")),
            abstract_url=_text(body.get("AbstractURL")),
            answer=_text(body.get("Answer")),
            answer_type=_text(body.get("AnswerType")),
            definition=_text(body.get("Definition")),
            definition_source=_text(body.get("DefinitionSource")),
            definition_url=_text(body.get("DefinitionURL")),
            entity=_text(body.get("Entity")),
            heading=_text(body.get("Heading")),
            image=_text(body.get("Image")),
            image_height=_int(body.get("ImageHeight")),
            image_width=_int(body.get("ImageWidth")),
            image_is_logo=_int(body.get("ImageIsLogo")),
            infobox=cls._parse_infobox(body.get("Infobox")),
            redirect=_text(body.get("Redirect")),
            related_topics=cls._parse_related_topics(body.get("RelatedTopics")),
            results=tuple(
                cls._parse_topic(item)
                for item in _dicts(body.get("Results"))
                if "FirstURL" in item
            ),
            type=_text(body.get("Type")),
            meta=dict(meta) if isinstance(meta, dict) else {},
            raw=dict(body),
        )

    @staticmethod
    def _parse_topic(raw: Mapping[str, Any]) -> RelatedTopic:
        icon_raw = raw.get("Icon")
        icon = Icon()
        if isinstance(icon_raw, dict):
            icon = Icon(
                url=_text(icon_raw.get("URL")),
                height=_text(icon_raw.get("Height")),
                width=_text(icon_raw.get("Width")),
            )
        return RelatedTopic(
            first_url=_text(raw.get("FirstURL")),
            icon=icon,
            result=_text(raw.get("Result")),
            text=_text(raw.get("Text")),
        )

    @classmethod
    def _parse_related_topics(
        cls, raw: Any
    ) -> tuple[RelatedTopic | RelatedTopicGroup, ...]:
        items: list[RelatedTopic | RelatedTopicGroup] = []
        for entry in _dicts(raw):
            if "Topics" in entry:
                items.append(
                    RelatedTopicGroup(
                        name=_text(entry.get("Name")),
                        topics=tuple(
                            cls._parse_topic(t) for t in _dicts(entry.get("Topics"))
                        ),
                    )
                )
            else:
                items.append(cls._parse_topic(entry))
        return tuple(items)

    @staticmethod
    def _parse_infobox(raw: Any) -> Infobox | None:
        # The API sends "" rather than null when there is no infobox.
        if not isinstance(raw, dict):
            return None

        def _entry(e: dict[str, Any]) -> InfoboxEntry:
            order = e.get("wiki_order")
            return InfoboxEntry(
                data_type=_text(e.get("data_type")),
                label=_text(e.get("label")),
                value=e.get("value"),
                wiki_order=order if isinstance(order, int) else None,
            )

        def _entries(key: str) -> tuple[InfoboxEntry, ...]:
            return tuple(_entry(e) for e in _dicts(raw.get(key)))

        return Infobox(content=_entries("content"), meta=_entries("meta"))


# ---------------------------------------------------------------------------
# Coercion helpers
# ---------------------------------------------------------------------------

def _text(value: Any) -> str:
    return "" if value is None else str(value)


def _int(value: Any) -> int:
    """Coerce API numbers, which are sometimes sent as ``""`` or ``"64"``."""
    if isinstance(value, bool):
        return int(value)
    try:
        if isinstance(value, (int, float)):
            return int(value)
        if isinstance(value, str):
            return int(float(value))
    except (ValueError, OverflowError):
        return 0
    return 0


def _dicts(raw: Any) -> list[dict[str, Any]]:
    if not isinstance(raw, list):
        return []
    return [entry for entry in raw if isinstance(entry, dict)]
