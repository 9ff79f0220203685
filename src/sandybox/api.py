"""Module-level entry points wired to the default adapters.

Each function builds its service from :meth:`Settings.from_env` plus the
requests / Playwright adapters and returns a result value.  Use the
services in :mod:`sandybox.core` directly to inject other adapters.
"""

from __future__ import annotations

from typing import Any

from sandybox.config import Settings
from sandybox.core.models import (
    ErrorCode,
    FormSubmissionError,
    FormSubmissionRequest,
    FormSubmissionResult,
    SearchError,
    SearchOptions,
    SearchResult,
)
from sandybox.core.search_service import SearchService
from sandybox.core.submit_service import SubmitService
from sandybox.exceptions import ConfigurationError
from sandybox.infra.playwright_browser import PlaywrightFormBrowser
from sandybox.infra.requests_provider import RequestsSearchProvider


def _settings(settings: Settings | None) -> Settings | ConfigurationError:
    if settings is not None:
        return settings
    try:
        return Settings.from_env()
    except ConfigurationError as exc:
        return exc


def _search_service(settings: Settings) -> SearchService:
    return SearchService(RequestsSearchProvider(), settings)


def _submit_service(settings: Settings) -> SubmitService:
    return SubmitService(PlaywrightFormBrowser(), settings)


def _config_search_error(exc: ConfigurationError) -> SearchError:
    return SearchError(error=ErrorCode.NETWORK_ERROR, message=str(exc), status_code=500)


def _config_submit_error(exc: ConfigurationError) -> FormSubmissionError:
    return FormSubmissionError(
        error=ErrorCode.SUBMISSION_ERROR, message=str(exc), status_code=500
    )


# ---------------------------------------------------------------------------
# Search
# ---------------------------------------------------------------------------

def search_duckduckgo(
    query: Any,
    options: SearchOptions | None = None,
    *,
    settings: Settings | None = None,
) -> SearchResult:
    resolved = _settings(settings)
    if isinstance(resolved, ConfigurationError):
        return _config_search_error(resolved)
    return _search_service(resolved).search(query, options)


def search_with_validation(
    query: Any,
    options: SearchOptions | None = None,
    *,
    settings: Settings | None = None,
) -> SearchResult:
    resolved = _settings(settings)
    if isinstance(resolved, ConfigurationError):
        return _config_search_error(resolved)
    return _search_service(resolved).search_with_validation(query, options)


def search_with_filtering(
    query: Any,
    options: SearchOptions | None = None,
    *,
    filter_empty_results: bool = False,
    include_images: bool = False,
    settings: Settings | None = None,
) -> SearchResult:
    resolved = _settings(settings)
    if isinstance(resolved, ConfigurationError):
        return _config_search_error(resolved)
    return _search_service(resolved).search_with_filtering(
        query,
        options,
        filter_empty_results=filter_empty_results,
        include_images=include_images,
    )


# ---------------------------------------------------------------------------
# Form submission
# ---------------------------------------------------------------------------

def submit_form(
    request: FormSubmissionRequest,
    *,
    settings: Settings | None = None,
) -> FormSubmissionResult:
    resolved = _settings(settings)
    if isinstance(resolved, ConfigurationError):
        return _config_submit_error(resolved)
    return _submit_service(resolved).submit(request)


def submit_form_with_retry(
    request: FormSubmissionRequest,
    max_retries: int | None = None,
    *,
    settings: Settings | None = None,
) -> FormSubmissionResult:
    resolved = _settings(settings)
    if isinstance(resolved, ConfigurationError):
        return _config_submit_error(resolved)
    return _submit_service(resolved).submit_with_retry(request, max_retries)
