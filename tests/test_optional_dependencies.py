"""Regression tests for optional dependency boundaries.

Bootstrap commands (``--help``, ``--version``, ``doctor``) must work
without Rich, requests or Playwright.  Runtime paths that need a missing
package fail with a typed :class:`EnvironmentError`, which the services
turn into error values.
"""

from __future__ import annotations

import sys

import pytest

from sandybox.cli import exit_codes
from sandybox.cli.app import main
from sandybox.core.models import (
    ErrorCode,
    FormData,
    FormSubmissionError,
    FormSubmissionRequest,
    SearchError,
)
from sandybox.core.search_service import SearchService
from sandybox.core.submit_service import SubmitService
from sandybox.exceptions import EnvironmentError
from sandybox.infra.playwright_browser import PlaywrightFormBrowser
from sandybox.infra.requests_provider import RequestsSearchProvider


def _hide_rich(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setitem(sys.modules, "rich", None)
    monkeypatch.setitem(sys.modules, "rich.console", None)
    monkeypatch.setitem(sys.modules, "rich.logging", None)
    monkeypatch.setitem(sys.modules, "rich.table", None)


def _hide_requests(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setitem(sys.modules, "requests", None)


def _hide_playwright(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setitem(sys.modules, "playwright", None)
    monkeypatch.setitem(sys.modules, "playwright.sync_api", None)


# ---------------------------------------------------------------------------
# Rich
# ---------------------------------------------------------------------------

def test_help_works_without_rich(monkeypatch: pytest.MonkeyPatch) -> None:
    _hide_rich(monkeypatch)

    with pytest.raises(SystemExit) as exc_info:
        main(["--help"])
    assert exc_info.value.code == 0


def test_version_works_without_rich(monkeypatch: pytest.MonkeyPatch) -> None:
    _hide_rich(monkeypatch)

    with pytest.raises(SystemExit) as exc_info:
        main(["--version"])
    assert exc_info.value.code == 0


def test_doctor_works_without_rich(monkeypatch: pytest.MonkeyPatch) -> None:
    _hide_rich(monkeypatch)

    assert main(["doctor"]) in (exit_codes.SUCCESS, exit_codes.GENERAL_ERROR)


def test_search_errors_print_plain_without_rich(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str],
) -> None:
    _hide_rich(monkeypatch)

    code = main(["search", "--validate", "x" * 201])

    assert code == exit_codes.GENERAL_ERROR
    assert "QUERY_TOO_LONG" in capsys.readouterr().err


# ---------------------------------------------------------------------------
# requests
# ---------------------------------------------------------------------------

def test_doctor_fails_without_requests(monkeypatch: pytest.MonkeyPatch) -> None:
    _hide_requests(monkeypatch)

    assert main(["doctor"]) == exit_codes.GENERAL_ERROR


def test_provider_raises_environment_error_without_requests(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    _hide_requests(monkeypatch)

    with pytest.raises(EnvironmentError, match="requests is not installed"):
        RequestsSearchProvider().get_json("https://api.duckduckgo.com/", {}, {}, 1.0)


def test_search_returns_network_error_without_requests(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    _hide_requests(monkeypatch)

    result = SearchService(RequestsSearchProvider()).search("python")

    assert isinstance(result, SearchError)
    assert result.error == ErrorCode.NETWORK_ERROR
    assert "requests is not installed" in result.message


# ---------------------------------------------------------------------------
# Playwright
# ---------------------------------------------------------------------------

def test_browser_raises_environment_error_without_playwright(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    _hide_playwright(monkeypatch)

    with pytest.raises(EnvironmentError, match="playwright is not installed") as exc_info:
        PlaywrightFormBrowser().submit(
            "https://httpbin.org/forms/post", FormData(), timeout_ms=1_000,
        )
    assert exc_info.value.hint is not None
    assert "playwright install chromium" in exc_info.value.hint


def test_submit_returns_submission_error_without_playwright(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    _hide_playwright(monkeypatch)

    result = SubmitService(PlaywrightFormBrowser()).submit(
        FormSubmissionRequest(form_data=FormData(custname="Ada")),
    )

    assert isinstance(result, FormSubmissionError)
    assert result.error == ErrorCode.SUBMISSION_ERROR
    assert "playwright is not installed" in result.message


def test_markup_escape_is_identity_without_rich(monkeypatch: pytest.MonkeyPatch) -> None:
    from sandybox.cli.console import escape

    monkeypatch.setitem(sys.modules, "rich.markup", None)

    assert escape("Foo [/bar]") == "Foo [/bar]"
