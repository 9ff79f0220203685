"""Protocols (interfaces) consumed by the core layer.

These define the contracts that infrastructure adapters must satisfy.
Core code depends ONLY on these protocols — never on concrete
implementations — so services can be exercised with plain mocks.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Protocol

from sandybox.core.models import FormData


class SearchProvider(Protocol):
    """Contract for the HTTP backend behind instant-answer search."""

    def get_json(
        self,
        url: str,
        params: Mapping[str, str],
        headers: Mapping[str, str],
        timeout: float,
    ) -> Any:
        """Issue a GET to *url* and return the decoded JSON body.

        The body is returned as decoded — it may legitimately be ``None``
        or a non-object value; shape checks belong to the caller.

        Raises
        ------
        ApiStatusError
            When the server replies with a non-2xx status.
        TransportError
            When the request fails or the body is not valid JSON.
        """
        ...  # pragma: no cover


class FormBrowser(Protocol):
    """Contract for the headless-browser backend behind form submission."""

    def submit(
        self,
        form_url: str,
        form_data: FormData,
        *,
        timeout_ms: int,
        headless: bool = True,
    ) -> dict[str, Any]:
        """Open *form_url*, fill it from *form_data*, submit, and return
        the echoed JSON object (``{}`` when the result page has none).

        Implementations must release every browser resource before
        returning or raising.

        Raises
        ------
        BrowserTimeoutError
            When navigation or waiting exceeds *timeout_ms*.
        BrowserAutomationError
            For any other browser failure.
        """
        ...  # pragma: no cover
