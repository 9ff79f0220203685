"""requests-backed implementation of :class:`~sandybox.core.protocols.SearchProvider`.

This module is the **only** place in the codebase that imports
``requests``.  All requests exceptions are caught here and re-raised as
typed :class:`~sandybox.exceptions.SandyboxError` subclasses — nothing
raw escapes the infrastructure boundary.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from sandybox.exceptions import ApiStatusError, EnvironmentError, TransportError

logger = logging.getLogger(__name__)


class RequestsSearchProvider:
    """Concrete :class:`SearchProvider` backed by ``requests.get``.

    A :class:`requests.Session` may be passed to reuse connections;
    otherwise the module-level ``requests.get`` is used per call.
    """

    def __init__(self, session: Any | None = None) -> None:
        self._session = session

    def get_json(
        self,
        url: str,
        params: Mapping[str, str],
        headers: Mapping[str, str],
        timeout: float,
    ) -> Any:
        """GET *url* and decode the JSON body.

        Raises
        ------
        ApiStatusError
            For any non-2xx reply.
        TransportError
            For connection/timeout failures and undecodable bodies.
        """
        try:
            import requests
        except ModuleNotFoundError as exc:
            raise EnvironmentError(
                "requests is not installed. Install with: pip install requests",
            ) from exc

        getter = self._session.get if self._session is not None else requests.get
        try:
            resp = getter(url, params=dict(params), headers=dict(headers), timeout=timeout)
        except requests.RequestException as exc:
            raise TransportError(str(exc) or type(exc).__name__) from exc

        logger.debug("GET %s -> %s", resp.url, resp.status_code)
        if not resp.ok:
            raise ApiStatusError(resp.status_code, resp.reason or "")

        try:
            return resp.json()
        except ValueError as exc:
            # The API answers JSONP (not JSON) when a callback is requested.
            raise TransportError(f"Response body is not valid JSON: {exc}") from exc
