"""Playwright-backed implementation of :class:`~sandybox.core.protocols.FormBrowser`.

This module is the **only** place in the codebase that drives a
browser.  It launches headless Chromium, fills the pizza-order form,
submits it, and decodes the JSON the endpoint echoes back inside a
``<pre>`` element.  Playwright exceptions are re-raised as
:class:`~sandybox.exceptions.BrowserAutomationError` (or its timeout
subclass); the browser is closed on every path.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Callable
from typing import Any

from sandybox.core.models import FormData
from sandybox.exceptions import (
    BrowserAutomationError,
    BrowserTimeoutError,
    EnvironmentError,
)

logger = logging.getLogger(__name__)

SUBMIT_BUTTON_SELECTOR: str = 'button:has-text("Submit order")'

# (form field, selector) for plain text inputs, in fill order.
TEXT_FIELD_SELECTORS: tuple[tuple[str, str], ...] = (
    ("custname", 'input[name="custname"]'),
    ("custtel", 'input[name="custtel"]'),
    ("custemail", 'input[name="custemail"]'),
    ("comments", 'textarea[name="comments"]'),
)
DELIVERY_SELECTOR: str = 'input[name="delivery"]'


def _load_playwright() -> tuple[Callable[[], Any], type[Exception], type[Exception]]:
    """Return ``(sync_playwright, TimeoutError, Error)`` or raise ``EnvironmentError``."""
    try:
        from playwright.sync_api import Error, TimeoutError, sync_playwright
    except ModuleNotFoundError as exc:
        raise EnvironmentError(
            "playwright is not installed. Install with: pip install playwright",
            hint="Then download a browser with: playwright install chromium",
        ) from exc
    return sync_playwright, TimeoutError, Error


class PlaywrightFormBrowser:
    """Concrete :class:`FormBrowser` driving headless Chromium.

    Parameters
    ----------
    sync_playwright:
        Factory returning a Playwright context manager.  Defaults to
        :func:`playwright.sync_api.sync_playwright`.
    """

    def __init__(self, sync_playwright: Callable[[], Any] | None = None) -> None:
        self._sync_playwright = sync_playwright

    def submit(
        self,
        form_url: str,
        form_data: FormData,
        *,
        timeout_ms: int,
        headless: bool = True,
    ) -> dict[str, Any]:
        """Fill and submit the form at *form_url*; return the echoed JSON."""
        default_factory, timeout_error, playwright_error = _load_playwright()
        factory = self._sync_playwright or default_factory

        try:
            with factory() as playwright:
                browser = playwright.chromium.launch(headless=headless, timeout=timeout_ms)
                try:
                    page = browser.new_page()
                    page.set_default_timeout(timeout_ms)
                    logger.debug("Opening %s", form_url)
                    page.goto(form_url, wait_until="networkidle", timeout=timeout_ms)
                    self.fill_form(page, form_data)
                    page.click(SUBMIT_BUTTON_SELECTOR)
                    page.wait_for_load_state("networkidle")
                    return self.read_echo(page)
                finally:
                    browser.close()
        except timeout_error as exc:
            raise BrowserTimeoutError(str(exc)) from exc
        except playwright_error as exc:
            raise BrowserAutomationError(str(exc)) from exc

    # ------------------------------------------------------------------
    # Page helpers
    # ------------------------------------------------------------------

    @staticmethod
    def fill_form(page: Any, form_data: FormData) -> None:
        """Populate every non-empty field of *form_data* on *page*."""
        for name, selector in TEXT_FIELD_SELECTORS:
            value = getattr(form_data, name)
            if value:
                page.fill(selector, value)

        if form_data.size:
            page.check(f'input[name="size"][value="{form_data.size}"]')

        for topping in form_data.topping:
            page.check(f'input[name="topping"][value="{topping}"]')

        if form_data.delivery:
            page.fill(DELIVERY_SELECTOR, form_data.delivery)

    @staticmethod
    def read_echo(page: Any) -> dict[str, Any]:
        """Decode the first ``<pre>`` block; ``{}`` when absent or not JSON."""
        element = page.query_selector("pre")
        if element is None:
            return {}
        text = element.text_content() or "{}"
        try:
            decoded = json.loads(text)
        except json.JSONDecodeError:
            logger.debug("Result page <pre> is not JSON")
            return {}
        return decoded if isinstance(decoded, dict) else {}
