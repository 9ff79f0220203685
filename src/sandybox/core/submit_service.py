"""Form submission service with its fixed retry policy.

The actual browser work is delegated to a
:class:`~sandybox.core.protocols.FormBrowser` injected at construction
time.  This service is responsible for:

* Validating form data before any browser is launched.
* Mapping the browser's echo into a :class:`FormSubmissionResponse`.
* Converting every failure into a :class:`FormSubmissionError`.
* Retrying transient failures (never validation failures).
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Mapping
from datetime import datetime, timezone
from typing import Any, cast

from sandybox.config import Settings
from sandybox.core.models import (
    ErrorCode,
    ErrorDetails,
    FormData,
    FormSubmissionError,
    FormSubmissionRequest,
    FormSubmissionResponse,
    FormSubmissionResult,
    SubmittedForm,
)
from sandybox.core.protocols import FormBrowser
from sandybox.core.validation import validate_form_data
from sandybox.exceptions import BrowserTimeoutError

logger = logging.getLogger(__name__)

AttemptCallback = Callable[[int, int], None]


class SubmitService:
    """Stateless service that submits the order form.

    Parameters
    ----------
    browser:
        Any object satisfying the :class:`FormBrowser` protocol.
    settings:
        Form URL, timeouts and retry settings.  Defaults to ``Settings()``.
    sleep:
        Delay function used between retries; injectable for tests.
    """

    def __init__(
        self,
        browser: FormBrowser,
        settings: Settings | None = None,
        *,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self._browser: FormBrowser = browser
        self._settings: Settings = settings or Settings()
        self._sleep = sleep

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def submit(self, request: FormSubmissionRequest) -> FormSubmissionResult:
        """Validate, then fill and submit the form once."""
        validation = validate_form_data(request.form_data)
        if not validation.is_valid:
            logger.info("Form data rejected: %s", "; ".join(validation.errors))
            return FormSubmissionError(
                error=ErrorCode.VALIDATION_ERROR,
                message="Form data validation failed",
                status_code=400,
                details=ErrorDetails(
                    field=next(iter(validation.field_errors), None),
                    validation_error=", ".join(validation.errors),
                ),
            )

        timeout_ms = request.timeout_ms or self._settings.browser_timeout_ms
        try:
            echo = self._browser.submit(
                self._settings.form_url,
                request.form_data,
                timeout_ms=timeout_ms,
                headless=self._settings.headless,
            )
        except Exception as exc:
            message = str(exc) or "Unknown error occurred during form submission"
            timed_out = isinstance(exc, BrowserTimeoutError) or "timeout" in message.lower()
            logger.warning("Form submission failed: %s", message)
            return FormSubmissionError(
                error=ErrorCode.SUBMISSION_ERROR,
                message=message,
                status_code=500,
                details=ErrorDetails(
                    network_error="Request timeout" if timed_out else None,
                ),
            )

        return self.build_response(echo if isinstance(echo, dict) else {})

    def submit_with_retry(
        self,
        request: FormSubmissionRequest,
        max_retries: int | None = None,
        *,
        on_attempt: AttemptCallback | None = None,
    ) -> FormSubmissionResult:
        """Submit up to *max_retries* times with exponential backoff.

        Validation failures (status 400) are returned at once.  The
        attempt count falls back to ``request.retries`` and then to
        ``Settings.max_retries``.
        """
        attempts = max_retries
        if attempts is None:
            attempts = request.retries
        if attempts is None:
            attempts = self._settings.max_retries
        if attempts < 1:
            return FormSubmissionError(
                error=ErrorCode.RETRY_ERROR,
                message="max_retries must be at least 1",
                status_code=400,
            )

        last_error: FormSubmissionError | None = None
        for attempt in range(1, attempts + 1):
            if on_attempt is not None:
                on_attempt(attempt, attempts)

            try:
                result = self.submit(request)
            except Exception as exc:
                result = FormSubmissionError(
                    error=ErrorCode.RETRY_ERROR,
                    message=f"Attempt {attempt} failed: {str(exc) or 'Unknown error'}",
                    status_code=500,
                )

            if isinstance(result, FormSubmissionResponse):
                return result
            if result.status_code == 400:
                return result

            last_error = result
            if attempt < attempts:
                delay = self._settings.backoff_base * 2 ** attempt
                logger.info(
                    "Attempt %d/%d failed (%s); retrying in %.1fs",
                    attempt, attempts, result.error.value, delay,
                )
                self._sleep(delay)

        # attempts >= 1 and every non-returning attempt sets last_error.
        return cast(FormSubmissionError, last_error)

    # ------------------------------------------------------------------
    # Echo → domain-model mapping (pure)
    # ------------------------------------------------------------------

    @staticmethod
    def build_response(echo: Mapping[str, Any]) -> FormSubmissionResponse:
        form = echo.get("form")
        return FormSubmissionResponse(
            data=SubmittedForm(
                form=FormData.from_mapping(form if isinstance(form, dict) else {}),
                files=_str_dict(echo.get("files")),
                url=str(echo.get("url") or ""),
                origin=str(echo.get("origin") or ""),
                # The form only ever POSTs.
                method="POST",
                headers=_str_dict(echo.get("headers")),
            ),
            timestamp=datetime.now(timezone.utc).isoformat(),
            status_code=200,
        )


def _str_dict(raw: Any) -> dict[str, str]:
    if not isinstance(raw, dict):
        return {}
    return {str(key): str(value) for key, value in raw.items()}
