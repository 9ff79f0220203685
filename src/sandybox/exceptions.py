"""Internal exception hierarchy for sandybox.

These exceptions are raised by the infrastructure adapters and the
configuration loader.  They never escape a public operation: the core
services catch them at their boundary and convert them into typed
error values (:class:`~sandybox.core.models.SearchError`,
:class:`~sandybox.core.models.FormSubmissionError`).  Raw third-party
exceptions (requests, Playwright) must be mapped to a subclass defined
here before leaving the ``infra`` layer.

Hierarchy
---------
SandyboxError
├── TransportError
├── ApiStatusError
├── BrowserAutomationError
│   └── BrowserTimeoutError
├── EnvironmentError
└── ConfigurationError
"""

from __future__ import annotations


class SandyboxError(Exception):
    """Base exception for all sandybox errors."""

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint: str | None = hint
        """Optional actionable guidance shown below the error message."""


# --- HTTP ------------------------------------------------------------------

class TransportError(SandyboxError):
    """Raised when an HTTP request cannot be completed or decoded."""


class ApiStatusError(SandyboxError):
    """Raised when an upstream API replies with a non-success status."""

    def __init__(self, status_code: int, reason: str, *, hint: str | None = None) -> None:
        super().__init__(f"HTTP {status_code}: {reason}", hint=hint)
        self.status_code: int = status_code
        self.reason: str = reason


# --- Browser automation ----------------------------------------------------

class BrowserAutomationError(SandyboxError):
    """Raised when the headless browser fails to drive a page."""


class BrowserTimeoutError(BrowserAutomationError):
    """Raised when a browser navigation or wait exceeds its timeout."""


# --- Environment / configuration -------------------------------------------

class EnvironmentError(SandyboxError):
    """Raised when a required runtime dependency is not available."""


class ConfigurationError(SandyboxError):
    """Raised when a ``SANDYBOX_*`` setting cannot be parsed."""
