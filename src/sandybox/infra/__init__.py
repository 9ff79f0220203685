"""Infrastructure layer — external system integration.

This layer wraps all interaction with requests and Playwright.  Every
raw third-party exception must be caught here and re-raised as a
:class:`~sandybox.exceptions.SandyboxError` subclass.

Rules
-----
* No imports from ``cli``.
* No user-facing output (no ``print()``, no Rich rendering).
* Third-party packages are imported lazily, inside the call that needs them.
"""

from sandybox.infra.playwright_browser import PlaywrightFormBrowser
from sandybox.infra.requests_provider import RequestsSearchProvider

__all__: list[str] = [
    "PlaywrightFormBrowser",
    "RequestsSearchProvider",
]
