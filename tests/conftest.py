"""Shared pytest fixtures and configuration for the sandybox test suite.

Guidelines
----------
* No internet access in any test.
* requests and Playwright are mocked at the infra boundary.
* Core tests must be pure — no side effects.
* Tests must not depend on OS state (``SANDYBOX_*`` variables are cleared).
"""

from __future__ import annotations

import logging
import os
from collections.abc import Iterator

import pytest


@pytest.fixture(autouse=True)
def _clean_sandybox_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in list(os.environ):
        if name.startswith("SANDYBOX_"):
            monkeypatch.delenv(name, raising=False)


@pytest.fixture(autouse=True)
def _reset_cli_logging() -> Iterator[None]:
    yield
    root = logging.getLogger()
    for handler in list(root.handlers):
        if getattr(handler, "_sandybox", False):
            root.removeHandler(handler)
