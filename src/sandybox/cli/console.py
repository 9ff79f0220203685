"""CLI console and logging helpers with optional Rich support.

This module intentionally avoids module-level imports of optional UI
dependencies so bootstrap paths (``--help``, ``--version``) remain
functional even when Rich is not installed.
"""

from __future__ import annotations

import logging
import sys
from typing import Any

from sandybox.exceptions import EnvironmentError

LOG_FORMAT: str = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def _load_rich_console_class() -> type[Any]:
    """Return ``rich.console.Console`` class or raise ``EnvironmentError``."""
    try:
        from rich.console import Console
    except ModuleNotFoundError as exc:
        raise EnvironmentError(
            "rich is not installed. Install with: pip install rich",
        ) from exc
    return Console


def get_rich_console(*, stderr: bool = True) -> Any:
    """Create a Rich console instance (stderr by default)."""
    console_class = _load_rich_console_class()
    return console_class(stderr=stderr)


class _ConsoleProxy:
    """Minimal ``print``-compatible proxy with Rich fallback."""

    def __init__(self, *, stderr: bool) -> None:
        self._stderr = stderr

    def print(self, *objects: object) -> None:
        """Render with Rich when available, else plain print."""
        try:
            rich_console = get_rich_console(stderr=self._stderr)
        except EnvironmentError:
            print(*objects, file=sys.stderr if self._stderr else sys.stdout)
            return
        rich_console.print(*objects)


def escape(text: object) -> str:
    """Return *text* with Rich markup escaped.

    API payloads, user input and exception messages may contain ``[...]``
    sequences that Rich would otherwise parse as tags.  Without Rich the
    proxy prints plainly, so the text is returned unchanged.
    """
    try:
        from rich.markup import escape as rich_escape
    except ModuleNotFoundError:
        return str(text)
    return rich_escape(str(text))


console = _ConsoleProxy(stderr=True)
"""Status and diagnostics (stderr)."""

out = _ConsoleProxy(stderr=False)
"""Result output (stdout)."""


def configure_logging(level: str | int = logging.WARNING) -> None:
    """Install a single root handler; Rich when available, plain otherwise.

    Calling it again replaces the handler instead of stacking a new one.
    """
    handler: logging.Handler
    try:
        from rich.logging import RichHandler

        handler = RichHandler(
            console=get_rich_console(),
            show_path=False,
            rich_tracebacks=True,
        )
        handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
    except (ModuleNotFoundError, EnvironmentError):
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))

    root = logging.getLogger()
    for existing in list(root.handlers):
        if getattr(existing, "_sandybox", False):
            root.removeHandler(existing)
    handler._sandybox = True  # type: ignore[attr-defined]
    root.addHandler(handler)
    root.setLevel(level)
