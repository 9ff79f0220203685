"""Rich spinner driven by the submit-retry attempt callback.

:class:`AttemptStatus` is passed as ``on_attempt`` to
:meth:`~sandybox.core.submit_service.SubmitService.submit_with_retry`
and keeps a single status line updated with the current attempt.

Design
------
* Manages a Rich :class:`~rich.status.Status` context.
* Shutdown-safe: once stopped, further calls are ignored.
* Falls back to plain stderr lines when Rich is missing.
"""

from __future__ import annotations

import sys
from typing import Any

from sandybox.cli.console import get_rich_console
from sandybox.exceptions import EnvironmentError


class AttemptStatus:
    """Callable attempt-hook adapter for Rich.

    Usage::

        with AttemptStatus("Submitting form") as status:
            service.submit_with_retry(request, on_attempt=status)
    """

    def __init__(self, label: str = "Working") -> None:
        self._label = label
        self._status: Any | None = None
        self._started: bool = False
        try:
            rich_console = get_rich_console()
        except EnvironmentError:
            rich_console = None
        if rich_console is not None:
            self._status = rich_console.status(f"[bold blue]{label}…")

    # ------------------------------------------------------------------
    # Context manager
    # ------------------------------------------------------------------

    def __enter__(self) -> AttemptStatus:
        self.start()
        return self

    def __exit__(self, *_args: object) -> None:
        self.stop()

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def start(self) -> None:
        if not self._started:
            if self._status is not None:
                self._status.start()
            self._started = True

    def stop(self) -> None:
        """Stop the spinner (idempotent)."""
        if self._started:
            if self._status is not None:
                self._status.stop()
            self._started = False

    # ------------------------------------------------------------------
    # Hook callback
    # ------------------------------------------------------------------

    def __call__(self, attempt: int, total: int) -> None:
        if not self._started:
            return
        text = f"{self._label} (attempt {attempt}/{total})"
        if self._status is not None:
            self._status.update(f"[bold blue]{text}…")
        else:
            print(text, file=sys.stderr)
