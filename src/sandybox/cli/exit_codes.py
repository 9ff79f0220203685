"""Process exit codes returned by :func:`sandybox.cli.app.main`.

Error *results* (a search or submission that came back as an error
value) and known :class:`~sandybox.exceptions.SandyboxError` failures
share :data:`GENERAL_ERROR`; only crashes use :data:`UNEXPECTED_ERROR`.
"""

from __future__ import annotations

SUCCESS: int = 0
"""The command printed a success result."""

GENERAL_ERROR: int = 1
"""An error result, a failed doctor check or a bad ``SANDYBOX_*`` value."""

KEYBOARD_INTERRUPT: int = 130
"""Interrupted with Ctrl+C (128 + SIGINT)."""

UNEXPECTED_ERROR: int = 2
"""Anything the error boundary in ``cli()`` did not anticipate."""
