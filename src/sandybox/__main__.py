"""Allow ``python -m sandybox`` invocation.

This module simply delegates to the CLI error-boundary entry point so
that ``python -m sandybox`` behaves identically to the ``sandybox``
console script.
"""

from __future__ import annotations

from sandybox.cli.app import cli

if __name__ == "__main__":
    cli()
