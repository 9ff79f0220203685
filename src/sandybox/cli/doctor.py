"""``sandybox doctor`` — environment diagnostics command.

Gathers system information and renders a Rich table summarising
whether the runtime environment satisfies sandybox's requirements.

This module lives in the CLI layer — it purely collects and displays
diagnostic data.
"""

from __future__ import annotations

import platform
import sys
from importlib.metadata import PackageNotFoundError, version

from sandybox.cli import exit_codes
from sandybox.cli.console import console, escape
from sandybox.config import Settings
from sandybox.exceptions import ConfigurationError
from sandybox.version import __version__


# ---------------------------------------------------------------------------
# Diagnostic collectors
# ---------------------------------------------------------------------------

def _python_version_check() -> tuple[str, str, str]:
    """Return (label, value, status) for the Python version row."""
    py_version = platform.python_version()
    ok = sys.version_info[:2] >= (3, 10)
    status = "[green]OK[/green]" if ok else "[red]FAIL (>=3.10 required)[/red]"
    return "Python", py_version, status


def _requests_check() -> tuple[str, str, str]:
    """Return (label, value, status) for the requests row."""
    try:
        import requests
    except ImportError:
        return "requests", "NOT INSTALLED", "[red]FAIL[/red]"
    return "requests", getattr(requests, "__version__", "unknown"), "[green]OK[/green]"


def _playwright_check() -> tuple[str, str, str]:
    """Return (label, value, status) for the playwright row.

    Browser binaries are not probed; a missing Chromium only surfaces
    when a submission launches it.
    """
    try:
        import playwright.sync_api  # noqa: F401
    except ImportError:
        return "playwright", "NOT INSTALLED", "[red]FAIL[/red]"

    try:
        value = version("playwright")
    except PackageNotFoundError:
        value = "unknown"
    return "playwright", value, "[green]OK[/green]"


def _config_check() -> tuple[str, str, str]:
    """Return (label, value, status) for the SANDYBOX_* settings row."""
    try:
        settings = Settings.from_env()
    except ConfigurationError as exc:
        return "config", str(exc), "[red]FAIL[/red]"
    value = f"retries={settings.max_retries} headless={settings.headless}"
    return "config", value, "[green]OK[/green]"


def _os_check() -> tuple[str, str, str]:
    """Return (label, value, status) for the OS row."""
    system_raw = platform.system()
    system_display = {
        "Windows": "Windows",
        "Linux": "Linux",
        "Darwin": "macOS",
    }.get(system_raw, system_raw)
    value = f"{system_display} {platform.release()} ({platform.machine()})"
    return "OS", value, "[green]OK[/green]"


def _sandybox_version_check() -> tuple[str, str, str]:
    return "sandybox", __version__, "[green]OK[/green]"


def _status_plain(status: str) -> str:
    """Convert rich-markup status to plain text."""
    for word in ("FAIL", "WARN", "OK"):
        if word in status:
            return word
    return status


def _print_plain_doctor_table(checks: list[tuple[str, str, str]]) -> None:
    """Render doctor output without Rich."""
    print("\nsandybox doctor", file=sys.stderr)
    print("=" * 56, file=sys.stderr)
    print(f"{'Component':<12} {'Value':<32} {'Status':<8}", file=sys.stderr)
    print("-" * 56, file=sys.stderr)
    for label, value, status in checks:
        print(f"{label:<12} {value:<32} {_status_plain(status):<8}", file=sys.stderr)
    print(file=sys.stderr)


# ---------------------------------------------------------------------------
# Public entry point
# ---------------------------------------------------------------------------

def run_doctor() -> int:
    """Execute all diagnostic checks and render a summary table.

    Returns
    -------
    int
        :data:`exit_codes.SUCCESS` when all checks pass,
        :data:`exit_codes.GENERAL_ERROR` if any check fails.
    """
    checks = [
        _sandybox_version_check(),
        _python_version_check(),
        _requests_check(),
        _playwright_check(),
        _config_check(),
        _os_check(),
    ]
    has_failure = any("FAIL" in status for _, _, status in checks)

    try:
        from rich.table import Table
    except ModuleNotFoundError:
        _print_plain_doctor_table(checks)
        print(
            "Some checks failed." if has_failure else "All checks passed.",
            file=sys.stderr,
        )
    else:
        table = Table(
            title="sandybox doctor",
            show_header=True,
            header_style="bold cyan",
            border_style="dim",
        )
        table.add_column("Component", style="bold", min_width=12)
        table.add_column("Value", min_width=20)
        table.add_column("Status", justify="center", min_width=8)
        for label, value, status in checks:
            table.add_row(label, escape(value), status)

        console.print()
        console.print(table)
        console.print()
        if has_failure:
            console.print("[bold red]Some checks failed.[/bold red]")
        else:
            console.print("[bold green]All checks passed.[/bold green]")

    return exit_codes.GENERAL_ERROR if has_failure else exit_codes.SUCCESS
