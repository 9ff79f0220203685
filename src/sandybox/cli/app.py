"""CLI application entry point and command routing for sandybox.

This module is the **sole error boundary** for the entire application.
Services already return result values; what remains (configuration
errors, ``KeyboardInterrupt``, anything unexpected) is caught in
:func:`cli` and mapped to a well-defined exit code.

Architecture notes
------------------
* No business logic lives here — all work is delegated to the core
  services wired with the infrastructure adapters.
* Results go to stdout, status and errors to stderr.
"""

from __future__ import annotations

import argparse
import logging
import sys

from sandybox.cli import exit_codes
from sandybox.cli.console import configure_logging, console, escape
from sandybox.config import Settings
from sandybox.exceptions import SandyboxError
from sandybox.version import __version__

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Argument parser
# ---------------------------------------------------------------------------

def _build_parser() -> argparse.ArgumentParser:
    """Construct the top-level argument parser.

    * ``sandybox search <query>``  — instant-answer lookup
    * ``sandybox submit [fields]`` — fill and submit the order form
    * ``sandybox doctor``          — environment diagnostics
    * ``sandybox --version``
    """
    parser = argparse.ArgumentParser(
        prog="sandybox",
        description="Instant-answer search and headless form submission.",
    )
    parser.add_argument(
        "-V",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Log more detail (-v info, -vv debug).",
    )
    sub = parser.add_subparsers(dest="command")

    search = sub.add_parser("search", help="Query the instant-answer API.")
    search.add_argument("query", nargs="+", help="Search terms.")
    mode = search.add_mutually_exclusive_group()
    mode.add_argument(
        "--validate",
        action="store_true",
        help="Strip < and > and reject queries over 200 characters.",
    )
    mode.add_argument(
        "--filter-empty",
        action="store_true",
        help="Report NO_RESULTS when there is no abstract and no related topic.",
    )
    search.add_argument(
        "--include-images",
        action="store_true",
        help="Keep image fields (they are blanked when --filter-empty is used).",
    )
    search.add_argument("--app-name", default=None, help="Value sent as the 't' parameter.")

    submit = sub.add_parser("submit", help="Submit the pizza-order form.")
    submit.add_argument("--name", dest="custname", default=None)
    submit.add_argument("--tel", dest="custtel", default=None)
    submit.add_argument("--email", dest="custemail", default=None)
    submit.add_argument("--size", default=None, help="small, medium or large.")
    submit.add_argument(
        "--topping",
        action="append",
        default=[],
        help="bacon, cheese, onion or mushroom; repeat for several.",
    )
    submit.add_argument("--delivery", default=None, help="Delivery time as HH:MM.")
    submit.add_argument("--comments", default=None)
    submit.add_argument("--timeout", type=int, default=None, help="Browser timeout in ms.")
    retry = submit.add_mutually_exclusive_group()
    retry.add_argument("--retries", type=int, default=None, help="Attempts before giving up.")
    retry.add_argument("--no-retry", action="store_true", help="Make a single attempt.")

    sub.add_parser("doctor", help="Check the runtime environment.")
    return parser


# ---------------------------------------------------------------------------
# Command dispatch
# ---------------------------------------------------------------------------

def _handle_search(args: argparse.Namespace, settings: Settings) -> int:
    from sandybox.cli.render import render_error, render_search
    from sandybox.core.models import SearchError, SearchOptions
    from sandybox.core.search_service import SearchService
    from sandybox.infra.requests_provider import RequestsSearchProvider

    service = SearchService(RequestsSearchProvider(), settings)
    query = " ".join(args.query)
    options = SearchOptions(t=args.app_name) if args.app_name else None

    if args.validate:
        result = service.search_with_validation(query, options)
    elif args.filter_empty:
        result = service.search_with_filtering(
            query,
            options,
            filter_empty_results=True,
            include_images=args.include_images,
        )
    else:
        result = service.search(query, options)

    if isinstance(result, SearchError):
        render_error(result)
        return exit_codes.GENERAL_ERROR

    render_search(result)
    return exit_codes.SUCCESS


def _handle_submit(args: argparse.Namespace, settings: Settings) -> int:
    from sandybox.cli.progress import AttemptStatus
    from sandybox.cli.render import render_error, render_submission
    from sandybox.core.models import FormData, FormSubmissionError, FormSubmissionRequest
    from sandybox.core.submit_service import SubmitService
    from sandybox.infra.playwright_browser import PlaywrightFormBrowser

    request = FormSubmissionRequest(
        form_data=FormData(
            custname=args.custname,
            custtel=args.custtel,
            custemail=args.custemail,
            size=args.size,
            topping=tuple(args.topping),
            delivery=args.delivery,
            comments=args.comments,
        ),
        timeout_ms=args.timeout,
        retries=args.retries,
    )
    service = SubmitService(PlaywrightFormBrowser(), settings)

    with AttemptStatus("Submitting form") as status:
        result = service.submit_with_retry(
            request,
            1 if args.no_retry else None,
            on_attempt=status,
        )

    if isinstance(result, FormSubmissionError):
        render_error(result)
        return exit_codes.GENERAL_ERROR

    render_submission(result)
    return exit_codes.SUCCESS


def _handle_doctor() -> int:
    from sandybox.cli.doctor import run_doctor

    return run_doctor()


def _log_level(verbosity: int, settings: Settings) -> str:
    if verbosity >= 2:
        return "DEBUG"
    if verbosity == 1:
        return "INFO"
    return settings.log_level


# ---------------------------------------------------------------------------
# Main entry point
# ---------------------------------------------------------------------------

def main(argv: list[str] | None = None) -> int:
    """Run the sandybox CLI.

    Parameters
    ----------
    argv:
        Explicit argument list.  When ``None`` (default), ``sys.argv[1:]``
        is used.

    Returns
    -------
    int
        OS process exit code.
    """
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return exit_codes.SUCCESS

    if args.command == "doctor":
        return _handle_doctor()

    settings = Settings.from_env()
    configure_logging(_log_level(args.verbose, settings))
    logger.debug("Running %s with %s", args.command, settings)

    if args.command == "search":
        return _handle_search(args, settings)
    return _handle_submit(args, settings)


# ---------------------------------------------------------------------------
# Script-level error boundary
# ---------------------------------------------------------------------------

def cli() -> None:
    """Top-level error boundary invoked by the console-script entry point.

    This function wraps :func:`main` and guarantees the process never
    exits with a raw stack trace during normal usage.
    """
    try:
        code = main()
        sys.exit(code)
    except SandyboxError as exc:
        console.print(f"[bold red]Error:[/bold red] {escape(exc)}")
        if exc.hint:
            console.print(f"[yellow]Hint:[/yellow] {escape(exc.hint)}")
        sys.exit(exit_codes.GENERAL_ERROR)
    except KeyboardInterrupt:
        console.print("\n[yellow]Aborted by user.[/yellow]")
        sys.exit(exit_codes.KEYBOARD_INTERRUPT)
    except Exception as exc:  # noqa: BLE001
        console.print(
            "[bold red]Unexpected error.[/bold red] "
            "Please report this issue.\n"
            f"  {type(exc).__name__}: {escape(exc)}"
        )
        sys.exit(exit_codes.UNEXPECTED_ERROR)
