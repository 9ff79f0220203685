"""Pure input validation and sanitization.

Nothing in this module performs I/O.  Search checks return a ready
:class:`~sandybox.core.models.SearchError` (or ``None``); form checks
return a :class:`~sandybox.core.models.FormValidationResult` listing
every failing field, in check order.
"""

from __future__ import annotations

import re
from typing import Any

from sandybox.core.models import (
    PIZZA_SIZES,
    PIZZA_TOPPINGS,
    ErrorCode,
    FormData,
    FormValidationResult,
    SearchError,
)

MAX_QUERY_LENGTH: int = 200
MAX_CUSTNAME_LENGTH: int = 100

_EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
_PHONE_RE = re.compile(r"^\+?[1-9]\d{0,15}$")
_PHONE_PUNCTUATION_RE = re.compile(r"[\s\-()]")
_TIME_RE = re.compile(r"^([0-1]?[0-9]|2[0-3]):[0-5][0-9]$")
_ANGLE_BRACKETS_RE = re.compile(r"[<>]")


# ---------------------------------------------------------------------------
# Search queries
# ---------------------------------------------------------------------------

def validate_query(query: Any) -> SearchError | None:
    """Return an ``INVALID_QUERY`` error unless *query* has visible text."""
    if isinstance(query, str) and query.strip():
        return None
    return SearchError(
        error=ErrorCode.INVALID_QUERY,
        message="Search query must be a non-empty string",
        status_code=400,
    )


def sanitize_query(query: str) -> str:
    """Strip surrounding whitespace and drop ``<`` / ``>`` characters."""
    return _ANGLE_BRACKETS_RE.sub("", query.strip())


def check_query_length(query: str) -> SearchError | None:
    if len(query) > MAX_QUERY_LENGTH:
        return SearchError(
            error=ErrorCode.QUERY_TOO_LONG,
            message=(
                "Search query exceeds maximum length of "
                f"{MAX_QUERY_LENGTH} characters"
            ),
            status_code=400,
        )
    return None


# ---------------------------------------------------------------------------
# Form fields
# ---------------------------------------------------------------------------

def is_valid_email(email: str) -> bool:
    return _EMAIL_RE.fullmatch(email) is not None


def is_valid_phone(phone: str) -> bool:
    """Accept an optional ``+`` then up to 16 digits, ignoring ``( ) -`` and spaces."""
    return _PHONE_RE.fullmatch(_PHONE_PUNCTUATION_RE.sub("", phone)) is not None


def is_valid_time(value: str) -> bool:
    return _TIME_RE.fullmatch(value) is not None


def validate_form_data(form_data: FormData) -> FormValidationResult:
    """Check every populated field of *form_data*.

    Empty fields are never checked; the form has no required inputs.
    """
    errors: list[str] = []
    field_errors: dict[str, list[str]] = {}

    def _fail(name: str, message: str) -> None:
        errors.append(message)
        field_errors.setdefault(name, []).append(message)

    if form_data.custname and len(form_data.custname) > MAX_CUSTNAME_LENGTH:
        _fail("custname", "Customer name must be less than 100 characters")

    if form_data.custemail and not is_valid_email(form_data.custemail):
        _fail("custemail", "Invalid email format")

    if form_data.custtel and not is_valid_phone(form_data.custtel):
        _fail("custtel", "Invalid phone number format")

    if form_data.size and form_data.size not in PIZZA_SIZES:
        _fail("size", "Invalid pizza size (use small, medium or large)")

    for topping in form_data.topping:
        if topping not in PIZZA_TOPPINGS:
            _fail("topping", f"Invalid topping: {topping}")

    if form_data.delivery and not is_valid_time(form_data.delivery):
        _fail("delivery", "Invalid time format (use HH:MM)")

    return FormValidationResult(
        is_valid=not errors,
        errors=tuple(errors),
        field_errors={name: tuple(msgs) for name, msgs in field_errors.items()},
    )
