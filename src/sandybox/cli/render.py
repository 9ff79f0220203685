"""Result rendering for the CLI.

Success payloads are shown as Rich tables on stdout; error values are
shown as a one-line code/message pair on stderr.  Without Rich, the
same information is printed as aligned plain text.
"""

from __future__ import annotations

from typing import Any

from sandybox.cli.console import console, escape, out
from sandybox.core.models import (
    FormSubmissionError,
    FormSubmissionResponse,
    RelatedTopic,
    RelatedTopicGroup,
    SearchError,
    SearchResponse,
)

ABSTRACT_PREVIEW_CHARS: int = 200


def _import_table() -> Any | None:
    try:
        from rich.table import Table
    except ModuleNotFoundError:
        return None
    return Table


def _render_rows(title: str, rows: list[tuple[str, str]]) -> None:
    """Render a two-column key/value table, Rich or plain."""
    table_class = _import_table()
    if table_class is None:
        out.print(title)
        for label, value in rows:
            out.print(f"  {label:<16} {escape(value)}")
        return

    table = table_class(title=title, show_header=False, border_style="dim")
    table.add_column("Field", style="bold cyan", no_wrap=True)
    table.add_column("Value", overflow="fold")
    for label, value in rows:
        table.add_row(label, escape(value))
    out.print(table)


def _preview(text: str, limit: int = ABSTRACT_PREVIEW_CHARS) -> str:
    if len(text) <= limit:
        return text
    return text[: limit - 3] + "..."


def count_topics(response: SearchResponse) -> int:
    """Count leaf topics, descending into named groups."""
    total = 0
    for item in response.related_topics:
        if isinstance(item, RelatedTopicGroup):
            total += len(item.topics)
        elif isinstance(item, RelatedTopic):
            total += 1
    return total


def render_search(response: SearchResponse) -> None:
    rows = [
        ("Heading", response.heading or "-"),
        ("Type", response.type or "-"),
        ("Abstract", _preview(response.abstract) or "-"),
        ("Source", response.abstract_source or "-"),
        ("URL", response.abstract_url or "-"),
        ("Related topics", str(count_topics(response))),
    ]
    if response.answer:
        rows.insert(2, ("Answer", response.answer))
    if response.image:
        rows.append(("Image", response.image))
    groups = [
        item.name for item in response.related_topics if isinstance(item, RelatedTopicGroup)
    ]
    if groups:
        rows.append(("Groups", ", ".join(groups)))
    _render_rows("Instant answer", rows)


def render_submission(response: FormSubmissionResponse) -> None:
    form = response.data.form
    rows = [
        ("Status", str(response.status_code)),
        ("Method", response.data.method),
        ("URL", response.data.url or "-"),
        ("Name", form.custname or "-"),
        ("Size", form.size or "-"),
        ("Toppings", ", ".join(form.topping) or "-"),
        ("Delivery", form.delivery or "-"),
        ("Submitted at", response.timestamp),
    ]
    _render_rows("Form submitted", rows)


def render_error(error: SearchError | FormSubmissionError) -> None:
    console.print(
        f"[bold red]{error.error.value}[/bold red] "
        f"({error.status_code}): {escape(error.message)}"
    )
    details = getattr(error, "details", None)
    if details is not None:
        if details.validation_error:
            console.print(
                f"[yellow]Invalid:[/yellow] {escape(details.validation_error)}"
            )
        if details.network_error:
            console.print(f"[yellow]Network:[/yellow] {escape(details.network_error)}")
