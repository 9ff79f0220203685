"""Result types for sandybox.

Every public operation returns one of two shapes: a success payload or
a structured error.  Both are **frozen** dataclasses, discriminated by
their ``ok`` attribute (or by ``isinstance``), and carry no I/O.

* Search:  :data:`SearchResult` = :class:`SearchResponse` | :class:`SearchError`
* Submit:  :data:`FormSubmissionResult` =
  :class:`FormSubmissionResponse` | :class:`FormSubmissionError`
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, ClassVar, Union


class ErrorCode(str, Enum):
    """Machine-readable codes carried by every error value."""

    INVALID_QUERY = "INVALID_QUERY"
    QUERY_TOO_LONG = "QUERY_TOO_LONG"
    API_ERROR = "API_ERROR"
    INVALID_RESPONSE = "INVALID_RESPONSE"
    NETWORK_ERROR = "NETWORK_ERROR"
    NO_RESULTS = "NO_RESULTS"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    SUBMISSION_ERROR = "SUBMISSION_ERROR"
    RETRY_ERROR = "RETRY_ERROR"


# ---------------------------------------------------------------------------
# Search request / response
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class SearchOptions:
    """Optional extras appended to an instant-answer query."""

    t: str | None = None
    """Application name reported to the API for tracking."""

    callback: str | None = None
    """JSONP callback name.  The API then replies with JavaScript, not JSON."""


@dataclass(frozen=True, slots=True)
class Icon:
    url: str = ""
    height: str = ""
    width: str = ""


@dataclass(frozen=True, slots=True)
class RelatedTopic:
    """A single related-topic link."""

    first_url: str
    icon: Icon
    result: str
    """HTML snippet of the result."""

    text: str


@dataclass(frozen=True, slots=True)
class RelatedTopicGroup:
    """A named group of related topics (e.g. ``"See also"``)."""

    name: str
    topics: tuple[RelatedTopic, ...]


@dataclass(frozen=True, slots=True)
class InfoboxEntry:
    data_type: str
    label: str
    value: Any
    wiki_order: int | None = None


@dataclass(frozen=True, slots=True)
class Infobox:
    content: tuple[InfoboxEntry, ...] = ()
    meta: tuple[InfoboxEntry, ...] = ()


@dataclass(frozen=True, slots=True)
class SearchResponse:
    """Successful instant-answer payload."""

    ok: ClassVar[bool] = True

    abstract: str = ""
    abstract_source: str = ""
    abstract_text: str = ""
    abstract_url: str = ""
    answer: str = ""
    answer_type: str = ""
    definition: str = ""
    definition_source: str = ""
    definition_url: str = ""
    entity: str = ""
    heading: str = ""
    image: str = ""
    image_height: int = 0
    image_width: int = 0
    image_is_logo: int = 0
    infobox: Infobox | None = None
    redirect: str = ""
    related_topics: tuple[RelatedTopic | RelatedTopicGroup, ...] = ()
    results: tuple[RelatedTopic, ...] = ()
    type: str = ""
    """Answer type: ``A`` article, ``D`` disambiguation, ``C`` category,
    ``N`` name, ``E`` exclusive, or empty."""

    meta: Mapping[str, Any] = field(default_factory=dict)
    raw: Mapping[str, Any] = field(default_factory=dict, repr=False, compare=False)
    """The decoded JSON body exactly as received."""

    @property
    def is_empty(self) -> bool:
        """``True`` when there is neither an abstract nor any related topic."""
        return not self.abstract and not self.related_topics


@dataclass(frozen=True, slots=True)
class SearchError:
    """Structured search failure."""

    ok: ClassVar[bool] = False

    error: ErrorCode
    message: str
    status_code: int


SearchResult = Union[SearchResponse, SearchError]


# ---------------------------------------------------------------------------
# Form submission
# ---------------------------------------------------------------------------

PIZZA_SIZES: tuple[str, ...] = ("small", "medium", "large")
PIZZA_TOPPINGS: tuple[str, ...] = ("bacon", "cheese", "onion", "mushroom")


@dataclass(frozen=True, slots=True)
class FormData:
    """Values for the pizza-order form.  Every field is optional."""

    custname: str | None = None
    custtel: str | None = None
    custemail: str | None = None
    size: str | None = None
    topping: tuple[str, ...] = ()
    delivery: str | None = None
    """Delivery time as ``HH:MM``."""

    comments: str | None = None

    @classmethod
    def from_mapping(cls, raw: Mapping[str, Any]) -> FormData:
        """Build from a form echo, where ``topping`` may be a str or a list."""
        toppings: Any = raw.get("topping", ())
        if isinstance(toppings, str):
            toppings = (toppings,)
        elif isinstance(toppings, (list, tuple)):
            toppings = tuple(str(t) for t in toppings)
        else:
            toppings = ()

        def _text(key: str) -> str | None:
            value = raw.get(key)
            return None if value is None else str(value)

        return cls(
            custname=_text("custname"),
            custtel=_text("custtel"),
            custemail=_text("custemail"),
            size=_text("size"),
            topping=toppings,
            delivery=_text("delivery"),
            comments=_text("comments"),
        )


@dataclass(frozen=True, slots=True)
class FormSubmissionRequest:
    form_data: FormData
    timeout_ms: int | None = None
    """Browser timeout override; falls back to ``Settings.browser_timeout_ms``."""

    retries: int | None = None
    """Attempt count used by ``submit_with_retry`` when none is passed."""


@dataclass(frozen=True, slots=True)
class SubmittedForm:
    """What the form endpoint echoed back after the POST."""

    form: FormData
    files: Mapping[str, str] = field(default_factory=dict)
    url: str = ""
    origin: str = ""
    method: str = "POST"
    headers: Mapping[str, str] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class FormSubmissionResponse:
    """Successful form submission."""

    ok: ClassVar[bool] = True

    data: SubmittedForm
    timestamp: str
    """UTC ISO-8601 time the submission completed."""

    status_code: int = 200
    success: bool = True


@dataclass(frozen=True, slots=True)
class ErrorDetails:
    field: str | None = None
    validation_error: str | None = None
    network_error: str | None = None


@dataclass(frozen=True, slots=True)
class FormSubmissionError:
    """Structured submission failure."""

    ok: ClassVar[bool] = False

    error: ErrorCode
    message: str
    status_code: int
    details: ErrorDetails | None = None


FormSubmissionResult = Union[FormSubmissionResponse, FormSubmissionError]


@dataclass(frozen=True, slots=True)
class FormValidationResult:
    is_valid: bool
    errors: tuple[str, ...] = ()
    field_errors: Mapping[str, tuple[str, ...]] = field(default_factory=dict)
