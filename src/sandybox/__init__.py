"""sandybox — typed integrations for instant-answer search and form submission.

Every public operation returns either a success payload or a structured
error value; nothing raises past the call boundary.
"""

from sandybox.api import (
    search_duckduckgo,
    search_with_filtering,
    search_with_validation,
    submit_form,
    submit_form_with_retry,
)
from sandybox.core.models import (
    ErrorCode,
    FormData,
    FormSubmissionError,
    FormSubmissionRequest,
    FormSubmissionResponse,
    FormSubmissionResult,
    SearchError,
    SearchOptions,
    SearchResponse,
    SearchResult,
)
from sandybox.version import __version__

__all__: list[str] = [
    "ErrorCode",
    "FormData",
    "FormSubmissionError",
    "FormSubmissionRequest",
    "FormSubmissionResponse",
    "FormSubmissionResult",
    "SearchError",
    "SearchOptions",
    "SearchResponse",
    "SearchResult",
    "__version__",
    "search_duckduckgo",
    "search_with_filtering",
    "search_with_validation",
    "submit_form",
    "submit_form_with_retry",
]
