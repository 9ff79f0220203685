"""Core / service layer — result types, validation, and orchestration.

Rules
-----
* No ``print()`` calls.
* No network or browser I/O; adapters are injected via protocols.
* No imports from ``cli`` or ``infra``.
* Public service methods return result values and never raise.
"""

from sandybox.core.models import (
    ErrorCode,
    ErrorDetails,
    FormData,
    FormSubmissionError,
    FormSubmissionRequest,
    FormSubmissionResponse,
    FormSubmissionResult,
    FormValidationResult,
    SearchError,
    SearchOptions,
    SearchResponse,
    SearchResult,
    SubmittedForm,
)
from sandybox.core.protocols import FormBrowser, SearchProvider
from sandybox.core.search_service import SearchService
from sandybox.core.submit_service import SubmitService

__all__: list[str] = [
    "ErrorCode",
    "ErrorDetails",
    "FormBrowser",
    "FormData",
    "FormSubmissionError",
    "FormSubmissionRequest",
    "FormSubmissionResponse",
    "FormSubmissionResult",
    "FormValidationResult",
    "SearchError",
    "SearchOptions",
    "SearchProvider",
    "SearchResponse",
    "SearchResult",
    "SearchService",
    "SubmitService",
    "SubmittedForm",
]
