"""API module for FastAPI endpoints and HTML views."""

from banglamuse.api.models import (
    CategoryResponse,
    ErrorResponse,
    GenerateRequest,
    HistoryDeleteResponse,
    RefineRequest,
    SpeechEndedRequest,
)

__all__ = [
    "CategoryResponse",
    "ErrorResponse",
    "GenerateRequest",
    "HistoryDeleteResponse",
    "RefineRequest",
    "SpeechEndedRequest",
]
