"""UI module for the Streamlit web interface."""

from banglamuse.ui.api_client import APIClient
from banglamuse.ui.utils import (
    format_category_bn,
    format_timestamp,
    truncate_text,
    wav_duration,
    word_count,
)

__all__ = [
    "APIClient",
    "format_category_bn",
    "format_timestamp",
    "truncate_text",
    "wav_duration",
    "word_count",
]
