"""Text helpers shared by the HTML views, the Streamlit client and the CLI."""

import io
import wave
from datetime import datetime

from banglamuse.categories import CATEGORIES, CategoryId


def format_category_bn(category: str) -> str:
    """Convert a category id to its Bengali label.

    Args:
        category: Category id such as "poetry".

    Returns:
        Bengali label, or the input unchanged if unknown.
    """
    try:
        return CATEGORIES[CategoryId(category)].bn_label
    except ValueError:
        return category


def word_count(text: str) -> int:
    """Count whitespace-separated words in text."""
    stripped = text.strip()
    return len(stripped.split()) if stripped else 0


def truncate_text(text: str, max_length: int = 100) -> str:
    """Truncate text to max length with ellipsis.

    Args:
        text: Text to truncate.
        max_length: Maximum length before truncation.

    Returns:
        Truncated text with ellipsis if needed.
    """
    if len(text) <= max_length:
        return text
    return text[:max_length] + "..."


def format_timestamp(timestamp_ms: int) -> str:
    """Format an epoch-millisecond timestamp as a local date."""
    return datetime.fromtimestamp(timestamp_ms / 1000).strftime("%Y-%m-%d")


def wav_duration(audio: bytes) -> float:
    """Return the playing time of a WAV clip in seconds, read from its header.

    Raises:
        wave.Error: If the bytes are not a WAV file.
    """
    with wave.open(io.BytesIO(audio), "rb") as wav_file:
        rate = wav_file.getframerate()
        return wav_file.getnframes() / rate if rate else 0.0
