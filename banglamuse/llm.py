"""Client factories for the Gemini text and speech models.

Both factories check for the Google Cloud credential before building a
client, so a missing ``GOOGLE_PROJECT_ID`` surfaces as ``LLMUnavailableError``
before any request is attempted.
"""

from google import genai
from langchain_google_vertexai import ChatVertexAI

from banglamuse.config import get_settings


class LLMUnavailableError(RuntimeError):
    """Raised when no credential is configured for the Gemini services."""


def _require_project_id() -> str:
    settings = get_settings()
    if not settings.has_credentials:
        raise LLMUnavailableError("GOOGLE_PROJECT_ID is not configured")
    return settings.google_project_id


def get_llm(temperature: float | None = None) -> ChatVertexAI:
    """Get a chat model instance for text generation.

    Args:
        temperature: Sampling temperature. If None, uses settings.llm_temperature.

    Returns:
        ChatVertexAI instance configured with the text model.

    Raises:
        LLMUnavailableError: If no Google Cloud project is configured.

    Examples:
        >>> # Creative writing
        >>> llm = get_llm(temperature=0.9)

        >>> # Refinement uses the model default
        >>> llm = get_llm()
    """
    project_id = _require_project_id()
    settings = get_settings()

    temp = temperature if temperature is not None else settings.llm_temperature

    return ChatVertexAI(
        model_name=settings.llm_model,
        project=project_id,
        location=settings.google_location,
        temperature=temp,
    )


def get_genai_client() -> genai.Client:
    """Get a google-genai client bound to Vertex AI for speech synthesis.

    Raises:
        LLMUnavailableError: If no Google Cloud project is configured.
    """
    project_id = _require_project_id()
    settings = get_settings()
    return genai.Client(
        vertexai=True,
        project=project_id,
        location=settings.google_location,
    )
