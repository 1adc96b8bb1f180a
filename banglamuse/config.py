"""Configuration management using Pydantic Settings.

Priority order:
1. Environment variables (highest priority)
2. .env file (for local development fallback)

The only credential is ``GOOGLE_PROJECT_ID`` (used together with Application
Default Credentials). When it is absent the studio runs in offline mode and
every generation request is answered with the built-in fallback text.
"""

from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables and .env."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Google Cloud
    google_project_id: str | None = None
    google_location: str = "us-central1"

    # Vertex AI text generation
    llm_model: str = "gemini-2.5-flash"
    llm_temperature: float = Field(default=0.8, ge=0.0, le=1.0)

    # Vertex AI speech synthesis
    tts_model: str = "gemini-2.5-flash-preview-tts"
    tts_voice: str = "Kore"
    tts_sample_rate: int = 24000
    tts_max_chars: int = 2000  # Characters sent per TTS request

    # Offline fallback
    fallback_delay_seconds: float = 1.5

    # History persistence
    history_file: Path = Path("data/history.json")
    history_key: str = "banglamuse_history"

    log_level: str = "INFO"

    @property
    def has_credentials(self) -> bool:
        """Whether the external Gemini services can be reached at all."""
        return bool(self.google_project_id and self.google_project_id.strip())


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


# Default settings instance
settings = get_settings()
