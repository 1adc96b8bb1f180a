"""State model shared by the studio, the HTML views and the Streamlit client."""

from pydantic import BaseModel, Field

from banglamuse.categories import CategoryId, LengthOption


class StudioState(BaseModel):
    """Editing state of the writing studio."""

    # Inputs
    selected_category: CategoryId = Field(default=CategoryId.ARTICLE, description="Selected category")
    topic: str = Field(default="", description="Topic or idea")
    style_sample: str = Field(default="", description="Writing sample to imitate")
    length: LengthOption = Field(default=LengthOption.MEDIUM, description="Target length")
    creativity: float = Field(default=0.8, ge=0.0, le=1.0, description="Sampling temperature")

    # Output
    generated_content: str = Field(default="", description="Latest generated text")
    show_style_badge: bool = Field(default=False, description="Content was written with a style sample")
    error_message: str | None = Field(default=None, description="User-facing error message")

    # In-flight flags
    is_generating: bool = Field(default=False, description="Generation in flight")
    is_refining: bool = Field(default=False, description="Refinement in flight")
    is_generating_audio: bool = Field(default=False, description="Speech synthesis in flight")
    is_playing_audio: bool = Field(default=False, description="Audio is playing")

    # Active audio clip, if any
    audio_clip_id: str | None = Field(default=None, description="Id of the active audio clip")
