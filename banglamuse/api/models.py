"""API request and response models."""

from pydantic import BaseModel, Field

from banglamuse.categories import CategoryId, LengthOption
from banglamuse.chains.refiner import RefineAction


class GenerateRequest(BaseModel):
    """Request model for content generation."""

    category: CategoryId = Field(default=CategoryId.ARTICLE, description="Content category")
    topic: str = Field(description="Topic or idea to write about")
    style_sample: str = Field(default="", description="Optional writing sample to imitate")
    length: LengthOption = Field(default=LengthOption.MEDIUM, description="Target length")
    creativity: float | None = Field(
        default=None, ge=0.0, le=1.0, description="Sampling temperature (uses default if omitted)"
    )


class RefineRequest(BaseModel):
    """Request model for refining the current content."""

    action: RefineAction = Field(description="shorten, expand or polish")
    category: CategoryId | None = Field(default=None, description="Category to record in history")
    topic: str | None = Field(default=None, description="Topic to record in history")


class SpeechEndedRequest(BaseModel):
    """Notification that the client finished playing a clip."""

    clip_id: str = Field(description="Id of the clip that ended")


class CategoryResponse(BaseModel):
    """Category metadata for building selectors."""

    id: CategoryId
    label: str
    bn_label: str
    description: str


class HistoryDeleteResponse(BaseModel):
    """Response for a history deletion."""

    status: str = "deleted"
    id: str


class ErrorResponse(BaseModel):
    """Error response model."""

    error: str = Field(description="Error type")
    detail: str | None = Field(default=None, description="Error details")
