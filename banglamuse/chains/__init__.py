"""LangChain chains for content generation and refinement."""

from banglamuse.chains.content_generator import (
    ContentGeneratorChain,
    EmptyResponseError,
    GenerationRequest,
    build_user_prompt,
)
from banglamuse.chains.fallback import get_fallback_text
from banglamuse.chains.refiner import RefineAction, RefinerChain, build_refine_prompt

__all__ = [
    "ContentGeneratorChain",
    "EmptyResponseError",
    "GenerationRequest",
    "RefineAction",
    "RefinerChain",
    "build_refine_prompt",
    "build_user_prompt",
    "get_fallback_text",
]
