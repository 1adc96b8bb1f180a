"""Content generation chain for Bengali articles, fiction, poetry and memoirs."""

import logging
from collections.abc import Callable

from langchain_core.language_models import BaseChatModel
from langchain_core.output_parsers import StrOutputParser
from langchain_core.prompts import ChatPromptTemplate
from pydantic import BaseModel, Field

from banglamuse.categories import (
    LENGTH_WORD_COUNTS,
    CategoryId,
    LengthOption,
    get_category,
)
from banglamuse.llm import get_llm

logger = logging.getLogger(__name__)


class EmptyResponseError(RuntimeError):
    """Raised when the model returns no text."""


class GenerationRequest(BaseModel):
    """Parameters of a single generation request."""

    category: CategoryId = Field(default=CategoryId.ARTICLE, description="Content category")
    topic: str = Field(description="Free-text topic or idea")
    style_sample: str = Field(default="", description="Optional writing sample to imitate")
    length: LengthOption = Field(default=LengthOption.MEDIUM, description="Target length band")
    creativity: float = Field(default=0.8, ge=0.0, le=1.0, description="Sampling temperature")

    @property
    def has_style(self) -> bool:
        return bool(self.style_sample.strip())


SYSTEM_PROMPT = (
    "You are an expert Bengali creative writer known for your eloquent and engaging prose. "
    "Your task is to write a piece of content in Bengali based on the user's specific "
    "requirements. Language: STRICTLY BENGALI."
)

MEMOIR_TONE = (
    "Tone: Write in a nostalgic, first-person perspective with emotional depth. "
    "Use sensory details to evoke memory.\n"
)

STYLE_INSTRUCTION = (
    "\nCRITICAL STYLE INSTRUCTION: Analyze the following sample text carefully. "
    "Mimic its vocabulary, sentence structure, tone, flow, and emotion. "
    "Adapt this EXACT style to write the new content.\n\n"
    'Sample Text (Training Data):\n"{style_sample}"\n'
)


def build_user_prompt(request: GenerationRequest) -> str:
    """Assemble the user instruction for a generation request.

    Args:
        request: Generation parameters.

    Returns:
        Prompt text with task, length band, optional memoir tone and
        optional style imitation directive.
    """
    category = get_category(request.category)
    words = LENGTH_WORD_COUNTS[request.length]

    prompt = (
        f'Task: Write a {category.label} ({category.bn_label}) about: "{request.topic}".\n'
        f"Length: {request.length.value} (approx {words} words).\n"
    )

    if request.category == CategoryId.MEMOIR:
        prompt += MEMOIR_TONE

    if request.has_style:
        prompt += STYLE_INSTRUCTION.replace("{style_sample}", request.style_sample)

    return prompt


class ContentGeneratorChain:
    """Chain that writes new content from a topic and optional style sample.

    A model is built per request because creativity maps directly onto the
    sampling temperature.
    """

    def __init__(self, llm_factory: Callable[..., BaseChatModel] | None = None):
        """Initialize the content generator.

        Args:
            llm_factory: Callable taking ``temperature`` and returning a chat
                model. Defaults to ``get_llm``.
        """
        self.llm_factory = llm_factory or get_llm
        self.parser = StrOutputParser()
        self.prompt = ChatPromptTemplate.from_messages(
            [
                ("system", SYSTEM_PROMPT),
                ("human", "{user_prompt}"),
            ]
        )

    def _build_chain(self, request: GenerationRequest):
        llm = self.llm_factory(temperature=request.creativity)
        return self.prompt | llm | self.parser

    def generate(self, request: GenerationRequest) -> str:
        """Generate content synchronously.

        Raises:
            LLMUnavailableError: If no credential is configured.
            EmptyResponseError: If the model returned no text.
        """
        chain = self._build_chain(request)
        text = chain.invoke({"user_prompt": build_user_prompt(request)})
        return self._check(text)

    async def agenerate(self, request: GenerationRequest) -> str:
        """Async version of generate."""
        chain = self._build_chain(request)
        text = await chain.ainvoke({"user_prompt": build_user_prompt(request)})
        return self._check(text)

    @staticmethod
    def _check(text: str) -> str:
        if not text or not text.strip():
            raise EmptyResponseError("No content generated")
        return text
