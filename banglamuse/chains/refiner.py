"""Refinement chain for rewriting existing Bengali content.

Takes the current text and rewrites it according to one of three actions:
shorten, expand or polish. No per-request temperature is passed, so the
configured default (``LLM_TEMPERATURE``) applies.
"""

import logging
from collections.abc import Callable
from enum import Enum

from langchain_core.language_models import BaseChatModel
from langchain_core.output_parsers import StrOutputParser
from langchain_core.prompts import ChatPromptTemplate

from banglamuse.chains.content_generator import EmptyResponseError
from banglamuse.llm import get_llm

logger = logging.getLogger(__name__)


class RefineAction(str, Enum):
    """Supported refinement actions."""

    SHORTEN = "shorten"
    EXPAND = "expand"
    POLISH = "polish"


ACTION_DIRECTIVES: dict[RefineAction, str] = {
    RefineAction.SHORTEN: (
        "Task: Rewrite the above Bengali text to be shorter and more concise "
        "while keeping the main message."
    ),
    RefineAction.EXPAND: (
        "Task: Expand the above Bengali text with more details, descriptions, "
        "and emotional depth."
    ),
    RefineAction.POLISH: (
        "Task: Polish the above Bengali text to make it more grammatically elegant, "
        "professional, and flow better."
    ),
}

# Bengali button labels
ACTION_LABELS: dict[RefineAction, str] = {
    RefineAction.SHORTEN: "সংক্ষিপ্ত করুন",
    RefineAction.EXPAND: "বিস্তারিত করুন",
    RefineAction.POLISH: "মার্জিত করুন",
}


def build_refine_prompt(text: str, action: RefineAction) -> str:
    """Wrap the original text with the directive for an action."""
    return f'Original Text:\n"{text}"\n\n{ACTION_DIRECTIVES[RefineAction(action)]}'


class RefinerChain:
    """Chain that rewrites content according to a RefineAction."""

    def __init__(self, llm_factory: Callable[..., BaseChatModel] | None = None):
        """Initialize the refiner.

        Args:
            llm_factory: Callable returning a chat model. Defaults to ``get_llm``,
                which uses ``settings.llm_temperature``.
                Called per request so a missing credential is reported at call time.
        """
        self.llm_factory = llm_factory or get_llm
        self.parser = StrOutputParser()
        self.prompt = ChatPromptTemplate.from_messages([("human", "{refine_prompt}")])

    def refine(self, text: str, action: RefineAction) -> str:
        """Rewrite text synchronously.

        Raises:
            LLMUnavailableError: If no credential is configured.
            EmptyResponseError: If the model returned no text.
        """
        chain = self.prompt | self.llm_factory() | self.parser
        result = chain.invoke({"refine_prompt": build_refine_prompt(text, action)})
        if not result or not result.strip():
            raise EmptyResponseError(f"Refinement '{RefineAction(action).value}' returned no text")
        return result

    async def arefine(self, text: str, action: RefineAction) -> str:
        """Async version of refine."""
        chain = self.prompt | self.llm_factory() | self.parser
        result = await chain.ainvoke({"refine_prompt": build_refine_prompt(text, action)})
        if not result or not result.strip():
            raise EmptyResponseError(f"Refinement '{RefineAction(action).value}' returned no text")
        return result
