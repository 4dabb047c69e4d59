"""LLM initialisation and the generation client.

Supports any OpenAI-compatible chat endpoint:

1. **Local Ollama** (default) — ``LLM_BASE_URL=http://localhost:11434/v1``.
   Ollama does not check the API key, so a dummy value is sent.
2. **OpenAI cloud** — set ``LLM_BASE_URL=""`` and ``OPENAI_API_KEY``.
"""

from __future__ import annotations

import logging
from typing import Protocol, runtime_checkable

from langchain_core.language_models import BaseChatModel
from langchain_openai import ChatOpenAI

from gutenberg_rag.config import Settings, settings
from gutenberg_rag.exceptions import GenerationServiceError

logger = logging.getLogger(__name__)


@runtime_checkable
class Generator(Protocol):
    """Anything that turns a prompt into a completion."""

    def complete(self, prompt: str, temperature: float | None = None) -> str: ...


def get_llm(
    temperature: float = settings.temperature,
    config: Settings | None = None,
) -> ChatOpenAI:
    """Return the chat model described by *config* (global settings by default)."""
    config = config or settings
    kwargs: dict = {
        "model": config.llm_model_name,
        "temperature": temperature,
    }

    if config.llm_base_url:
        logger.info("Using OpenAI-compatible endpoint: %s", config.llm_base_url)
        kwargs["base_url"] = config.llm_base_url
        # Ollama doesn't need a real key; LangChain requires a non-empty value.
        kwargs["api_key"] = config.openai_api_key or "EMPTY"
    else:
        kwargs["api_key"] = config.openai_api_key

    return ChatOpenAI(**kwargs)


class ChatGenerator:
    """:class:`Generator` backed by a LangChain chat model.

    Parameters
    ----------
    llm:
        Chat model to call.  Defaults to :func:`get_llm`.
    temperature:
        Sampling temperature used when :meth:`complete` is not given one.
    """

    def __init__(
        self,
        llm: BaseChatModel | None = None,
        *,
        temperature: float = settings.temperature,
    ) -> None:
        self.temperature = temperature
        self._llm = llm if llm is not None else get_llm(temperature)

    def complete(self, prompt: str, temperature: float | None = None) -> str:
        llm = self._llm
        if temperature is not None and temperature != self.temperature:
            llm = llm.bind(temperature=temperature)

        try:
            response = llm.invoke(prompt)
        except Exception as exc:
            raise GenerationServiceError(
                "Language model call failed", details={"error": str(exc)}
            ) from exc

        content = response.content if hasattr(response, "content") else response
        if not isinstance(content, str):
            content = str(content)
        logger.info("Generated %d character answer", len(content))
        return content
