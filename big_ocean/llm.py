"""Shared LLM client factory.

Every module that needs a chat model should import from here instead of
constructing its own client, so model selection and timeouts stay in one
place.
"""

from __future__ import annotations

from langchain_openai import ChatOpenAI

from big_ocean import settings

# Default network timeout (seconds) for all OpenAI requests.
_REQUEST_TIMEOUT: int = 30


def get_chat_llm(
    *,
    temperature: float = 0.7,
    request_timeout: int = _REQUEST_TIMEOUT,
) -> ChatOpenAI:
    """Return a configured ChatOpenAI instance."""
    return ChatOpenAI(
        model=settings.LLM_MODEL_NAME,
        temperature=temperature,
        request_timeout=request_timeout,
    )
