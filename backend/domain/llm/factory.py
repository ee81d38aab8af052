"""
Factory for creating LLM clients
"""

from typing import Optional

from domain.llm.base import BaseLLMClient
from domain.llm.groq_client import GroqClient
from domain.llm.openai_client import OpenAIChatClient
from domain.llm.gemini_client import GeminiChatClient
from core.config import settings
from core.exceptions import LLMError

OPENAI_MODEL_PREFIXES = ("gpt-", "o1", "o3", "o4")


def infer_provider(model: str) -> str:
    """Provider implied by a model name, else the configured default"""
    name = model.lower()
    if name.startswith(OPENAI_MODEL_PREFIXES):
        return "openai"
    if name.startswith("gemini"):
        return "gemini"
    return settings.llm_provider.lower()


def create_llm_client(
    model: str,
    provider: Optional[str] = None,
    api_key: Optional[str] = None
) -> BaseLLMClient:
    """
    Create an LLM client for a model.

    Args:
        model: Model name, e.g. "gpt-4.1-mini" or "gemini-2.5-flash"
        provider: LLM provider name (overrides inference from the model name)
        api_key: API key (overrides settings)

    Raises:
        LLMError: If provider is not supported or client creation fails
    """
    provider = (provider or infer_provider(model)).lower()

    if provider == "openai":
        return OpenAIChatClient(model, api_key=api_key)
    elif provider == "gemini":
        return GeminiChatClient(model, api_key=api_key)
    elif provider == "groq":
        return GroqClient(model, api_key=api_key)
    else:
        raise LLMError(f"Unknown LLM provider: {provider}")
