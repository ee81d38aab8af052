"""
Abstract base class for LLM clients
"""

from abc import ABC, abstractmethod
from typing import Optional

from core.config import settings


class BaseLLMClient(ABC):
    """Abstract base class for all LLM clients"""

    provider: str = ""

    def __init__(self, model: str, max_tokens: Optional[int] = None, temperature: Optional[float] = None):
        self.model = model
        self.max_tokens = max_tokens or settings.llm_max_tokens
        self.temperature = settings.llm_temperature if temperature is None else temperature

    @abstractmethod
    async def complete(self, prompt: str) -> str:
        """
        Generate a completion for a single user prompt.

        Args:
            prompt: Full prompt text (context and question already filled in)

        Returns:
            Generated text, "" when the model returns no content

        Raises:
            LLMError: If the request fails
        """
        pass

    async def close(self) -> None:
        """Release HTTP connections"""
        pass
