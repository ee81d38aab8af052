"""
Groq LLM client implementation
"""

import logging
from typing import Optional
from groq import Groq

from domain.llm.base import BaseLLMClient
from core.config import settings
from core.exceptions import LLMError

logger = logging.getLogger(__name__)


class GroqClient(BaseLLMClient):
    """Groq LLM client implementation"""

    provider = "groq"

    def __init__(
        self,
        model: str,
        max_tokens: Optional[int] = None,
        temperature: Optional[float] = None,
        api_key: Optional[str] = None
    ):
        super().__init__(model, max_tokens, temperature)
        try:
            self.client = Groq(api_key=api_key or settings.groq_api_key or None, timeout=settings.llm_timeout)
        except Exception as e:
            raise LLMError(f"Failed to initialize Groq client: {e}")

    async def complete(self, prompt: str) -> str:
        """Make a chat completion request to Groq"""
        try:
            response = self.client.chat.completions.create(
                model=self.model,
                max_tokens=self.max_tokens,
                temperature=self.temperature,
                messages=[{"role": "user", "content": prompt}],
            )
        except Exception as e:
            logger.error(f"Error calling Groq API: {e}")
            raise LLMError(f"Groq API call failed: {e}")

        if not response.choices:
            return ""
        return response.choices[0].message.content or ""
