"""
OpenAI chat completions client
"""

from typing import Any, Dict, Optional

from domain.llm.http_client import HTTPLLMClient
from core.config import settings


class OpenAIChatClient(HTTPLLMClient):
    """POST {api_url}/chat/completions"""

    provider = "openai"

    def __init__(self, model: str, api_key: Optional[str] = None, **kwargs):
        super().__init__(
            model,
            api_key=api_key or settings.openai_api_key,
            api_url=settings.openai_api_url,
            **kwargs
        )

    def _headers(self) -> Dict[str, str]:
        return {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }

    def _endpoint(self) -> str:
        return f"{self.api_url}/chat/completions"

    def _build_payload(self, prompt: str) -> Dict[str, Any]:
        return {
            "model": self.model,
            "messages": [{"role": "user", "content": prompt}],
            "temperature": self.temperature,
            "max_tokens": self.max_tokens,
        }

    def _parse_text(self, data: Dict[str, Any]) -> str:
        choices = data.get("choices") or []
        if not choices:
            return ""
        return choices[0]["message"].get("content") or ""
