"""
Gemini generateContent client
"""

from typing import Any, Dict, Optional

from domain.llm.http_client import HTTPLLMClient
from core.config import settings


class GeminiChatClient(HTTPLLMClient):
    """POST {api_url}/models/{model}:generateContent"""

    provider = "gemini"

    def __init__(self, model: str, api_key: Optional[str] = None, **kwargs):
        super().__init__(
            model,
            api_key=api_key or settings.gemini_api_key,
            api_url=settings.gemini_api_url,
            **kwargs
        )

    def _headers(self) -> Dict[str, str]:
        return {
            "x-goog-api-key": self.api_key,
            "Content-Type": "application/json",
        }

    def _endpoint(self) -> str:
        return f"{self.api_url}/models/{self.model}:generateContent"

    def _build_payload(self, prompt: str) -> Dict[str, Any]:
        return {
            "contents": [{"role": "user", "parts": [{"text": prompt}]}],
            "generationConfig": {
                "temperature": self.temperature,
                "maxOutputTokens": self.max_tokens,
            },
        }

    def _parse_text(self, data: Dict[str, Any]) -> str:
        candidates = data.get("candidates") or []
        if not candidates:
            return ""
        parts = candidates[0].get("content", {}).get("parts") or []
        return "".join(part.get("text", "") for part in parts)
