"""
Shared httpx plumbing for REST-based LLM clients
"""

import logging
from abc import abstractmethod
from typing import Any, Dict, Optional

import httpx

from domain.llm.base import BaseLLMClient
from core.config import settings
from core.exceptions import LLMError
from utils.retry import retry_with_backoff

logger = logging.getLogger(__name__)


class TransientLLMError(LLMError):
    """Rate limit, server error or network failure; safe to retry"""
    pass


class HTTPLLMClient(BaseLLMClient):
    """Posts one JSON request per completion over a pooled httpx client"""

    def __init__(
        self,
        model: str,
        api_key: str,
        api_url: str,
        max_tokens: Optional[int] = None,
        temperature: Optional[float] = None,
        timeout: Optional[int] = None
    ):
        super().__init__(model, max_tokens, temperature)
        self.api_key = api_key
        self.api_url = api_url.rstrip("/")
        self.timeout = timeout or settings.llm_timeout
        self._client: Optional[httpx.AsyncClient] = None

    @abstractmethod
    def _headers(self) -> Dict[str, str]:
        pass

    @abstractmethod
    def _endpoint(self) -> str:
        pass

    @abstractmethod
    def _build_payload(self, prompt: str) -> Dict[str, Any]:
        pass

    @abstractmethod
    def _parse_text(self, data: Dict[str, Any]) -> str:
        pass

    async def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self.timeout, headers=self._headers())
        return self._client

    async def complete(self, prompt: str) -> str:
        if not self.api_key:
            raise LLMError(f"{self.provider} API key not configured")
        return await self._post(prompt)

    @retry_with_backoff(max_retries=3, base_delay=1.0, exceptions=(TransientLLMError,))
    async def _post(self, prompt: str) -> str:
        client = await self._get_client()
        try:
            response = await client.post(self._endpoint(), json=self._build_payload(prompt))
            response.raise_for_status()
            return self._parse_text(response.json())
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            logger.error(f"{self.provider} API error: {status} - {e.response.text}")
            if status == 429 or status >= 500:
                raise TransientLLMError(f"{self.provider} API error: {status}")
            raise LLMError(f"{self.provider} API error: {status}")
        except httpx.HTTPError as e:
            logger.error(f"Error calling {self.provider} API: {e}")
            raise TransientLLMError(f"{self.provider} API call failed: {e}")
        except (KeyError, IndexError, TypeError, ValueError) as e:
            logger.error(f"Unexpected {self.provider} response: {e}")
            raise LLMError(f"Unexpected {self.provider} response: {e}")

    async def close(self) -> None:
        if self._client:
            await self._client.aclose()
            self._client = None
