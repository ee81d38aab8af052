"""
Async embedding clients (OpenAI, Gemini) with connection pooling, retry logic, and rate limiting
"""

import logging
import asyncio
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

import httpx

from core.config import settings
from core.exceptions import EmbeddingError
from utils.retry import retry_with_backoff

logger = logging.getLogger(__name__)


class BaseEmbeddingClient(ABC):
    """Shared HTTP pool and rate limiting. Subclasses build the request and parse the response."""

    provider: str = ""

    def __init__(
        self,
        model: str,
        api_key: Optional[str] = None,
        api_url: Optional[str] = None,
        timeout: Optional[int] = None,
        rate_limit: Optional[int] = None,
        output_dimension: Optional[int] = None
    ):
        self.model = model
        self.api_key = api_key
        self.api_url = (api_url or "").rstrip("/")
        self.timeout = timeout or settings.embedding_timeout
        self.rate_limit = rate_limit or settings.embedding_rate_limit
        self.output_dimension = output_dimension

        # Connection pool
        self._client: Optional[httpx.AsyncClient] = None
        self._rate_limiter = asyncio.Semaphore(self.rate_limit)
        self._last_request_time = 0.0
        self._min_request_interval = 1.0 / self.rate_limit

    @abstractmethod
    def _headers(self) -> Dict[str, str]:
        pass

    @abstractmethod
    def _endpoint(self) -> str:
        pass

    @abstractmethod
    def _build_payload(self, text: str) -> Dict[str, Any]:
        pass

    @abstractmethod
    def _parse_embedding(self, data: Dict[str, Any]) -> List[float]:
        pass

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client"""
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self.timeout, headers=self._headers())
        return self._client

    async def _rate_limit(self):
        """Rate limiting"""
        async with self._rate_limiter:
            current_time = asyncio.get_event_loop().time()
            time_since_last = current_time - self._last_request_time
            if time_since_last < self._min_request_interval:
                await asyncio.sleep(self._min_request_interval - time_since_last)
            self._last_request_time = asyncio.get_event_loop().time()

    async def embed(self, text: str) -> List[float]:
        """Embed a single text. Raises EmbeddingError after retries are exhausted."""
        if not self.api_key:
            raise EmbeddingError(f"{self.provider} API key not configured")
        if not text:
            raise EmbeddingError("text must not be empty")
        return await self._request_embedding(text)

    @retry_with_backoff(max_retries=settings.embedding_max_retries, base_delay=1.0, exceptions=(EmbeddingError,))
    async def _request_embedding(self, text: str) -> List[float]:
        try:
            await self._rate_limit()  # Rate limit before each API call
            client = await self._get_client()
            response = await client.post(self._endpoint(), json=self._build_payload(text))
            response.raise_for_status()
            embedding = self._parse_embedding(response.json())
        except httpx.HTTPStatusError as e:
            logger.error(f"{self.provider} API error: {e.response.status_code} - {e.response.text}")
            raise EmbeddingError(f"{self.provider} API error: {e.response.status_code}")
        except (KeyError, IndexError, TypeError, ValueError) as e:
            logger.error(f"Unexpected {self.provider} embedding response: {e}")
            raise EmbeddingError(f"Unexpected {self.provider} embedding response: {e}")
        except httpx.HTTPError as e:
            logger.error(f"Error generating embedding with {self.model}: {e}")
            raise EmbeddingError(f"Failed to generate embedding: {e}")

        if not embedding:
            raise EmbeddingError(f"{self.provider} returned an empty embedding for {self.model}")
        return embedding

    async def close(self):
        """Close HTTP client"""
        if self._client:
            await self._client.aclose()
            self._client = None


class OpenAIEmbeddingClient(BaseEmbeddingClient):
    """POST {api_url}/embeddings"""

    provider = "OpenAI"

    def __init__(self, model: str, api_key: Optional[str] = None, api_url: Optional[str] = None, **kwargs):
        super().__init__(
            model,
            api_key=api_key or settings.openai_api_key,
            api_url=api_url or settings.openai_api_url,
            **kwargs
        )

    def _headers(self) -> Dict[str, str]:
        return {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }

    def _endpoint(self) -> str:
        return f"{self.api_url}/embeddings"

    def _build_payload(self, text: str) -> Dict[str, Any]:
        return {"model": self.model, "input": text, "encoding_format": "float"}

    def _parse_embedding(self, data: Dict[str, Any]) -> List[float]:
        return data["data"][0]["embedding"]


class GeminiEmbeddingClient(BaseEmbeddingClient):
    """POST {api_url}/models/{model}:embedContent"""

    provider = "Gemini"

    def __init__(self, model: str, api_key: Optional[str] = None, api_url: Optional[str] = None, **kwargs):
        super().__init__(
            model,
            api_key=api_key or settings.gemini_api_key,
            api_url=api_url or settings.gemini_api_url,
            **kwargs
        )

    def _headers(self) -> Dict[str, str]:
        return {
            "x-goog-api-key": self.api_key,
            "Content-Type": "application/json",
        }

    def _endpoint(self) -> str:
        return f"{self.api_url}/models/{self.model}:embedContent"

    def _build_payload(self, text: str) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "model": f"models/{self.model}",
            "content": {"parts": [{"text": text}]},
        }
        # Gemini models default to a wider vector than the shard they are stored in
        if self.output_dimension:
            payload["outputDimensionality"] = self.output_dimension
        return payload

    def _parse_embedding(self, data: Dict[str, Any]) -> List[float]:
        return data["embedding"]["values"]
