"""
Tests for embedding/LLM client factories and HTTP payloads, with httpx.MockTransport.
"""
import json

import httpx
import pytest

from core.exceptions import EmbeddingError, LLMError
from domain.llm.factory import create_llm_client, infer_provider
from domain.llm.gemini_client import GeminiChatClient
from domain.llm.openai_client import OpenAIChatClient
from domain.rag.embedding.client import GeminiEmbeddingClient, OpenAIEmbeddingClient
from domain.rag.embedding.factory import create_embedding_client, get_embedding_dimension
from utils.retry import retry_with_backoff


def mock_client(client, handler):
    client._client = httpx.AsyncClient(transport=httpx.MockTransport(handler), headers=client._headers())
    return client


class TestEmbeddingFactory:
    """Test model -> width mapping and client selection."""

    @pytest.mark.parametrize("model,dimension", [
        ("text-embedding-3-small", 1536),
        ("text-embedding-004", 1536),
        ("text-embedding-3-large", 3072),
        ("gemini-embedding-001", 768),
        ("gemini-embedding-exp-03-07", 768),
        ("mistral-embed", None),
    ])
    def test_dimension(self, model, dimension):
        assert get_embedding_dimension(model) == dimension

    def test_client_by_model(self):
        assert isinstance(create_embedding_client("text-embedding-3-large", api_key="k"), OpenAIEmbeddingClient)
        gemini = create_embedding_client("gemini-embedding-001", api_key="k")
        assert isinstance(gemini, GeminiEmbeddingClient)
        assert gemini.output_dimension == 768


class TestEmbeddingClients:
    """Test request building and response parsing."""

    @pytest.mark.asyncio
    async def test_openai_embedding(self):
        def handler(request):
            assert request.url.path.endswith("/embeddings")
            assert request.headers["Authorization"] == "Bearer k"
            assert json.loads(request.content)["model"] == "text-embedding-3-small"
            return httpx.Response(200, json={"data": [{"embedding": [0.1, 0.2]}]})

        client = mock_client(OpenAIEmbeddingClient("text-embedding-3-small", api_key="k"), handler)

        assert await client.embed("What is Co2Sensor?") == [0.1, 0.2]
        await client.close()

    @pytest.mark.asyncio
    async def test_gemini_requests_shard_width(self):
        def handler(request):
            body = json.loads(request.content)
            assert request.url.path.endswith("/models/gemini-embedding-001:embedContent")
            assert body["outputDimensionality"] == 768
            return httpx.Response(200, json={"embedding": {"values": [0.5] * 768}})

        client = mock_client(create_embedding_client("gemini-embedding-001", api_key="k"), handler)

        assert len(await client.embed("ahu")) == 768
        await client.close()

    @pytest.mark.asyncio
    async def test_missing_key_is_not_retried(self):
        client = OpenAIEmbeddingClient("text-embedding-3-small", api_key="")
        client.api_key = ""

        with pytest.raises(EmbeddingError, match="API key"):
            await client.embed("ahu")


class TestLLMClients:
    """Test provider inference and REST clients."""

    @pytest.mark.parametrize("model,provider", [
        ("gpt-4.1-mini", "openai"),
        ("o3-mini", "openai"),
        ("gemini-2.5-flash", "gemini"),
        ("llama-3.3-70b-versatile", "groq"),
    ])
    def test_infer_provider(self, model, provider):
        assert infer_provider(model) == provider

    def test_unknown_provider(self):
        with pytest.raises(LLMError):
            create_llm_client("gpt-4.1-mini", provider="anthropic")

    @pytest.mark.asyncio
    async def test_openai_chat(self):
        def handler(request):
            body = json.loads(request.content)
            assert body["messages"] == [{"role": "user", "content": "prompt"}]
            assert body["max_tokens"] == 500
            return httpx.Response(200, json={"choices": [{"message": {"content": "answer"}}]})

        client = mock_client(OpenAIChatClient("gpt-4.1-mini", api_key="k"), handler)

        assert await client.complete("prompt") == "answer"
        await client.close()

    @pytest.mark.asyncio
    async def test_gemini_chat(self):
        def handler(request):
            body = json.loads(request.content)
            assert body["generationConfig"]["temperature"] == 0.3
            return httpx.Response(200, json={"candidates": [{"content": {"parts": [{"text": "ans"}, {"text": "wer"}]}}]})

        client = mock_client(GeminiChatClient("gemini-2.5-flash", api_key="k"), handler)

        assert await client.complete("prompt") == "answer"
        await client.close()

    @pytest.mark.asyncio
    async def test_client_error_is_not_retried(self):
        calls = []

        def handler(request):
            calls.append(request)
            return httpx.Response(400, json={"error": "bad request"})

        client = mock_client(OpenAIChatClient("gpt-4.1-mini", api_key="k"), handler)

        with pytest.raises(LLMError):
            await client.complete("prompt")
        assert len(calls) == 1
        await client.close()


class TestRetryWithBackoff:
    """Test retry_with_backoff()."""

    @pytest.mark.asyncio
    async def test_retries_until_success(self):
        attempts = []

        @retry_with_backoff(max_retries=3, base_delay=0.0, exceptions=(ConnectionError,))
        async def flaky():
            attempts.append(1)
            if len(attempts) < 3:
                raise ConnectionError("reset")
            return "ok"

        assert await flaky() == "ok"
        assert len(attempts) == 3

    @pytest.mark.asyncio
    async def test_gives_up_after_max_retries(self):
        attempts = []

        @retry_with_backoff(max_retries=2, base_delay=0.0, exceptions=(ConnectionError,))
        async def broken():
            attempts.append(1)
            raise ConnectionError("reset")

        with pytest.raises(ConnectionError):
            await broken()
        assert len(attempts) == 3

    @pytest.mark.asyncio
    async def test_other_exceptions_propagate_immediately(self):
        attempts = []

        @retry_with_backoff(max_retries=3, base_delay=0.0, exceptions=(ConnectionError,))
        async def wrong():
            attempts.append(1)
            raise ValueError("bad input")

        with pytest.raises(ValueError):
            await wrong()
        assert len(attempts) == 1
