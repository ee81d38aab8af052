"""
Factory for embedding clients and the model -> vector width mapping
"""

from typing import Optional

from domain.rag.embedding.client import BaseEmbeddingClient, OpenAIEmbeddingClient, GeminiEmbeddingClient


def get_embedding_dimension(model: str) -> Optional[int]:
    """
    Vector width produced by an embedding model, i.e. the shard its documents live in.

    Returns None for models without a shard; callers skip those combinations.
    """
    if "text-embedding-3-small" in model or "text-embedding-004" in model:
        return 1536
    if "text-embedding-3-large" in model:
        return 3072
    if "gemini-embedding" in model:
        return 768
    return None


def create_embedding_client(model: str, api_key: Optional[str] = None) -> BaseEmbeddingClient:
    """OpenAI for text-embedding-3-* models, Gemini for everything else"""
    if "text-embedding-3" in model:
        return OpenAIEmbeddingClient(model, api_key=api_key)
    return GeminiEmbeddingClient(model, api_key=api_key, output_dimension=get_embedding_dimension(model))
