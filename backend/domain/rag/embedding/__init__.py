"""
Embedding clients and batching
"""

from domain.rag.embedding.batch_processor import BatchProcessor
from domain.rag.embedding.client import BaseEmbeddingClient, OpenAIEmbeddingClient, GeminiEmbeddingClient
from domain.rag.embedding.factory import create_embedding_client, get_embedding_dimension
from domain.rag.embedding.types import QueryEmbedding

__all__ = [
    "BatchProcessor",
    "BaseEmbeddingClient",
    "OpenAIEmbeddingClient",
    "GeminiEmbeddingClient",
    "create_embedding_client",
    "get_embedding_dimension",
    "QueryEmbedding",
]
