"""
Retrieval service - orchestrates retrieval: query embedding → strategy search → context assembly
"""

import logging
from typing import Callable, Dict, List, Optional

from pydantic import BaseModel

from domain.rag.embedding.client import BaseEmbeddingClient
from domain.rag.embedding.factory import create_embedding_client, get_embedding_dimension
from domain.rag.embedding.types import QueryEmbedding
from domain.rag.retrieval.types import Candidate, SearchRequest
from domain.rag.strategies.factory import create_search_strategy
from storage.base import BaseDocumentStore
from services.base import BaseService
from core.config import settings
from core.exceptions import UnsupportedDimensionError

logger = logging.getLogger(__name__)

CONTEXT_SEPARATOR = "\n\n"

EmbeddingClientFactory = Callable[[str], BaseEmbeddingClient]


class RetrievalService(BaseService):
    """
    Orchestrates the retrieval pipeline: embed query → run a named strategy → build LLM context.

    Holds one embedding client per model and shares a single document store across strategies.
    """

    def __init__(
        self,
        document_store: BaseDocumentStore,
        embedding_client_factory: Optional[EmbeddingClientFactory] = None
    ):
        self.document_store = document_store
        self.embedding_client_factory = embedding_client_factory or create_embedding_client
        self._embedding_clients: Dict[str, BaseEmbeddingClient] = {}

    def _get_embedding_client(self, model: str) -> BaseEmbeddingClient:
        if model not in self._embedding_clients:
            self._embedding_clients[model] = self.embedding_client_factory(model)
        return self._embedding_clients[model]

    async def embed_query(self, query_text: str, embedding_model: str) -> QueryEmbedding:
        """
        Embed a query.

        Raises:
            UnsupportedDimensionError: If the model has no document shard (checked before the API call)
            EmbeddingError: If the provider call fails
        """
        dimension = get_embedding_dimension(embedding_model)
        if dimension is None:
            raise UnsupportedDimensionError(None, model=embedding_model)
        embedding = await self._get_embedding_client(embedding_model).embed(query_text)
        return QueryEmbedding(text=query_text, model=embedding_model, embedding=embedding)

    async def search_by_vector(
        self,
        strategy_name: str,
        query_embedding: QueryEmbedding,
        content_type: str,
        top_k: Optional[int] = None,
        weights: Optional[BaseModel] = None
    ) -> List[Candidate]:
        """Run a named strategy for an already embedded query"""
        request = SearchRequest(
            query_vector=query_embedding.embedding,
            query_text=query_embedding.text,
            content_type=content_type,
            top_k=top_k or settings.default_top_k,
        )
        strategy = create_search_strategy(strategy_name, self.document_store)
        try:
            return await strategy.search(request, weights=weights)
        finally:
            await strategy.close()

    async def search(
        self,
        query_text: str,
        strategy_name: str,
        embedding_model: str,
        content_type: str,
        top_k: Optional[int] = None,
        weights: Optional[BaseModel] = None
    ) -> List[Candidate]:
        """Embed the query and search with the named strategy"""
        query_embedding = await self.embed_query(query_text, embedding_model)
        candidates = await self.search_by_vector(strategy_name, query_embedding, content_type, top_k, weights)
        logger.info(
            f"{strategy_name} returned {len(candidates)} candidates for '{query_text[:50]}' "
            f"({embedding_model}, {content_type})"
        )
        return candidates

    @staticmethod
    def build_context(candidates: List[Candidate]) -> str:
        """Concatenate candidate contents in rank order"""
        return CONTEXT_SEPARATOR.join(candidate.content for candidate in candidates)

    async def close(self):
        """Close embedding clients and the document store"""
        for client in self._embedding_clients.values():
            await client.close()
        self._embedding_clients.clear()
        await self.document_store.close()
