"""
Vector search strategy: cosine similarity over the matching shard
"""

import logging
from typing import List, Optional

from pydantic import BaseModel

from domain.rag.retrieval.fusion import VECTOR, from_hits, rank
from domain.rag.retrieval.types import Candidate, SearchRequest
from domain.rag.strategies.base import BaseSearchStrategy
from core.exceptions import RetrievalError

logger = logging.getLogger(__name__)


class VectorSearchStrategy(BaseSearchStrategy):
    """Nearest neighbours by cosine distance; score = 1 - distance"""

    name = "vector-search"

    async def search(self, request: SearchRequest, weights: Optional[BaseModel] = None) -> List[Candidate]:
        dimension = self._validate(request)
        try:
            hits = await self.document_store.vector_search(
                query_vector=request.query_vector,
                content_type=request.content_type,
                limit=request.top_k,
                dimension=dimension
            )
        except Exception as e:
            logger.error(f"Error in vector search: {e}")
            raise RetrievalError(f"Vector search failed: {e}") from e

        candidates = list(from_hits(hits, VECTOR).values())
        for candidate in candidates:
            candidate.score = candidate.vector_score

        return rank(candidates, request.top_k)
