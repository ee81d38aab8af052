"""
Hybrid search strategy: vector similarity fused with lexical rank
"""

import logging
from typing import List, Optional

from domain.rag.retrieval.fusion import VECTOR, LEXICAL, from_hits, outer_join, weighted_sum, rank
from domain.rag.retrieval.keywords import extract_keywords, build_keyword_pattern
from domain.rag.retrieval.types import Candidate, HybridWeights, SearchRequest
from domain.rag.strategies.base import BaseSearchStrategy
from storage.base import BaseDocumentStore
from core.exceptions import RetrievalError

logger = logging.getLogger(__name__)

OVERFETCH = 2


class HybridSearchStrategy(BaseSearchStrategy):
    """
    Vector + lexical fusion.

    Both branches over-fetch 2 x top_k candidates, are outer-joined by document id
    (a missing branch scores 0) and ranked by vector * w_vector + lexical * w_lexical.
    With no usable keywords the lexical branch is skipped and the ranking is vector-only.
    """

    name = "hybrid-search"

    def __init__(
        self,
        document_store: BaseDocumentStore,
        owns_store: bool = False,
        weights: Optional[HybridWeights] = None
    ):
        super().__init__(document_store, owns_store)
        self.weights = weights or HybridWeights()

    async def search(
        self,
        request: SearchRequest,
        weights: Optional[HybridWeights] = None
    ) -> List[Candidate]:
        dimension = self._validate(request)
        weights = weights or self.weights
        fetch_limit = request.top_k * OVERFETCH
        keywords = extract_keywords(request.query_text)

        try:
            vector_hits = await self.document_store.vector_search(
                query_vector=request.query_vector,
                content_type=request.content_type,
                limit=fetch_limit,
                dimension=dimension
            )
            lexical_hits = []
            if keywords:
                lexical_hits = await self.document_store.lexical_search(
                    keyword_pattern=build_keyword_pattern(keywords),
                    content_type=request.content_type,
                    limit=fetch_limit,
                    dimension=dimension
                )
        except Exception as e:
            logger.error(f"Error in hybrid search: {e}")
            raise RetrievalError(f"Hybrid search failed: {e}") from e

        joined = outer_join(from_hits(vector_hits, VECTOR), lexical_hits, LEXICAL)
        score_weights = {VECTOR: weights.vector, LEXICAL: weights.lexical}
        for candidate in joined.values():
            candidate.score = weighted_sum(candidate, score_weights)

        logger.debug(
            f"hybrid-search: {len(vector_hits)} vector, {len(lexical_hits)} lexical, {len(joined)} joined"
        )
        return rank(list(joined.values()), request.top_k)
