"""
Combined search strategy: vector, lexical and field-weighted relevance with a phrase boost

Three independent signals cover each other's blind spots: vector search misses exact
technical terms, lexical search misses paraphrases, and the field-weighted rank rewards
matches in a type's formal name. Slower than the other strategies (three branch queries).
"""

import logging
from typing import List, Optional

from domain.rag.retrieval.fusion import (
    VECTOR,
    LEXICAL,
    RELEVANCE,
    from_hits,
    outer_join,
    weighted_sum,
    phrase_boosted,
    rank,
)
from domain.rag.retrieval.keywords import extract_keywords, build_keyword_pattern
from domain.rag.retrieval.types import Candidate, CombinedWeights, SearchRequest
from domain.rag.strategies.base import BaseSearchStrategy
from storage.base import BaseDocumentStore
from core.config import settings
from core.exceptions import RetrievalError

logger = logging.getLogger(__name__)

OVERFETCH = 3


class CombinedSearchStrategy(BaseSearchStrategy):
    """
    Three-signal fusion.

    Each branch over-fetches 3 x top_k. Vector and lexical results are outer-joined
    first, then joined with the relevance branch; missing scores are 0. The weighted
    sum is multiplied by the phrase boost (1.2) when the document content contains the
    whole query text, case-insensitively. Boosted scores can exceed 1.
    """

    name = "combined-search"

    def __init__(
        self,
        document_store: BaseDocumentStore,
        owns_store: bool = False,
        weights: Optional[CombinedWeights] = None,
        phrase_boost: Optional[float] = None
    ):
        super().__init__(document_store, owns_store)
        self.weights = weights or CombinedWeights()
        self.phrase_boost = phrase_boost if phrase_boost is not None else settings.phrase_boost

    async def search(
        self,
        request: SearchRequest,
        weights: Optional[CombinedWeights] = None
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
            relevance_hits = await self.document_store.relevance_search(
                query_text=request.query_text,
                content_type=request.content_type,
                limit=fetch_limit,
                dimension=dimension
            )
        except Exception as e:
            logger.error(f"Error in combined search: {e}")
            raise RetrievalError(f"Combined search failed: {e}") from e

        joined = outer_join(from_hits(vector_hits, VECTOR), lexical_hits, LEXICAL)
        joined = outer_join(joined, relevance_hits, RELEVANCE)

        score_weights = {
            VECTOR: weights.vector,
            LEXICAL: weights.lexical,
            RELEVANCE: weights.relevance,
        }
        for candidate in joined.values():
            candidate.score = phrase_boosted(
                weighted_sum(candidate, score_weights),
                candidate.content,
                request.query_text,
                self.phrase_boost
            )

        logger.debug(
            f"combined-search: {len(vector_hits)} vector, {len(lexical_hits)} lexical, "
            f"{len(relevance_hits)} relevance, {len(joined)} joined"
        )
        return rank(list(joined.values()), request.top_k)
