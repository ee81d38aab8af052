"""
Abstract base class for search strategies
"""

import logging
from abc import ABC, abstractmethod
from typing import List, Optional

from pydantic import BaseModel

from domain.rag.retrieval.types import Candidate, SearchRequest
from storage.base import BaseDocumentStore, validate_dimension
from core.exceptions import RetrievalError

logger = logging.getLogger(__name__)


class BaseSearchStrategy(ABC):
    """
    Common interface for all retrieval strategies: search(request) -> List[Candidate], close().

    A strategy reads from a document store and never writes to it. The store is
    usually shared; the strategy only closes it when it created the store itself.
    """

    name: str = ""

    def __init__(self, document_store: BaseDocumentStore, owns_store: bool = False):
        self.document_store = document_store
        self.owns_store = owns_store

    def _validate(self, request: SearchRequest) -> int:
        """Check the vector width before any store query. Returns the shard dimension."""
        dimension = validate_dimension(request.vector_width)
        if len(request.query_vector) != dimension:
            raise RetrievalError(
                f"Query vector has {len(request.query_vector)} values, expected {dimension}"
            )
        return dimension

    @abstractmethod
    async def search(self, request: SearchRequest, weights: Optional[BaseModel] = None) -> List[Candidate]:
        """
        Run the strategy.

        Args:
            request: Query vector, query text, content type, top_k and shard width
            weights: Fusion weights for this call; None uses the strategy defaults.
                Strategies without fusion ignore it.

        Returns:
            At most request.top_k candidates, ordered by descending score.
            An empty list when nothing matches.

        Raises:
            UnsupportedDimensionError: If no shard matches the vector width (before any query)
            RetrievalError: If any store query fails. No partial results are returned.
        """
        pass

    async def close(self) -> None:
        """Release store resources owned by this strategy"""
        if self.owns_store:
            await self.document_store.close()
            logger.debug(f"{self.name}: document store closed")
