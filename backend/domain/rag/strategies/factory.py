"""
Factory for creating search strategies by name
"""

import logging
from typing import Dict, List, Optional, Type

from pydantic import BaseModel

from domain.rag.retrieval.types import CombinedWeights, HybridWeights
from domain.rag.strategies.base import BaseSearchStrategy
from domain.rag.strategies.vector_search import VectorSearchStrategy
from domain.rag.strategies.hybrid_search import HybridSearchStrategy
from domain.rag.strategies.combined_search import CombinedSearchStrategy
from storage.base import BaseDocumentStore
from storage.pg_document_store import PgDocumentStore
from core.exceptions import UnknownStrategyError

logger = logging.getLogger(__name__)

STRATEGIES: Dict[str, Type[BaseSearchStrategy]] = {
    VectorSearchStrategy.name: VectorSearchStrategy,
    HybridSearchStrategy.name: HybridSearchStrategy,
    CombinedSearchStrategy.name: CombinedSearchStrategy,
}


def get_available_strategies() -> List[str]:
    return list(STRATEGIES.keys())


def create_search_strategy(
    name: str,
    document_store: Optional[BaseDocumentStore] = None
) -> BaseSearchStrategy:
    """
    Create a search strategy.

    Args:
        name: Strategy name ("vector-search", "hybrid-search", "combined-search")
        document_store: Shared store. When omitted a PgDocumentStore is created
            and closed together with the strategy.

    Raises:
        UnknownStrategyError: If the name is not registered
    """
    strategy_class = STRATEGIES.get(name)
    if strategy_class is None:
        raise UnknownStrategyError(
            f"Unknown search strategy: {name}. Available: {', '.join(get_available_strategies())}"
        )

    if document_store is None:
        logger.debug(f"Creating dedicated document store for {name}")
        return strategy_class(PgDocumentStore(), owns_store=True)

    return strategy_class(document_store)


def build_weights(
    name: str,
    vector: Optional[float] = None,
    lexical: Optional[float] = None,
    relevance: Optional[float] = None
) -> Optional[BaseModel]:
    """
    Weights struct for a strategy from optional overrides. Unset fields keep their defaults;
    an explicit 0 is kept. Returns None for strategies without fusion weights.
    """
    overrides = {"vector": vector, "lexical": lexical, "relevance": relevance}
    if name == HybridSearchStrategy.name:
        overrides.pop("relevance")
        return HybridWeights(**{k: v for k, v in overrides.items() if v is not None})
    if name == CombinedSearchStrategy.name:
        return CombinedWeights(**{k: v for k, v in overrides.items() if v is not None})
    return None
