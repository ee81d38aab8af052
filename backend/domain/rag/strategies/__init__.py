"""
Retrieval strategies over the dimension-sharded document store
"""

from domain.rag.strategies.base import BaseSearchStrategy
from domain.rag.strategies.vector_search import VectorSearchStrategy
from domain.rag.strategies.hybrid_search import HybridSearchStrategy
from domain.rag.strategies.combined_search import CombinedSearchStrategy
from domain.rag.strategies.factory import create_search_strategy, get_available_strategies, build_weights, STRATEGIES

__all__ = [
    "BaseSearchStrategy",
    "VectorSearchStrategy",
    "HybridSearchStrategy",
    "CombinedSearchStrategy",
    "create_search_strategy",
    "get_available_strategies",
    "build_weights",
    "STRATEGIES",
]
