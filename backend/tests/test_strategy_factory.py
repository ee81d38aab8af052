"""
Tests for the search strategy factory.
"""
import pytest

from core.exceptions import RetrievalError, UnknownStrategyError
from domain.rag.retrieval.types import CombinedWeights, HybridWeights
from domain.rag.strategies.combined_search import CombinedSearchStrategy
from domain.rag.strategies.factory import build_weights, create_search_strategy, get_available_strategies
from domain.rag.strategies.hybrid_search import HybridSearchStrategy
from domain.rag.strategies.vector_search import VectorSearchStrategy
from storage.memory_document_store import InMemoryDocumentStore


class TrackingStore(InMemoryDocumentStore):
    def __init__(self):
        super().__init__()
        self.closed = False

    async def close(self):
        self.closed = True


class TestCreateSearchStrategy:
    """Test create_search_strategy()."""

    def test_available_strategies(self):
        assert get_available_strategies() == ["vector-search", "hybrid-search", "combined-search"]

    @pytest.mark.parametrize("name,strategy_class", [
        ("vector-search", VectorSearchStrategy),
        ("hybrid-search", HybridSearchStrategy),
        ("combined-search", CombinedSearchStrategy),
    ])
    def test_creates_strategy_by_name(self, name, strategy_class):
        store = TrackingStore()

        strategy = create_search_strategy(name, store)

        assert isinstance(strategy, strategy_class)
        assert strategy.document_store is store

    def test_unknown_name_raises(self):
        with pytest.raises(UnknownStrategyError, match="keyword-search"):
            create_search_strategy("keyword-search", TrackingStore())

    def test_unknown_strategy_is_a_retrieval_error(self):
        assert issubclass(UnknownStrategyError, RetrievalError)

    @pytest.mark.asyncio
    async def test_close_leaves_shared_store_open(self):
        store = TrackingStore()
        strategy = create_search_strategy("hybrid-search", store)

        await strategy.close()

        assert not store.closed

    @pytest.mark.asyncio
    async def test_close_releases_owned_store(self):
        store = TrackingStore()
        strategy = VectorSearchStrategy(store, owns_store=True)

        await strategy.close()

        assert store.closed


class TestBuildWeights:
    """Test build_weights()."""

    def test_vector_search_has_no_weights(self):
        assert build_weights("vector-search", vector=0.5) is None

    def test_hybrid_defaults(self):
        assert build_weights("hybrid-search") == HybridWeights(vector=0.7, lexical=0.3)

    def test_explicit_zero_is_kept(self):
        weights = build_weights("hybrid-search", lexical=0.0)

        assert weights.lexical == 0.0
        assert weights.vector == 0.7

    def test_combined_overrides(self):
        weights = build_weights("combined-search", vector=0.9, relevance=0.0)

        assert weights == CombinedWeights(vector=0.9, lexical=0.3, relevance=0.0)
