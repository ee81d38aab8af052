"""
Tests for CombinedSearchStrategy.
"""
import pytest

from core.exceptions import RetrievalError, UnsupportedDimensionError
from domain.rag.retrieval.fusion import LEXICAL, RELEVANCE, VECTOR, weighted_sum
from domain.rag.retrieval.types import CombinedWeights, SearchRequest
from domain.rag.strategies.combined_search import CombinedSearchStrategy
from storage.memory_document_store import InMemoryDocumentStore
from tests.fakes import basis

DEFAULT_WEIGHTS = {VECTOR: 0.5, LEXICAL: 0.3, RELEVANCE: 0.2}


class FailingRelevanceStore(InMemoryDocumentStore):
    async def relevance_search(self, *args, **kwargs):
        raise RuntimeError("relation does not exist")


def request(query_text: str, vector=None, top_k: int = 4) -> SearchRequest:
    return SearchRequest(
        query_vector=vector or basis(1.0),
        query_text=query_text,
        content_type="xeto",
        top_k=top_k,
    )


class TestPhraseBoost:
    """Test the phrase boost applied to the weighted sum."""

    @pytest.mark.asyncio
    async def test_boost_is_exactly_1_2_on_phrase_match(self, document_store):
        results = await CombinedSearchStrategy(document_store).search(request("pressure sensors"))

        boosted = next(c for c in results if c.id == 4)
        assert boosted.score == pytest.approx(1.2 * weighted_sum(boosted, DEFAULT_WEIGHTS))

    @pytest.mark.asyncio
    async def test_no_boost_without_phrase(self, document_store):
        results = await CombinedSearchStrategy(document_store).search(request("pressure sensors"))

        for candidate in results:
            if candidate.id != 4:
                assert candidate.score == weighted_sum(candidate, DEFAULT_WEIGHTS)

    @pytest.mark.asyncio
    async def test_boosted_score_can_exceed_one(self, document_store):
        weights = CombinedWeights(vector=1.0, lexical=0.3, relevance=0.2)

        results = await CombinedSearchStrategy(document_store).search(
            request("pressure sensors", vector=basis(0.0, 0.0, 1.0), top_k=1), weights=weights
        )

        assert results[0].id == 4
        assert results[0].score > 1.0

    @pytest.mark.asyncio
    async def test_custom_boost(self, document_store):
        strategy = CombinedSearchStrategy(document_store, phrase_boost=2.0)

        results = await strategy.search(request("pressure sensors"))

        boosted = next(c for c in results if c.id == 4)
        assert boosted.score == pytest.approx(2.0 * weighted_sum(boosted, DEFAULT_WEIGHTS))


class TestCombinedSearch:
    """Test branch fusion in CombinedSearchStrategy.search()."""

    @pytest.mark.asyncio
    async def test_runs_three_branches(self, document_store):
        results = await CombinedSearchStrategy(document_store).search(request("pressure sensors"))

        assert document_store.query_count == 3
        assert len(results) <= 4
        assert [c.score for c in results] == sorted((c.score for c in results), reverse=True)

    @pytest.mark.asyncio
    async def test_relevance_scores_all_query_terms(self, document_store):
        results = await CombinedSearchStrategy(document_store).search(request("pressure sensors"))

        by_id = {c.id: c for c in results}
        assert by_id[4].relevance_score > 0.0
        # "pressure" is missing from the temperature sensor document
        assert by_id[2].relevance_score == 0.0

    @pytest.mark.asyncio
    async def test_no_keywords_skips_lexical_branch(self, document_store):
        results = await CombinedSearchStrategy(document_store).search(request("the a"))

        assert document_store.query_count == 2
        assert all(c.lexical_score == 0.0 for c in results)

    @pytest.mark.asyncio
    async def test_unsupported_width_raises(self, document_store):
        with pytest.raises(UnsupportedDimensionError):
            await CombinedSearchStrategy(document_store).search(
                SearchRequest(query_vector=[0.5] * 1024, query_text="ahu", content_type="xeto", top_k=3)
            )

        assert document_store.query_count == 0

    @pytest.mark.asyncio
    async def test_branch_failure_raises_retrieval_error(self):
        with pytest.raises(RetrievalError, match="Combined search failed"):
            await CombinedSearchStrategy(FailingRelevanceStore()).search(request("ahu"))
