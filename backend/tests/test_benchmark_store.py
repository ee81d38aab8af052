"""
Tests for InMemoryBenchmarkStore and the default test queries.
"""
import pytest

from domain.evaluation.default_queries import CATEGORIES, DEFAULT_TEST_QUERIES
from storage.base import BenchmarkQuery
from storage.benchmark_sql_store import BenchmarkQueryModel, BenchmarkResultModel, PerformanceMetricModel
from storage.memory_benchmark_store import InMemoryBenchmarkStore


class TestDefaultQueries:
    """The seeded benchmark questions."""

    def test_fifteen_valid_queries(self):
        queries = [BenchmarkQuery(**query) for query in DEFAULT_TEST_QUERIES]

        assert len(queries) == 15
        assert all(query.category in CATEGORIES for query in queries)
        assert all(query.expected_keywords for query in queries)
        assert all(1 <= query.difficulty_level <= 5 for query in queries)


class TestInMemoryBenchmarkStore:
    """Test InMemoryBenchmarkStore."""

    @pytest.mark.asyncio
    async def test_seeded_with_defaults(self):
        store = InMemoryBenchmarkStore(seed=1)

        queries = await store.get_test_queries(20)

        assert len(queries) == 15
        assert sorted(q.id for q in queries) == list(range(1, 16))

    @pytest.mark.asyncio
    async def test_limit(self):
        store = InMemoryBenchmarkStore(seed=1)

        assert len(await store.get_test_queries(3)) == 3

    @pytest.mark.asyncio
    async def test_add_query_and_stats(self):
        store = InMemoryBenchmarkStore(queries=[])

        query_id = await store.add_test_query(BenchmarkQuery(category="complex", query_text="Explain VAV boxes"))
        await store.save_result({"query_id": query_id, "metrics": {"total_time": 12.5, "keywords_matched": 1}})

        assert query_id == 1
        assert await store.get_stats() == {"test_queries": 1, "benchmark_results": 1, "performance_metrics": 2}


class TestBenchmarkTables:
    """Column definitions of the benchmark tables."""

    @pytest.mark.parametrize("model", [BenchmarkQueryModel, BenchmarkResultModel, PerformanceMetricModel])
    def test_created_at_is_set_by_the_database(self, model):
        column = model.__table__.c.created_at

        assert column.type.timezone
        assert column.server_default is not None
        assert column.default is None
