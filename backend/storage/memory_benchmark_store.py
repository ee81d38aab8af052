"""
In-memory benchmark store, seeded with the default test queries
"""

import logging
import random
from typing import Any, Dict, List, Optional

from domain.evaluation.default_queries import DEFAULT_TEST_QUERIES
from storage.base import BaseBenchmarkStore, BenchmarkQuery

logger = logging.getLogger(__name__)


class InMemoryBenchmarkStore(BaseBenchmarkStore):
    """Keeps test queries and saved results in lists. Query order is random, as in SQL."""

    def __init__(self, queries: Optional[List[BenchmarkQuery]] = None, seed: Optional[int] = None):
        self.queries: List[BenchmarkQuery] = []
        self.results: List[Dict[str, Any]] = []
        self._random = random.Random(seed)
        if queries is None:
            queries = [BenchmarkQuery(**query) for query in DEFAULT_TEST_QUERIES]
        for query in queries:
            self._append(query)

    def _append(self, query: BenchmarkQuery) -> int:
        stored = query.model_copy(update={"id": len(self.queries) + 1})
        self.queries.append(stored)
        return stored.id

    async def get_test_queries(self, limit: int) -> List[BenchmarkQuery]:
        return self._random.sample(self.queries, min(limit, len(self.queries)))

    async def add_test_query(self, query: BenchmarkQuery) -> int:
        return self._append(query)

    async def save_result(self, result: Dict[str, Any]) -> None:
        self.results.append(result)

    async def get_stats(self) -> Dict[str, int]:
        return {
            "test_queries": len(self.queries),
            "benchmark_results": len(self.results),
            "performance_metrics": sum(
                1 for r in self.results for v in (r.get("metrics") or {}).values()
                if isinstance(v, (int, float)) and not isinstance(v, bool)
            ),
        }
