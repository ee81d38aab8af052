"""
Tests for BenchmarkService orchestration.
"""
import asyncio
import json

import pytest

from domain.evaluation.reporter import BenchmarkReporter
from domain.evaluation.types import BenchmarkConfig
from services.benchmark_service import BenchmarkService
from services.retrieval_service import RetrievalService
from storage.base import BenchmarkQuery
from storage.memory_benchmark_store import InMemoryBenchmarkStore
from tests.fakes import FakeEmbeddingClient, FakeLLMClient

ANSWER = "A Co2Sensor measures carbon dioxide. The context does not provide details on calibration."

QUERIES = [
    BenchmarkQuery(category="direct_lookup", query_text="What is Co2Sensor?",
                   expected_keywords=["Co2Sensor", "carbon dioxide", "calibration", "abstract"]),
    BenchmarkQuery(category="functional", query_text="How does an AHU condition air?",
                   expected_keywords=[]),
]


@pytest.fixture
def llm_clients():
    return {}


@pytest.fixture
def benchmark_store():
    return InMemoryBenchmarkStore(queries=QUERIES, seed=7)


@pytest.fixture
def service(document_store, benchmark_store, llm_clients, tmp_path):
    def llm_factory(model):
        llm_clients[model] = FakeLLMClient(model, answer=ANSWER, fail=model == "broken-model")
        return llm_clients[model]

    return BenchmarkService(
        retrieval_service=RetrievalService(document_store, embedding_client_factory=FakeEmbeddingClient),
        benchmark_store=benchmark_store,
        reporter=BenchmarkReporter(results_dir=tmp_path),
        llm_client_factory=llm_factory,
        show_progress=False,
    )


def config(**overrides) -> BenchmarkConfig:
    values = dict(
        search_strategies=["vector-search"],
        llm_models=["gpt-4.1-mini"],
        embedding_models=["text-embedding-3-small"],
        content_types=["xeto"],
        num_queries=2,
        top_k_values=[2],
        output_file="test-run.json",
    )
    values.update(overrides)
    return BenchmarkConfig(**values)


class TestBenchmarkQuery:
    """Test BenchmarkService.benchmark_query()."""

    @pytest.mark.asyncio
    async def test_measures_one_query(self, service, benchmark_store, llm_clients):
        result = await service.benchmark_query(
            QUERIES[0], "hybrid-search", "gpt-4.1-mini", "text-embedding-3-small", "xeto", 2
        )

        assert result.success
        assert result.retrieved_document_ids == [1, 2]
        assert result.response_text == ANSWER
        assert result.metrics.keywords_matched == 2
        assert result.metrics.keyword_match_percentage == pytest.approx(50.0)
        assert result.metrics.total_cost == pytest.approx(result.metrics.embedding_cost + result.metrics.llm_cost)
        assert result.metrics.total_time >= result.metrics.search_time
        assert "A Co2Sensor measures carbon dioxide concentration" in llm_clients["gpt-4.1-mini"].prompts[0]
        assert len(benchmark_store.results) == 1

    @pytest.mark.asyncio
    async def test_empty_expected_keywords_score_zero(self, service):
        result = await service.benchmark_query(
            QUERIES[1], "vector-search", "gpt-4.1-mini", "text-embedding-3-small", "xeto", 1
        )

        assert result.metrics.keyword_match_percentage == 0.0
        assert result.metrics.keywords_matched == 0


class TestRunBenchmark:
    """Test BenchmarkService.run_benchmark()."""

    @pytest.mark.asyncio
    async def test_runs_every_combination(self, service):
        run = await service.run_benchmark(config(
            search_strategies=["vector-search", "combined-search"],
            top_k_values=[1, 5],
        ))

        assert len(run.results) == 2 * 2 * 2
        assert {r.search_strategy for r in run.results} == {"vector-search", "combined-search"}
        assert {r.top_k for r in run.results} == {1, 5}
        assert run.finished_at is not None

    @pytest.mark.asyncio
    async def test_failures_are_recorded_and_run_continues(self, service, benchmark_store):
        run = await service.run_benchmark(config(llm_models=["broken-model", "gpt-4.1-mini"]))

        failed = [r for r in run.results if not r.success]
        assert len(failed) == 2
        assert all("broken-model is down" in r.error for r in failed)
        assert run.summary["successful"] == 2
        assert run.summary["failed"] == 2
        assert "broken-model" not in run.summary["by_llm"]
        # Only successful results are persisted
        assert len(benchmark_store.results) == 2

    @pytest.mark.asyncio
    async def test_unsupported_embedding_models_are_skipped(self, service):
        run = await service.run_benchmark(config(embedding_models=["mistral-embed", "text-embedding-3-small"]))

        assert {r.embedding_model for r in run.results} == {"text-embedding-3-small"}
        assert len(run.results) == 2

    @pytest.mark.asyncio
    async def test_writes_json_report(self, service, tmp_path):
        run = await service.run_benchmark(config())

        assert run.output_file == str(tmp_path / "test-run.json")
        data = json.loads((tmp_path / "test-run.json").read_text())
        assert data["summary"]["total"] == 2
        assert data["config"]["search_strategies"] == ["vector-search"]

    @pytest.mark.asyncio
    async def test_llm_clients_closed_after_run(self, service, llm_clients):
        await service.run_benchmark(config())

        assert llm_clients["gpt-4.1-mini"].closed

    @pytest.mark.asyncio
    async def test_without_store_returns_empty_run(self, document_store):
        service = BenchmarkService(
            RetrievalService(document_store, embedding_client_factory=FakeEmbeddingClient),
            show_progress=False,
        )

        run = await service.run_benchmark(config())

        assert run.results == []


class SlowLLMClient(FakeLLMClient):
    """Yields to the event loop and refuses to answer once closed"""

    async def complete(self, prompt: str) -> str:
        await asyncio.sleep(0)
        if self.closed:
            raise RuntimeError(f"{self.model} client is closed")
        return await super().complete(prompt)


class TestConcurrentRuns:
    """Overlapping run_benchmark() calls on one service."""

    @pytest.mark.asyncio
    async def test_overlapping_runs_keep_their_own_llm_clients(self, document_store, tmp_path):
        created = []

        def llm_factory(model):
            created.append(SlowLLMClient(model, answer=ANSWER))
            return created[-1]

        service = BenchmarkService(
            RetrievalService(document_store, embedding_client_factory=FakeEmbeddingClient),
            benchmark_store=InMemoryBenchmarkStore(queries=QUERIES, seed=7),
            reporter=BenchmarkReporter(results_dir=tmp_path),
            llm_client_factory=llm_factory,
            show_progress=False,
        )

        short, long = await asyncio.gather(
            service.run_benchmark(config(output_file="short.json")),
            service.run_benchmark(config(top_k_values=[1, 2, 3], output_file="long.json")),
        )

        assert all(r.success for r in short.results)
        assert all(r.success for r in long.results)
        assert len(long.results) == 3 * 2
        assert len(created) == 2
        assert all(client.closed for client in created)

    @pytest.mark.asyncio
    async def test_close_only_affects_direct_query_clients(self, service, llm_clients):
        await service.benchmark_query(
            QUERIES[0], "vector-search", "gpt-4.1-mini", "text-embedding-3-small", "xeto", 2
        )
        cached = llm_clients["gpt-4.1-mini"]
        assert not cached.closed

        await service.close()

        assert cached.closed
