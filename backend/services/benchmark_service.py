"""
Benchmark service - runs every configuration combination over the test queries
"""

import itertools
import logging
import time
from datetime import datetime, timezone
from typing import Callable, Dict, List, Optional

from tqdm import tqdm

from domain.evaluation.costs import calculate_embedding_cost, calculate_llm_cost, count_tokens
from domain.evaluation.grader import count_keyword_matches, keyword_match_percentage
from domain.evaluation.reporter import BenchmarkReporter, summarize
from domain.evaluation.types import BenchmarkConfig, BenchmarkMetrics, BenchmarkResult, BenchmarkRun
from domain.llm.base import BaseLLMClient
from domain.llm.factory import create_llm_client
from domain.llm.prompts import build_rag_prompt
from domain.rag.embedding.factory import get_embedding_dimension
from storage.base import BaseBenchmarkStore, BenchmarkQuery
from services.base import BaseService
from services.retrieval_service import RetrievalService

logger = logging.getLogger(__name__)

LLMClientFactory = Callable[[str], BaseLLMClient]


def _elapsed_ms(start: float) -> float:
    return (time.perf_counter() - start) * 1000


class BenchmarkService(BaseService):
    """
    Orchestrates benchmark runs: strategy × LLM × embedding model × content type × top_k.

    A failing query is logged and recorded with success=False; the run continues and
    failed results are left out of the summary averages.
    """

    def __init__(
        self,
        retrieval_service: RetrievalService,
        benchmark_store: Optional[BaseBenchmarkStore] = None,
        reporter: Optional[BenchmarkReporter] = None,
        llm_client_factory: Optional[LLMClientFactory] = None,
        show_progress: bool = True
    ):
        self.retrieval_service = retrieval_service
        self.benchmark_store = benchmark_store
        self.reporter = reporter
        self.llm_client_factory = llm_client_factory or create_llm_client
        self.show_progress = show_progress
        self._llm_clients: Dict[str, BaseLLMClient] = {}

    def _get_llm_client(self, model: str) -> BaseLLMClient:
        if model not in self._llm_clients:
            self._llm_clients[model] = self.llm_client_factory(model)
        return self._llm_clients[model]

    async def benchmark_query(
        self,
        query: BenchmarkQuery,
        search_strategy: str,
        llm_model: str,
        embedding_model: str,
        content_type: str,
        top_k: int,
        llm_client: Optional[BaseLLMClient] = None
    ) -> BenchmarkResult:
        """
        Run one query end to end and measure it.

        `llm_client` defaults to a client kept on the service until close().

        Raises whatever the embedding, search, LLM or storage step raises.
        """
        start_time = time.perf_counter()

        # Step 1: embed the query
        embedding_start = time.perf_counter()
        query_embedding = await self.retrieval_service.embed_query(query.query_text, embedding_model)
        embedding_time = _elapsed_ms(embedding_start)

        # Step 2: retrieve with the selected strategy
        search_start = time.perf_counter()
        candidates = await self.retrieval_service.search_by_vector(
            search_strategy, query_embedding, content_type, top_k
        )
        search_time = _elapsed_ms(search_start)

        # Step 3: answer from the retrieved context
        llm_start = time.perf_counter()
        context = self.retrieval_service.build_context(candidates)
        llm_client = llm_client or self._get_llm_client(llm_model)
        response_text = await llm_client.complete(
            build_rag_prompt(query.query_text, context)
        )
        llm_response_time = _elapsed_ms(llm_start)

        total_time = _elapsed_ms(start_time)

        # Step 4: cost and quality
        query_tokens = count_tokens(query.query_text)
        context_tokens = count_tokens(context)
        response_tokens = count_tokens(response_text)
        embedding_cost = calculate_embedding_cost(query_tokens, embedding_model)
        llm_cost = calculate_llm_cost(query_tokens + context_tokens, response_tokens, llm_model)

        keywords_matched = count_keyword_matches(response_text, query.expected_keywords)
        match_percentage = 0.0
        if query.expected_keywords:
            match_percentage = keyword_match_percentage(keywords_matched, len(query.expected_keywords))

        result = BenchmarkResult(
            query_id=query.id,
            query_text=query.query_text,
            search_strategy=search_strategy,
            llm_model=llm_model,
            embedding_model=embedding_model,
            content_type=content_type,
            top_k=top_k,
            response_text=response_text,
            retrieved_document_ids=[candidate.id for candidate in candidates],
            metrics=BenchmarkMetrics(
                embedding_time=embedding_time,
                search_time=search_time,
                llm_response_time=llm_response_time,
                total_time=total_time,
                query_tokens=query_tokens,
                context_tokens=context_tokens,
                response_tokens=response_tokens,
                embedding_cost=embedding_cost,
                llm_cost=llm_cost,
                total_cost=embedding_cost + llm_cost,
                keywords_matched=keywords_matched,
                keyword_match_percentage=match_percentage,
            ),
        )

        if self.benchmark_store:
            await self.benchmark_store.save_result(result.model_dump(mode="json"))

        return result

    def _combinations(self, config: BenchmarkConfig):
        embedding_models = []
        for model in config.embedding_models:
            if get_embedding_dimension(model) is None:
                logger.warning(f"Skipping embedding model {model}: no document shard for its vector width")
                continue
            embedding_models.append(model)

        return list(itertools.product(
            config.search_strategies,
            config.llm_models,
            embedding_models,
            config.content_types,
            config.top_k_values,
        ))

    async def run_benchmark(self, config: BenchmarkConfig) -> BenchmarkRun:
        """
        Run every combination over `config.num_queries` test queries.

        Returns:
            BenchmarkRun with all results (failed ones included) and the summary
        """
        run = BenchmarkRun(config=config)
        if not self.benchmark_store:
            logger.warning("No benchmark store configured; nothing to benchmark")
            run.finished_at = datetime.now(timezone.utc)
            return run

        queries = await self.benchmark_store.get_test_queries(config.num_queries)
        combinations = self._combinations(config)
        logger.info(
            f"Running {len(combinations)} combinations x {len(queries)} queries "
            f"({len(combinations) * len(queries)} total)"
        )

        llm_clients: Dict[str, BaseLLMClient] = {}
        try:
            progress = tqdm(
                combinations,
                desc="Benchmarking",
                unit="combination",
                disable=not self.show_progress,
            )
            for strategy, llm_model, embedding_model, content_type, top_k in progress:
                progress.set_postfix_str(f"{strategy} | {llm_model} | {embedding_model} | {content_type} | k={top_k}")
                for query in queries:
                    run.results.append(
                        await self._run_one(
                            query, strategy, llm_model, embedding_model, content_type, top_k, llm_clients
                        )
                    )
        finally:
            # Clients belong to this run only; overlapping runs keep their own
            for client in llm_clients.values():
                await client.close()

        run.summary = summarize(run.results)
        run.finished_at = datetime.now(timezone.utc)

        if self.reporter:
            filename = config.output_file or f"benchmark-{run.started_at.strftime('%Y%m%d-%H%M%S')}.json"
            run.output_file = str(self.reporter.save_json(run, filename))

        logger.info(
            f"Benchmark complete: {run.summary['successful']} successful, {run.summary['failed']} failed"
        )
        return run

    async def _run_one(
        self,
        query: BenchmarkQuery,
        search_strategy: str,
        llm_model: str,
        embedding_model: str,
        content_type: str,
        top_k: int,
        llm_clients: Dict[str, BaseLLMClient]
    ) -> BenchmarkResult:
        try:
            if llm_model not in llm_clients:
                llm_clients[llm_model] = self.llm_client_factory(llm_model)
            return await self.benchmark_query(
                query, search_strategy, llm_model, embedding_model, content_type, top_k,
                llm_client=llm_clients[llm_model],
            )
        except Exception as e:
            logger.error(
                f"Error benchmarking '{query.query_text}' with {search_strategy}, {llm_model}, "
                f"{embedding_model}, {content_type}: {e}"
            )
            return BenchmarkResult(
                query_id=query.id,
                query_text=query.query_text,
                search_strategy=search_strategy,
                llm_model=llm_model,
                embedding_model=embedding_model,
                content_type=content_type,
                top_k=top_k,
                success=False,
                error=str(e),
            )

    async def close(self):
        """Close LLM clients cached for direct benchmark_query calls"""
        for client in self._llm_clients.values():
            await client.close()
        self._llm_clients.clear()
