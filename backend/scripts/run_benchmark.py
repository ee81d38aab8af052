"""Run the RAG benchmark from the command line.

Examples:
    python -m scripts.run_benchmark --preset fastest
    python -m scripts.run_benchmark -s hybrid-search -l gpt-4.1-mini -e text-embedding-3-small -q 3
    python -m scripts.run_benchmark --list
"""

import argparse
import asyncio
import logging
import sys

from pydantic import ValidationError

from core.config import settings
from core.logging_utils import setup_logging
from domain.evaluation.presets import (
    PRESET_DESCRIPTIONS,
    available_embedding_models,
    available_llm_models,
    build_config,
)
from domain.evaluation.reporter import BenchmarkReporter
from domain.evaluation.types import BenchmarkConfig, BenchmarkRun
from domain.rag.strategies.factory import get_available_strategies
from services.benchmark_service import BenchmarkService
from services.retrieval_service import RetrievalService
from storage.benchmark_sql_store import BenchmarkSQLStore
from storage.database import create_db_engine
from storage.pg_document_store import PgDocumentStore

logger = logging.getLogger(__name__)


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Benchmark retrieval strategies, LLMs and embedding models",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument(
        "-s", "--strategy",
        action="append",
        dest="search_strategies",
        help="Search strategy to test. Can be passed several times.",
    )
    parser.add_argument(
        "-l", "--llm",
        action="append",
        dest="llm_models",
        help="LLM model to test. Can be passed several times.",
    )
    parser.add_argument(
        "-e", "--embedding",
        action="append",
        dest="embedding_models",
        help="Embedding model to test. Can be passed several times.",
    )
    parser.add_argument(
        "-c", "--content",
        action="append",
        dest="content_types",
        help=f"Content type to test (default: {', '.join(settings.content_types)})",
    )
    parser.add_argument(
        "-q", "--queries",
        type=int,
        dest="num_queries",
        help=f"Number of test queries (default: {settings.default_num_queries})",
    )
    parser.add_argument(
        "-k", "--topk",
        type=int,
        action="append",
        dest="top_k_values",
        help="Number of documents to retrieve. Can be passed several times.",
    )
    parser.add_argument(
        "-o", "--output",
        dest="output_file",
        help="JSON report file name, written to the results directory",
    )
    parser.add_argument(
        "--preset",
        choices=list(PRESET_DESCRIPTIONS.keys()),
        help="Use a predefined configuration; explicit options override it",
    )
    parser.add_argument(
        "--list",
        action="store_true",
        help="List available strategies, models, content types and presets",
    )
    return parser.parse_args(argv)


def print_available_options() -> None:
    print("Search strategies:")
    for name in get_available_strategies():
        print(f"  {name}")
    print("\nLLM models:")
    for name in available_llm_models():
        print(f"  {name}")
    print("\nEmbedding models:")
    for name in available_embedding_models():
        print(f"  {name}")
    print("\nContent types:")
    for name in settings.content_types:
        print(f"  {name}")
    print("\nPresets:")
    for name, description in PRESET_DESCRIPTIONS.items():
        print(f"  {name}: {description}")


def print_configuration(config: BenchmarkConfig) -> None:
    print("Benchmark configuration:")
    print(f"  Strategies:       {', '.join(config.search_strategies)}")
    print(f"  LLM models:       {', '.join(config.llm_models)}")
    print(f"  Embedding models: {', '.join(config.embedding_models)}")
    print(f"  Content types:    {', '.join(config.content_types)}")
    print(f"  Queries:          {config.num_queries}")
    print(f"  top_k values:     {', '.join(str(k) for k in config.top_k_values)}")
    print(f"  Combinations:     {config.num_combinations}")


async def run(config: BenchmarkConfig) -> BenchmarkRun:
    engine = create_db_engine()
    benchmark_store = BenchmarkSQLStore(engine=engine)
    if settings.seed_test_queries:
        await benchmark_store.seed_default_queries()

    reporter = BenchmarkReporter()
    retrieval_service = RetrievalService(document_store=PgDocumentStore(engine=engine))
    service = BenchmarkService(
        retrieval_service=retrieval_service,
        benchmark_store=benchmark_store,
        reporter=reporter,
    )
    try:
        benchmark_run = await service.run_benchmark(config)
    finally:
        await retrieval_service.close()

    reporter.print_console(benchmark_run.summary)
    if benchmark_run.output_file:
        print(f"\nResults saved to {benchmark_run.output_file}")
    return benchmark_run


def main(argv=None) -> int:
    args = parse_args(argv)
    setup_logging()

    if args.list:
        print_available_options()
        return 0

    options = vars(args)
    options.pop("list")
    try:
        config = build_config(**options)
    except (KeyError, ValidationError) as e:
        print(f"Invalid benchmark configuration: {e}", file=sys.stderr)
        return 2

    unknown = set(config.search_strategies) - set(get_available_strategies())
    if unknown:
        print(f"Unknown search strategies: {', '.join(sorted(unknown))}", file=sys.stderr)
        return 2

    print_configuration(config)
    asyncio.run(run(config))
    return 0


if __name__ == "__main__":
    sys.exit(main())
