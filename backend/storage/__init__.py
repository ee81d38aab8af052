"""
Storage layer: dimension-sharded document stores and benchmark persistence
"""

from storage.base import (
    BaseDocumentStore,
    BaseBenchmarkStore,
    Document,
    BenchmarkQuery,
    SUPPORTED_DIMENSIONS,
    shard_table_name,
    validate_dimension,
)
from storage.memory_document_store import InMemoryDocumentStore
from storage.memory_benchmark_store import InMemoryBenchmarkStore
from storage.pg_document_store import PgDocumentStore
from storage.benchmark_sql_store import BenchmarkSQLStore

__all__ = [
    "BaseDocumentStore",
    "BaseBenchmarkStore",
    "Document",
    "BenchmarkQuery",
    "SUPPORTED_DIMENSIONS",
    "shard_table_name",
    "validate_dimension",
    "InMemoryDocumentStore",
    "InMemoryBenchmarkStore",
    "PgDocumentStore",
    "BenchmarkSQLStore",
]
