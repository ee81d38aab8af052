"""
Benchmark SQL store using PostgreSQL
"""

import logging
from typing import Any, Dict, List, Optional

from sqlalchemy import Column, DateTime, Integer, Numeric, String, Text, func
from sqlalchemy.dialects.postgresql import ARRAY, JSONB, UUID
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, sessionmaker

from domain.evaluation.costs import get_metric_unit
from domain.evaluation.default_queries import DEFAULT_TEST_QUERIES
from storage.base import BaseBenchmarkStore, BenchmarkQuery
from storage.database import create_db_engine
from core.exceptions import StorageError

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    pass


class BenchmarkQueryModel(Base):
    __tablename__ = "test_queries"

    id = Column(Integer, primary_key=True, autoincrement=True)
    category = Column(String(100), nullable=False, index=True)  # direct_lookup, inheritance, functional, ...
    query_text = Column(Text, nullable=False)
    expected_keywords = Column(ARRAY(Text))
    difficulty_level = Column(Integer, default=1)  # 1-5
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())


class BenchmarkResultModel(Base):
    __tablename__ = "benchmark_results"

    id = Column(Integer, primary_key=True, autoincrement=True)
    test_run_id = Column(UUID(as_uuid=False), nullable=False, index=True)
    query_text = Column(Text, nullable=False)
    search_strategy = Column(String(50), nullable=False)
    content_type = Column(String(50), nullable=False)
    embedding_model = Column(String(100), nullable=False)
    llm_model = Column(String(100), nullable=False)
    top_k = Column(Integer)
    response_text = Column(Text)
    retrieved_document_ids = Column(ARRAY(Integer))
    metrics = Column(JSONB, default=dict)  # Timing, token counts, costs, keyword match
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now(), index=True)


class PerformanceMetricModel(Base):
    __tablename__ = "performance_metrics"

    id = Column(Integer, primary_key=True, autoincrement=True)
    test_run_id = Column(UUID(as_uuid=False), nullable=False, index=True)
    metric_name = Column(String(100), nullable=False, index=True)
    metric_value = Column(Numeric)
    metric_unit = Column(String(50))
    # `metadata` is reserved on declarative classes
    metric_metadata = Column("metadata", JSONB, default=dict)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())


class BenchmarkSQLStore(BaseBenchmarkStore):
    """Test queries, benchmark results and per-metric rows in PostgreSQL"""

    def __init__(self, engine: Optional[Engine] = None):
        try:
            self.engine = engine or create_db_engine()
            # Create tables if they don't exist
            Base.metadata.create_all(self.engine)
            self.SessionLocal = sessionmaker(bind=self.engine)
        except Exception as e:
            logger.error(f"Error initializing benchmark store: {e}")
            raise StorageError(f"Failed to initialize benchmark store: {e}")

    async def seed_default_queries(self) -> int:
        """Insert the default test queries when the table is empty. Returns the number inserted."""
        try:
            with self.SessionLocal.begin() as session:
                if session.query(BenchmarkQueryModel).count() > 0:
                    return 0
                session.add_all([BenchmarkQueryModel(**query) for query in DEFAULT_TEST_QUERIES])
            logger.info(f"Seeded {len(DEFAULT_TEST_QUERIES)} default test queries")
            return len(DEFAULT_TEST_QUERIES)
        except Exception as e:
            logger.error(f"Error seeding test queries: {e}")
            raise StorageError(f"Failed to seed test queries: {e}")

    async def get_test_queries(self, limit: int) -> List[BenchmarkQuery]:
        try:
            with self.SessionLocal.begin() as session:
                rows = (
                    session.query(BenchmarkQueryModel)
                    .order_by(func.random())
                    .limit(limit)
                    .all()
                )
                return [
                    BenchmarkQuery(
                        id=row.id,
                        category=row.category,
                        query_text=row.query_text,
                        expected_keywords=list(row.expected_keywords or []),
                        difficulty_level=row.difficulty_level or 1,
                    )
                    for row in rows
                ]
        except Exception as e:
            logger.error(f"Error getting test queries: {e}")
            raise StorageError(f"Failed to get test queries: {e}")

    async def add_test_query(self, query: BenchmarkQuery) -> int:
        try:
            with self.SessionLocal.begin() as session:
                row = BenchmarkQueryModel(
                    category=query.category,
                    query_text=query.query_text,
                    expected_keywords=query.expected_keywords,
                    difficulty_level=query.difficulty_level,
                )
                session.add(row)
                session.flush()
                return row.id
        except Exception as e:
            logger.error(f"Error adding test query: {e}")
            raise StorageError(f"Failed to add test query: {e}")

    async def save_result(self, result: Dict[str, Any]) -> None:
        """Save the result row plus one performance_metrics row per numeric metric"""
        metrics = result.get("metrics") or {}
        try:
            with self.SessionLocal.begin() as session:
                session.add(BenchmarkResultModel(
                    test_run_id=result["test_run_id"],
                    query_text=result["query_text"],
                    search_strategy=result["search_strategy"],
                    content_type=result["content_type"],
                    embedding_model=result["embedding_model"],
                    llm_model=result["llm_model"],
                    top_k=result.get("top_k"),
                    response_text=result.get("response_text"),
                    retrieved_document_ids=result.get("retrieved_document_ids", []),
                    metrics={**metrics, "search_strategy": result["search_strategy"]},
                ))

                metric_metadata = {
                    "llm_model": result["llm_model"],
                    "embedding_model": result["embedding_model"],
                    "content_type": result["content_type"],
                    "query_id": result.get("query_id"),
                }
                for metric_name, metric_value in metrics.items():
                    if isinstance(metric_value, bool) or not isinstance(metric_value, (int, float)):
                        continue
                    session.add(PerformanceMetricModel(
                        test_run_id=result["test_run_id"],
                        metric_name=metric_name,
                        metric_value=metric_value,
                        metric_unit=get_metric_unit(metric_name),
                        metric_metadata=metric_metadata,
                    ))
        except Exception as e:
            logger.error(f"Error saving benchmark result {result.get('test_run_id')}: {e}")
            raise StorageError(f"Failed to save benchmark result: {e}")

    async def get_stats(self) -> Dict[str, int]:
        try:
            with self.SessionLocal.begin() as session:
                return {
                    "test_queries": session.query(BenchmarkQueryModel).count(),
                    "benchmark_results": session.query(BenchmarkResultModel).count(),
                    "performance_metrics": session.query(PerformanceMetricModel).count(),
                }
        except Exception as e:
            logger.error(f"Error getting benchmark stats: {e}")
            raise StorageError(f"Failed to get benchmark stats: {e}")
