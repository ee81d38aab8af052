"""
Application startup and initialization logic
"""

import logging
from fastapi import FastAPI, HTTPException

from core.config import settings
from core.exceptions import StorageError
from storage.database import create_db_engine
from storage.pg_document_store import PgDocumentStore
from storage.benchmark_sql_store import BenchmarkSQLStore
from domain.evaluation.reporter import BenchmarkReporter
from services.retrieval_service import RetrievalService
from services.benchmark_service import BenchmarkService
from services.ingestion_service import IngestionService

logger = logging.getLogger(__name__)


def raise_startup_error(message: str, error: Exception = None) -> None:
    """Helper to raise HTTPException for startup errors."""
    detail = f"{message}: {error}" if error else message
    raise HTTPException(status_code=500, detail=detail)


async def initialize_rag_system(app: FastAPI):
    """
    Initialize stores and services on one shared database engine.
    Seeds the default test queries when the table is empty.
    """
    try:
        engine = create_db_engine()
    except ValueError as e:
        raise_startup_error("Invalid database configuration", e)

    try:
        document_store = PgDocumentStore(engine=engine)
        benchmark_store = BenchmarkSQLStore(engine=engine)
        if settings.seed_test_queries:
            seeded = await benchmark_store.seed_default_queries()
            if seeded:
                logger.info(f"Seeded {seeded} default test queries")
    except StorageError as e:
        raise_startup_error("Failed to initialize storage", e)

    retrieval_service = RetrievalService(document_store=document_store)
    benchmark_service = BenchmarkService(
        retrieval_service=retrieval_service,
        benchmark_store=benchmark_store,
        reporter=BenchmarkReporter(),
        show_progress=False,
    )

    app.state.engine = engine
    app.state.document_store = document_store
    app.state.benchmark_store = benchmark_store
    app.state.retrieval_service = retrieval_service
    app.state.benchmark_service = benchmark_service
    app.state.ingestion_service = IngestionService(document_store=document_store, show_progress=False)


async def cleanup_rag_system(app: FastAPI):
    """Close provider HTTP connections and the database pool."""
    if hasattr(app.state, 'ingestion_service') and app.state.ingestion_service:
        try:
            await app.state.ingestion_service.close()
        except Exception as e:
            logger.error(f"Error during ingestion service cleanup: {e}", exc_info=True)

    if hasattr(app.state, 'benchmark_service') and app.state.benchmark_service:
        try:
            await app.state.benchmark_service.close()
        except Exception as e:
            logger.error(f"Error during benchmark service cleanup: {e}", exc_info=True)

    if hasattr(app.state, 'retrieval_service') and app.state.retrieval_service:
        try:
            # Also disposes the shared engine through the document store
            await app.state.retrieval_service.close()
            logger.info("Retrieval service cleaned up")
        except Exception as e:
            logger.error(f"Error during retrieval service cleanup: {e}", exc_info=True)
