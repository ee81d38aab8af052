"""
Root and health check endpoints
"""

from fastapi import APIRouter, Depends

from storage.base import BaseBenchmarkStore, BaseDocumentStore
from api.dependencies import get_benchmark_store, get_document_store
from core.config import settings

router = APIRouter(tags=["root"])


@router.get("/")
async def root():
    """API name, docs location and endpoint groups"""
    return {
        "name": "RAG Explorer API",
        "version": "0.1.0",
        "environment": settings.environment,
        "docs": "/docs",
        "endpoints": {
            "search": "/api/v1/search",
            "grading": "/api/v1/grading",
            "benchmark": "/api/v1/benchmark",
            "documents": "/api/v1/documents",
        }
    }


@router.get("/health")
async def health(
    store: BaseBenchmarkStore = Depends(get_benchmark_store),
    document_store: BaseDocumentStore = Depends(get_document_store)
):
    """Liveness plus the number of seeded test queries and stored documents"""
    stats = await store.get_stats()
    document_stats = await document_store.get_stats()
    return {
        "status": "ok",
        "test_queries": stats["test_queries"],
        "documents": document_stats["documents"],
    }
