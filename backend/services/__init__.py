"""
Service layer (business logic orchestration)
"""

from services.base import BaseService
from services.retrieval_service import RetrievalService
from services.benchmark_service import BenchmarkService
from services.ingestion_service import IngestionService

__all__ = [
    "BaseService",
    "RetrievalService",
    "BenchmarkService",
    "IngestionService",
]
