"""
FastAPI dependencies
"""

from fastapi import Request
from services.retrieval_service import RetrievalService
from services.benchmark_service import BenchmarkService
from services.ingestion_service import IngestionService
from storage.base import BaseBenchmarkStore, BaseDocumentStore


def get_retrieval_service(request: Request) -> RetrievalService:
    return request.app.state.retrieval_service


def get_benchmark_service(request: Request) -> BenchmarkService:
    return request.app.state.benchmark_service


def get_benchmark_store(request: Request) -> BaseBenchmarkStore:
    return request.app.state.benchmark_store


def get_ingestion_service(request: Request) -> IngestionService:
    return request.app.state.ingestion_service


def get_document_store(request: Request) -> BaseDocumentStore:
    return request.app.state.document_store
