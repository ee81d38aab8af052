"""
Document ingestion and stats endpoints
"""

from fastapi import APIRouter, HTTPException, Depends
from api.schemas.documents import IngestRequest, IngestResponse, DocumentStatsResponse
from services.ingestion_service import IngestionService
from storage.base import BaseDocumentStore
from api.dependencies import get_ingestion_service, get_document_store
from core.config import settings
from core.exceptions import IngestionError, RAGException

router = APIRouter(prefix="/api/v1/documents", tags=["documents"])


@router.post("/ingest", response_model=IngestResponse)
async def ingest_documents(
    request: IngestRequest,
    service: IngestionService = Depends(get_ingestion_service)
):
    """Split, embed and store content items. Per-model failures are reported, not raised."""
    try:
        return IngestResponse(**await service.ingest(
            request.items,
            content_type=request.content_type,
            embedding_models=request.embedding_models,
            chunk_sizes=request.chunk_sizes,
        ))
    except IngestionError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except RAGException as e:
        raise HTTPException(status_code=500, detail=str(e))


@router.get("/stats", response_model=DocumentStatsResponse)
async def document_stats(store: BaseDocumentStore = Depends(get_document_store)):
    """Document counts per shard and content type"""
    try:
        return DocumentStatsResponse(**await store.get_stats(settings.content_types))
    except RAGException as e:
        raise HTTPException(status_code=500, detail=str(e))
