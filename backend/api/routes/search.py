"""
Search endpoints
"""

import time
from fastapi import APIRouter, HTTPException, Depends
from api.schemas.search import SearchRequest, SearchResponse, SearchResultItem, StrategiesResponse
from domain.rag.strategies.factory import build_weights, get_available_strategies
from services.retrieval_service import RetrievalService
from api.dependencies import get_retrieval_service
from core.exceptions import RAGException, UnknownStrategyError, UnsupportedDimensionError

router = APIRouter(prefix="/api/v1/search", tags=["search"])


@router.get("/strategies", response_model=StrategiesResponse)
async def list_strategies():
    """List registered search strategies"""
    return StrategiesResponse(strategies=get_available_strategies())


@router.post("", response_model=SearchResponse)
async def search(
    request: SearchRequest,
    service: RetrievalService = Depends(get_retrieval_service)
):
    """Embed the query and search with the selected strategy"""
    try:
        weights = build_weights(
            request.strategy,
            vector=request.vector_weight,
            lexical=request.lexical_weight,
            relevance=request.relevance_weight,
        )
        start = time.perf_counter()
        candidates = await service.search(
            query_text=request.query,
            strategy_name=request.strategy,
            embedding_model=request.embedding_model,
            content_type=request.content_type,
            top_k=request.top_k,
            weights=weights,
        )
        search_time_ms = (time.perf_counter() - start) * 1000
    except (UnknownStrategyError, UnsupportedDimensionError) as e:
        raise HTTPException(status_code=400, detail=str(e))
    except RAGException as e:
        raise HTTPException(status_code=500, detail=str(e))

    return SearchResponse(
        query=request.query,
        strategy=request.strategy,
        embedding_model=request.embedding_model,
        content_type=request.content_type,
        search_time_ms=search_time_ms,
        results=[SearchResultItem(**candidate.model_dump()) for candidate in candidates],
    )
