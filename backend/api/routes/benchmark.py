"""
Benchmark endpoints
"""

from fastapi import APIRouter, HTTPException, Depends
from pydantic import ValidationError
from api.schemas.benchmark import (
    RunBenchmarkRequest,
    BenchmarkRunResponse,
    ConfigurationsResponse,
    BenchmarkStatsResponse,
)
from domain.evaluation.presets import (
    PRESET_DESCRIPTIONS,
    available_embedding_models,
    available_llm_models,
    build_config,
)
from domain.rag.strategies.factory import get_available_strategies
from services.benchmark_service import BenchmarkService
from storage.base import BaseBenchmarkStore
from api.dependencies import get_benchmark_service, get_benchmark_store
from core.config import settings
from core.exceptions import RAGException

router = APIRouter(prefix="/api/v1/benchmark", tags=["benchmark"])


@router.get("/configurations", response_model=ConfigurationsResponse)
async def list_configurations():
    """Strategies, models, content types and presets a benchmark can use"""
    return ConfigurationsResponse(
        search_strategies=get_available_strategies(),
        llm_models=available_llm_models(),
        embedding_models=available_embedding_models(),
        content_types=settings.content_types,
        presets=PRESET_DESCRIPTIONS,
    )


@router.post("/run", response_model=BenchmarkRunResponse)
async def run_benchmark(
    request: RunBenchmarkRequest,
    service: BenchmarkService = Depends(get_benchmark_service)
):
    """Run a benchmark from a preset and/or explicit options"""
    try:
        config = build_config(**request.model_dump())
    except (KeyError, ValidationError) as e:
        raise HTTPException(status_code=400, detail=str(e))

    unknown = set(config.search_strategies) - set(get_available_strategies())
    if unknown:
        raise HTTPException(status_code=400, detail=f"Unknown search strategies: {', '.join(sorted(unknown))}")

    try:
        run = await service.run_benchmark(config)
    except RAGException as e:
        raise HTTPException(status_code=500, detail=str(e))

    return BenchmarkRunResponse(output_file=run.output_file, summary=run.summary, results=run.results)


@router.get("/stats", response_model=BenchmarkStatsResponse)
async def benchmark_stats(store: BaseBenchmarkStore = Depends(get_benchmark_store)):
    """Row counts of the benchmark tables"""
    try:
        return BenchmarkStatsResponse(**await store.get_stats())
    except RAGException as e:
        raise HTTPException(status_code=500, detail=str(e))
