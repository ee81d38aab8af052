"""
Pydantic models for benchmark endpoints
"""

from pathlib import Path
from pydantic import BaseModel, Field, field_validator
from typing import List, Dict, Any, Optional

from domain.evaluation.types import BenchmarkResult


class RunBenchmarkRequest(BaseModel):
    """
    Request to run a benchmark.

    With `preset`, the preset's configuration is used and any list given here
    overrides the matching preset field. Without it, unset strategies default to
    vector-search and hybrid-search, and unset model and content type lists to
    every available option.
    """
    preset: Optional[str] = None
    search_strategies: Optional[List[str]] = None
    llm_models: Optional[List[str]] = None
    embedding_models: Optional[List[str]] = None
    content_types: Optional[List[str]] = None
    num_queries: Optional[int] = Field(default=None, gt=0)
    top_k_values: Optional[List[int]] = None
    output_file: Optional[str] = None

    @field_validator("output_file")
    @classmethod
    def _bare_file_name(cls, value: Optional[str]) -> Optional[str]:
        # Reports are written inside the results directory only
        if value is not None and (Path(value).name != value or value in (".", "..")):
            raise ValueError("output_file must be a bare file name")
        return value


class BenchmarkRunResponse(BaseModel):
    """Results of a benchmark run"""
    output_file: Optional[str] = None
    summary: Dict[str, Any]
    results: List[BenchmarkResult]


class ConfigurationsResponse(BaseModel):
    """Everything a benchmark can be configured with"""
    search_strategies: List[str]
    llm_models: List[str]
    embedding_models: List[str]
    content_types: List[str]
    presets: Dict[str, str]


class BenchmarkStatsResponse(BaseModel):
    """Row counts of the benchmark tables"""
    test_queries: int
    benchmark_results: int
    performance_metrics: int
