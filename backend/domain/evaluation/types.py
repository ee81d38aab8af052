"""
Benchmark data types
"""

import uuid
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional
from pydantic import BaseModel, Field, field_validator

from core.config import settings


class BenchmarkMetrics(BaseModel):
    """Per-query measurements. Times in ms, costs in USD."""
    embedding_time: float = 0.0
    search_time: float = 0.0
    llm_response_time: float = 0.0
    total_time: float = 0.0
    query_tokens: int = 0
    context_tokens: int = 0
    response_tokens: int = 0
    embedding_cost: float = 0.0
    llm_cost: float = 0.0
    total_cost: float = 0.0
    keywords_matched: int = 0
    keyword_match_percentage: float = 0.0


class BenchmarkResult(BaseModel):
    """One query evaluated under one configuration combination"""
    test_run_id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    query_id: Optional[int] = None
    query_text: str
    search_strategy: str
    llm_model: str
    embedding_model: str
    content_type: str
    top_k: int
    response_text: str = ""
    retrieved_document_ids: List[int] = Field(default_factory=list)
    metrics: BenchmarkMetrics = Field(default_factory=BenchmarkMetrics)
    success: bool = True
    error: Optional[str] = None
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def combination(self) -> str:
        return f"{self.search_strategy} + {self.llm_model} + {self.embedding_model} + {self.content_type}"


class BenchmarkConfig(BaseModel):
    """The configuration cross product to run"""
    search_strategies: List[str]
    llm_models: List[str]
    embedding_models: List[str]
    content_types: List[str] = Field(default_factory=lambda: list(settings.content_types))
    num_queries: int = Field(default_factory=lambda: settings.default_num_queries, gt=0)
    top_k_values: List[int] = Field(default_factory=lambda: [settings.default_top_k])
    output_file: Optional[str] = None

    @field_validator("top_k_values")
    @classmethod
    def _positive_top_k(cls, values: List[int]) -> List[int]:
        if not values or any(k <= 0 for k in values):
            raise ValueError("top_k_values must be a non-empty list of positive integers")
        return values

    @property
    def num_combinations(self) -> int:
        return (
            len(self.search_strategies)
            * len(self.llm_models)
            * len(self.embedding_models)
            * len(self.content_types)
            * len(self.top_k_values)
        )


class BenchmarkRun(BaseModel):
    """All results of one run plus their summary"""
    config: BenchmarkConfig
    results: List[BenchmarkResult] = Field(default_factory=list)
    summary: Dict[str, Any] = Field(default_factory=dict)
    output_file: Optional[str] = None
    started_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    finished_at: Optional[datetime] = None
