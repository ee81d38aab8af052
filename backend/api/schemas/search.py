"""
Pydantic models for search endpoints
"""

from pydantic import BaseModel, Field
from typing import List, Dict, Any, Optional

from core.config import settings


class SearchRequest(BaseModel):
    """Request to search the document store"""
    query: str = Field(..., min_length=1)
    strategy: str = "vector-search"
    embedding_model: str = Field(default_factory=lambda: settings.openai_embedding_small)
    content_type: str = "xeto"
    top_k: int = Field(default_factory=lambda: settings.default_top_k, gt=0)
    # Fusion weight overrides; unset fields keep the strategy defaults
    vector_weight: Optional[float] = None
    lexical_weight: Optional[float] = None
    relevance_weight: Optional[float] = None


class SearchResultItem(BaseModel):
    """A single ranked document"""
    id: int
    content: str
    content_type: str
    type_name: Optional[str] = None
    library_name: Optional[str] = None
    metadata: Dict[str, Any] = Field(default_factory=dict)
    vector_score: float
    lexical_score: float
    relevance_score: float
    score: float


class SearchResponse(BaseModel):
    """Response from search"""
    query: str
    strategy: str
    embedding_model: str
    content_type: str
    search_time_ms: float
    results: List[SearchResultItem]


class StrategiesResponse(BaseModel):
    """Registered search strategies"""
    strategies: List[str]
