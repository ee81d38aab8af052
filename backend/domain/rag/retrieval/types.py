"""
Retrieval data types
"""

from dataclasses import dataclass, field
from typing import Dict, Any, List, Optional
from pydantic import BaseModel, Field

from core.config import settings


@dataclass
class BranchHit:
    """
    One row returned by a single store branch (vector, lexical or relevance).

    `score` is the branch's own signal: 1 - cosine distance for the vector branch,
    a text-search rank for the lexical and relevance branches.
    """
    id: int
    content: str
    content_type: str
    score: float
    metadata: Dict[str, Any] = field(default_factory=dict)
    type_name: Optional[str] = None
    library_name: Optional[str] = None


class Candidate(BaseModel):
    """
    Standardized retrieval result.

    All strategies (VectorSearchStrategy, HybridSearchStrategy, CombinedSearchStrategy)
    return List[Candidate]. Branch scores a strategy does not use stay at 0.0.
    """
    id: int
    content: str
    content_type: str
    metadata: Dict[str, Any] = Field(default_factory=dict)
    type_name: Optional[str] = None
    library_name: Optional[str] = None
    vector_score: float = 0.0
    lexical_score: float = 0.0
    relevance_score: float = 0.0
    score: float = 0.0  # Final ranking value; may exceed 1 after phrase boost


class HybridWeights(BaseModel):
    """
    Weights for vector + lexical fusion.

    Not normalized: weights summing to something other than 1 are accepted as given.
    """
    vector: float = Field(default_factory=lambda: settings.hybrid_vector_weight)
    lexical: float = Field(default_factory=lambda: settings.hybrid_lexical_weight)


class CombinedWeights(BaseModel):
    """
    Weights for vector + lexical + field-weighted relevance fusion.

    Not normalized: weights summing to something other than 1 are accepted as given.
    """
    vector: float = Field(default_factory=lambda: settings.combined_vector_weight)
    lexical: float = Field(default_factory=lambda: settings.combined_lexical_weight)
    relevance: float = Field(default_factory=lambda: settings.combined_relevance_weight)


class SearchRequest(BaseModel):
    """Parameters shared by every strategy's search call"""
    query_vector: List[float]
    query_text: str = ""
    content_type: str
    top_k: int = Field(default_factory=lambda: settings.default_top_k, gt=0)
    dimension: Optional[int] = None  # Defaults to len(query_vector)

    @property
    def vector_width(self) -> int:
        return self.dimension if self.dimension is not None else len(self.query_vector)
