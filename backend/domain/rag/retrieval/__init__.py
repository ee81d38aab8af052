"""
Retrieval building blocks: keyword extraction, similarity and score fusion
"""

from domain.rag.retrieval.keywords import extract_keywords, build_keyword_pattern, STOP_WORDS
from domain.rag.retrieval.similarity import cosine_similarity, cosine_distance
from domain.rag.retrieval.types import BranchHit, Candidate, HybridWeights, CombinedWeights, SearchRequest

__all__ = [
    "extract_keywords",
    "build_keyword_pattern",
    "STOP_WORDS",
    "cosine_similarity",
    "cosine_distance",
    "BranchHit",
    "Candidate",
    "HybridWeights",
    "CombinedWeights",
    "SearchRequest",
]
