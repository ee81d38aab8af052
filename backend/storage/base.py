"""
Abstract base classes for storage
"""

from abc import ABC, abstractmethod
from typing import List, Dict, Any, Optional
from pydantic import BaseModel, Field

from domain.rag.retrieval.types import BranchHit
from core.exceptions import UnsupportedDimensionError

# One shard (table) per embedding width
SUPPORTED_DIMENSIONS = (768, 1536, 3072)


def validate_dimension(dimension: int) -> int:
    """Raise UnsupportedDimensionError unless a shard exists for this width"""
    if dimension not in SUPPORTED_DIMENSIONS:
        raise UnsupportedDimensionError(dimension)
    return dimension


def shard_table_name(dimension: int) -> str:
    """Table holding documents of the given embedding width, e.g. documents_1536"""
    return f"documents_{validate_dimension(dimension)}"


class Document(BaseModel):
    """A content chunk with its embedding. The shard is chosen by len(embedding)."""
    id: Optional[int] = None  # Assigned by the store
    content: str
    content_type: str
    embedding: List[float]
    embedding_model: str = ""
    metadata: Dict[str, Any] = Field(default_factory=dict)
    type_name: Optional[str] = None
    library_name: Optional[str] = None
    inheritance_path: List[str] = Field(default_factory=list)
    file_path: Optional[str] = None

    @property
    def dimension(self) -> int:
        return len(self.embedding)


class BenchmarkQuery(BaseModel):
    """A benchmark question with the keywords a good answer should mention"""
    id: Optional[int] = None
    category: str
    query_text: str
    expected_keywords: List[str] = Field(default_factory=list)
    difficulty_level: int = 1


class BaseDocumentStore(ABC):
    """
    Abstract base class for dimension-sharded document stores.

    Query methods are read-only. Every query targets the single shard
    matching `dimension` and filters on `content_type`.
    """

    @abstractmethod
    async def vector_search(
        self,
        query_vector: List[float],
        content_type: str,
        limit: int,
        dimension: int
    ) -> List[BranchHit]:
        """
        Nearest neighbours by cosine distance.

        Returns:
            Up to `limit` hits ordered by ascending distance, score = 1 - cosine distance
        """
        pass

    @abstractmethod
    async def lexical_search(
        self,
        keyword_pattern: str,
        content_type: str,
        limit: int,
        dimension: int
    ) -> List[BranchHit]:
        """
        Text-search rank of `content` against an OR-pattern ("a | b").

        Returns:
            Up to `limit` hits matching at least one term, ordered by descending rank
        """
        pass

    @abstractmethod
    async def relevance_search(
        self,
        query_text: str,
        content_type: str,
        limit: int,
        dimension: int
    ) -> List[BranchHit]:
        """
        Field-weighted rank of a natural-language phrase: type name (A) > library name (B) > content (C).

        Returns:
            Up to `limit` hits ordered by descending rank (zero-ranked rows included)
        """
        pass

    @abstractmethod
    async def add_document(self, document: Document) -> int:
        """Store a document in the shard matching its embedding width. Returns the new id."""
        pass

    @abstractmethod
    async def count_documents(self, dimension: int, content_type: Optional[str] = None) -> int:
        """Number of documents in a shard, optionally of one content type"""
        pass

    async def get_stats(self, content_types: Optional[List[str]] = None) -> Dict[str, Any]:
        """
        Document counts per shard, broken down by content type.

        Returns:
            {"documents": total, "shards": {table_name: {"total": n, "by_content_type": {type: n}}}}
        """
        shards = {}
        for dimension in SUPPORTED_DIMENSIONS:
            shards[shard_table_name(dimension)] = {
                "total": await self.count_documents(dimension),
                "by_content_type": {
                    content_type: await self.count_documents(dimension, content_type)
                    for content_type in content_types or []
                },
            }
        return {
            "documents": sum(shard["total"] for shard in shards.values()),
            "shards": shards,
        }

    @abstractmethod
    async def close(self) -> None:
        """Release connections"""
        pass


class BaseBenchmarkStore(ABC):
    """Abstract base class for benchmark persistence"""

    @abstractmethod
    async def get_test_queries(self, limit: int) -> List[BenchmarkQuery]:
        """Get up to `limit` test queries in random order"""
        pass

    @abstractmethod
    async def add_test_query(self, query: BenchmarkQuery) -> int:
        """Add a test query"""
        pass

    @abstractmethod
    async def save_result(self, result: Dict[str, Any]) -> None:
        """Save a benchmark result and its individual metrics"""
        pass

    @abstractmethod
    async def get_stats(self) -> Dict[str, int]:
        """Row counts per table"""
        pass
