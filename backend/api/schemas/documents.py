"""
Pydantic models for document ingestion and stats endpoints
"""

from pydantic import BaseModel, Field
from typing import List, Dict, Any, Optional

from domain.rag.ingestion.types import ContentItem


class IngestRequest(BaseModel):
    """Content to split, embed with each model and store under one content type"""
    content_type: str
    embedding_models: List[str] = Field(min_length=1)
    chunk_sizes: Optional[List[int]] = None
    items: List[ContentItem] = Field(min_length=1)


class IngestResponse(BaseModel):
    items: int
    documents_stored: int
    by_model: Dict[str, int]
    failed: List[Dict[str, Any]]


class ShardStats(BaseModel):
    total: int
    by_content_type: Dict[str, int]


class DocumentStatsResponse(BaseModel):
    """Document counts per shard table, broken down by content type"""
    documents: int
    shards: Dict[str, ShardStats]
