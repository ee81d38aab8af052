"""
Ingestion types
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


class ContentItem(BaseModel):
    """One piece of source content (a spec, a markdown page, a doc section) before splitting"""
    content: str
    type_name: Optional[str] = None
    library_name: Optional[str] = None
    inheritance_path: List[str] = Field(default_factory=list)
    file_path: Optional[str] = None
    metadata: Dict[str, Any] = Field(default_factory=dict)


class Chunk(BaseModel):
    """A window of a ContentItem's text, ready to embed"""
    content: str
    item: ContentItem
    chunk_index: int
    total_chunks: int
    chunk_size: int
    chunk_start: int
    chunk_end: int

    @property
    def metadata(self) -> Dict[str, Any]:
        return {
            **self.item.metadata,
            "chunk_index": self.chunk_index,
            "total_chunks": self.total_chunks,
            "chunk_size": self.chunk_size,
            "chunk_start": self.chunk_start,
            "chunk_end": self.chunk_end,
        }
