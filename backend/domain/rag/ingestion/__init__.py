"""
Content ingestion: loading and character-window splitting
"""

from domain.rag.ingestion.loader import load_content_items
from domain.rag.ingestion.splitter import TextSplitter
from domain.rag.ingestion.types import Chunk, ContentItem

__all__ = [
    "Chunk",
    "ContentItem",
    "TextSplitter",
    "load_content_items",
]
