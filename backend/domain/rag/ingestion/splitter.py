"""
Character-window splitting with overlap
"""

import logging
from typing import List

from domain.rag.ingestion.types import Chunk, ContentItem
from core.exceptions import IngestionError

logger = logging.getLogger(__name__)

MAX_OVERLAP = 100


class TextSplitter:
    """Splits content into fixed-size character windows"""

    def __init__(self, chunk_size: int):
        if chunk_size <= 0:
            raise IngestionError(f"chunk_size must be positive, got {chunk_size}")
        self.chunk_size = chunk_size
        # 10% of the window, capped at MAX_OVERLAP characters
        self.overlap = min(MAX_OVERLAP, int(chunk_size * 0.1))

    def split(self, item: ContentItem) -> List[Chunk]:
        """
        Split one item into chunks.

        Content that fits in one window becomes a single chunk. Longer content is cut
        into windows of chunk_size characters, each starting `overlap` characters before
        the previous one ended. Empty content yields no chunks.
        """
        content = item.content
        if not content:
            return []

        windows = []
        start = 0
        while True:
            end = min(start + self.chunk_size, len(content))
            windows.append((start, end))
            if end >= len(content):
                break
            start = end - self.overlap

        return [
            Chunk(
                content=content[start:end],
                item=item,
                chunk_index=index,
                total_chunks=len(windows),
                chunk_size=self.chunk_size,
                chunk_start=start,
                chunk_end=end,
            )
            for index, (start, end) in enumerate(windows)
        ]

    def split_all(self, items: List[ContentItem]) -> List[Chunk]:
        chunks = [chunk for item in items for chunk in self.split(item)]
        logger.info(f"Split {len(items)} items into {len(chunks)} chunks of {self.chunk_size} chars")
        return chunks
