"""
Embedding data types
"""

from typing import List
from pydantic import BaseModel


class QueryEmbedding(BaseModel):
    """A query embedded with one model"""
    text: str
    model: str
    embedding: List[float]

    @property
    def dimension(self) -> int:
        return len(self.embedding)
