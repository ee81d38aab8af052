"""
In-memory document store with the same query interface as PgDocumentStore.

Used by tests and for small local corpora. Ranks approximate PostgreSQL's:
- vector: exact cosine similarity (numpy)
- lexical: OR-pattern term hits in content, normalized hits / (hits + 1); matching docs only
- relevance: field-weighted term hits (type name 1.0, library 0.4, content 0.2), only when
  every query term is present somewhere, normalized r / (r + 1); zero-ranked rows included
No stemming is applied.
"""

import logging
import re
from collections import Counter
from typing import Dict, List, Optional

import numpy as np

from domain.rag.retrieval.keywords import extract_keywords
from domain.rag.retrieval.similarity import cosine_similarities
from domain.rag.retrieval.types import BranchHit
from storage.base import BaseDocumentStore, Document, SUPPORTED_DIMENSIONS, validate_dimension

logger = logging.getLogger(__name__)

FIELD_WEIGHTS = {"type_name": 1.0, "library_name": 0.4, "content": 0.2}

_PUNCTUATION = re.compile(r"[^\w\s]", re.ASCII)


def _term_counts(text: Optional[str]) -> Counter:
    return Counter(_PUNCTUATION.sub("", (text or "").lower()).split())


def _to_hit(document: Document, score: float) -> BranchHit:
    return BranchHit(
        id=document.id,
        content=document.content,
        content_type=document.content_type,
        score=float(score),
        metadata=dict(document.metadata),
        type_name=document.type_name,
        library_name=document.library_name,
    )


class InMemoryDocumentStore(BaseDocumentStore):
    """Dimension-sharded documents held in process memory"""

    def __init__(self):
        self._shards: Dict[int, List[Document]] = {dimension: [] for dimension in SUPPORTED_DIMENSIONS}
        self._next_id = 1
        self.query_count = 0  # Branch queries served

    def _documents(self, dimension: int, content_type: str) -> List[Document]:
        self.query_count += 1
        return [doc for doc in self._shards[validate_dimension(dimension)] if doc.content_type == content_type]

    async def vector_search(
        self,
        query_vector: List[float],
        content_type: str,
        limit: int,
        dimension: int
    ) -> List[BranchHit]:
        documents = self._documents(dimension, content_type)
        if not documents:
            return []

        matrix = np.asarray([doc.embedding for doc in documents], dtype=float)
        similarities = cosine_similarities(query_vector, matrix)
        # Stable sort keeps insertion order among equal distances
        order = np.argsort(-similarities, kind="stable")[:limit]
        return [_to_hit(documents[i], similarities[i]) for i in order]

    async def lexical_search(
        self,
        keyword_pattern: str,
        content_type: str,
        limit: int,
        dimension: int
    ) -> List[BranchHit]:
        documents = self._documents(dimension, content_type)
        terms = [term.strip().lower() for term in (keyword_pattern or "").split("|") if term.strip()]
        if not terms:
            return []

        scored = []
        for doc in documents:
            counts = _term_counts(doc.content)
            hits = sum(counts[term] for term in terms)
            if hits:
                scored.append((hits / (hits + 1), doc))

        scored.sort(key=lambda item: item[0], reverse=True)
        return [_to_hit(doc, score) for score, doc in scored[:limit]]

    async def relevance_search(
        self,
        query_text: str,
        content_type: str,
        limit: int,
        dimension: int
    ) -> List[BranchHit]:
        documents = self._documents(dimension, content_type)
        terms = extract_keywords(query_text)

        scored = []
        for doc in documents:
            field_counts = {
                "type_name": _term_counts(doc.type_name),
                "library_name": _term_counts(doc.library_name),
                "content": _term_counts(doc.content),
            }
            rank = 0.0
            if terms and all(any(counts[term] for counts in field_counts.values()) for term in terms):
                rank = sum(
                    FIELD_WEIGHTS[field] * counts[term]
                    for field, counts in field_counts.items()
                    for term in terms
                )
            scored.append((rank / (rank + 1), doc))

        scored.sort(key=lambda item: item[0], reverse=True)
        return [_to_hit(doc, score) for score, doc in scored[:limit]]

    async def add_document(self, document: Document) -> int:
        dimension = validate_dimension(document.dimension)
        stored = document.model_copy(update={"id": self._next_id})
        self._shards[dimension].append(stored)
        self._next_id += 1
        document.id = stored.id
        return stored.id

    async def count_documents(self, dimension: int, content_type: Optional[str] = None) -> int:
        documents = self._shards[validate_dimension(dimension)]
        if content_type:
            return sum(1 for doc in documents if doc.content_type == content_type)
        return len(documents)

    async def close(self) -> None:
        logger.debug("In-memory document store closed")
