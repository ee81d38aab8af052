"""
Ingestion service - orchestrates split → embed in batches → store in the matching shard
INTERNAL SERVICE: Called by the ingestion CLI and API endpoints
"""

import logging
from typing import Any, Callable, Dict, List, Optional, Sequence

from domain.rag.embedding.batch_processor import BatchProcessor
from domain.rag.embedding.client import BaseEmbeddingClient
from domain.rag.embedding.factory import create_embedding_client, get_embedding_dimension
from domain.rag.ingestion.splitter import TextSplitter
from domain.rag.ingestion.types import Chunk, ContentItem
from storage.base import BaseDocumentStore, Document
from services.base import BaseService
from core.config import settings
from core.exceptions import IngestionError, RAGException

logger = logging.getLogger(__name__)

EmbeddingClientFactory = Callable[[str], BaseEmbeddingClient]


class IngestionService(BaseService):
    """Orchestrates the ingestion pipeline: split → embed (batched) → store per embedding width."""

    def __init__(
        self,
        document_store: BaseDocumentStore,
        embedding_client_factory: Optional[EmbeddingClientFactory] = None,
        batch_size: Optional[int] = None,
        max_concurrent: Optional[int] = None,
        show_progress: bool = True
    ):
        self.document_store = document_store
        self.embedding_client_factory = embedding_client_factory or create_embedding_client
        self.batch_processor = BatchProcessor(
            batch_size=batch_size or settings.ingestion_batch_size,
            max_concurrent=max_concurrent or settings.ingestion_max_concurrent,
        )
        self.show_progress = show_progress
        self._embedding_clients: Dict[str, BaseEmbeddingClient] = {}

    def _get_embedding_client(self, model: str) -> BaseEmbeddingClient:
        if model not in self._embedding_clients:
            self._embedding_clients[model] = self.embedding_client_factory(model)
        return self._embedding_clients[model]

    async def ingest(
        self,
        items: List[ContentItem],
        content_type: str,
        embedding_models: List[str],
        chunk_sizes: Optional[List[int]] = None
    ) -> Dict[str, Any]:
        """
        Split items and store their embeddings for every model and chunk size.

        A model that fails (unknown width, provider or storage error) is recorded and
        the remaining models still run.

        Raises:
            IngestionError: If the content type, model list or chunk sizes are invalid
        """
        if content_type not in settings.content_types:
            raise IngestionError(
                f"Unknown content type: {content_type}. Available: {', '.join(settings.content_types)}"
            )
        if not embedding_models:
            raise IngestionError("At least one embedding model is required")

        chunked = {
            chunk_size: TextSplitter(chunk_size).split_all(items)
            for chunk_size in chunk_sizes or [settings.ingestion_chunk_size]
        }

        result: Dict[str, Any] = {
            "items": len(items),
            "documents_stored": 0,
            "by_model": {},
            "failed": [],
        }

        for model in embedding_models:
            result["by_model"][model] = 0
            if get_embedding_dimension(model) is None:
                logger.error(f"Skipping {model}: no document shard for its embedding width")
                result["failed"].append({"embedding_model": model, "error": f"Embedding model {model} has no document shard"})
                continue

            for chunk_size, chunks in chunked.items():
                if not chunks:
                    continue
                try:
                    stored = await self.ingest_chunks(chunks, content_type, model)
                except RAGException as e:
                    logger.error(f"Error ingesting {content_type} ({chunk_size} chars) with {model}: {e}")
                    result["failed"].append({"embedding_model": model, "chunk_size": chunk_size, "error": str(e)})
                    continue
                result["by_model"][model] += stored
                result["documents_stored"] += stored

        logger.info(
            f"Ingested {result['items']} {content_type} items: {result['documents_stored']} documents stored, "
            f"{len(result['failed'])} failures"
        )
        return result

    async def ingest_chunks(self, chunks: Sequence[Chunk], content_type: str, embedding_model: str) -> int:
        """
        Embed chunks batch by batch and store each batch before embedding the next.

        Returns:
            Number of documents stored

        Raises:
            EmbeddingError: If the provider call fails
            StorageError / UnsupportedDimensionError: If a vector cannot be stored
        """
        client = self._get_embedding_client(embedding_model)

        async def embed_and_store(batch: Sequence[Chunk]) -> List[int]:
            embeddings = await self.batch_processor.process_batch(
                [chunk.content for chunk in batch], client.embed
            )
            ids = []
            for chunk, embedding in zip(batch, embeddings):
                ids.append(await self.document_store.add_document(
                    self._to_document(chunk, content_type, embedding_model, embedding)
                ))
            return ids

        ids = await self.batch_processor.process_in_batches(
            chunks,
            embed_and_store,
            show_progress=self.show_progress,
            desc=f"{embedding_model} ({content_type})",
        )
        return len(ids)

    @staticmethod
    def _to_document(chunk: Chunk, content_type: str, embedding_model: str, embedding: List[float]) -> Document:
        item = chunk.item
        return Document(
            content=chunk.content,
            content_type=content_type,
            embedding=embedding,
            embedding_model=embedding_model,
            metadata={
                **chunk.metadata,
                "embedding_model": embedding_model,
                "embedding_dimensions": len(embedding),
            },
            type_name=item.type_name,
            library_name=item.library_name,
            inheritance_path=item.inheritance_path,
            file_path=item.file_path,
        )

    async def close(self):
        """Close embedding clients"""
        for client in self._embedding_clients.values():
            await client.close()
        self._embedding_clients.clear()
