"""
Document store using PostgreSQL + pgvector, one table per embedding width
"""

import logging
from typing import Dict, List, Optional

from sqlalchemy import Column, DateTime, Integer, MetaData, String, Table, Text, func, text
from sqlalchemy.dialects.postgresql import ARRAY, JSONB
from sqlalchemy.engine import Engine

from domain.rag.retrieval.types import BranchHit
from storage.base import BaseDocumentStore, Document, SUPPORTED_DIMENSIONS, shard_table_name, validate_dimension
from storage.database import Vector, create_db_engine, ensure_vector_extension, to_vector_literal
from core.exceptions import StorageError

logger = logging.getLogger(__name__)

metadata_obj = MetaData()


def _shard_table(dimension: int) -> Table:
    table_name = shard_table_name(dimension)
    return Table(
        table_name,
        metadata_obj,
        Column("id", Integer, primary_key=True, autoincrement=True),
        Column("content", Text, nullable=False),
        Column("content_type", String(50), nullable=False, index=True),
        Column("embedding_model", String(100), nullable=False, index=True),
        Column("embedding", Vector(dimension)),
        Column("metadata", JSONB),
        Column("xeto_spec_name", String(255), index=True),
        Column("xeto_library", String(255), index=True),
        Column("inheritance_path", ARRAY(Text)),
        Column("file_path", Text),
        Column("created_at", DateTime(timezone=True), server_default=func.now(), index=True),
        Column("updated_at", DateTime(timezone=True), server_default=func.now()),
    )


SHARD_TABLES: Dict[int, Table] = {dimension: _shard_table(dimension) for dimension in SUPPORTED_DIMENSIONS}

# Table names below come from shard_table_name(), never from user input

VECTOR_SEARCH_SQL = """
    SELECT id, content, content_type, metadata, xeto_spec_name, xeto_library,
           1 - (embedding <=> CAST(:embedding AS vector)) AS score
    FROM {table}
    WHERE content_type = :content_type
    ORDER BY embedding <=> CAST(:embedding AS vector)
    LIMIT :limit
"""

LEXICAL_SEARCH_SQL = """
    SELECT id, content, content_type, metadata, xeto_spec_name, xeto_library,
           ts_rank_cd(to_tsvector('english', content), to_tsquery('english', :pattern)) AS score
    FROM {table}
    WHERE content_type = :content_type
      AND to_tsvector('english', content) @@ to_tsquery('english', :pattern)
    ORDER BY score DESC
    LIMIT :limit
"""

# Field weights: type name (A) > library (B) > content (C); 32 = rank / (rank + 1)
RELEVANCE_SEARCH_SQL = """
    SELECT id, content, content_type, metadata, xeto_spec_name, xeto_library,
           ts_rank_cd(
               setweight(to_tsvector('english', coalesce(xeto_spec_name, '')), 'A') ||
               setweight(to_tsvector('english', coalesce(xeto_library, '')), 'B') ||
               setweight(to_tsvector('english', content), 'C'),
               plainto_tsquery('english', :query_text),
               32
           ) AS score
    FROM {table}
    WHERE content_type = :content_type
    ORDER BY score DESC
    LIMIT :limit
"""


def _row_to_hit(row) -> BranchHit:
    return BranchHit(
        id=row.id,
        content=row.content,
        content_type=row.content_type,
        score=float(row.score or 0.0),
        metadata=row.metadata or {},
        type_name=row.xeto_spec_name,
        library_name=row.xeto_library,
    )


class PgDocumentStore(BaseDocumentStore):
    """Dimension-sharded document store on PostgreSQL with the pgvector extension"""

    def __init__(self, engine: Optional[Engine] = None, create_tables: bool = True):
        try:
            self.engine = engine or create_db_engine()
            if create_tables:
                ensure_vector_extension(self.engine)
                metadata_obj.create_all(self.engine)
        except Exception as e:
            logger.error(f"Error initializing document store: {e}")
            raise StorageError(f"Failed to initialize document store: {e}")

    def _fetch_hits(self, sql: str, dimension: int, params: Dict) -> List[BranchHit]:
        query = text(sql.format(table=shard_table_name(dimension)))
        with self.engine.connect() as conn:
            rows = conn.execute(query, params).fetchall()
        return [_row_to_hit(row) for row in rows]

    async def vector_search(
        self,
        query_vector: List[float],
        content_type: str,
        limit: int,
        dimension: int
    ) -> List[BranchHit]:
        validate_dimension(dimension)
        try:
            return self._fetch_hits(
                VECTOR_SEARCH_SQL,
                dimension,
                {"embedding": to_vector_literal(query_vector), "content_type": content_type, "limit": limit}
            )
        except Exception as e:
            logger.error(f"Error in vector search on {shard_table_name(dimension)}: {e}")
            raise StorageError(f"Failed to run vector search: {e}")

    async def lexical_search(
        self,
        keyword_pattern: str,
        content_type: str,
        limit: int,
        dimension: int
    ) -> List[BranchHit]:
        validate_dimension(dimension)
        if not keyword_pattern:
            return []
        try:
            return self._fetch_hits(
                LEXICAL_SEARCH_SQL,
                dimension,
                {"pattern": keyword_pattern, "content_type": content_type, "limit": limit}
            )
        except Exception as e:
            logger.error(f"Error in lexical search on {shard_table_name(dimension)}: {e}")
            raise StorageError(f"Failed to run lexical search: {e}")

    async def relevance_search(
        self,
        query_text: str,
        content_type: str,
        limit: int,
        dimension: int
    ) -> List[BranchHit]:
        validate_dimension(dimension)
        try:
            return self._fetch_hits(
                RELEVANCE_SEARCH_SQL,
                dimension,
                {"query_text": query_text, "content_type": content_type, "limit": limit}
            )
        except Exception as e:
            logger.error(f"Error in relevance search on {shard_table_name(dimension)}: {e}")
            raise StorageError(f"Failed to run relevance search: {e}")

    async def add_document(self, document: Document) -> int:
        table = SHARD_TABLES[validate_dimension(document.dimension)]
        try:
            with self.engine.begin() as conn:
                result = conn.execute(
                    table.insert().values(
                        content=document.content,
                        content_type=document.content_type,
                        embedding_model=document.embedding_model,
                        embedding=document.embedding,
                        metadata=document.metadata,
                        xeto_spec_name=document.type_name,
                        xeto_library=document.library_name,
                        inheritance_path=document.inheritance_path,
                        file_path=document.file_path,
                    ).returning(table.c.id)
                )
                doc_id = result.scalar_one()
            document.id = doc_id
            return doc_id
        except Exception as e:
            logger.error(f"Error adding document to {table.name}: {e}")
            raise StorageError(f"Failed to add document: {e}")

    async def count_documents(self, dimension: int, content_type: Optional[str] = None) -> int:
        table = SHARD_TABLES[validate_dimension(dimension)]
        try:
            query = table.select().with_only_columns(func.count())
            if content_type:
                query = query.where(table.c.content_type == content_type)
            with self.engine.connect() as conn:
                return conn.execute(query).scalar_one()
        except Exception as e:
            logger.error(f"Error counting documents in {table.name}: {e}")
            raise StorageError(f"Failed to count documents: {e}")

    async def close(self) -> None:
        self.engine.dispose()
        logger.info("Document store connections closed")
