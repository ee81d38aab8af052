"""
PostgreSQL engine and the pgvector column type
"""

import logging
from typing import List, Optional, Sequence

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.types import UserDefinedType

from core.config import settings

logger = logging.getLogger(__name__)


def get_database_url() -> str:
    # Prioritize database_url for managed services
    if settings.database_url:
        return settings.database_url

    if not settings.postgres_password:
        raise ValueError(
            "PostgreSQL password is required. Set POSTGRES_PASSWORD environment variable "
            "or DATABASE_URL connection string."
        )
    return (
        f"postgresql://{settings.postgres_user}:{settings.postgres_password}"
        f"@{settings.postgres_host}:{settings.postgres_port}/{settings.postgres_database}"
    )


def create_db_engine(db_url: Optional[str] = None) -> Engine:
    """Pooled engine shared by the document and benchmark stores"""
    logger.info("Connecting to PostgreSQL database")
    return create_engine(
        db_url or get_database_url(),
        pool_pre_ping=True,  # Verify connections before using
        pool_size=settings.db_pool_size,
        max_overflow=settings.db_max_overflow,
        pool_timeout=settings.db_pool_timeout,
    )


def ensure_vector_extension(engine: Engine) -> None:
    with engine.begin() as conn:
        conn.execute(text("CREATE EXTENSION IF NOT EXISTS vector"))


def to_vector_literal(values: Sequence[float]) -> str:
    """pgvector text format: [1.0,2.0,3.0]"""
    return "[" + ",".join(str(float(v)) for v in values) + "]"


def parse_vector_literal(value: str) -> List[float]:
    stripped = value.strip("[]")
    if not stripped:
        return []
    return [float(v) for v in stripped.split(",")]


class Vector(UserDefinedType):
    """pgvector VECTOR(n) column"""

    cache_ok = True

    def __init__(self, dimension: int):
        self.dimension = dimension

    def get_col_spec(self, **kw) -> str:
        return f"VECTOR({self.dimension})"

    def bind_processor(self, dialect):
        def process(value):
            if value is None:
                return None
            return to_vector_literal(value)
        return process

    def result_processor(self, dialect, coltype):
        def process(value):
            if value is None or isinstance(value, list):
                return value
            return parse_vector_literal(value)
        return process
