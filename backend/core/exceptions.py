"""
Custom exception hierarchy for the application
"""

from typing import Optional


class RAGException(Exception):
    """Base exception for RAG-related errors"""
    pass


class EmbeddingError(RAGException):
    """Error during embedding generation"""
    pass


class StorageError(RAGException):
    """Error during storage operations"""
    pass


class RetrievalError(RAGException):
    """Error during retrieval operations"""
    pass


class UnsupportedDimensionError(RetrievalError):
    """Embedding width has no matching document shard"""

    def __init__(self, dimension: Optional[int], model: Optional[str] = None):
        self.dimension = dimension
        self.model = model
        if dimension is None:
            super().__init__(f"Embedding model {model} has no document shard")
        else:
            super().__init__(f"Unsupported embedding dimension: {dimension}")


class UnknownStrategyError(RetrievalError):
    """Search strategy name is not registered"""
    pass


class IngestionError(RAGException):
    """Error during document ingestion"""
    pass


class EvaluationError(RAGException):
    """Error during evaluation"""
    pass


class LLMError(Exception):
    """Error during LLM operations"""
    pass
