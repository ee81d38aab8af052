"""
Similarity functions (cosine similarity, cosine distance)
"""

import numpy as np
from typing import List


def cosine_similarity(vec1: List[float], vec2: List[float]) -> float:
    """Compute cosine similarity between two vectors"""
    vec1_np = np.asarray(vec1, dtype=float)
    vec2_np = np.asarray(vec2, dtype=float)

    dot_product = np.dot(vec1_np, vec2_np)
    norm1 = np.linalg.norm(vec1_np)
    norm2 = np.linalg.norm(vec2_np)

    if norm1 == 0 or norm2 == 0:
        return 0.0

    return float(dot_product / (norm1 * norm2))


def cosine_distance(vec1: List[float], vec2: List[float]) -> float:
    """Cosine distance as pgvector's <=> operator defines it: 1 - cosine similarity"""
    return 1.0 - cosine_similarity(vec1, vec2)


def cosine_similarities(query_vector: List[float], matrix: np.ndarray) -> np.ndarray:
    """
    Cosine similarity between one query vector and every row of a matrix (vectorized).

    Rows with zero norm score 0.0.

    Args:
        query_vector: Query embedding vector, shape [d]
        matrix: Document embeddings, shape [N, d]

    Returns:
        Similarities, shape [N]
    """
    if matrix.size == 0:
        return np.zeros(0)

    query = np.asarray(query_vector, dtype=float)
    query_norm = np.linalg.norm(query)
    row_norms = np.linalg.norm(matrix, axis=1)

    denom = row_norms * query_norm
    dots = matrix @ query
    return np.divide(dots, denom, out=np.zeros_like(dots), where=denom != 0)
