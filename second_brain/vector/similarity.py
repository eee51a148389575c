"""
Cosine similarity and ranked top-K search over an EmbeddingIndex.
"""

from typing import List

import numpy as np

from .embeddings import IEmbeddingProvider
from .index import EmbeddingIndex
from .types import QueryResult, as_vector


def cosine_similarity(vec_a, vec_b) -> float:
    """Cosine similarity of two vectors.

    Returns 0.0 when either vector is empty, has zero norm or holds a
    non-finite value. Vectors of different length are compared over their
    common prefix.
    """
    a = as_vector(vec_a)
    b = as_vector(vec_b)
    if a.size == 0 or b.size == 0:
        return 0.0

    n = min(a.size, b.size)
    a = a[:n]
    b = b[:n]
    if not (np.all(np.isfinite(a)) and np.all(np.isfinite(b))):
        return 0.0

    scale_a = np.max(np.abs(a))
    scale_b = np.max(np.abs(b))
    if scale_a == 0 or scale_b == 0:
        return 0.0

    # Scale to max-abs 1 so norms and dot cannot overflow or underflow
    a = a / scale_a
    b = b / scale_b

    score = np.dot(a, b) / (np.linalg.norm(a) * np.linalg.norm(b))
    if not np.isfinite(score):
        return 0.0

    # Rounding can push identical vectors slightly past 1
    return float(np.clip(score, -1.0, 1.0))


def rank(query_vector, top_n: int, index: EmbeddingIndex) -> List[QueryResult]:
    """Score every record against a query vector and return the best top_n.

    The sort is stable: equal scores keep index order.
    """
    if top_n < 0:
        raise ValueError("top_n must be >= 0")

    query_vector = as_vector(query_vector)
    results = [
        QueryResult(identifier=record.identifier,
                    score=cosine_similarity(query_vector, record.vector))
        for record in index
    ]
    results.sort(key=lambda r: r.score, reverse=True)
    return results[:top_n]


def query(text: str, top_n: int, index: EmbeddingIndex, provider: IEmbeddingProvider) -> List[QueryResult]:
    """Embed text with the provider and rank the index against it."""
    if top_n < 0:
        raise ValueError("top_n must be >= 0")

    query_vector = provider.embed_text(text)
    return rank(query_vector, top_n, index)
