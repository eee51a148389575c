"""
Semantic search over the note index.
"""

from typing import Any, Dict, List

from .config import get_embedding_provider
from ..vector.index import EmbeddingIndex
from ..vector.similarity import query
from ..vector.types import QueryResult


def semantic_search(text: str, top_n: int, index: EmbeddingIndex, _embedding_provider=None) -> List[QueryResult]:
    """
    Find the notes most similar to a piece of text.

    Args:
        text: Query text, typically the content of the note being edited
        top_n: Maximum number of results to return
        index: The index to search
        _embedding_provider: Optional embedding provider, defaults to config

    Returns:
        min(top_n, len(index)) QueryResults ordered by descending score
    """
    embedding_provider = _embedding_provider if _embedding_provider is not None else get_embedding_provider()
    return query(text, top_n, index, embedding_provider)


def format_results(results: List[QueryResult]) -> List[Dict[str, Any]]:
    """Plain dicts for display or JSON output."""
    return [
        {
            "filePath": r.identifier,
            "score": float(r.score),
            "explanation": f"Matched via semantic vector similarity at {r.score:.2f}",
        }
        for r in results
    ]
