"""
Semantic search entry point.
"""

import pytest
from unittest.mock import MagicMock, patch

from second_brain.core.search_service import semantic_search, format_results
from second_brain.vector.index import EmbeddingIndex
from second_brain.vector.types import QueryResult


@pytest.fixture
def index():
    index = EmbeddingIndex()
    index.upsert_record("A", [1, 0])
    index.upsert_record("B", [0, 1])
    index.upsert_record("C", [1, 0])
    return index


@pytest.fixture
def mock_embedding_provider():
    embedder = MagicMock()
    embedder.embed_text.return_value = [1.0, 0.0]
    return embedder


def test_semantic_search_basic(index, mock_embedding_provider):
    results = semantic_search("query", 2, index, _embedding_provider=mock_embedding_provider)

    mock_embedding_provider.embed_text.assert_called_once_with("query")
    assert [r.identifier for r in results] == ["A", "C"]
    assert all(r.score == pytest.approx(1.0) for r in results)


def test_semantic_search_uses_configured_provider(index, mock_embedding_provider):
    with patch("second_brain.core.search_service.get_embedding_provider",
               return_value=mock_embedding_provider) as mock_get:
        results = semantic_search("query", 3, index)

    mock_get.assert_called_once()
    assert len(results) == 3
    assert results[-1].identifier == "B"


def test_format_results():
    formatted = format_results([QueryResult("notes/a.md", 0.875)])
    assert formatted == [{
        "filePath": "notes/a.md",
        "score": 0.875,
        "explanation": "Matched via semantic vector similarity at 0.88",
    }]
