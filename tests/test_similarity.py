"""
Cosine similarity and ranked query over the note index.
"""

import pytest
import numpy as np
from unittest.mock import MagicMock

from second_brain.vector.index import EmbeddingIndex
from second_brain.vector.similarity import cosine_similarity, rank, query
from second_brain.vector.embeddings import IEmbeddingProvider


def make_provider(vectors):
    """Mock provider returning fixed vectors per text."""
    provider = MagicMock(spec=IEmbeddingProvider)
    provider.embed_text.side_effect = lambda text: vectors.get(text, [])
    return provider


def make_index(records):
    index = EmbeddingIndex()
    for identifier, vector in records:
        index.upsert_record(identifier, vector)
    return index


def test_cosine_identical_vectors():
    """A non-zero vector has similarity 1 with itself."""
    a = [0.3, -1.2, 4.5, 0.01]
    assert cosine_similarity(a, a) == pytest.approx(1.0)


def test_cosine_orthogonal_and_opposite():
    assert cosine_similarity([1.0, 0.0], [0.0, 1.0]) == pytest.approx(0.0)
    assert cosine_similarity([1.0, 2.0], [-1.0, -2.0]) == pytest.approx(-1.0)


def test_cosine_is_magnitude_independent():
    assert cosine_similarity([1.0, 1.0], [10.0, 10.0]) == pytest.approx(1.0)


def test_cosine_bounded():
    """Similarity of random vectors stays within [-1, 1]."""
    rng = np.random.default_rng(42)
    for _ in range(50):
        a = rng.normal(size=16)
        b = rng.normal(size=16)
        score = cosine_similarity(a, b)
        assert -1.0 <= score <= 1.0


def test_cosine_empty_vector_is_zero():
    assert cosine_similarity([], [1.0, 0.0]) == 0.0
    assert cosine_similarity([1.0, 0.0], []) == 0.0
    assert cosine_similarity([], []) == 0.0


def test_cosine_zero_vector_is_zero():
    """Zero-norm vectors score 0 rather than producing NaN."""
    assert cosine_similarity([0.0, 0.0], [1.0, 0.0]) == 0.0


def test_cosine_mismatched_lengths_use_common_prefix():
    # Only the first two components are compared
    assert cosine_similarity([1.0, 0.0], [1.0, 0.0, 5.0]) == pytest.approx(1.0)
    assert cosine_similarity([0.0, 1.0, 7.0], [1.0, 0.0]) == pytest.approx(0.0)


def test_rank_scenario_with_ties():
    """Equal scores keep index order, and top_n truncates."""
    index = make_index([("A", [1, 0]), ("B", [0, 1]), ("C", [1, 0])])

    results = rank([1, 0], 3, index)
    assert [r.identifier for r in results] == ["A", "C", "B"]
    assert results[0].score == pytest.approx(1.0)
    assert results[1].score == pytest.approx(1.0)
    assert results[2].score == pytest.approx(0.0)

    top_two = rank([1, 0], 2, index)
    assert len(top_two) == 2
    assert {r.identifier for r in top_two} == {"A", "C"}


def test_query_returns_min_of_top_n_and_index_size():
    index = make_index([("a", [1, 0]), ("b", [0, 1]), ("c", [1, 1])])
    provider = make_provider({"q": [1, 0]})

    assert len(query("q", 0, index, provider)) == 0
    assert len(query("q", 2, index, provider)) == 2
    assert len(query("q", 10, index, provider)) == 3


def test_query_sorted_descending():
    index = make_index([("low", [-1, 0]), ("mid", [1, 1]), ("high", [1, 0])])
    provider = make_provider({"q": [1, 0]})

    results = query("q", 3, index, provider)
    scores = [r.score for r in results]
    assert scores == sorted(scores, reverse=True)
    assert [r.identifier for r in results] == ["high", "mid", "low"]


def test_query_unembedded_note_scores_zero():
    """A note indexed with an empty vector scores 0 and sorts after matches."""
    index = make_index([("D", []), ("E", [1, 0]), ("F", [0.5, 0.5])])
    provider = make_provider({"q": [1, 0]})

    results = query("q", 3, index, provider)
    assert results[-1].identifier == "D"
    assert results[-1].score == 0.0


def test_query_with_unavailable_query_embedding():
    """An empty query vector scores every note at 0."""
    index = make_index([("a", [1, 0]), ("b", [0, 1])])
    provider = make_provider({})

    results = query("unknown", 5, index, provider)
    assert [r.score for r in results] == [0.0, 0.0]
    assert [r.identifier for r in results] == ["a", "b"]


def test_query_empty_index():
    provider = make_provider({"q": [1, 0]})
    assert query("q", 5, EmbeddingIndex(), provider) == []


def test_negative_top_n_rejected():
    provider = make_provider({"q": [1, 0]})
    with pytest.raises(ValueError):
        query("q", -1, EmbeddingIndex(), provider)
    provider.embed_text.assert_not_called()


def test_cosine_extreme_magnitudes():
    """Very large or very small vectors still give 1 with themselves."""
    large = [1e200, 1e200]
    tiny = [1e-200, 1e-200]
    assert cosine_similarity(large, large) == pytest.approx(1.0)
    assert cosine_similarity(tiny, tiny) == pytest.approx(1.0)
    assert cosine_similarity(large, tiny) == pytest.approx(1.0)
    assert cosine_similarity([1e300, 0.0], [-1e300, 0.0]) == pytest.approx(-1.0)


def test_cosine_non_finite_is_zero():
    assert cosine_similarity([float("nan"), 1.0], [1.0, 0.0]) == 0.0
    assert cosine_similarity([1.0, 0.0], [float("inf"), 1.0]) == 0.0


def test_rank_with_non_finite_vector_stays_sorted():
    """A record holding NaN scores 0 and does not disturb the ordering."""
    index = make_index([("low", [-1, 0]), ("bad", [float("nan"), 1.0]), ("high", [1, 0])])

    results = rank([1, 0], 3, index)

    assert [r.identifier for r in results] == ["high", "bad", "low"]
    assert [r.score for r in results] == [pytest.approx(1.0), 0.0, pytest.approx(-1.0)]
