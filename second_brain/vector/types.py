"""
Record and result types for the in-memory note embedding index.
"""

from dataclasses import dataclass, field

import numpy as np


def as_vector(values) -> np.ndarray:
    """Coerce an embedding (list, tuple or array) to a 1-D float array."""
    if values is None:
        return np.zeros(0, dtype=np.float64)
    return np.asarray(values, dtype=np.float64).reshape(-1)


@dataclass
class DocumentRecord:
    """Represents one indexed note."""

    identifier: str
    """Unique identifier of the note (vault-relative path)"""

    vector: np.ndarray = field(default_factory=lambda: as_vector(None))
    """Embedding of the note text; empty when the embedding was unavailable"""

    def __post_init__(self):
        self.vector = as_vector(self.vector)

    @property
    def has_embedding(self) -> bool:
        return self.vector.size > 0


@dataclass
class QueryResult:
    """Represents a ranked match from a similarity query."""

    identifier: str
    """Identifier of the matching note"""

    score: float
    """Cosine similarity between the query and the note (-1 to 1)"""
