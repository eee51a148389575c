"""
Index maintenance: full rebuild, per-note upsert and removal.
Embeddings are requested one note at a time.
"""

from typing import Iterable, Optional, Tuple

from .embeddings import IEmbeddingProvider
from .index import EmbeddingIndex
from ..util.logging import logger


class IndexBuilder:
    """Keeps an EmbeddingIndex in step with note contents using one provider."""

    def __init__(self, provider: IEmbeddingProvider):
        self.provider = provider

    def rebuild_all(self, documents: Iterable[Tuple[str, str]],
                    index: Optional[EmbeddingIndex] = None) -> EmbeddingIndex:
        """
        Clear the index and embed every (identifier, text) pair in order.

        Notes whose embedding is unavailable are still indexed, with an
        empty vector, and never match until they are upserted again.
        An identifier repeated in the input keeps its first position and
        the vector of its last occurrence, so identifiers stay unique.

        Args:
            documents: Sequence of (identifier, text) pairs
            index: Index to rebuild in place; a new one is created if omitted

        Returns:
            The rebuilt index
        """
        if index is None:
            index = EmbeddingIndex()
        index.clear()

        empty_count = 0
        for identifier, text in documents:
            logger.debug(f"Generating embedding for {identifier}")
            vector = self.provider.embed_text(text)
            if not len(vector):
                empty_count += 1
            index.upsert_record(identifier, vector)

        logger.log_index_rebuild(len(index), empty_count)
        return index

    def upsert(self, identifier: str, text: str, index: EmbeddingIndex) -> EmbeddingIndex:
        """Re-embed one note and replace or append its record."""
        vector = self.provider.embed_text(text)
        appended = index.upsert_record(identifier, vector)
        logger.log_index_operation(
            "upsert", identifier,
            {"action": "insert" if appended else "update", "dimension": len(vector)}
        )
        return index

    def remove(self, identifier: str, index: EmbeddingIndex) -> EmbeddingIndex:
        """Drop a note's record; unknown identifiers are ignored."""
        return remove(identifier, index)


def rebuild_all(documents: Iterable[Tuple[str, str]], provider: IEmbeddingProvider,
                index: Optional[EmbeddingIndex] = None) -> EmbeddingIndex:
    return IndexBuilder(provider).rebuild_all(documents, index)


def upsert(identifier: str, text: str, index: EmbeddingIndex, provider: IEmbeddingProvider) -> EmbeddingIndex:
    return IndexBuilder(provider).upsert(identifier, text, index)


def remove(identifier: str, index: EmbeddingIndex) -> EmbeddingIndex:
    removed = index.remove(identifier)
    logger.log_index_operation("remove", identifier, status="success" if removed else "not_found")
    return index
