"""
Note embedding index - flat in-memory vectors with cosine similarity search.
"""

# Package initialization for vector module
from .index import EmbeddingIndex
from .types import DocumentRecord, QueryResult
from .embeddings import IEmbeddingProvider, DeterministicHashEmbedding, OpenAIEmbeddingProvider
from .builder import IndexBuilder, rebuild_all, upsert, remove
from .similarity import cosine_similarity, rank, query

__all__ = [
    'EmbeddingIndex',
    'DocumentRecord',
    'QueryResult',
    'IEmbeddingProvider',
    'DeterministicHashEmbedding',
    'OpenAIEmbeddingProvider',
    'IndexBuilder',
    'rebuild_all',
    'upsert',
    'remove',
    'cosine_similarity',
    'rank',
    'query'
]
