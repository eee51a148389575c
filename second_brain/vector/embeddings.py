"""
Embedding providers for note text.
The remote provider degrades to an empty vector instead of raising.
"""

from abc import ABC, abstractmethod
import hashlib
import logging
import struct
from typing import Callable, List, Optional, Union

import requests
from pydantic import ValidationError

from ..core.schemas import EmbeddingRequest, EmbeddingResponse
from ..util.logging import logger

OPENAI_EMBEDDINGS_URL = "https://api.openai.com/v1/embeddings"
DEFAULT_EMBED_MODEL = "text-embedding-ada-002"

# Known output sizes, used by get_dimension without a network call
MODEL_DIMENSIONS = {
    "text-embedding-ada-002": 1536,
    "text-embedding-3-small": 1536,
    "text-embedding-3-large": 3072,
}


class IEmbeddingProvider(ABC):
    """Abstract interface for embedding providers."""

    @abstractmethod
    def embed_text(self, text: str) -> List[float]:
        """Generate embedding vector for given text. Empty list if unavailable."""
        pass

    @abstractmethod
    def get_dimension(self) -> int:
        """Get the dimension of the embedding vectors."""
        pass


class DeterministicHashEmbedding(IEmbeddingProvider):
    """Deterministic hash-based embedding provider for tests and offline use.

    Expands a SHA-256 digest of the text into `dimension` values in [-1, 1].
    Identical text always maps to the identical vector.
    """

    def __init__(self, dimension: int = 384):
        if dimension < 1:
            raise ValueError("dimension must be >= 1")
        self.dimension = dimension

    def embed_text(self, text: str) -> List[float]:
        if not text:
            return []

        vector = []
        counter = 0
        while len(vector) < self.dimension:
            digest = hashlib.sha256(f"{counter}:{text}".encode("utf-8")).digest()
            # 8 unsigned 32-bit ints per digest
            for value in struct.unpack(">8I", digest):
                if len(vector) >= self.dimension:
                    break
                vector.append((value / 2**32) * 2 - 1)
            counter += 1

        return vector

    def get_dimension(self) -> int:
        return self.dimension


class OpenAIEmbeddingProvider(IEmbeddingProvider):
    """Embedding provider backed by the OpenAI embeddings HTTP endpoint.

    One POST per call, no retries. Any failure (missing key, transport
    error, error status, malformed body) yields an empty vector and a log
    record.

    Args:
        api_key: The bearer credential, or a callable returning it so that
            settings changes are picked up on the next request
        model: Embedding model identifier sent with each request
        endpoint: Embeddings endpoint URL
        timeout: Request timeout in seconds
        session: Optional requests session, mostly for tests
    """

    def __init__(self,
                 api_key: Union[str, Callable[[], str], None] = None,
                 model: str = DEFAULT_EMBED_MODEL,
                 endpoint: str = OPENAI_EMBEDDINGS_URL,
                 timeout: float = 30.0,
                 session: Optional[requests.Session] = None):
        self._api_key = api_key
        self.model = model
        self.endpoint = endpoint
        self.timeout = timeout
        self._session = session

    @property
    def api_key(self) -> str:
        key = self._api_key() if callable(self._api_key) else self._api_key
        return key or ""

    @property
    def session(self):
        if self._session is None:
            self._session = requests.Session()
        return self._session

    def embed_text(self, text: str) -> List[float]:
        if not text:
            return []

        api_key = self.api_key
        if not api_key:
            logger.log_embedding_failure("api_key_missing", level=logging.WARNING)
            return []

        payload = EmbeddingRequest(input=text, model=self.model)
        try:
            response = self.session.post(
                self.endpoint,
                headers={
                    "Content-Type": "application/json",
                    "Authorization": f"Bearer {api_key}",
                },
                json=payload.model_dump(),
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            logger.log_embedding_failure("transport_error", {"error": str(e)})
            return []

        if not response.ok:
            logger.log_embedding_failure("http_status", {
                "status_code": response.status_code,
                "body": response.text,
            })
            return []

        try:
            body = response.json()
        except ValueError as e:
            logger.log_embedding_failure("invalid_json", {"error": str(e)})
            return []

        try:
            return EmbeddingResponse.model_validate(body).first_embedding()
        except ValidationError as e:
            logger.log_embedding_failure("malformed_response", {"error": str(e)})
            return []

    def get_dimension(self) -> int:
        return MODEL_DIMENSIONS.get(self.model, 1536)
