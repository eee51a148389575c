"""
Environment-driven configuration for the note index.
"""

import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

# Settings blob (holds the user-supplied apiKey)
SETTINGS_PATH = os.getenv("SETTINGS_PATH", "./data/settings.json")

# Debug flag
DEBUG = os.getenv("DEBUG", "false").lower() == "true"

# Embedding configuration
OPENAI_API_KEY = os.getenv("OPENAI_API_KEY", "")
EMBED_PROVIDER = os.getenv("EMBED_PROVIDER", "openai")  # openai|hash
EMBED_MODEL_NAME = os.getenv("EMBED_MODEL_NAME", "text-embedding-ada-002")
EMBED_ENDPOINT = os.getenv("EMBED_ENDPOINT", "https://api.openai.com/v1/embeddings")
EMBED_TIMEOUT_SEC = float(os.getenv("EMBED_TIMEOUT_SEC", "30"))
EMBED_DIMENSION = int(os.getenv("EMBED_DIMENSION", "384"))  # hash provider only

# Suggestions shown for editor content
SUGGESTION_COUNT = int(os.getenv("SUGGESTION_COUNT", "5"))

# Notes with these extensions are indexed
NOTE_EXTENSIONS = ("md",)


def get_embed_provider_name():
    """Get configured embedding provider name (openai|hash)."""
    return os.getenv("EMBED_PROVIDER", EMBED_PROVIDER).lower()


def get_embedding_provider(api_key=None):
    """Get configured embedding provider implementation.

    api_key may be a string or a zero-argument callable; it falls back to
    the OPENAI_API_KEY environment variable.
    """
    provider_name = get_embed_provider_name()

    if provider_name == "hash":
        from second_brain.vector.embeddings import DeterministicHashEmbedding
        return DeterministicHashEmbedding(dimension=EMBED_DIMENSION)

    from second_brain.vector.embeddings import OpenAIEmbeddingProvider
    return OpenAIEmbeddingProvider(
        api_key=api_key if api_key is not None else OPENAI_API_KEY,
        model=EMBED_MODEL_NAME,
        endpoint=EMBED_ENDPOINT,
        timeout=EMBED_TIMEOUT_SEC,
    )


def ensure_settings_directory(path=None):
    """Ensure the settings directory exists."""
    Path(path or SETTINGS_PATH).parent.mkdir(parents=True, exist_ok=True)


def validate_config():
    """Validate embedding configuration and return any issues."""
    issues = []

    if get_embed_provider_name() not in ["openai", "hash"]:
        issues.append(f"Invalid EMBED_PROVIDER: {get_embed_provider_name()}")

    if EMBED_TIMEOUT_SEC <= 0:
        issues.append("EMBED_TIMEOUT_SEC must be > 0")

    if EMBED_DIMENSION < 1:
        issues.append("EMBED_DIMENSION must be >= 1")

    if SUGGESTION_COUNT < 0:
        issues.append("SUGGESTION_COUNT must be >= 0")

    return issues
