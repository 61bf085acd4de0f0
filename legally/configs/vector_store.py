"""
Vector store configuration settings.

Selects the chunk index backend (in-memory brute force or pgvector) and
holds the embedding model settings the index dimension depends on.

Dependencies: pydantic, pydantic_settings
System role: Vector database configuration for RAG retrieval
"""

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from legally.configs.base import BaseSettings


class VectorStoreSettings(BaseSettings):
    """Vector store configuration (memory for dev/tests, pgvector for prod)."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="VECTOR_STORE_",
        case_sensitive=False,
        extra="ignore",
    )

    store_type: str = Field(
        default="memory",
        description="Vector store type: 'memory' for local dev, 'pgvector' for production",
    )
    batch_size: int = Field(
        default=10,
        description="Maximum chunk records written per insert batch",
        ge=1,
    )

    embedding_model: str = Field(
        default="models/gemini-embedding-001",
        description="Google Gemini embedding model ID",
    )
    embedding_dimension: int = Field(
        default=768,
        description="Embedding vector dimension, fixed for every stored chunk",
        ge=1,
    )

    similarity_threshold: float = Field(
        default=0.3,
        description="Minimum cosine similarity for retrieval (-1.0 to 1.0)",
        ge=-1.0,
        le=1.0,
    )
