"""
RAG pipeline configuration settings.

Chunking parameters and ingestion/retrieval gates.

Dependencies: pydantic, pydantic_settings
System role: Chunking and context assembly configuration
"""

from pydantic import Field, model_validator
from pydantic_settings import SettingsConfigDict

from legally.configs.base import BaseSettings


class RAGSettings(BaseSettings):
    """Chunking and context configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="RAG_",
        case_sensitive=False,
        extra="ignore",
    )

    chunk_size: int = Field(default=500, description="Soft maximum chunk length in characters")
    chunk_overlap: int = Field(default=100, description="Characters carried into the next chunk")
    min_content_length: int = Field(
        default=50,
        description="Documents shorter than this are not indexed",
        ge=0,
    )
    max_chunks: int = Field(default=5, description="Chunks rendered into a chat context", ge=1)

    @model_validator(mode="after")
    def _check_overlap(self) -> "RAGSettings":
        if self.chunk_size <= 0:
            raise ValueError("chunk_size must be positive")
        if not 0 < self.chunk_overlap < self.chunk_size:
            raise ValueError("chunk_overlap must be > 0 and < chunk_size")
        return self
