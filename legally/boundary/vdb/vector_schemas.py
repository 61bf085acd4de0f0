"""
Vector database schemas.

Pydantic models for stored chunks, search queries and scored results.
Used for type-safe vector store interactions.

Dependencies: pydantic
System role: Type definitions for vector operations
"""

from typing import Any
import uuid

from pydantic import BaseModel, ConfigDict, Field


class DocumentChunk(BaseModel):
    """
    One embedded piece of a document.

    Chunks are created in batch during ingestion and never modified.
    ``chunk_index`` runs contiguously from 0 within a document.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=lambda: str(uuid.uuid4()), description="Chunk identifier")
    document_id: str = Field(description="Owning document ID")
    owner_id: str = Field(description="Owning user ID")
    chunk_index: int = Field(ge=0, description="Position of the chunk within its document")
    content: str = Field(description="Chunk text content")
    embedding: list[float] = Field(description="Unit-length embedding vector")
    metadata: dict[str, Any] = Field(default_factory=dict, description="Free-form chunk metadata")


class VectorQuery(BaseModel):
    """Query parameters for a scoped similarity search."""

    embedding: list[float] = Field(description="Query embedding vector")
    owner_id: str = Field(description="Only chunks of this owner are searched")
    document_id: str | None = Field(
        default=None,
        description="Restrict the search to one document",
    )
    top_k: int = Field(default=5, description="Number of results to return", ge=1)
    similarity_threshold: float = Field(
        default=0.3,
        description="Minimum cosine similarity (-1.0 to 1.0)",
        ge=-1.0,
        le=1.0,
    )


class ScoredChunk(BaseModel):
    """Single result from vector search."""

    chunk: DocumentChunk = Field(description="Matched chunk")
    similarity: float = Field(description="Cosine similarity to the query (-1.0 to 1.0)")
