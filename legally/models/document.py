"""
Document domain models and schemas.

Request/response schemas for document indexing operations.

Dependencies: pydantic
System role: Document API contracts
"""

from enum import Enum

from pydantic import BaseModel, Field


class IndexingStatus(str, Enum):
    """Per-document indexing outcome."""

    INDEXED = "indexed"
    SKIPPED = "skipped"
    FAILED = "failed"


class IndexDocumentRequest(BaseModel):
    """Request schema for indexing a document's extracted text."""

    text: str = Field(description="Extracted document text")


class IngestionReport(BaseModel):
    """Response schema for document indexing."""

    document_id: str
    status: IndexingStatus
    chunk_count: int = Field(default=0, description="Chunks stored for the document")
    error: str | None = Field(default=None, description="Failure reason when status is failed")


class VectorStoreHealthResponse(BaseModel):
    """Response schema for vector store health check."""

    status: str
    store_type: str
    chunk_count: int
