"""
Chat domain models and schemas.

Request/response schemas for retrieval, analysis and stored conversations.

Dependencies: pydantic
System role: Chat API contracts
"""

from datetime import datetime

from pydantic import BaseModel, Field


class RetrievalRequest(BaseModel):
    """Request schema for context retrieval."""

    query: str = Field(min_length=1, description="User question")
    document_id: str | None = Field(default=None, description="Restrict retrieval to one document")
    max_chunks: int = Field(default=5, ge=1, le=20, description="Maximum chunks in the context")


class RetrievalResponse(BaseModel):
    """Formatted context for a question; empty when nothing is relevant."""

    context: str


class DocumentAnalysisRequest(BaseModel):
    """Request schema for whole-document analysis."""

    document_content: str = Field(min_length=1, description="Extracted document text")
    file_name: str = Field(description="Original file name")
    language: str | None = Field(default=None, description="UI language code")


class ChatMessageRecord(BaseModel):
    """Single stored chat message."""

    id: str | None = None
    conversation_id: str
    role: str = Field(description="Message role: 'user' or 'assistant'")
    content: str = Field(description="Message content")
    created_at: datetime | None = None


class ConversationRecord(BaseModel):
    """Stored conversation header."""

    id: str
    owner_id: str
    title: str
    created_at: datetime | None = None
    updated_at: datetime | None = None
