"""
Database boundary layer: ORM models and connection management.

Exports:
  - Base, TimestampMixin: Model building blocks
  - get_async_engine(), get_async_session_factory(): Async connection management
  - DocumentChunkModel: Embedded chunk rows

Dependencies: sqlalchemy, pgvector, legally.configs
System role: Database adapter backing the pgvector chunk index
"""

from legally.boundary.db.base import Base, TimestampMixin
from legally.boundary.db.connection import get_async_engine, get_async_session_factory
from legally.boundary.db.models.document_chunk_model import DocumentChunkModel

__all__ = [
    "Base",
    "TimestampMixin",
    "get_async_engine",
    "get_async_session_factory",
    "DocumentChunkModel",
]
