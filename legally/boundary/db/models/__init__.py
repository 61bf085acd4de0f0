"""
Database models package.

Exports:
  - DocumentChunkModel: Embedded chunk row for the pgvector index

Dependencies: sqlalchemy, legally.boundary.db.base
System role: Database model definitions for domain entities
"""

from legally.boundary.db.models.document_chunk_model import DocumentChunkModel

__all__ = ["DocumentChunkModel"]
