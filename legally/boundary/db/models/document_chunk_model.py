"""
Document chunk ORM model.

One row per embedded chunk, with the pgvector embedding column used for
cosine similarity search.

Dependencies: sqlalchemy, pgvector, legally.boundary.db.base
System role: Chunk persistence for the pgvector index
"""

from typing import Any

from pgvector.sqlalchemy import Vector
from sqlalchemy import JSON, Index, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from legally.boundary.db.base import Base, TimestampMixin
from legally.configs import get_settings

EMBEDDING_DIMENSION = get_settings().vector_store.embedding_dimension


class DocumentChunkModel(Base, TimestampMixin):
    """
    Embedded document chunk.

    Rows are written in batches during ingestion and only removed by
    deleting every chunk of their document.

    Attributes:
        id: Chunk identifier
        document_id: Owning document (indexed for delete-by-document)
        owner_id: Owning user (indexed, every search filters on it)
        chunk_index: Position in the document, unique per document
        content: Chunk text
        embedding: Unit-length vector, HNSW-indexed for cosine distance
        chunk_metadata: Free-form JSON stored in the ``metadata`` column
    """

    __tablename__ = "document_chunks"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    document_id: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    owner_id: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    chunk_index: Mapped[int] = mapped_column(Integer, nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    embedding: Mapped[Any] = mapped_column(Vector(EMBEDDING_DIMENSION), nullable=False)
    chunk_metadata: Mapped[dict] = mapped_column(
        "metadata",
        JSON,
        nullable=False,
        default=dict,
    )

    __table_args__ = (
        UniqueConstraint("document_id", "chunk_index", name="uq_document_chunks_position"),
        Index(
            "ix_document_chunks_embedding_hnsw",
            "embedding",
            postgresql_using="hnsw",
            postgresql_with={"m": 16, "ef_construction": 64},
            postgresql_ops={"embedding": "vector_cosine_ops"},
        ),
    )
