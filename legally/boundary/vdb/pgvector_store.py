"""
PostgreSQL + pgvector vector index for production.

Stores chunks in the ``document_chunks`` table and ranks them with the
pgvector cosine distance operator, served by an HNSW index. Each insert
batch runs in its own transaction.

Dependencies: sqlalchemy, pgvector, legally.boundary.db
System role: Production vector store for RAG retrieval
"""

import logging

from sqlalchemy import Select, delete, func, select
from sqlalchemy.ext.asyncio import async_sessionmaker

from legally.boundary.db.models.document_chunk_model import DocumentChunkModel
from legally.boundary.vdb.vector_index import VectorIndex
from legally.boundary.vdb.vector_schemas import DocumentChunk, ScoredChunk, VectorQuery

logger = logging.getLogger(__name__)


def build_similarity_statement(query: VectorQuery) -> Select:
    """
    Build the scoped similarity query.

    The threshold is applied as a distance bound (``distance <= 1 - t``)
    and results are ordered by distance so the HNSW index can serve them.

    Args:
        query: Validated query

    Returns:
        Select: Rows of (DocumentChunkModel, similarity)
    """
    distance = DocumentChunkModel.embedding.cosine_distance(query.embedding)
    stmt = (
        select(DocumentChunkModel, (1 - distance).label("similarity"))
        .where(DocumentChunkModel.owner_id == query.owner_id)
        .where(distance <= 1 - query.similarity_threshold)
    )
    if query.document_id is not None:
        stmt = stmt.where(DocumentChunkModel.document_id == query.document_id)
    return stmt.order_by(distance.asc(), DocumentChunkModel.chunk_index.asc()).limit(query.top_k)


def to_row(chunk: DocumentChunk) -> DocumentChunkModel:
    """Map a domain chunk to its ORM row."""
    return DocumentChunkModel(
        id=chunk.id,
        document_id=chunk.document_id,
        owner_id=chunk.owner_id,
        chunk_index=chunk.chunk_index,
        content=chunk.content,
        embedding=list(chunk.embedding),
        chunk_metadata=dict(chunk.metadata),
    )


def to_chunk(row: DocumentChunkModel) -> DocumentChunk:
    """Map an ORM row back to a domain chunk."""
    return DocumentChunk(
        id=row.id,
        document_id=row.document_id,
        owner_id=row.owner_id,
        chunk_index=row.chunk_index,
        content=row.content,
        embedding=[float(x) for x in row.embedding],
        metadata=dict(row.chunk_metadata or {}),
    )


class PgVectorIndex(VectorIndex):
    """Vector index backed by the pgvector ``document_chunks`` table."""

    def __init__(
        self,
        session_factory: async_sessionmaker,
        dimension: int,
        batch_size: int = 10,
    ) -> None:
        """
        Args:
            session_factory: Async session factory bound to the database
            dimension: Embedding dimension of the table's vector column
            batch_size: Maximum rows per insert transaction
        """
        super().__init__(dimension=dimension, batch_size=batch_size)
        self._session_factory = session_factory

    async def _write_batch(self, batch: list[DocumentChunk]) -> None:
        async with self._session_factory() as session:
            async with session.begin():
                session.add_all([to_row(chunk) for chunk in batch])

    async def _search(self, query: VectorQuery) -> list[ScoredChunk]:
        stmt = build_similarity_statement(query)
        async with self._session_factory() as session:
            result = await session.execute(stmt)
            rows = result.all()
        return [
            ScoredChunk(chunk=to_chunk(row[0]), similarity=float(row[1]))
            for row in rows
        ]

    async def _delete_document(self, document_id: str, owner_id: str | None) -> int:
        stmt = delete(DocumentChunkModel).where(DocumentChunkModel.document_id == document_id)
        if owner_id is not None:
            stmt = stmt.where(DocumentChunkModel.owner_id == owner_id)
        async with self._session_factory() as session:
            async with session.begin():
                result = await session.execute(stmt)
        return result.rowcount or 0

    async def _owners(self, document_id: str) -> set[str]:
        stmt = select(DocumentChunkModel.owner_id).where(DocumentChunkModel.document_id == document_id).distinct()
        async with self._session_factory() as session:
            result = await session.execute(stmt)
            return set(result.scalars().all())

    async def _count(self, document_id: str | None) -> int:
        stmt = select(func.count()).select_from(DocumentChunkModel)
        if document_id is not None:
            stmt = stmt.where(DocumentChunkModel.document_id == document_id)
        async with self._session_factory() as session:
            result = await session.execute(stmt)
            return int(result.scalar_one())
