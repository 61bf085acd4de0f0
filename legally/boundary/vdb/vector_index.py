"""
Vector index interface.

Defines the storage contract shared by the in-memory and pgvector
backends: batched inserts with resumable failures, owner-scoped cosine
search with a threshold, and idempotent delete-by-document.

Dependencies: legally.boundary.vdb.vector_schemas, legally.core.exceptions
System role: Vector store abstraction for RAG retrieval
"""

import logging
from abc import ABC, abstractmethod
from collections.abc import Sequence

from legally.boundary.vdb.vector_schemas import DocumentChunk, ScoredChunk, VectorQuery
from legally.core.exceptions import StoreQueryError, StoreWriteError, VectorStoreError

logger = logging.getLogger(__name__)

DEFAULT_BATCH_SIZE = 10


def rank_key(result: ScoredChunk) -> tuple[float, int]:
    """Sort key: similarity descending, then chunk_index ascending."""
    return (-result.similarity, result.chunk.chunk_index)


class VectorIndex(ABC):
    """
    Base class for chunk vector indexes.

    Subclasses implement the storage primitives; this class enforces the
    batching, validation and error contract around them.
    """

    def __init__(self, dimension: int, batch_size: int = DEFAULT_BATCH_SIZE) -> None:
        """
        Args:
            dimension: Embedding dimension every stored chunk must have
            batch_size: Maximum chunks written per batch
        """
        if batch_size < 1:
            raise ValueError("batch_size must be >= 1")
        self.dimension = dimension
        self.batch_size = batch_size

    async def insert_chunks(self, chunks: Sequence[DocumentChunk]) -> int:
        """
        Persist chunks in sequential batches.

        Batches are independent: when one fails, the batches before it stay
        persisted and the error names the failing batch so the caller can
        resume from there.

        Args:
            chunks: Chunks to store

        Returns:
            int: Number of chunks written

        Raises:
            StoreWriteError: On the first failing batch
        """
        committed = 0
        for batch_index, start in enumerate(range(0, len(chunks), self.batch_size)):
            batch = list(chunks[start:start + self.batch_size])
            try:
                self._check_dimensions(batch)
                await self._write_batch(batch)
            except Exception as e:
                logger.error(
                    f"{__name__}:insert_chunks - Batch {batch_index} failed after "
                    f"{committed} committed chunks: {type(e).__name__}: {e}"
                )
                raise StoreWriteError(
                    f"Failed to insert chunk batch {batch_index}: {e}",
                    batch_index=batch_index,
                    committed_count=committed,
                    details={"batch_offset": start},
                ) from e
            committed += len(batch)

        logger.info(f"{__name__}:insert_chunks - Stored {committed} chunks")
        return committed

    async def similarity_search(
        self,
        query_vector: Sequence[float],
        owner_id: str,
        document_id: str | None = None,
        top_k: int = 5,
        threshold: float = 0.3,
    ) -> list[ScoredChunk]:
        """
        Find the owner's chunks most similar to a query vector.

        Only chunks of ``owner_id`` (and of ``document_id`` when given) are
        considered. A document that belongs to another owner therefore
        yields an empty result, not an error.

        Args:
            query_vector: Query embedding
            owner_id: Requesting owner
            document_id: Optional document scope
            top_k: Maximum results
            threshold: Minimum cosine similarity

        Returns:
            list[ScoredChunk]: Similarity descending, ties by chunk_index;
            empty when nothing clears the threshold

        Raises:
            StoreQueryError: When the query is malformed or the backend fails
        """
        if len(query_vector) != self.dimension:
            raise StoreQueryError(
                "Query vector has unexpected dimension",
                details={"expected": self.dimension, "actual": len(query_vector)},
            )
        try:
            query = VectorQuery(
                embedding=list(query_vector),
                owner_id=owner_id,
                document_id=document_id,
                top_k=top_k,
                similarity_threshold=threshold,
            )
            results = await self._search(query)
        except StoreQueryError:
            raise
        except Exception as e:
            logger.error(f"{__name__}:similarity_search - FAILED: {type(e).__name__}: {e}")
            raise StoreQueryError(f"Similarity search failed: {e}") from e

        logger.debug(
            f"{__name__}:similarity_search - {len(results)} results "
            f"(owner_id={owner_id}, document_id={document_id}, top_k={top_k}, threshold={threshold})"
        )
        return results

    async def delete_chunks(self, document_id: str, owner_id: str | None = None) -> int:
        """
        Remove every chunk of a document. Deleting nothing is not an error.

        Args:
            document_id: Document whose chunks are removed
            owner_id: When given, only chunks of this owner are removed

        Returns:
            int: Number of chunks removed

        Raises:
            VectorStoreError: When the backend fails
        """
        try:
            removed = await self._delete_document(document_id, owner_id)
        except Exception as e:
            logger.error(f"{__name__}:delete_chunks - FAILED for {document_id}: {type(e).__name__}: {e}")
            raise VectorStoreError(
                f"Failed to delete chunks: {e}",
                operation="delete",
                details={"document_id": document_id, "owner_id": owner_id},
            ) from e
        logger.info(f"{__name__}:delete_chunks - Removed {removed} chunks for document {document_id}")
        return removed

    async def document_owners(self, document_id: str) -> set[str]:
        """
        Owners holding chunks of a document; empty for an unknown document.

        Raises:
            StoreQueryError: When the backend fails
        """
        try:
            return await self._owners(document_id)
        except Exception as e:
            logger.error(f"{__name__}:document_owners - FAILED for {document_id}: {type(e).__name__}: {e}")
            raise StoreQueryError(
                f"Failed to look up document owner: {e}",
                details={"document_id": document_id},
            ) from e

    async def count(self, document_id: str | None = None) -> int:
        """Number of stored chunks, optionally for one document."""
        return await self._count(document_id)

    def _check_dimensions(self, batch: Sequence[DocumentChunk]) -> None:
        for chunk in batch:
            if len(chunk.embedding) != self.dimension:
                raise ValueError(
                    f"chunk {chunk.chunk_index} of document {chunk.document_id} has "
                    f"dimension {len(chunk.embedding)}, expected {self.dimension}"
                )

    @abstractmethod
    async def _write_batch(self, batch: list[DocumentChunk]) -> None:
        """Atomically persist one batch."""

    @abstractmethod
    async def _search(self, query: VectorQuery) -> list[ScoredChunk]:
        """Run a validated, scoped search honouring threshold, ordering and top_k."""

    @abstractmethod
    async def _delete_document(self, document_id: str, owner_id: str | None) -> int:
        """Delete a document's chunks (optionally one owner's) and return how many were removed."""

    @abstractmethod
    async def _owners(self, document_id: str) -> set[str]:
        """Distinct owner ids among a document's chunks."""

    @abstractmethod
    async def _count(self, document_id: str | None) -> int:
        """Count stored chunks."""
