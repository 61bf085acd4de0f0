"""
In-memory vector index for development and tests.

Brute-force cosine similarity over every chunk of the requesting owner.
Provides the same contract as the pgvector index.

Dependencies: numpy, legally.boundary.vdb.vector_index
System role: Local vector store for development RAG
"""

import asyncio
import logging

import numpy as np

from legally.boundary.vdb.vector_index import VectorIndex, rank_key
from legally.boundary.vdb.vector_schemas import DocumentChunk, ScoredChunk, VectorQuery

logger = logging.getLogger(__name__)


class InMemoryVectorIndex(VectorIndex):
    """
    Vector index kept in a process-local dict, keyed by chunk id.

    Writes and deletes hold an asyncio.Lock so a batch is applied as a unit.
    """

    def __init__(self, dimension: int, batch_size: int = 10) -> None:
        super().__init__(dimension=dimension, batch_size=batch_size)
        self._chunks: dict[str, DocumentChunk] = {}
        self._write_lock = asyncio.Lock()

    async def _write_batch(self, batch: list[DocumentChunk]) -> None:
        async with self._write_lock:
            duplicates = [chunk.id for chunk in batch if chunk.id in self._chunks]
            if duplicates:
                raise ValueError(f"chunk ids already stored: {duplicates}")
            for chunk in batch:
                self._chunks[chunk.id] = chunk

    async def _search(self, query: VectorQuery) -> list[ScoredChunk]:
        candidates = [
            chunk
            for chunk in self._chunks.values()
            if chunk.owner_id == query.owner_id
            and (query.document_id is None or chunk.document_id == query.document_id)
        ]
        if not candidates:
            return []

        matrix = np.asarray([chunk.embedding for chunk in candidates], dtype=np.float32)
        vector = np.asarray(query.embedding, dtype=np.float32)
        norms = np.linalg.norm(matrix, axis=1) * np.linalg.norm(vector)
        scores = (matrix @ vector) / np.where(norms == 0, 1.0, norms)

        results = [
            ScoredChunk(chunk=chunk, similarity=float(score))
            for chunk, score in zip(candidates, scores)
            if score >= query.similarity_threshold
        ]
        results.sort(key=rank_key)
        return results[:query.top_k]

    async def _delete_document(self, document_id: str, owner_id: str | None) -> int:
        async with self._write_lock:
            doomed = [
                cid
                for cid, chunk in self._chunks.items()
                if chunk.document_id == document_id and (owner_id is None or chunk.owner_id == owner_id)
            ]
            for cid in doomed:
                del self._chunks[cid]
        return len(doomed)

    async def _owners(self, document_id: str) -> set[str]:
        return {chunk.owner_id for chunk in self._chunks.values() if chunk.document_id == document_id}

    async def _count(self, document_id: str | None) -> int:
        if document_id is None:
            return len(self._chunks)
        return sum(1 for chunk in self._chunks.values() if chunk.document_id == document_id)
