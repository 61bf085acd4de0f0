"""
Retrieval orchestrator.

Composes chunker, embedding provider and vector index into the two RAG
flows: ingest a document's text, and turn a question into a ranked,
formatted context block for the answer prompt.

Dependencies: legally.core.document_processing, legally.boundary.vdb
System role: RAG ingestion and retrieval business logic
"""

import logging

from pydantic import BaseModel, Field

from legally.boundary.vdb.vector_index import VectorIndex
from legally.boundary.vdb.vector_schemas import DocumentChunk, ScoredChunk
from legally.core.document_processing.chunker import TextChunker
from legally.core.document_processing.embedding_provider import EmbeddingProvider

logger = logging.getLogger(__name__)

DEFAULT_MIN_CONTENT_LENGTH = 50
DEFAULT_SIMILARITY_THRESHOLD = 0.3
DEFAULT_MAX_CHUNKS = 5


class IngestionResult(BaseModel):
    """Outcome of ingesting one document."""

    document_id: str = Field(description="Ingested document")
    chunk_count: int = Field(default=0, description="Chunks stored")
    skipped: bool = Field(default=False, description="True when the text was too short to index")


def format_context(results: list[ScoredChunk]) -> str:
    """
    Render search results as the prompt context block.

    Chunks appear in document order, numbered from 1, each headed by its
    relevance percentage.

    Args:
        results: Search results in any order

    Returns:
        str: Blocks separated by a blank line; empty when there are no results
    """
    ordered = sorted(results, key=lambda r: r.chunk.chunk_index)
    return "\n\n".join(
        f"[Chunk {i}, Relevance: {result.similarity * 100:.1f}%]\n{result.chunk.content}"
        for i, result in enumerate(ordered, start=1)
    )


class RetrievalOrchestrator:
    """
    Ingestion and retrieval over one vector index.

    Stateless apart from its collaborators; safe to share across requests.
    """

    def __init__(
        self,
        chunker: TextChunker,
        embedder: EmbeddingProvider,
        index: VectorIndex,
        min_content_length: int = DEFAULT_MIN_CONTENT_LENGTH,
        similarity_threshold: float = DEFAULT_SIMILARITY_THRESHOLD,
    ) -> None:
        """
        Args:
            chunker: Splits document text
            embedder: Produces unit vectors for chunks and queries
            index: Stores and searches chunks
            min_content_length: Texts shorter than this (after stripping) are not indexed
            similarity_threshold: Minimum cosine similarity for retrieval
        """
        self._chunker = chunker
        self._embedder = embedder
        self._index = index
        self._min_content_length = min_content_length
        self._similarity_threshold = similarity_threshold

    @property
    def index(self) -> VectorIndex:
        return self._index

    async def ingest(self, document_id: str, owner_id: str, raw_text: str) -> IngestionResult:
        """
        Chunk, embed and store a document's text.

        Does not delete earlier chunks of the document; callers re-indexing a
        document remove it first. On a store failure, batches already written
        remain.

        Args:
            document_id: Document being indexed
            owner_id: Owner of the document
            raw_text: Extracted document text

        Returns:
            IngestionResult: Chunk count, or skipped=True for short text

        Raises:
            EmbeddingUnavailable: When the embedding model fails
            StoreWriteError: When an insert batch fails
        """
        logger.info(f"{__name__}:ingest - START document_id={document_id}, text_len={len(raw_text)}")

        if len(raw_text.strip()) < self._min_content_length:
            logger.info(
                f"{__name__}:ingest - Skipping document_id={document_id}: "
                f"content shorter than {self._min_content_length} characters"
            )
            return IngestionResult(document_id=document_id, skipped=True)

        # Step 1: Chunk
        texts = self._chunker.chunk(raw_text)
        logger.info(f"{__name__}:ingest - Step 1 OK: {len(texts)} chunks")

        # Step 2: Embed
        vectors = await self._embedder.embed_batch(texts)
        logger.info(f"{__name__}:ingest - Step 2 OK: {len(vectors)} embeddings")

        # Step 3: Store
        chunks = [
            DocumentChunk(
                document_id=document_id,
                owner_id=owner_id,
                chunk_index=i,
                content=content,
                embedding=vector,
                metadata={"chunk_size": len(content)},
            )
            for i, (content, vector) in enumerate(zip(texts, vectors))
        ]
        stored = await self._index.insert_chunks(chunks)
        logger.info(f"{__name__}:ingest - END document_id={document_id}, stored={stored}")

        return IngestionResult(document_id=document_id, chunk_count=stored)

    async def search(
        self,
        query_text: str,
        owner_id: str,
        document_id: str | None = None,
        max_chunks: int = DEFAULT_MAX_CHUNKS,
    ) -> list[ScoredChunk]:
        """
        Find the owner's chunks most relevant to a question.

        Returns:
            list[ScoredChunk]: Relevance order, at most ``max_chunks``

        Raises:
            EmbeddingUnavailable: When the query cannot be embedded
            StoreQueryError: When the search fails
        """
        query_vector = await self._embedder.embed(query_text)
        return await self._index.similarity_search(
            query_vector,
            owner_id=owner_id,
            document_id=document_id,
            top_k=max_chunks,
            threshold=self._similarity_threshold,
        )

    async def retrieve(
        self,
        query_text: str,
        owner_id: str,
        document_id: str | None = None,
        max_chunks: int = DEFAULT_MAX_CHUNKS,
    ) -> str:
        """
        Build the context block for a question.

        Args:
            query_text: User question
            owner_id: Requesting owner
            document_id: Optional document scope
            max_chunks: Maximum chunks in the context

        Returns:
            str: Formatted context, or "" when no chunk clears the threshold
        """
        results = await self.search(query_text, owner_id, document_id, max_chunks)
        if not results:
            logger.info(f"{__name__}:retrieve - No relevant chunks (owner_id={owner_id}, document_id={document_id})")
            return ""

        context = format_context(results)
        logger.info(f"{__name__}:retrieve - {len(results)} chunks, context_len={len(context)}")
        return context

    async def document_owners(self, document_id: str) -> set[str]:
        """Owners holding chunks of a document."""
        return await self._index.document_owners(document_id)

    async def delete_document(self, document_id: str, owner_id: str | None = None) -> int:
        """Remove all chunks of a document (only ``owner_id``'s when given). Returns the number removed."""
        return await self._index.delete_chunks(document_id, owner_id=owner_id)
