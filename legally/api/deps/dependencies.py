"""
Dependency injection container.

Factory functions for FastAPI dependencies.

Dependencies: legally.configs, legally.application, legally.core, legally.boundary
System role: DI container for service injection
"""

from functools import lru_cache

from fastapi import Depends, Header, HTTPException

from legally.application.adapters.conversation_store import ConversationStore
from legally.application.services import ChatService, DocumentService
from legally.configs import Settings, get_settings


class ServiceCache:
    """Container for cached service instances."""

    def __init__(self):
        self._embedding_provider = None
        self._vector_index = None
        self._orchestrator = None
        self._assembler = None
        self._conversation_store: ConversationStore | None = None

    @property
    def embedding_provider(self):
        """Get cached embedding provider (model loads lazily on first embed)."""
        if self._embedding_provider is None:
            from legally.core.document_processing.embedding_provider import get_embedding_provider
            self._embedding_provider = get_embedding_provider()
        return self._embedding_provider

    @property
    def vector_index(self):
        """Get cached vector index."""
        if self._vector_index is None:
            from legally.boundary.vdb.vector_store_factory import get_vector_index
            self._vector_index = get_vector_index()
        return self._vector_index

    @property
    def orchestrator(self):
        """Get cached retrieval orchestrator."""
        if self._orchestrator is None:
            from legally.core.document_processing.chunker import TextChunker
            from legally.core.retrieval.orchestrator import RetrievalOrchestrator

            settings = get_settings()
            self._orchestrator = RetrievalOrchestrator(
                chunker=TextChunker(settings.rag.chunk_size, settings.rag.chunk_overlap),
                embedder=self.embedding_provider,
                index=self.vector_index,
                min_content_length=settings.rag.min_content_length,
                similarity_threshold=settings.vector_store.similarity_threshold,
            )
        return self._orchestrator

    @property
    def assembler(self):
        """Get cached answer assembler."""
        if self._assembler is None:
            from legally.core.generation import StreamingAnswerAssembler, get_generation_client

            self._assembler = StreamingAnswerAssembler(
                client=get_generation_client(),
                history_window=get_settings().generation.history_window,
            )
        return self._assembler

    @property
    def conversation_store(self) -> ConversationStore | None:
        """Conversation store, when one has been attached."""
        return self._conversation_store

    def set_conversation_store(self, store: ConversationStore | None) -> None:
        """Attach the external conversation store."""
        self._conversation_store = store

    def clear(self) -> None:
        """Clear all cached instances."""
        self._embedding_provider = None
        self._vector_index = None
        self._orchestrator = None
        self._assembler = None
        self._conversation_store = None


# Global service cache
_service_cache = ServiceCache()

def get_service_cache() -> ServiceCache:
    """Get service cache singleton."""
    return _service_cache


@lru_cache
def get_settings_dependency() -> Settings:
    """Get settings singleton."""
    return get_settings()


def get_owner_id(x_owner_id: str | None = Header(default=None)) -> str:
    """
    Resolve the requesting owner from the X-Owner-Id header.

    Authentication happens upstream; this only requires the identity to be present.

    Raises:
        HTTPException(401): Header missing or blank
    """
    if not x_owner_id or not x_owner_id.strip():
        raise HTTPException(status_code=401, detail="X-Owner-Id header is required")
    return x_owner_id.strip()


def get_document_service(cache: ServiceCache = Depends(get_service_cache)) -> DocumentService:
    """
    Get document service instance.

    Returns:
        DocumentService: Document service bound to the shared orchestrator
    """
    return DocumentService(orchestrator=cache.orchestrator)


def get_chat_service(cache: ServiceCache = Depends(get_service_cache)) -> ChatService:
    """
    Get chat service instance.

    Returns:
        ChatService: Chat service with the shared orchestrator and assembler
    """
    return ChatService(
        orchestrator=cache.orchestrator,
        assembler=cache.assembler,
        conversation_store=cache.conversation_store,
        max_chunks=get_settings().rag.max_chunks,
    )
