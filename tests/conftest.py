"""
Shared test fixtures and configuration for entire test suite.

Provides: fake embeddings, in-memory vector index, orchestrator, gateway mocks
Dependencies: pytest, langchain_core, httpx
System role: Test infrastructure and fixture management
"""

import json
from unittest.mock import AsyncMock, MagicMock

import httpx
import numpy as np
import pytest
from langchain_core.embeddings import DeterministicFakeEmbedding

from legally.boundary.vdb.memory_store import InMemoryVectorIndex
from legally.core.document_processing.chunker import TextChunker
from legally.core.document_processing.embedding_provider import LazyEmbeddingProvider
from legally.core.generation.gateway_client import GenerationClient
from legally.core.retrieval.orchestrator import RetrievalOrchestrator
from legally.models.chat import ConversationRecord

TEST_DIMENSION = 32


def _unit_vector(*components: float, dimension: int = TEST_DIMENSION) -> list[float]:
    """Unit vector whose leading components are given, rest zero."""
    vector = np.zeros(dimension, dtype=np.float64)
    vector[: len(components)] = components
    return (vector / np.linalg.norm(vector)).tolist()


def _completion_chunk(token: str) -> dict:
    return {
        "id": "chatcmpl-test",
        "object": "chat.completion.chunk",
        "created": 1700000000,
        "model": "test-model",
        "choices": [{"index": 0, "delta": {"content": token}, "finish_reason": None}],
    }


def _sse_body(*tokens: str, done: bool = True) -> bytes:
    """Build a chat completions SSE response body streaming the given tokens."""
    lines = ["data: " + json.dumps(_completion_chunk(token)) for token in tokens]
    if done:
        lines.append("data: [DONE]")
    return ("\n\n".join(lines) + "\n\n").encode("utf-8")


@pytest.fixture
def fake_embeddings() -> DeterministicFakeEmbedding:
    """Deterministic embeddings model: same text, same vector."""
    return DeterministicFakeEmbedding(size=TEST_DIMENSION)


@pytest.fixture
def embedding_provider(fake_embeddings: DeterministicFakeEmbedding) -> LazyEmbeddingProvider:
    """Lazy provider backed by the deterministic fake model."""
    return LazyEmbeddingProvider(loader=lambda: fake_embeddings, dimension=TEST_DIMENSION)


@pytest.fixture
def memory_index() -> InMemoryVectorIndex:
    """Empty in-memory index with the default batch size."""
    return InMemoryVectorIndex(dimension=TEST_DIMENSION, batch_size=10)


@pytest.fixture
def orchestrator(
    embedding_provider: LazyEmbeddingProvider,
    memory_index: InMemoryVectorIndex,
) -> RetrievalOrchestrator:
    """Orchestrator with default chunking over the in-memory index."""
    return RetrievalOrchestrator(
        chunker=TextChunker(chunk_size=500, overlap=100),
        embedder=embedding_provider,
        index=memory_index,
    )


@pytest.fixture
def make_gateway_client():
    """
    Factory for GenerationClient instances whose gateway is an httpx.MockTransport.

    Returns:
        Callable: (handler) -> GenerationClient
    """

    def _make(handler, stream_idle_timeout: float = 5.0) -> GenerationClient:
        return GenerationClient(
            base_url="https://gateway.test/v1",
            api_key="test-key",
            model="test-model",
            stream_idle_timeout=stream_idle_timeout,
            http_client=httpx.AsyncClient(transport=httpx.MockTransport(handler)),
        )

    return _make


@pytest.fixture
def mock_conversation_store() -> MagicMock:
    """
    Create mock ConversationStore for testing.

    Returns:
        MagicMock: Store with async methods, conv-1 owned by owner-a, no stored messages
    """
    store = MagicMock()
    store.get_messages = AsyncMock(return_value=[])
    store.add_message = AsyncMock()
    store.update_title = AsyncMock()
    store.create_conversation = AsyncMock()
    store.get_conversations = AsyncMock(return_value=[])
    store.get_conversation = AsyncMock(
        return_value=ConversationRecord(id="conv-1", owner_id="owner-a", title="New conversation")
    )
    store.delete_conversation = AsyncMock(return_value=True)
    return store


@pytest.fixture
def owner_id() -> str:
    """Requesting owner used across tests."""
    return "owner-a"


@pytest.fixture
def unit_vector():
    """Helper building unit vectors of the test dimension."""
    return _unit_vector


@pytest.fixture
def sse_body():
    """Helper building SSE response bodies."""
    return _sse_body
