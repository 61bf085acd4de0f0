"""
API test fixtures.

Builds the application with the service cache swapped for one wired to
the in-memory index, fake embeddings and a mock gateway.

Dependencies: fastapi.testclient, httpx
System role: HTTP and WebSocket test infrastructure
"""

import httpx
import pytest
from fastapi.testclient import TestClient

from legally.api.deps import ServiceCache, get_service_cache
from legally.api.main import create_app
from legally.core.generation.answer_assembler import StreamingAnswerAssembler

OWNER_HEADERS = {"X-Owner-Id": "owner-a"}


@pytest.fixture
def gateway_tokens() -> list[str]:
    """Tokens the mock gateway streams for every request."""
    return ["Under Section 106, ", "the notice period is 15 days."]


@pytest.fixture
def service_cache(
    embedding_provider,
    memory_index,
    orchestrator,
    make_gateway_client,
    sse_body,
    gateway_tokens,
) -> ServiceCache:
    """Service cache pre-populated with test doubles."""
    client = make_gateway_client(lambda request: httpx.Response(200, content=sse_body(*gateway_tokens)))
    cache = ServiceCache()
    cache._embedding_provider = embedding_provider
    cache._vector_index = memory_index
    cache._orchestrator = orchestrator
    cache._assembler = StreamingAnswerAssembler(client)
    return cache


@pytest.fixture
def client(service_cache: ServiceCache) -> TestClient:
    """Test client whose dependencies resolve to the test service cache."""
    app = create_app()
    app.dependency_overrides[get_service_cache] = lambda: service_cache
    return TestClient(app)


@pytest.fixture
def owner_headers() -> dict[str, str]:
    """Identity header for the default test owner."""
    return dict(OWNER_HEADERS)
