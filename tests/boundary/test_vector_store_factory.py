"""
Test suite for vector index factory.

Tests backend selection based on VECTOR_STORE_STORE_TYPE.

System role: Verification of vector index selection
"""

from unittest.mock import MagicMock, patch

import pytest

from legally.boundary.vdb.memory_store import InMemoryVectorIndex
from legally.boundary.vdb.pgvector_store import PgVectorIndex
from legally.boundary.vdb.vector_store_factory import get_vector_index
from legally.configs import Settings
from legally.configs.vector_store import VectorStoreSettings


def _settings(store_type: str) -> Settings:
    return Settings(
        vector_store=VectorStoreSettings(store_type=store_type, embedding_dimension=16, batch_size=4)
    )


class TestGetVectorIndex:
    """Test suite for get_vector_index."""

    def test_get_vector_index_should_return_memory_index(self) -> None:
        """Test memory store type builds the in-memory index with configured sizes."""
        index = get_vector_index(_settings("memory"))

        assert isinstance(index, InMemoryVectorIndex)
        assert index.dimension == 16
        assert index.batch_size == 4

    def test_get_vector_index_should_accept_mixed_case(self) -> None:
        """Test store type matching is case-insensitive."""
        assert isinstance(get_vector_index(_settings("Memory")), InMemoryVectorIndex)

    def test_get_vector_index_should_build_pgvector_index(self) -> None:
        """Test pgvector store type binds the database session factory."""
        # Arrange
        session_factory = MagicMock()

        # Act
        with patch(
            "legally.boundary.db.connection.get_async_session_factory",
            return_value=session_factory,
        ):
            index = get_vector_index(_settings("pgvector"))

        # Assert
        assert isinstance(index, PgVectorIndex)
        assert index._session_factory is session_factory

    def test_get_vector_index_should_reject_unknown_type(self) -> None:
        """Test unknown store types raise ValueError."""
        with pytest.raises(ValueError, match="Invalid VECTOR_STORE_STORE_TYPE"):
            get_vector_index(_settings("faiss"))
