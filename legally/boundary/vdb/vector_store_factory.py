"""
Vector index factory for selecting between memory (dev) and pgvector (prod).

Depends on the VECTOR_STORE_STORE_TYPE environment variable.
Provides a consistent interface regardless of underlying implementation.

Dependencies: legally.boundary.vdb, legally.configs
System role: Vector index instantiation and selection
"""

import logging

from legally.boundary.vdb.memory_store import InMemoryVectorIndex
from legally.boundary.vdb.vector_index import VectorIndex
from legally.configs import Settings, get_settings

logger = logging.getLogger(__name__)


def get_vector_index(settings: Settings | None = None) -> VectorIndex:
    """
    Build the vector index configured for this environment.

    Args:
        settings: Settings to use; defaults to the cached application settings

    Returns:
        VectorIndex: InMemoryVectorIndex or PgVectorIndex

    Raises:
        ValueError: If VECTOR_STORE_STORE_TYPE is invalid
    """
    settings = settings or get_settings()
    config = settings.vector_store
    store_type = config.store_type.lower()

    if store_type == "memory":
        logger.info(f"{__name__}:get_vector_index - Creating in-memory vector index (local dev mode)")
        return InMemoryVectorIndex(
            dimension=config.embedding_dimension,
            batch_size=config.batch_size,
        )

    elif store_type == "pgvector":
        logger.info(f"{__name__}:get_vector_index - Creating pgvector index (production mode)")
        # Deferred so the memory backend works without database drivers installed
        from legally.boundary.db.connection import get_async_session_factory
        from legally.boundary.vdb.pgvector_store import PgVectorIndex

        return PgVectorIndex(
            session_factory=get_async_session_factory(),
            dimension=config.embedding_dimension,
            batch_size=config.batch_size,
        )

    else:
        raise ValueError(
            f"Invalid VECTOR_STORE_STORE_TYPE: {store_type}. "
            f"Must be 'memory' (dev) or 'pgvector' (production)."
        )
