"""
Vector database boundary layer.

Provides the chunk vector index used for storage and retrieval.
- VectorIndex: storage contract
- InMemoryVectorIndex: brute-force index for development and tests
- PgVectorIndex: PostgreSQL/pgvector index (built by get_vector_index)

Dependencies: numpy, sqlalchemy, pgvector
System role: Vector store adapter for RAG retrieval
"""

from legally.boundary.vdb.memory_store import InMemoryVectorIndex
from legally.boundary.vdb.vector_index import VectorIndex
from legally.boundary.vdb.vector_schemas import DocumentChunk, ScoredChunk, VectorQuery
from legally.boundary.vdb.vector_store_factory import get_vector_index


__all__ = [
    "DocumentChunk",
    "ScoredChunk",
    "VectorQuery",
    "VectorIndex",
    "InMemoryVectorIndex",
    "get_vector_index",
]
