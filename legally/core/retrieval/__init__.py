"""
Retrieval module.

Document ingestion and context retrieval for RAG answers.
"""

from legally.core.retrieval.orchestrator import (
    IngestionResult,
    RetrievalOrchestrator,
    format_context,
)

__all__ = ["IngestionResult", "RetrievalOrchestrator", "format_context"]
