"""
Documents router package.

Indexing and deletion of a document's chunks.
"""

from .documents_router import router

__all__ = ["router"]
