"""
Document processing for ingestion.

Chunking and embedding of extracted document text.

Dependencies: langchain_core, langchain_google_genai, numpy
System role: Document ingestion building blocks
"""

from .chunker import TextChunker, chunk_text
from .embedding_provider import (
    EmbeddingProvider,
    LazyEmbeddingProvider,
    get_embedding_provider,
)
from .single_flight import SingleFlightCell

__all__ = [
    "TextChunker",
    "chunk_text",
    "EmbeddingProvider",
    "LazyEmbeddingProvider",
    "get_embedding_provider",
    "SingleFlightCell",
]
