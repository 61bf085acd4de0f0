"""
Sentence-aware text chunker with fixed-window fallback.

Splits extracted document text into overlapping chunks for embedding.
Sentences are accumulated greedily; each new chunk starts with the tail
of the previous one so neighbouring chunks share local context.

Dependencies: re, legally.core.exceptions
System role: First stage of document ingestion pipeline
"""

import logging
import re

from legally.core.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

# Terminal punctuation followed by whitespace
SENTENCE_BOUNDARY = re.compile(r"(?<=[.!?])\s+")

DEFAULT_CHUNK_SIZE = 500
DEFAULT_CHUNK_OVERLAP = 100


def validate_chunk_params(chunk_size: int, overlap: int) -> None:
    """
    Reject chunking parameters before any work starts.

    Args:
        chunk_size: Soft maximum chunk length in characters
        overlap: Characters carried from one chunk into the next

    Raises:
        ConfigurationError: When chunk_size <= 0 or overlap is not in (0, chunk_size)
    """
    if chunk_size <= 0:
        raise ConfigurationError(
            f"chunk_size must be positive, got {chunk_size}",
            field="chunk_size",
        )
    if overlap <= 0 or overlap >= chunk_size:
        raise ConfigurationError(
            f"overlap must be > 0 and < chunk_size ({chunk_size}), got {overlap}",
            field="overlap",
            details={"chunk_size": chunk_size, "overlap": overlap},
        )


def split_sentences(text: str) -> list[str]:
    """Split text on sentence boundaries, dropping empty pieces."""
    return [s for s in SENTENCE_BOUNDARY.split(text.strip()) if s]


def fixed_windows(text: str, chunk_size: int, overlap: int) -> list[str]:
    """
    Slice text into fixed windows with stride ``chunk_size - overlap``.

    Stops at the first window that reaches the end of the text, so the
    last window is never a strict suffix of the one before it.
    """
    stride = chunk_size - overlap
    windows = []
    for start in range(0, len(text), stride):
        windows.append(text[start:start + chunk_size])
        if start + chunk_size >= len(text):
            break
    return windows


def chunk_text(
    text: str,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
    overlap: int = DEFAULT_CHUNK_OVERLAP,
) -> list[str]:
    """
    Split document text into ordered, overlapping chunks.

    Sentences are joined with a single space. When adding the next sentence
    would push the buffer past ``chunk_size`` the buffer is closed and the
    next one is seeded with the closed chunk's last ``overlap`` characters.
    A chunk may exceed ``chunk_size`` by at most one sentence.

    Text without any sentence boundary that is longer than ``chunk_size``
    (or that yields no sentences at all, e.g. whitespace only) is cut into
    fixed windows instead.

    Args:
        text: Extracted document text
        chunk_size: Soft maximum chunk length in characters
        overlap: Characters carried from one chunk into the next

    Returns:
        list[str]: Chunks in document order; empty only for empty input

    Raises:
        ConfigurationError: When chunk_size/overlap are invalid
    """
    validate_chunk_params(chunk_size, overlap)
    if not text:
        return []

    sentences = split_sentences(text)
    if not sentences or (len(sentences) == 1 and len(sentences[0]) > chunk_size):
        windows = fixed_windows(text, chunk_size, overlap)
        logger.debug(
            f"{__name__}:chunk_text - No sentence boundaries, "
            f"fixed-window fallback produced {len(windows)} chunks"
        )
        return windows

    chunks: list[str] = []
    buffer = ""
    for sentence in sentences:
        if buffer and len(buffer) + len(sentence) > chunk_size:
            chunks.append(buffer)
            buffer = f"{buffer[-overlap:]} {sentence}"
        else:
            buffer = f"{buffer} {sentence}" if buffer else sentence

    if buffer.strip():
        chunks.append(buffer)

    logger.debug(
        f"{__name__}:chunk_text - {len(sentences)} sentences -> {len(chunks)} chunks "
        f"(chunk_size={chunk_size}, overlap={overlap})"
    )
    return chunks


class TextChunker:
    """Chunker bound to a fixed chunk size and overlap."""

    def __init__(
        self,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
        overlap: int = DEFAULT_CHUNK_OVERLAP,
    ) -> None:
        """
        Initialize chunker and validate its configuration.

        Args:
            chunk_size: Soft maximum chunk length in characters
            overlap: Characters carried from one chunk into the next

        Raises:
            ConfigurationError: When parameters are invalid
        """
        validate_chunk_params(chunk_size, overlap)
        self.chunk_size = chunk_size
        self.overlap = overlap

    def chunk(self, text: str) -> list[str]:
        """Split text using this chunker's configuration."""
        return chunk_text(text, self.chunk_size, self.overlap)
