"""
Embedding provider with lazy, single-flight model initialization.

Turns text into L2-normalized vectors of a fixed dimension so that cosine
similarity downstream is a plain dot product. The underlying LangChain
embeddings model is loaded on first use and cached for the process.

Dependencies: langchain_core, numpy, fastapi.concurrency, legally.configs
System role: Embedding generation adapter for ingestion and retrieval
"""

import logging
from abc import ABC, abstractmethod
from collections.abc import Callable, Sequence
from functools import lru_cache

import numpy as np
from fastapi.concurrency import run_in_threadpool
from langchain_core.embeddings import Embeddings

from legally.configs import get_settings
from legally.core.document_processing.single_flight import SingleFlightCell
from legally.core.exceptions import EmbeddingUnavailable

logger = logging.getLogger(__name__)

EmbeddingsLoader = Callable[[], Embeddings]


def l2_normalize(vector: Sequence[float], dimension: int) -> list[float]:
    """
    Scale a vector to unit length.

    Args:
        vector: Raw embedding
        dimension: Expected vector length

    Returns:
        list[float]: Unit-length copy of the vector

    Raises:
        EmbeddingUnavailable: On wrong dimension or a zero vector
    """
    arr = np.asarray(vector, dtype=np.float32)
    if arr.shape != (dimension,):
        raise EmbeddingUnavailable(
            "Embedding model returned a vector of unexpected dimension",
            details={"expected": dimension, "actual": arr.shape[0] if arr.ndim == 1 else arr.shape},
        )
    norm = float(np.linalg.norm(arr))
    if norm == 0.0:
        raise EmbeddingUnavailable("Embedding model returned a zero vector")
    return (arr / norm).tolist()


class EmbeddingProvider(ABC):
    """Text → fixed-dimension unit vector capability."""

    dimension: int

    @abstractmethod
    async def embed_batch(self, texts: Sequence[str]) -> list[list[float]]:
        """
        Embed several texts in one call.

        Args:
            texts: Texts to embed

        Returns:
            list[list[float]]: One vector per input, in input order

        Raises:
            EmbeddingUnavailable: When any text fails; no partial result
        """

    async def embed(self, text: str) -> list[float]:
        """Embed a single text. Identical to ``embed_batch([text])[0]``."""
        vectors = await self.embed_batch([text])
        return vectors[0]


class LazyEmbeddingProvider(EmbeddingProvider):
    """
    Embedding provider backed by a lazily loaded LangChain model.

    The loader runs at most once at a time: concurrent callers during
    initialization share the same in-flight load, and a failed load is
    retried by the next call.
    """

    def __init__(self, loader: EmbeddingsLoader, dimension: int) -> None:
        """
        Args:
            loader: Builds the embeddings model (may block; run in a thread)
            dimension: Expected output dimension
        """
        self._loader = loader
        self.dimension = dimension
        self._model_cell: SingleFlightCell[Embeddings] = SingleFlightCell(self._load_model)

    @property
    def is_loaded(self) -> bool:
        """Whether the embeddings model has been initialized."""
        return self._model_cell.ready

    async def _load_model(self) -> Embeddings:
        logger.info(f"{__name__}:_load_model - Initializing embedding model (dimension={self.dimension})")
        try:
            model = await run_in_threadpool(self._loader)
        except Exception as e:
            logger.error(f"{__name__}:_load_model - FAILED: {type(e).__name__}: {e}")
            raise EmbeddingUnavailable(f"Failed to initialize embedding model: {e}") from e
        logger.info(f"{__name__}:_load_model - Embedding model ready ({type(model).__name__})")
        return model

    async def embed_batch(self, texts: Sequence[str]) -> list[list[float]]:
        if not texts:
            return []

        model = await self._model_cell.get()
        try:
            raw_vectors = await run_in_threadpool(model.embed_documents, list(texts))
        except Exception as e:
            logger.error(
                f"{__name__}:embed_batch - FAILED for batch of {len(texts)}: {type(e).__name__}: {e}"
            )
            raise EmbeddingUnavailable(
                f"Failed to generate embeddings: {e}",
                details={"batch_size": len(texts)},
            ) from e

        if len(raw_vectors) != len(texts):
            raise EmbeddingUnavailable(
                "Embedding model returned a different number of vectors than inputs",
                details={"expected": len(texts), "actual": len(raw_vectors)},
            )

        logger.debug(f"{__name__}:embed_batch - Embedded {len(texts)} texts")
        return [l2_normalize(vector, self.dimension) for vector in raw_vectors]

    def reset(self) -> None:
        """Forget the loaded model (next call reloads it)."""
        self._model_cell.reset()


def gemini_embeddings_loader(model_id: str, dimension: int) -> EmbeddingsLoader:
    """
    Build a loader for the Google Gemini embeddings model.

    Args:
        model_id: Google embedding model ID
        dimension: Output dimensionality

    Returns:
        EmbeddingsLoader: Zero-argument callable creating the model
    """

    def _load() -> Embeddings:
        from legally.core.document_processing.embeddings_wrapper import FixedDimensionEmbeddings

        return FixedDimensionEmbeddings(model=model_id, output_dimensionality=dimension)

    return _load


@lru_cache
def get_embedding_provider() -> EmbeddingProvider:
    """
    Get the process-wide embedding provider.

    Returns:
        EmbeddingProvider: Lazy provider configured from VECTOR_STORE_* settings
    """
    settings = get_settings().vector_store
    return LazyEmbeddingProvider(
        loader=gemini_embeddings_loader(settings.embedding_model, settings.embedding_dimension),
        dimension=settings.embedding_dimension,
    )
