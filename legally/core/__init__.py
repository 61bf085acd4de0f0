"""
Core business logic module.

Contains domain business logic, exception hierarchy, and core components.
All business rules and domain-specific logic reside here.
"""

from legally.core.exceptions import (
    LegallyException,
    ConfigurationError,
    EmbeddingUnavailable,
    VectorStoreError,
    StoreWriteError,
    StoreQueryError,
    GenerationError,
    GenerationRateLimited,
    GenerationQuotaExceeded,
    GenerationFailure,
)

__all__ = [
    # Exceptions
    "LegallyException",
    "ConfigurationError",
    "EmbeddingUnavailable",
    "VectorStoreError",
    "StoreWriteError",
    "StoreQueryError",
    "GenerationError",
    "GenerationRateLimited",
    "GenerationQuotaExceeded",
    "GenerationFailure",
]
