"""
Exception hierarchy for the Legally RAG backend.

Provides layered exception structure for domain-specific errors.
All exceptions include context for observability and debugging.

Dependencies: None (pure domain layer)
System role: Centralized exception handling across the application
"""

from typing import Any


class LegallyException(Exception):
    """Base exception for all Legally application errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """
        Initialize base exception with message and optional context.

        Args:
            message: Human-readable error message
            details: Optional dictionary of additional context for debugging
        """
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        """Return string representation including details."""
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class ConfigurationError(LegallyException):
    """Raised when chunking or pipeline parameters are invalid."""

    def __init__(
        self,
        message: str,
        field: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize configuration error.

        Args:
            message: Error message
            field: Parameter name that failed validation
            details: Additional context
        """
        details = details or {}
        if field:
            details["field"] = field
        super().__init__(message, details)


class EmbeddingUnavailable(LegallyException):
    """Raised when the embedding model cannot be loaded or fails to embed.

    Retryable: a later call re-attempts initialization.
    """


class DocumentOwnershipError(LegallyException):
    """Raised when a document's chunks belong to another owner."""

    def __init__(self, document_id: str, owner_id: str) -> None:
        super().__init__(
            "Document not found",
            details={"document_id": document_id, "owner_id": owner_id},
        )
        self.document_id = document_id


class VectorStoreError(LegallyException):
    """Raised when vector store operations fail."""

    def __init__(
        self,
        message: str,
        operation: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize vector store error.

        Args:
            message: Error message
            operation: Operation that failed (insert, query, delete)
            details: Additional context
        """
        details = details or {}
        if operation:
            details["operation"] = operation
        super().__init__(message, details)


class StoreWriteError(VectorStoreError):
    """Raised when a chunk insert batch fails.

    Batches before ``batch_index`` are committed and stay persisted.
    """

    def __init__(
        self,
        message: str,
        batch_index: int,
        committed_count: int,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize store write error.

        Args:
            message: Error message
            batch_index: Zero-based index of the first failing batch
            committed_count: Number of chunks persisted before the failure
            details: Additional context
        """
        details = details or {}
        details["batch_index"] = batch_index
        details["committed_count"] = committed_count
        self.batch_index = batch_index
        self.committed_count = committed_count
        super().__init__(message, operation="insert", details=details)


class StoreQueryError(VectorStoreError):
    """Raised when a similarity search fails."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message, operation="query", details=details)


class GenerationError(LegallyException):
    """Base exception for failures reported by the generation gateway."""

    code = "GENERATION_FAILED"
    user_message = "Failed to get AI response. Please try again."
    retryable = True

    def __init__(
        self,
        message: str | None = None,
        status_code: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize generation error.

        Args:
            message: Error message (defaults to the user-facing message)
            status_code: HTTP status returned by the gateway, if any
            details: Additional context
        """
        details = details or {}
        if status_code is not None:
            details["status_code"] = status_code
        self.status_code = status_code
        super().__init__(message or self.user_message, details)


class GenerationRateLimited(GenerationError):
    """Gateway answered 429."""

    code = "RATE_LIMITED"
    user_message = "Rate limits exceeded. Please try again in a moment."


class GenerationQuotaExceeded(GenerationError):
    """Gateway answered 402."""

    code = "QUOTA_EXCEEDED"
    user_message = "Usage limits reached. Please add credits to continue."
    retryable = False


class GenerationFailure(GenerationError):
    """Any other gateway or transport failure."""


def generation_error_for_status(status_code: int, body: str = "") -> GenerationError:
    """
    Map a non-2xx gateway status to its exception.

    Args:
        status_code: HTTP status code
        body: Response body, kept for debugging

    Returns:
        GenerationError: Rate limit, quota, or generic failure
    """
    details = {"body": body[:500]} if body else None
    if status_code == 429:
        return GenerationRateLimited(status_code=status_code, details=details)
    if status_code == 402:
        return GenerationQuotaExceeded(status_code=status_code, details=details)
    return GenerationFailure(status_code=status_code, details=details)
