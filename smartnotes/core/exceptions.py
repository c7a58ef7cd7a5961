"""
Exception hierarchy for SmartNotes retrieval.

    SmartNotesException
    ├── ValidationError
    │   └── InvalidParameterError      bad threshold / limit / window / query
    ├── DocumentNotFoundError          missing or owned by someone else
    ├── EmbeddingError
    │   ├── EmbeddingProviderUnavailable
    │   └── EmbeddingGenerationFailed
    ├── VectorStoreError               backend failure, wraps SQLAlchemyError
    └── RetrievalError                 query-time failure surfaced to callers

Every exception carries a `details` dict that is safe to log.

Dependencies: None (pure domain layer)
System role: Centralized exception handling across the application
"""

from typing import Any


class SmartNotesException(Exception):
    """Root of all application errors; message plus loggable details."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        if not self.details:
            return self.message
        return f"{self.message} | Details: {self.details}"


class ValidationError(SmartNotesException):
    """Caller input rejected before any side effect."""

    def __init__(
        self,
        message: str,
        field: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Args:
            message: What was wrong
            field: Offending parameter name, copied into details["field"]
            details: Extra context
        """
        details = dict(details or {})
        if field:
            details["field"] = field
        super().__init__(message, details)


class InvalidParameterError(ValidationError):
    """A search, chunking or query parameter is outside its allowed range."""


class DocumentNotFoundError(SmartNotesException):
    """No document with this id is visible to the requesting owner."""

    def __init__(self, document_id: str, details: dict[str, Any] | None = None) -> None:
        details = dict(details or {})
        details["document_id"] = document_id
        super().__init__(f"Document not found: {document_id}", details)


class EmbeddingError(SmartNotesException):
    """Text could not be turned into a vector."""


class EmbeddingProviderUnavailable(EmbeddingError):
    """No provider client configured (e.g. missing API key)."""

    def __init__(
        self,
        message: str = "Embedding provider is not configured",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, details)


class EmbeddingGenerationFailed(EmbeddingError):
    """Provider call failed after retries, timed out, or returned a bad vector."""


class VectorStoreError(SmartNotesException):
    """Vector store backend operation failed."""

    def __init__(
        self,
        message: str,
        operation: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Args:
            message: What failed
            operation: Store method name, copied into details["operation"]
            details: Extra context
        """
        details = dict(details or {})
        if operation:
            details["operation"] = operation
        super().__init__(message, details)


class RetrievalError(SmartNotesException):
    """Retrieval could not complete; the cause is chained."""

    def __init__(
        self,
        message: str,
        owner_id: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        details = dict(details or {})
        if owner_id:
            details["owner_id"] = owner_id
        super().__init__(message, details)
