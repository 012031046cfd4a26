from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    """Closed set of failure kinds callers can branch on."""

    EMPTY_CONTENT = "empty_content"
    UNSUPPORTED_TYPE = "unsupported_type"
    # Signaled by return values (None / False), never raised.
    NOT_FOUND = "not_found"


class KnowledgeBaseError(Exception):
    """Base class for ingestion failures. Not retryable."""

    kind: ErrorKind

    def __init__(self, message: str, *, filename: str | None = None) -> None:
        super().__init__(message)
        self.filename = filename


class EmptyContentError(KnowledgeBaseError):
    """Raised when a document has no usable text after trimming."""

    kind = ErrorKind.EMPTY_CONTENT


class UnsupportedTypeError(KnowledgeBaseError):
    """Raised when the declared content type is not accepted as extracted text."""

    kind = ErrorKind.UNSUPPORTED_TYPE

    def __init__(
        self, message: str, *, filename: str | None = None, declared_type: str = ""
    ) -> None:
        super().__init__(message, filename=filename)
        self.declared_type = declared_type


class ConfigurationError(Exception):
    """Raised for invalid or missing configuration."""
