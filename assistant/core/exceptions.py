"""
Exception hierarchy for the knowledge-base assistant.

Provides layered exception structure for domain-specific errors.
All exceptions include context for observability and debugging.

Dependencies: None (pure domain layer)
System role: Centralized exception handling across the application
"""

from typing import Any


class AssistantException(Exception):
    """Base exception for all assistant application errors."""

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


class ValidationError(AssistantException):
    """Raised when input validation fails."""

    def __init__(
        self,
        message: str,
        field: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize validation error.

        Args:
            message: Error message
            field: Field name that failed validation
            details: Additional context
        """
        details = details or {}
        if field:
            details["field"] = field
        super().__init__(message, details)


class InvalidDiagramFilenameError(ValidationError):
    """Raised when a requested diagram filename could escape the generated directory."""

    def __init__(self, filename: str, details: dict[str, Any] | None = None) -> None:
        details = details or {}
        details["filename"] = filename
        super().__init__(f"Invalid diagram filename: {filename}", field="filename", details=details)


class DiagramNotFoundError(AssistantException):
    """Raised when a diagram description document does not exist."""

    def __init__(self, filename: str, details: dict[str, Any] | None = None) -> None:
        """
        Initialize diagram not found error.

        Args:
            filename: Name of the missing diagram file
            details: Additional context
        """
        details = details or {}
        details["filename"] = filename
        super().__init__(f"Diagram not found: {filename}", details)


class ExtractionError(AssistantException):
    """Raised when LLM output cannot be turned into diagram components."""

    def __init__(
        self,
        message: str,
        stage: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize extraction error.

        Args:
            message: Error message
            stage: Pipeline stage that failed (enrichment, extraction)
            details: Additional context
        """
        details = details or {}
        if stage:
            details["stage"] = stage
        super().__init__(message, details)


class RenderError(AssistantException):
    """Raised when a render backend fails to produce an artifact."""

    def __init__(
        self,
        message: str,
        backend: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize render error.

        Args:
            message: Error message
            backend: Render backend that failed (d2, browser)
            details: Additional context
        """
        details = details or {}
        if backend:
            details["backend"] = backend
        super().__init__(message, details)


class KnowledgeBaseError(AssistantException):
    """Raised for vector store indexing and search failures."""

    def __init__(
        self,
        message: str,
        operation: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize knowledge base error.

        Args:
            message: Error message
            operation: Operation that failed (add, search, load)
            details: Additional context
        """
        details = details or {}
        if operation:
            details["operation"] = operation
        super().__init__(message, details)
