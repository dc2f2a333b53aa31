"""Custom exception classes for the extraction indexer."""

from typing import Any, Dict, Optional


class IngestionException(Exception):
    """Base exception for all extraction indexer errors."""

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to a dictionary for structured logging."""
        return {
            "error": {
                "message": self.message,
                "code": self.code,
                "details": self.details,
            }
        }


class ProviderError(IngestionException):
    """Exception raised when the embedding provider cannot produce usable vectors.

    Covers missing credentials, transport/provider failures and responses
    whose vector count or dimensionality does not match the request.
    """

    def __init__(
        self,
        message: str = "Embedding provider request failed",
        model: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        error_details = details or {}
        if model:
            error_details["model"] = model
        super().__init__(
            message=message,
            code="PROVIDER_ERROR",
            details=error_details,
        )


class PersistenceError(IngestionException):
    """Exception raised when chunk rows cannot be read or replaced."""

    def __init__(
        self,
        message: str = "Chunk persistence failed",
        document_id: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        error_details = details or {}
        if document_id:
            error_details["document_id"] = document_id
        super().__init__(
            message=message,
            code="PERSISTENCE_ERROR",
            details=error_details,
        )


class OrchestrationError(IngestionException):
    """Exception raised when the document source itself cannot be enumerated."""

    def __init__(
        self,
        message: str = "Failed to enumerate documents",
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(
            message=message,
            code="ORCHESTRATION_ERROR",
            details=details,
        )


class ChunkingError(IngestionException):
    """Exception raised for invalid chunker parameters."""

    def __init__(
        self,
        message: str = "Invalid chunking parameters",
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(
            message=message,
            code="CHUNKING_ERROR",
            details=details,
        )


class ConfigurationError(IngestionException):
    """Exception raised when the service cannot be configured at start-up."""

    def __init__(
        self,
        message: str = "Invalid configuration",
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(
            message=message,
            code="CONFIGURATION_ERROR",
            details=details,
        )
