"""Tests for custom exceptions."""

from extraction_indexer.utils.errors import (
    ChunkingError,
    ConfigurationError,
    IngestionException,
    OrchestrationError,
    PersistenceError,
    ProviderError,
)


class TestCustomExceptions:
    """Test suite for custom exceptions."""

    def test_base_exception(self):
        """Test base IngestionException."""
        error = IngestionException("Test error")
        assert str(error) == "Test error"
        assert error.code == "IngestionException"
        assert error.details == {}

    def test_provider_error_records_model(self):
        """Test ProviderError exception."""
        error = ProviderError("Embedding failed", model="text-embedding-3-small")
        assert str(error) == "Embedding failed"
        assert error.code == "PROVIDER_ERROR"
        assert error.details == {"model": "text-embedding-3-small"}

    def test_provider_error_default_message(self):
        error = ProviderError()
        assert error.message == "Embedding provider request failed"

    def test_persistence_error_records_document(self):
        """Test PersistenceError exception."""
        error = PersistenceError("Write failed", document_id="doc-1", details={"chunks": 3})
        assert error.code == "PERSISTENCE_ERROR"
        assert error.details == {"chunks": 3, "document_id": "doc-1"}

    def test_orchestration_error(self):
        """Test OrchestrationError exception."""
        error = OrchestrationError("Cannot list documents")
        assert str(error) == "Cannot list documents"
        assert error.code == "ORCHESTRATION_ERROR"

    def test_to_dict(self):
        error = ChunkingError("bad overlap", details={"overlap": 10})
        assert error.to_dict() == {
            "error": {
                "message": "bad overlap",
                "code": "CHUNKING_ERROR",
                "details": {"overlap": 10},
            }
        }

    def test_exception_inheritance(self):
        """Test that all custom exceptions inherit from base."""
        assert issubclass(ProviderError, IngestionException)
        assert issubclass(PersistenceError, IngestionException)
        assert issubclass(OrchestrationError, IngestionException)
        assert issubclass(ChunkingError, IngestionException)
        assert issubclass(ConfigurationError, IngestionException)
