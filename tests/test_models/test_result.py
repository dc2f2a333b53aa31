"""Tests for backfill result models."""

from extraction_indexer.models.result import BackfillResult, DocumentOutcome, OutcomeStatus


class TestBackfillResult:
    """Test suite for BackfillResult model."""

    def test_defaults(self):
        result = BackfillResult()

        assert (result.processed, result.skipped, result.failed) == (0, 0, 0)
        assert result.total == 0
        assert result.has_failures is False

    def test_record_counts_each_outcome(self):
        result = BackfillResult()

        result.record(DocumentOutcome(document_id="a", status=OutcomeStatus.PROCESSED, chunk_count=3))
        result.record(DocumentOutcome(document_id="b", status=OutcomeStatus.SKIPPED))
        result.record(DocumentOutcome(document_id="c", status=OutcomeStatus.FAILED, error="boom"))
        result.record(DocumentOutcome(document_id="d", status=OutcomeStatus.PROCESSED))

        assert (result.processed, result.skipped, result.failed) == (2, 1, 1)
        assert result.total == 4
        assert result.has_failures is True
        assert [f.document_id for f in result.failures] == ["c"]
        assert result.failures[0].error == "boom"
