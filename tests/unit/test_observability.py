"""Unit tests for structured logging helpers."""

import logging

from images_binding.core.observability import LogContext, StructuredLogger


class TestLogContext:
    """Tests for LogContext."""

    def test_with_operation_keeps_correlation_id(self):
        context = LogContext(component="orchestrator")
        child = context.with_operation("encode")
        assert child.correlation_id == context.correlation_id
        assert child.operation == "encode"
        assert child.component == "orchestrator"

    def test_with_metadata_does_not_mutate_parent(self):
        context = LogContext().with_metadata(path="/info")
        child = context.with_metadata(status=415)
        assert context.metadata == {"path": "/info"}
        assert child.metadata == {"path": "/info", "status": 415}

    def test_correlation_ids_are_unique(self):
        assert LogContext().correlation_id != LogContext().correlation_id


class TestStructuredLogger:
    """Tests for StructuredLogger."""

    def test_formats_context_into_message(self, caplog):
        logger = StructuredLogger("test-structured-logger", level="DEBUG")
        logging.getLogger("test-structured-logger").propagate = True
        context = LogContext(correlation_id="abc", operation="inspect").with_metadata(
            path="/info"
        )

        with caplog.at_level(logging.DEBUG, logger="test-structured-logger"):
            logger.warning("Rejected request", context, status=400)

        assert "[inspect] [abc] Rejected request (path=/info, status=400)" in caplog.text

    def test_plain_message_without_context(self, caplog):
        logger = StructuredLogger("test-plain-logger", level="DEBUG")
        logging.getLogger("test-plain-logger").propagate = True

        with caplog.at_level(logging.INFO, logger="test-plain-logger"):
            logger.info("hello")

        assert "hello" in caplog.text
