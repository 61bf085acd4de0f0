"""
Test suite for structured logging helpers.

System role: Verification of log-safe value rendering
"""

import logging

import pytest
from pydantic import SecretStr

from legally.observability.log_utils import log_exception_with_context, safe_log_value


class TestSafeLogValue:
    """Test suite for safe_log_value."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            (None, "None"),
            (SecretStr("sk-live-123"), "**********"),
            ([0.1] * 768, "list(768 items)"),
            ({"a": 1, "b": 2}, "dict(2 keys)"),
            (42, "42"),
        ],
    )
    def test_safe_log_value_should_summarize(self, value, expected: str) -> None:
        """Test secrets are masked and containers summarized."""
        assert safe_log_value(value) == expected

    def test_safe_log_value_should_truncate_long_text(self) -> None:
        """Test long document text is cut with its original length."""
        rendered = safe_log_value("a" * 300, max_length=10)

        assert rendered == "aaaaaaaaaa... (300 chars)"


class TestLogExceptionWithContext:
    """Test suite for log_exception_with_context."""

    def test_log_exception_should_attach_error_fields(self, caplog: pytest.LogCaptureFixture) -> None:
        """Test the record carries error type, message and safe context."""
        # Arrange
        logger = logging.getLogger("tests.log_utils")

        # Act
        with caplog.at_level(logging.WARNING, logger="tests.log_utils"):
            log_exception_with_context(
                logger,
                "Retrieval failed",
                RuntimeError("index offline"),
                level=logging.WARNING,
                document_id="doc-1",
            )

        # Assert
        record = caplog.records[0]
        assert record.levelno == logging.WARNING
        assert record.error_type == "RuntimeError"
        assert record.error_msg == "index offline"
        assert record.document_id == "doc-1"
