"""Tests for secure logging configuration."""

import logging

import httpx

from hacocms.utils.logging import TokenMaskingFilter, setup_logging


def make_record(msg: str, *args: object) -> logging.LogRecord:
    return logging.LogRecord(
        name="hacocms.test",
        level=logging.INFO,
        pathname="",
        lineno=0,
        msg=msg,
        args=args,
        exc_info=None,
    )


class TestTokenMaskingFilter:
    """Tests for TokenMaskingFilter."""

    def test_masks_bearer_token(self) -> None:
        """Test that bearer tokens are masked in the message."""
        record = make_record("Authorization: Bearer secret-token")
        TokenMaskingFilter().filter(record)

        assert "secret-token" not in record.getMessage()
        assert "Bearer [MASKED]" in record.getMessage()

    def test_masks_bearer_token_in_header_dict(self) -> None:
        """Test that bearer tokens are masked in dict-formatted headers."""
        record = make_record("headers: {'Authorization': 'Bearer secret-token'}")
        TokenMaskingFilter().filter(record)

        assert "secret-token" not in record.getMessage()

    def test_prose_mentioning_bearer_is_untouched(self) -> None:
        """Test that the word bearer outside an Authorization header is kept."""
        record = make_record("the bearer of bad news")
        TokenMaskingFilter().filter(record)

        assert record.getMessage() == "the bearer of bad news"

    def test_masks_draft_token_header(self) -> None:
        """Test that the Project-Draft-Token header value is masked."""
        record = make_record("headers: {'Haco-Project-Draft-Token': 'draft-secret'}")
        TokenMaskingFilter().filter(record)

        assert "draft-secret" not in record.getMessage()

    def test_masks_draft_query_in_args(self) -> None:
        """Test that draft query values are masked in non-str args such as URLs."""
        url = httpx.URL("http://localhost/api/v1/entries/abc?draft=revision-secret")
        record = make_record("GET %s -> %d", url, 401)
        TokenMaskingFilter().filter(record)

        message = record.getMessage()
        assert "revision-secret" not in message
        assert "draft=[MASKED]" in message
        assert message.endswith("-> 401")

    def test_plain_message_is_untouched(self) -> None:
        """Test that messages without credentials pass through unchanged."""
        url = httpx.URL("http://localhost/api/v1/entries")
        record = make_record("GET %s", url)

        assert TokenMaskingFilter().filter(record) is True
        assert record.args == (url,)


class TestSetupLogging:
    """Tests for logger helpers."""

    def test_setup_logging_installs_masking_handler(self) -> None:
        """Test that setup_logging adds one handler with the masking filter."""
        logger = setup_logging(logging.DEBUG, name="hacocms.test_setup")
        setup_logging(logging.DEBUG, name="hacocms.test_setup")

        assert len(logger.handlers) == 1
        assert any(isinstance(f, TokenMaskingFilter) for f in logger.handlers[0].filters)
        assert logger.level == logging.DEBUG
