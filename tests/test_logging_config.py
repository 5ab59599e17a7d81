"""
Tests for log setup and payload redaction.
"""
import logging

from app.core.logging_config import LOG_FILE_NAME, sanitize_log_data, setup_logging


def test_sanitize_redacts_nested_secrets():
    data = {"userId": "u1", "apiToken": "abc", "meta": {"Authorization": "Bearer x", "jobId": "job-1"}}

    sanitized = sanitize_log_data(data)

    assert sanitized == {
        "userId": "u1",
        "apiToken": "***REDACTED***",
        "meta": {"Authorization": "***REDACTED***", "jobId": "job-1"},
    }
    # Original is untouched
    assert data["apiToken"] == "abc"


def test_sanitize_handles_none():
    assert sanitize_log_data(None) == {}


def test_setup_logging_writes_rotating_file(tmp_path):
    root = logging.getLogger()
    saved_handlers, saved_level = list(root.handlers), root.level
    try:
        setup_logging("debug", str(tmp_path))

        assert root.level == logging.DEBUG
        logging.getLogger("app.test").info("trash purged")
        for handler in root.handlers:
            handler.flush()
        assert "trash purged" in (tmp_path / LOG_FILE_NAME).read_text()
        assert logging.getLogger("httpx").level == logging.WARNING
    finally:
        for handler in root.handlers:
            handler.close()
        root.handlers[:] = saved_handlers
        root.setLevel(saved_level)
