"""Tests for the ops log, error log and error types."""

import logging

import pytest

from snip.errors import (
    AttachmentIOError,
    ConfigError,
    MalformedIdentifierError,
    MultipleMatchesError,
    NotFoundError,
    SnipError,
    StorageError,
    log_exception,
)
from snip.logging_config import OPS_LOG_FILENAME, configure_ops_log, remove_ops_log


class TestOpsLog:
    def test_writes_beside_database(self, tmp_path):
        handler = configure_ops_log(tmp_path / "db" / "snip.sqlite3")
        try:
            logging.getLogger("snip.snippet").info("Created snip abc")
        finally:
            remove_ops_log(handler)

        log_path = tmp_path / "db" / OPS_LOG_FILENAME
        assert "Created snip abc" in log_path.read_text()

    def test_memory_database_has_no_log(self):
        assert configure_ops_log(":memory:") is None
        remove_ops_log(None)

    def test_handler_removed(self, tmp_path):
        handler = configure_ops_log(tmp_path / "snip.sqlite3")
        remove_ops_log(handler)
        assert handler not in logging.getLogger("snip").handlers


class TestErrorLog:
    def test_log_beside_database(self, tmp_path):
        try:
            raise RuntimeError("boom")
        except RuntimeError as e:
            path = log_exception(e, context="snip CLI", db_path=tmp_path / "snip.sqlite3")

        assert path == tmp_path / "snip-errors.log"
        text = path.read_text()
        assert "snip CLI" in text
        assert "RuntimeError: boom" in text
        assert (path.stat().st_mode & 0o777) == 0o600

    def test_appends(self, tmp_path):
        db = tmp_path / "snip.sqlite3"
        log_exception(ValueError("first"), db_path=db)
        path = log_exception(ValueError("second"), db_path=db)
        text = path.read_text()
        assert "first" in text and "second" in text

    def test_memory_database_logs_under_home(self, tmp_path, monkeypatch):
        monkeypatch.setenv("HOME", str(tmp_path))
        path = log_exception(ValueError("x"), db_path=":memory:")
        assert path == tmp_path / ".snip-errors.log"


class TestErrorTypes:
    @pytest.mark.parametrize("exc", [
        MalformedIdentifierError("x"),
        NotFoundError("x"),
        MultipleMatchesError("x", "snip"),
        AttachmentIOError("/tmp/x", "gone"),
        StorageError("x"),
        ConfigError("x"),
    ])
    def test_all_are_snip_errors(self, exc):
        assert isinstance(exc, SnipError)

    def test_attachment_io_error_message(self):
        e = AttachmentIOError("/tmp/x.pdf", "No such file or directory")
        assert str(e) == "/tmp/x.pdf: No such file or directory"
