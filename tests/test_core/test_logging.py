"""Tests for objweld.core.logging."""

import logging

from objweld.core.logging import setup_logging


def test_setup_logging_sets_level():
    setup_logging("warning")
    assert logging.getLogger().level == logging.WARNING
    setup_logging("INFO")
    assert logging.getLogger().level == logging.INFO


def test_setup_logging_writes_file(tmp_path):
    log_file = tmp_path / "logs" / "objweld.log"
    setup_logging("INFO", log_file=log_file)
    logging.getLogger("objweld.test").info("hello from test")
    for handler in logging.getLogger().handlers:
        handler.flush()
    assert "hello from test" in log_file.read_text(encoding="utf-8")
    setup_logging("INFO")
