"""
Tests for logging configuration.
"""

import logging

from rich.logging import RichHandler

from infra_nuke.core.logging import setup_logging


class TestSetupLogging:
    """Tests for setup_logging."""

    def test_rich_handler_installed(self, restore_root_logger):
        setup_logging(level="DEBUG")
        root = logging.getLogger()
        assert root.level == logging.DEBUG
        assert any(isinstance(h, RichHandler) for h in root.handlers)

    def test_no_duplicate_handlers(self, restore_root_logger):
        setup_logging()
        setup_logging()
        root = logging.getLogger()
        assert sum(isinstance(h, RichHandler) for h in root.handlers) == 1

    def test_log_file(self, restore_root_logger, tmp_path):
        log_file = tmp_path / "nuke.log"
        setup_logging(level="INFO", log_file=str(log_file))

        logging.getLogger("infra_nuke.test").info("hello from a worker")
        for handler in logging.getLogger().handlers:
            handler.flush()

        content = log_file.read_text()
        assert "hello from a worker" in content
        assert "MainThread" in content

    def test_noisy_loggers_quieted(self, restore_root_logger):
        setup_logging(level="DEBUG")
        assert logging.getLogger("botocore").level == logging.WARNING

