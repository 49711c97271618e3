"""Tests for logging configuration."""

import logging
from pathlib import Path

from tt_core.utils.logging import LOGGER_NAME, configure_logging


class TestConfigureLogging:
    def test_sets_level_and_single_handler(self) -> None:
        logger = configure_logging("info")

        assert logger.name == LOGGER_NAME
        assert logger.level == logging.INFO
        assert logger.propagate is False
        assert len(logger.handlers) == 1

    def test_repeated_calls_do_not_stack_handlers(self) -> None:
        configure_logging("WARNING")
        logger = configure_logging("DEBUG")

        assert len(logger.handlers) == 1
        assert logger.level == logging.DEBUG

    def test_debug_format_includes_location(self) -> None:
        logger = configure_logging("DEBUG")

        formatter = logger.handlers[0].formatter
        assert formatter is not None
        assert "%(lineno)d" in (formatter._fmt or "")

    def test_unknown_level_falls_back_to_warning(self) -> None:
        logger = configure_logging("nonsense")

        assert logger.level == logging.WARNING

    def test_file_handler(self, tmp_path: Path) -> None:
        log_file = tmp_path / "logs" / "tt.log"

        logger = configure_logging("INFO", log_file=log_file)
        logging.getLogger("tt_core.store.core").info("hello file")
        for handler in logger.handlers:
            handler.flush()

        assert "hello file" in log_file.read_text()
        for handler in logger.handlers:
            handler.close()
        logger.handlers.clear()
