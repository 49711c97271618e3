"""Logging setup for tt-core.

Library modules only create module-level loggers; handlers are attached
here, once, by the CLI entry point.
"""

import logging
from pathlib import Path

LOGGER_NAME = "tt_core"


def configure_logging(log_level: str, log_file: Path | None = None) -> logging.Logger:
    """Configure the tt_core logger.

    Args:
        log_level: Log level name (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        log_file: Optional file to log to instead of stderr.

    Returns:
        The configured package logger.
    """
    level = getattr(logging, log_level.upper(), logging.WARNING)

    tt_logger = logging.getLogger(LOGGER_NAME)
    tt_logger.setLevel(level)
    # Handlers are ours alone; clearing keeps repeated calls from duplicating output
    tt_logger.propagate = False
    tt_logger.handlers.clear()

    if level == logging.DEBUG:
        formatter = logging.Formatter(
            "%(asctime)s [%(levelname)s] %(name)s:%(lineno)d - %(message)s",
            datefmt="%H:%M:%S",
        )
    else:
        formatter = logging.Formatter(
            "%(asctime)s [%(levelname)s] %(message)s",
            datefmt="%H:%M:%S",
        )

    handler: logging.Handler
    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
    else:
        handler = logging.StreamHandler()
    handler.setFormatter(formatter)
    tt_logger.addHandler(handler)

    return tt_logger
