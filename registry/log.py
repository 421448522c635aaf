"""Logging setup: loguru sinks plus redirection of standard-library logging."""

import logging
import sys
from typing import Any

from loguru import logger

CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan> - <level>{message}</level>"
)
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} - {message}"


class InterceptHandler(logging.Handler):
    """Route standard-library log records (Streamlit's included) into loguru."""

    def emit(self, record):
        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        frame, depth = logging.currentframe(), 2
        while frame and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(level, record.getMessage())


def configure_logging(config: dict[str, Any]):
    """Replace loguru's default sink with the configured console and file sinks."""
    logging_config = config.get("logging", {})
    level = str(logging_config.get("level", "INFO")).upper()

    logger.remove()
    logger.add(
        sys.stderr,
        level=level,
        format=CONSOLE_FORMAT,
        colorize=True,
        backtrace=True,
    )

    log_file = logging_config.get("file")
    if log_file:
        logger.add(
            str(log_file),
            level=level,
            format=FILE_FORMAT,
            rotation=logging_config.get("rotation"),
            retention=logging_config.get("retention"),
            colorize=False,
            backtrace=True,
        )

    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)
    streamlit_logger = logging.getLogger("streamlit")
    streamlit_logger.handlers = [InterceptHandler()]
    streamlit_logger.propagate = False

    return logger
