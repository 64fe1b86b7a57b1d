import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
import sys
from typing import List

from seller_quotes.core.config import settings

LOG_FORMAT = "%(levelname)s | %(asctime)s | %(name)s | %(message)s"
LOG_FILE_NAME = "seller_quotes.log"

_handlers: List[logging.Handler] = []


def log_level() -> int:
    level = logging.getLevelName(settings.LOG_LEVEL.upper())
    return level if isinstance(level, int) else logging.INFO


def _console_stream():
    try:
        return open(sys.stdout.fileno(), mode="w", encoding="utf-8", closefd=False)
    except Exception:
        # stdout has no usable file descriptor (e.g. captured by a test runner)
        return sys.stdout


def shared_handlers() -> List[logging.Handler]:
    """One rotating file handler and one console handler for every service logger.

    A single file handler per process keeps rotation from racing between loggers.
    """
    if not _handlers:
        log_dir = Path(settings.LOG_DIR)
        log_dir.mkdir(parents=True, exist_ok=True)
        formatter = logging.Formatter(LOG_FORMAT)

        file_handler = RotatingFileHandler(
            log_dir / LOG_FILE_NAME, maxBytes=2_000_000, backupCount=3, encoding="utf-8"
        )
        console_handler = logging.StreamHandler(_console_stream())
        for handler in (file_handler, console_handler):
            handler.setFormatter(formatter)
            handler.setLevel(log_level())
            _handlers.append(handler)

    return _handlers


def get_logger(name: str) -> logging.Logger:
    logger = logging.getLogger(name)

    if not logger.handlers:
        for handler in shared_handlers():
            logger.addHandler(handler)
        logger.setLevel(log_level())
        logger.propagate = False

    return logger
