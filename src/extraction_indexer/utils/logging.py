"""Logging configuration."""

import logging
import sys
from typing import Any, Optional

from extraction_indexer.config import get_settings
from extraction_indexer.utils.errors import IngestionException

ROOT_LOGGER_NAME = "extraction_indexer"


def setup_logging(level: Optional[str] = None) -> None:
    """Configure logging for the service.

    Safe to call more than once: the stdout handler is only attached once.
    """
    level = (level or get_settings().log_level).upper()

    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(level)

    for handler in logger.handlers:
        if getattr(handler, "_extraction_indexer", False):
            handler.setLevel(level)
            return

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    handler.setFormatter(
        logging.Formatter(
            fmt="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )
    handler._extraction_indexer = True  # type: ignore[attr-defined]
    logger.addHandler(handler)


def get_logger(name: str) -> logging.Logger:
    """Get logger instance."""
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")


def log_error(
    logger: logging.Logger,
    message: str,
    error: BaseException,
    **context: Any,
) -> None:
    """Log *error* with its code/details and the caller's context (e.g. document_id)."""
    if isinstance(error, IngestionException):
        summary = f"{error.message} ({error.code})"
        extra = {**context, "error_code": error.code, "error_details": error.details}
    else:
        summary = f"{type(error).__name__}: {error}"
        extra = {**context, "error_code": type(error).__name__}

    context_str = ", ".join(f"{key}={value}" for key, value in context.items())
    prefix = f"{message}: {context_str}" if context_str else message
    logger.error(f"{prefix} - {summary}", extra=extra, exc_info=error)
