"""Logging helpers shared by services and the CLI."""

import logging
import time
from contextlib import contextmanager
from typing import Iterator, Optional, Union

LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


def configure_logging(level: Optional[Union[str, int]] = None) -> None:
    """Configure root logging for command-line use.

    Args:
        level: Level name (e.g. "DEBUG") or number. Defaults to WARNING.

    Raises:
        ValueError: If the level name is unknown
    """
    if level is None:
        level = logging.WARNING
    elif isinstance(level, str):
        resolved = logging.getLevelName(level.upper())
        if not isinstance(resolved, int):
            raise ValueError(f"Unknown log level '{level}'")
        level = resolved

    logging.basicConfig(level=level, format=LOG_FORMAT, force=True)


@contextmanager
def log_operation(logger: logging.Logger, operation: str, **params) -> Iterator[None]:
    """Log start, completion and failure of an operation with its duration.

    Failures are logged and re-raised unchanged.
    """
    start = time.perf_counter()
    if logger.isEnabledFor(logging.DEBUG):
        if params:
            rendered = ", ".join(f"{key}={value!r}" for key, value in params.items())
            logger.debug("Starting operation: %s with parameters: %s", operation, rendered)
        else:
            logger.debug("Starting operation: %s", operation)
    try:
        yield
    except Exception as exc:
        duration_ms = (time.perf_counter() - start) * 1000
        logger.error("Failed operation: %s after %.1f ms: %s", operation, duration_ms, exc)
        raise
    duration_ms = (time.perf_counter() - start) * 1000
    logger.debug("Completed operation: %s in %.1f ms", operation, duration_ms)
