from __future__ import annotations

import sys

from loguru import logger


def configure_logging(level: str = "INFO", log_file: str | None = None) -> None:
    """Replace loguru's default sink with the service's stderr (and optional file) sinks."""
    logger.remove()
    logger.add(
        sys.stderr,
        level=level,
        format="<dim>{time:HH:mm:ss}</dim> | <level>{level: <8}</level> | {message}",
    )
    if log_file:
        logger.add(log_file, level=level, rotation="10 MB", retention=5)
