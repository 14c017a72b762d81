# MIT License (see LICENSE)
"""
Logging setup for scripts and examples.

The library itself only creates module loggers under the 'galton_sim'
namespace; applications opt in to output by calling setup_logging().
"""
from __future__ import annotations
import logging
import sys


def setup_logging(level: int = logging.INFO, log_file: str | None = None) -> logging.Logger:
    """
    Configure the 'galton_sim' logger.

    Existing handlers are replaced, so calling this twice does not duplicate
    output.

    Args:
        level: Logging level, e.g. logging.DEBUG to see evictions.
        log_file: Optional path that receives the same records.

    Returns:
        The configured package logger.
    """
    logger = logging.getLogger("galton_sim")
    logger.setLevel(level)
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)

    formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%H:%M:%S",
    )
    console = logging.StreamHandler(sys.stdout)
    console.setLevel(level)
    console.setFormatter(formatter)
    logger.addHandler(console)

    if log_file:
        file_handler = logging.FileHandler(log_file, mode="w", encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    logger.debug("Logging initialized.")
    return logger
