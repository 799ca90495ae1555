"""Minimal logging utilities for Tintero.

Provides a simple get_logger function that wraps the standard library logging.

Example:
    >>> from tintero.utils.logger import get_logger
    >>> logger = get_logger(__name__)
    >>> logger.debug("Resolving include %s", "chapter.adoc")
"""

from __future__ import annotations

import logging


def get_logger(name: str) -> logging.Logger:
    """Get a logger for the given name.

    Returns a standard library logger with the "tintero." prefix.

    Args:
        name: Logger name (typically __name__)

    Returns:
        logging.Logger instance

    Example:
        >>> logger = get_logger("mymodule")
        >>> logger.name
        'tintero.mymodule'
    """
    if not (name == "tintero" or name.startswith("tintero.")):
        name = f"tintero.{name}"
    return logging.getLogger(name)
