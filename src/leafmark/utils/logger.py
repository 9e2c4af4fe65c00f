"""Minimal logging utilities for Leafmark.

Provides a simple get_logger function that wraps the standard library logging.

Example:
    >>> from leafmark.utils.logger import get_logger
    >>> logger = get_logger(__name__)
    >>> logger.debug("Registered reference %r", "foo")
"""

from __future__ import annotations

import logging


def get_logger(name: str) -> logging.Logger:
    """Get a logger for the given name.

    Returns a standard library logger with the "leafmark." prefix.

    Args:
        name: Logger name (typically __name__)

    Returns:
        logging.Logger instance

    Example:
        >>> logger = get_logger("mymodule")
        >>> logger.name
        'leafmark.mymodule'
    """
    if not (name == "leafmark" or name.startswith("leafmark.")):
        name = f"leafmark.{name}"
    return logging.getLogger(name)
