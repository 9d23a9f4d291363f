"""Logging for remiendo.

Every module logs under the ``remiendo`` namespace. The package logger
carries a NullHandler, so nothing is printed unless the embedding
application configures logging. Segment merges and pipeline short-circuits
log at DEBUG; skipped user handlers log at WARNING.

Example:
    >>> from remiendo.utils.logger import get_logger, set_log_level
    >>> logger = get_logger(__name__)
    >>> set_log_level("DEBUG")  # show segmentation decisions while streaming
"""

from __future__ import annotations

import logging

ROOT_LOGGER_NAME = "remiendo"

logging.getLogger(ROOT_LOGGER_NAME).addHandler(logging.NullHandler())


def get_logger(name: str) -> logging.Logger:
    """Logger for ``name``, namespaced under ``remiendo.``.

    Example:
        >>> get_logger("blocks").name
        'remiendo.blocks'
        >>> get_logger("remiendo.healer").name
        'remiendo.healer'
    """
    if name != ROOT_LOGGER_NAME and not name.startswith(f"{ROOT_LOGGER_NAME}."):
        name = f"{ROOT_LOGGER_NAME}.{name}"
    return logging.getLogger(name)


def set_log_level(level: int | str) -> None:
    """Set the level of every remiendo logger at once."""
    logging.getLogger(ROOT_LOGGER_NAME).setLevel(level)


__all__ = [
    "ROOT_LOGGER_NAME",
    "get_logger",
    "set_log_level",
]
