#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
Logger factory shared by the API, services and the indexing script.

Usage:
    from utils.logger import get_logger
    logger = get_logger(__name__)
    logger.info("Something happened")
"""
import logging
import sys
from typing import Optional, Union

_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_level: int = logging.INFO


def _resolve_level(level: Union[int, str, None]) -> int:
    if level is None:
        return _level
    if isinstance(level, int):
        return level
    return logging.getLevelNamesMapping().get(level.upper(), logging.INFO)


def configure_logging(level: Union[int, str] = logging.INFO) -> None:
    """Set the level used by every logger created through ``get_logger``."""
    global _level
    _level = _resolve_level(level)

    for logger in list(logging.Logger.manager.loggerDict.values()):
        if isinstance(logger, logging.Logger) and getattr(logger, "_review_chat", False):
            logger.setLevel(_level)
            for handler in logger.handlers:
                handler.setLevel(_level)


def get_logger(name: str, level: Optional[Union[int, str]] = None) -> logging.Logger:
    """
    Create and return a named logger with a standardised formatter.

    Args:
        name: Typically ``__name__`` of the calling module.
        level: Explicit logging level override.

    Returns:
        A configured ``logging.Logger`` instance.
    """
    resolved_level = _resolve_level(level)
    logger = logging.getLogger(name)

    # Avoid adding duplicate handlers if the logger already exists
    if not logger.handlers:
        logger.setLevel(resolved_level)

        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(resolved_level)
        console_handler.setFormatter(logging.Formatter(fmt=_FORMAT, datefmt=_DATE_FORMAT))
        logger.addHandler(console_handler)

        # Prevent log propagation to the root logger (avoids duplicates)
        logger.propagate = False
        logger._review_chat = True  # type: ignore[attr-defined]

    return logger
