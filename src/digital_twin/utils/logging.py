"""
Logging utilities.
"""

import logging
import sys


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger with the given name.

    Handlers write to stderr; stdout carries the JSON-RPC stream when the
    server runs over stdio.

    Args:
        name: Logger name (usually __name__)

    Returns:
        Configured logger
    """
    logger = logging.getLogger(name)

    if not logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
        ))
        logger.addHandler(handler)
        logger.setLevel(logging.INFO)
        logger.propagate = False

    return logger


def set_log_level(level: int | str) -> None:
    """
    Set the log level for every digital_twin logger.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    """
    if isinstance(level, str):
        level = getattr(logging, level.upper())

    logging.getLogger('digital_twin').setLevel(level)
    for name, logger in logging.Logger.manager.loggerDict.items():
        if name.startswith('digital_twin.') and isinstance(logger, logging.Logger):
            logger.setLevel(level)
