"""Bootstrap utilities for tool scripts.

Provides logging setup for command-line tools.
"""

from __future__ import annotations

import logging
import sys


def setup_logging(
    level: str | int = logging.DEBUG,
    format_str: str = "[%(levelname)s] %(message)s",
    stream=sys.stderr,
) -> logging.Logger:
    """Configure and return root logger.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR)
        format_str: Log message format
        stream: Output stream (default: stderr)

    Returns:
        Configured root logger instance
    """
    logger = logging.getLogger()
    logger.setLevel(level)

    # Remove existing handlers
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)

    handler = logging.StreamHandler(stream)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(format_str))
    logger.addHandler(handler)

    return logger
