"""
Logging setup for cavegen.

Usage:
    from cave_logging import setup_logging
    setup_logging(logging.DEBUG)  # call once at startup

All cavegen.* loggers share one console handler on stderr.
"""

import logging
import sys
from typing import IO, Optional


ROOT_LOGGER = "cavegen"
LOG_FORMAT = "%(levelname)-8s | %(name)-18s | %(message)s"


def setup_logging(level: int = logging.WARNING, stream: Optional[IO[str]] = None) -> logging.Logger:
    """
    Configure the cavegen logger hierarchy.

    Args:
        level: Minimum level emitted to the console
        stream: Output stream (default: sys.stderr)

    Returns:
        The configured root cavegen logger
    """
    root_logger = logging.getLogger(ROOT_LOGGER)
    root_logger.setLevel(level)

    # Clear any existing handlers (for re-initialization)
    root_logger.handlers.clear()

    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT))
    root_logger.addHandler(handler)

    # Don't double-log through the root logger
    root_logger.propagate = False

    return root_logger
