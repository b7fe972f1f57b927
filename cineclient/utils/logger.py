"""
Centralized logging utility.

Provides a consistent logger across the client data layer.
"""

import logging
import os
import sys
from typing import Optional

# Read log level from environment (default: INFO)
LOG_LEVEL = os.getenv("CINECLIENT_LOG_LEVEL", "INFO").upper()


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """
    Create or retrieve a configured logger instance.

    Args:
        name (Optional[str]): Logger name (usually __name__).

    Returns:
        logging.Logger: Configured logger instance.
    """
    logger = logging.getLogger(name)
    logger.setLevel(LOG_LEVEL)

    # Controllers are rebuilt per screen visit; keep a single handler
    if logger.handlers:
        return logger

    handler = logging.StreamHandler(sys.stderr)

    formatter = logging.Formatter(
        fmt="%(asctime)s | %(levelname)-8s | CLIENT | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    handler.setFormatter(formatter)
    logger.addHandler(handler)
    logger.propagate = False

    return logger
