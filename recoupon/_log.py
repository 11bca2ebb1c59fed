"""
Logging for recoupon.

Library code logs under the "recoupon" namespace and installs only a
NullHandler. Hosts that want console output call configure_logging().
"""

from __future__ import annotations

import logging
import os
import sys

LOG_LEVEL = os.getenv("RECOUPON_LOG_LEVEL", "WARNING").upper()

logger = logging.getLogger("recoupon")
logger.setLevel(LOG_LEVEL)
logger.addHandler(logging.NullHandler())


def get_logger(name: str | None = None) -> logging.Logger:
    """
    Get a logger instance.

    Args:
        name: Optional name, appended to "recoupon"
    """
    if name:
        return logging.getLogger(f"recoupon.{name}")
    return logger


def configure_logging(level: str | None = None) -> logging.Logger:
    """Attach a stdout handler to the package logger (idempotent)."""
    level = (level or LOG_LEVEL).upper()
    logger.setLevel(level)

    if not any(isinstance(h, logging.StreamHandler) for h in logger.handlers):
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(level)
        console_handler.setFormatter(logging.Formatter(
            fmt="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        ))
        logger.addHandler(console_handler)

    # Avoid duplicate lines through the root logger
    logger.propagate = False
    return logger


__all__ = ("get_logger", "configure_logging")
