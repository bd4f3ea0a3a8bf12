# SPDX-License-Identifier: Apache-2.0

"""Utility functions for the BCPC helpers."""

import sys

from loguru import logger

from bcpc.config import SETTINGS


def setup_logging(sink=sys.stdout) -> None:
    """Configure logging settings.

    Args:
        sink: Stream the log messages are written to
    """
    level = SETTINGS.get("BCPC_LOG_LEVEL", "INFO")
    log_fmt = (
        "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | "
        "<level>{message}</level>"
    )
    logger.remove()
    logger.add(sink, format=log_fmt, level=level, colorize=True)
