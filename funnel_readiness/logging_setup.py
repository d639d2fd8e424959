"""Logging setup for funnel_readiness.

Library code only creates module loggers. Applications (and the CLI) call
setup_logging() once to attach a console handler.
"""

import logging
import sys
from typing import TextIO

from funnel_readiness.config import ReadinessConfig

logger = logging.getLogger(__name__)

_LEVEL_MAP = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}


def setup_logging(config: ReadinessConfig, stream: TextIO | None = None) -> None:
    """Configure the funnel_readiness logger tree based on config.

    Sets up:
    - funnel_readiness logger with the configured level
    - Console handler with structured format
    """
    level = _LEVEL_MAP.get(config.log_level, logging.INFO)

    package_logger = logging.getLogger("funnel_readiness")
    package_logger.setLevel(level)

    # Remove existing handlers to avoid duplicates
    for handler in package_logger.handlers[:]:
        package_logger.removeHandler(handler)

    console_handler = logging.StreamHandler(stream or sys.stdout)
    console_handler.setLevel(level)
    formatter = logging.Formatter(
        fmt="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    console_handler.setFormatter(formatter)
    package_logger.addHandler(console_handler)

    logger.info(f"Logging configured: level={config.log_level}")
