"""
Logging configuration for the Push Chain MCP server.

stdout carries the stdio protocol stream, so every handler writes to stderr.
"""

from __future__ import annotations

import logging
import sys

LOGGER_NAMES = ("pushchain_mcp", "pushchain_mcp_server")

logger = logging.getLogger("pushchain_mcp_server")


def configure_logging(level: str = "INFO") -> None:
    """
    Configure logging for both server packages.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR)
    """
    numeric_level = getattr(logging, level.upper(), None)
    if not isinstance(numeric_level, int):
        raise ValueError(f"Unknown log level: {level!r}")

    formatter = logging.Formatter(
        "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )
    for name in LOGGER_NAMES:
        package_logger = logging.getLogger(name)
        package_logger.setLevel(numeric_level)
        # Only add handler if not already configured
        if not package_logger.handlers:
            handler = logging.StreamHandler(sys.stderr)
            handler.setLevel(logging.DEBUG)
            handler.setFormatter(formatter)
            package_logger.addHandler(handler)
