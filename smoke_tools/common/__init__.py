"""
================================================================================
Smoke Tools Common Utilities
================================================================================

Shared logging setup and filesystem helpers for the smoke tools and runner.

Exports:
    - init_logger: Initialize the loguru logger from `logging.*` settings
    - ensure_directory: Create a directory if needed

Usage:
    from smoke_tools.common import init_logger

    init_logger()
    init_logger(level="DEBUG", log_file="test-results/smoke.log")

================================================================================
"""

import sys
from pathlib import Path
from typing import Optional, Union

from loguru import logger

from smoke_suites.storefront.framework.config_loader import ConfigLoader


DEFAULT_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
    "<level>{message}</level>"
)

_logger_initialized = False


def init_logger(
    level: Optional[str] = None,
    log_file: Optional[str] = None,
    force: bool = False,
) -> None:
    """
    Initializes the loguru logger with standard settings.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR). Defaults to config value.
        log_file: Optional file path to write logs to. Defaults to config value.
        force: Re-initialize even if already done (e.g. after a level change)

    Example:
        init_logger()  # Use defaults
        init_logger(level="DEBUG", log_file="logs/smoke.log")
    """
    global _logger_initialized

    if _logger_initialized and not force:
        return

    config = ConfigLoader()
    level = (level or config.get("logging.level", "INFO")).upper()

    # Remove default handler
    logger.remove()

    logger.add(
        sys.stderr,
        format=DEFAULT_FORMAT,
        level=level,
        colorize=True,
    )

    log_file = log_file or config.get("logging.file", "")
    if log_file:
        ensure_directory(Path(log_file).parent)
        logger.add(
            log_file,
            format=DEFAULT_FORMAT,
            level=level,
            rotation="10 MB",
            retention="7 days",
        )

    _logger_initialized = True
    logger.debug(f"Logger initialized with level: {level}")


def ensure_directory(path: Union[str, Path]) -> Path:
    """
    Ensures a directory exists, creating it if necessary.

    Returns:
        The path (for chaining)
    """
    path = Path(path)
    path.mkdir(parents=True, exist_ok=True)
    return path


__all__ = [
    "init_logger",
    "ensure_directory",
]
