"""
go-scaffold Logging Configuration

Configurable logging with debug mode support.
"""

import os
import logging
import sys
from pathlib import Path
from typing import Optional


ROOT_LOGGER = "go_scaffold"


def is_debug_mode() -> bool:
    """Check the GO_SCAFFOLD_DEBUG environment variable."""
    return os.environ.get("GO_SCAFFOLD_DEBUG", "").lower() in ("1", "true", "yes")


def setup_logging(
    level: Optional[int] = None,
    log_file: Optional[Path] = None,
    quiet: bool = False
) -> logging.Logger:
    """Set up logging configuration.

    Args:
        level: Logging level (default: DEBUG if GO_SCAFFOLD_DEBUG, else INFO)
        log_file: Optional path to log file
        quiet: If True, suppress console output (used while the wizard owns
            the terminal)

    Returns:
        Configured logger
    """
    debug = is_debug_mode()

    # Determine log level
    if level is None:
        level = logging.DEBUG if debug else logging.INFO

    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(level)
    logger.propagate = False

    # Clear existing handlers
    logger.handlers.clear()

    # Console handler
    if not quiet:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(level)

        if debug:
            console_format = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
        else:
            console_format = "%(message)s"

        console_handler.setFormatter(logging.Formatter(console_format))
        logger.addHandler(console_handler)

    # File handler (if specified)
    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(logging.DEBUG)
        file_format = "%(asctime)s [%(levelname)s] %(name)s:%(lineno)d: %(message)s"
        file_handler.setFormatter(logging.Formatter(file_format))
        logger.addHandler(file_handler)

    if not logger.handlers:
        logger.addHandler(logging.NullHandler())

    return logger


def get_logger(name: str = ROOT_LOGGER) -> logging.Logger:
    """Get a logger under the go_scaffold namespace.

    Args:
        name: Logger name (will be prefixed with 'go_scaffold.')

    Returns:
        Logger instance
    """
    if not name.startswith(ROOT_LOGGER):
        name = f"{ROOT_LOGGER}.{name}"
    return logging.getLogger(name)
