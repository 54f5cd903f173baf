"""Centralized logging configuration for the JDF client.

Usage:
    # At application startup
    from jdf_client.logging_config import setup_logging

    setup_logging(log_level=logging.INFO)

    # In modules
    logger = logging.getLogger(__name__)
"""

import logging
import sys

ROOT_LOGGER_NAME = "jdf_client"


def setup_logging(log_level: int = logging.INFO) -> logging.Logger:
    """Configure console logging for the `jdf_client` logger tree.

    Args:
        log_level: Minimum log level (default: INFO).

    Returns:
        logging.Logger: Configured package root logger.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(log_level)
    logger.propagate = False

    # Allows re-configuration without duplicate output
    logger.handlers.clear()

    formatter = logging.Formatter(
        fmt="%(asctime)s [%(levelname)-8s] %(name)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(log_level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    logger.debug("Logging configured at level %s", logging.getLevelName(log_level))
    return logger


def get_logger(name: str) -> logging.Logger:
    """Return a logger under the `jdf_client` namespace.

    Args:
        name: Module name (typically __name__).

    Returns:
        logging.Logger: Logger inheriting the package configuration.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    if name != ROOT_LOGGER_NAME and not name.startswith(f"{ROOT_LOGGER_NAME}."):
        name = f"{ROOT_LOGGER_NAME}.{name}"
    return logging.getLogger(name)
