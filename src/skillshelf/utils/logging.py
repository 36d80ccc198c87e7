"""Logging configuration for skillshelf."""

import logging
import sys
from logging.handlers import RotatingFileHandler

from skillshelf.utils.config import Config

LOGGER_NAME = "skillshelf"


def setup_logging(
    config: Config, console_output: bool = False, verbose: bool = False
) -> None:
    """
    Set up logging for skillshelf.

    Args:
        config: Application configuration
        console_output: Whether to output logs to stderr (default: False)
        verbose: Lower the console threshold to DEBUG
    """
    format_str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    formatter = logging.Formatter(format_str)

    # Console format is simpler (no timestamp)
    console_format = "%(levelname)s - %(name)s - %(message)s"
    console_formatter = logging.Formatter(console_format)

    root_logger = logging.getLogger(LOGGER_NAME)
    root_logger.setLevel(logging.DEBUG)

    # Calling twice (CLI callback + serve) must not duplicate output
    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)
        handler.close()

    if config.logging_path is not None:
        config.logging_path.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            config.logging_path / "skillshelf.log", maxBytes=100000, backupCount=3
        )
        file_handler.setFormatter(formatter)
        file_handler.setLevel(logging.DEBUG)
        root_logger.addHandler(file_handler)

    if console_output:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setFormatter(console_formatter)
        console_handler.setLevel(logging.DEBUG if verbose else logging.INFO)
        root_logger.addHandler(console_handler)

    if not root_logger.handlers:
        root_logger.addHandler(logging.NullHandler())
