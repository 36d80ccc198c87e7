"""Tests for logging setup."""

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

from skillshelf.utils.config import Config
from skillshelf.utils.logging import LOGGER_NAME, setup_logging


def _handlers():
    return logging.getLogger(LOGGER_NAME).handlers


def test_file_handler_when_logging_path_set(tmp_path: Path):
    config = Config(workspace=tmp_path, logging_path=Path(".logs"))

    setup_logging(config)

    assert (tmp_path / ".logs").is_dir()
    assert any(isinstance(h, RotatingFileHandler) for h in _handlers())
    setup_logging(Config(workspace=tmp_path))


def test_repeated_setup_does_not_stack_handlers(tmp_path: Path):
    config = Config(workspace=tmp_path)

    setup_logging(config, console_output=True)
    setup_logging(config, console_output=True)

    stream_handlers = [
        h for h in _handlers() if type(h) is logging.StreamHandler
    ]
    assert len(stream_handlers) == 1


def test_verbose_console_level(tmp_path: Path):
    config = Config(workspace=tmp_path)

    setup_logging(config, console_output=True, verbose=True)

    assert _handlers()[0].level == logging.DEBUG
    setup_logging(config)
    assert isinstance(_handlers()[0], logging.NullHandler)
