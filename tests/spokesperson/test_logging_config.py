"""Tests for logging setup."""

import logging

from src.spokesperson.logging_config import get_logger, setup_logging


def test_get_logger_uses_package_namespace():
    logger = get_logger("store")

    assert logger.name == "spokesperson.store"


def test_setup_logging_writes_file(tmp_path):
    log_file = tmp_path / "dashboard.log"

    logger = setup_logging(log_file=log_file, level=logging.INFO, console=False)
    get_logger("tests").info("hello from the tests")
    for handler in logger.handlers:
        handler.flush()

    content = log_file.read_text(encoding="utf-8")
    assert "Logging initialized" in content
    assert "spokesperson.tests - INFO - hello from the tests" in content


def test_setup_logging_replaces_handlers(tmp_path):
    setup_logging(log_file=tmp_path / "first.log", console=False)
    logger = setup_logging(file_output=False, console=True, level=logging.WARNING)

    assert len(logger.handlers) == 1
    assert isinstance(logger.handlers[0], logging.StreamHandler)
