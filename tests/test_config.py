"""Tests for package logging configuration."""

from __future__ import annotations

import logging

import pytest

from scenejsx.config import LOG_LEVEL_ENV, configure_logging


@pytest.fixture
def package_logger():
    logger = logging.getLogger("scenejsx")
    level, handlers = logger.level, list(logger.handlers)
    yield logger
    logger.setLevel(level)
    logger.handlers[:] = handlers


class TestConfigureLogging:
    def test_explicit_level(self, package_logger: logging.Logger):
        assert configure_logging("debug") is package_logger
        assert package_logger.level == logging.DEBUG

    def test_level_from_environment(self, package_logger, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv(LOG_LEVEL_ENV, "INFO")
        configure_logging()
        assert package_logger.level == logging.INFO

    def test_unknown_level_falls_back(self, package_logger):
        configure_logging("chatty")
        assert package_logger.level == logging.WARNING

    def test_single_handler(self, package_logger):
        package_logger.handlers[:] = []
        configure_logging(logging.INFO)
        configure_logging(logging.ERROR)
        assert len(package_logger.handlers) == 1
        assert package_logger.level == logging.ERROR
