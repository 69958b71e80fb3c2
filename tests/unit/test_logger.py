"""Unit tests for logger setup and level handling."""

import logging

import pytest

from src.utils import logger as logger_module
from src.utils.logger import configure_logging, get_logger, set_log_level


@pytest.fixture(autouse=True)
def restore_log_level(monkeypatch):
    """Keep level changes made here from leaking into other tests."""
    monkeypatch.setattr(logger_module, "_level_override", None)
    monkeypatch.delenv("LOG_LEVEL", raising=False)
    yield
    for name in logger_module._configured_loggers:
        set_log_level(logging.getLogger(name), "INFO")


class TestGetLogger:
    """Test logger creation."""

    def test_handlers_and_no_propagation(self, tmp_path):
        logger = get_logger("tests.logger.handlers", log_dir=tmp_path)

        assert len(logger.handlers) == 2
        assert logger.propagate is False
        assert (tmp_path / logger_module.LOG_FILE_NAME).exists()

    def test_configured_once(self, tmp_path):
        first = get_logger("tests.logger.once", log_dir=tmp_path)
        second = get_logger("tests.logger.once", log_dir=tmp_path, level="DEBUG")

        assert first is second
        assert len(second.handlers) == 2
        assert second.level == logging.INFO

    def test_level_from_env(self, tmp_path, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "warning")

        logger = get_logger("tests.logger.env", log_dir=tmp_path)

        assert logger.level == logging.WARNING


class TestConfigureLogging:
    """Test applying one level to all package loggers."""

    def test_existing_loggers_updated(self, tmp_path):
        scraper_logger = get_logger("tests.logger.scraper", log_dir=tmp_path)
        fetcher_logger = get_logger("tests.logger.fetcher", log_dir=tmp_path)

        configure_logging("error")

        for logger in (scraper_logger, fetcher_logger):
            assert logger.level == logging.ERROR
            assert all(handler.level == logging.ERROR for handler in logger.handlers)

    def test_later_loggers_follow(self, tmp_path):
        """Test loggers created after the call start at the configured level."""
        configure_logging("DEBUG")

        logger = get_logger("tests.logger.later", log_dir=tmp_path)

        assert logger.level == logging.DEBUG

    def test_explicit_level_wins(self, tmp_path):
        configure_logging("ERROR")

        logger = get_logger("tests.logger.explicit", log_dir=tmp_path, level="DEBUG")

        assert logger.level == logging.DEBUG

    def test_package_loggers_reached(self):
        """Test the scraper modules' loggers pick up the level."""
        from src.scraper import clinic_scraper, fetcher

        configure_logging("WARNING")

        assert clinic_scraper.logger.level == logging.WARNING
        assert fetcher.logger.level == logging.WARNING
