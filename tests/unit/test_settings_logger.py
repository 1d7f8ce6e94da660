"""
Unit tests for settings and logging configuration.
"""

import logging
import logging.handlers

from xer_schedule.config.settings import Settings, settings
from xer_schedule.utils.logger import configure_logging


class TestSettings:
    """Test configuration defaults and validation."""

    def test_defaults(self):
        assert settings.HOURS_PER_DAY == 8.0
        assert settings.NEAR_CRITICAL_THRESHOLD_HOURS == 40.0
        assert settings.XER_ENCODING == 'utf-8'

    def test_defaults_are_valid(self):
        assert Settings.validate_required_settings() == []

    def test_invalid_values_reported(self, monkeypatch):
        monkeypatch.setattr(Settings, 'HOURS_PER_DAY', 0.0)
        monkeypatch.setattr(Settings, 'NEAR_CRITICAL_THRESHOLD_HOURS', -1.0)
        problems = Settings.validate_required_settings()
        assert problems == [
            'HOURS_PER_DAY must be positive',
            'NEAR_CRITICAL_THRESHOLD_HOURS must not be negative',
        ]

    def test_log_dir(self, monkeypatch, tmp_path):
        monkeypatch.setattr(Settings, 'LOG_DIR', '')
        assert Settings.get_log_dir() is None
        monkeypatch.setattr(Settings, 'LOG_DIR', str(tmp_path))
        assert Settings.get_log_dir() == tmp_path


class TestConfigureLogging:
    """Test logger setup."""

    def test_handlers_attached_once(self, monkeypatch):
        monkeypatch.setattr(Settings, 'LOG_DIR', '')
        name = 'xer_schedule.tests.console_only'
        logger = configure_logging(name)
        configure_logging(name)
        assert len(logger.handlers) == 1
        logger.handlers.clear()

    def test_file_handler(self, monkeypatch, tmp_path):
        monkeypatch.setattr(Settings, 'LOG_DIR', str(tmp_path / 'logs'))
        name = 'xer_schedule.tests.with_file'
        logger = configure_logging(name)
        try:
            assert len(logger.handlers) == 2
            assert isinstance(logger.handlers[1], logging.handlers.RotatingFileHandler)
            assert (tmp_path / 'logs').is_dir()
        finally:
            for handler in logger.handlers:
                handler.close()
            logger.handlers.clear()
