"""
Unit tests for the logging configuration.
"""

import logging

from httpcloud.logging_config import configure_logging, get_logging_config


class TestLoggingConfig:
    """Tests for get_logging_config() and configure_logging()."""

    def test_config_structure(self):
        """Test the dictConfig document."""
        config = get_logging_config()

        assert config["version"] == 1
        assert config["disable_existing_loggers"] is False
        assert config["loggers"]["httpcloud"]["level"] == "INFO"
        assert config["loggers"]["httpcloud.transport"]["level"] == "WARNING"

    def test_levels_configurable(self):
        """Test overriding provider and transport levels."""
        config = get_logging_config(level="DEBUG", transport_level="DEBUG")

        assert config["loggers"]["httpcloud"]["level"] == "DEBUG"
        assert config["loggers"]["httpcloud.transport"]["level"] == "DEBUG"

    def test_configure_logging_applies_levels(self):
        """Test that configure_logging sets the logger levels."""
        configure_logging(level="ERROR", transport_level="CRITICAL")

        assert logging.getLogger("httpcloud").level == logging.ERROR
        assert logging.getLogger("httpcloud.transport").level == logging.CRITICAL

        configure_logging()
