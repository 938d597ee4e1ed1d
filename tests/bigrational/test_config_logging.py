"""Tests for settings and logging setup."""

import json
import logging

import pytest
from pydantic import ValidationError

from bigrational.config import Settings, get_settings
from bigrational.fraction import Fraction
from bigrational.logging import (
    LIBRARY_LOGGER,
    StructuredFormatter,
    TextFormatter,
    get_logger,
    setup_logging,
)
from bigrational.roots import sqrt


@pytest.fixture
def library_logger():
    """Restore the library logger after a test installs handlers."""
    logger = logging.getLogger(LIBRARY_LOGGER)
    yield logger
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)


class TestSettings:
    """Test environment-driven settings."""

    def test_defaults(self, monkeypatch):
        """Test the default values."""
        for key in ["ROOT_PRECISION", "ROOT_MAX_ITERATIONS", "FLOAT_CONVERSION", "LOG_LEVEL", "LOG_FORMAT"]:
            monkeypatch.delenv(f"BIGRATIONAL_{key}", raising=False)
        settings = Settings()
        assert settings.ROOT_PRECISION == 30
        assert settings.ROOT_MAX_ITERATIONS == 20_000
        assert settings.FLOAT_CONVERSION == "heuristic"
        assert settings.CONTINUED_FRACTION_MAX_DENOMINATOR == 10**8
        assert settings.LOG_LEVEL == "WARNING"
        assert settings.LOG_FORMAT == "text"

    def test_environment_override(self, settings_env):
        """Test that prefixed environment variables override defaults."""
        settings = settings_env(ROOT_PRECISION=12, FLOAT_CONVERSION="continued_fraction")
        assert settings.ROOT_PRECISION == 12
        assert settings.FLOAT_CONVERSION == "continued_fraction"

    def test_cached(self):
        """Test that get_settings returns one cached instance."""
        assert get_settings() is get_settings()

    def test_invalid_values(self):
        """Test validation of out-of-range and unknown values."""
        with pytest.raises(ValidationError):
            Settings(ROOT_PRECISION=-1)
        with pytest.raises(ValidationError):
            Settings(ROOT_MAX_ITERATIONS=0)
        with pytest.raises(ValidationError):
            Settings(FLOAT_CONVERSION="rounding")


class TestLogging:
    """Test logger setup and formatters."""

    def test_get_logger(self):
        """Test that module loggers sit under the library logger."""
        logger = get_logger("bigrational.roots")
        assert logger.name == "bigrational.roots"
        assert logger.name.startswith(LIBRARY_LOGGER + ".")

    def test_setup_logging_text(self, library_logger, capsys):
        """Test the text handler at an explicit level."""
        logger = setup_logging(level="info", fmt="text")
        assert logger is library_logger
        assert logger.level == logging.INFO
        assert len(logger.handlers) == 1
        assert isinstance(logger.handlers[0].formatter, TextFormatter)

        get_logger("bigrational.test").info("hello")
        assert "bigrational.test - INFO - hello" in capsys.readouterr().out

    def test_setup_logging_json(self, library_logger, capsys):
        """Test the JSON handler merges extra data."""
        setup_logging(level="DEBUG", fmt="json")
        get_logger("bigrational.test").warning("capped", extra={"extra_data": {"iterations": 3}})

        record = json.loads(capsys.readouterr().out.strip())
        assert record["level"] == "WARNING"
        assert record["logger"] == "bigrational.test"
        assert record["message"] == "capped"
        assert record["iterations"] == 3

    def test_setup_logging_from_settings(self, library_logger, settings_env):
        """Test that level and format default to settings."""
        settings_env(LOG_LEVEL="ERROR", LOG_FORMAT="json")
        logger = setup_logging()
        assert logger.level == logging.ERROR
        assert isinstance(logger.handlers[0].formatter, StructuredFormatter)

    def test_setup_logging_replaces_handlers(self, library_logger):
        """Test that repeated setup does not stack handlers."""
        setup_logging()
        setup_logging()
        assert len(library_logger.handlers) == 1

    def test_root_logger_untouched(self, library_logger):
        """Test that setup never configures the root logger."""
        before = list(logging.getLogger().handlers)
        setup_logging()
        assert logging.getLogger().handlers == before

    def test_json_carries_root_details(self, library_logger, capsys):
        """Test that bisection details appear as JSON fields."""
        setup_logging(level="WARNING", fmt="json")
        sqrt(Fraction(2), precision=30, max_iterations=4)

        record = json.loads(capsys.readouterr().out.strip())
        assert record["level"] == "WARNING"
        assert record["logger"] == "bigrational.roots"
        assert record["root"] == 2
        assert record["precision"] == 30
        assert record["iterations"] == 4
        assert record["start"] == 1
