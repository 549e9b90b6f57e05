############################################################
#
# drfsorter - Dominant Resource Fairness Client Sorter
#
# test_settings.py: Unit tests for settings and logging setup
#
# Luke Sheneman
# Research Computing and Data Services (RCDS)
# Institute for Interdisciplinary Data Sciences (IIDS)
# University of Idaho
# sheneman@uidaho.edu
#
############################################################

"""Unit tests for Settings and setup_logging()."""

import logging
from unittest.mock import patch

import pytest
import structlog
from pydantic import ValidationError

from drfsorter.logging_config import get_logger, setup_logging
from drfsorter.settings import Settings


class TestSettings:
    """Tests for environment-driven settings."""

    def test_defaults(self):
        """Test default values."""
        settings = Settings(_env_file=None)

        assert settings.app_name == "drfsorter"
        assert settings.sorter_default_weight == 1.0
        assert settings.sorter_log_order is False
        assert settings.log_format == "json"

    def test_env_prefix(self, monkeypatch):
        """Test loading settings from prefixed environment variables."""
        monkeypatch.setenv("DRFSORTER_SORTER_DEFAULT_WEIGHT", "2.5")
        monkeypatch.setenv("DRFSORTER_LOG_FORMAT", "CONSOLE")

        settings = Settings(_env_file=None)

        assert settings.sorter_default_weight == 2.5
        assert settings.log_format == "console"

    @pytest.mark.parametrize("weight", [0, -1, float("nan"), float("inf")])
    def test_default_weight_must_be_positive(self, weight):
        """Test that the default weight must be finite and positive."""
        with pytest.raises(ValidationError):
            Settings(_env_file=None, sorter_default_weight=weight)

    def test_unknown_log_format_rejected(self):
        """Test that unknown log formats are rejected."""
        with pytest.raises(ValidationError):
            Settings(_env_file=None, log_format="xml")


class TestSetupLogging:
    """Tests for structlog wiring."""

    @pytest.fixture
    def root_logger(self):
        """Root logger whose handlers and level are restored afterwards."""
        root = logging.getLogger()
        with patch.object(root, "handlers", []), patch.object(root, "level", root.level):
            yield root
            for handler in root.handlers:
                handler.close()
        structlog.reset_defaults()

    def test_console_and_file_handlers(self, mock_settings, root_logger, tmp_path):
        """Test console and file handler setup."""
        log_file = tmp_path / "sorter.log"
        mock_settings.log_file = str(log_file)
        mock_settings.log_format = "json"

        with patch("drfsorter.logging_config.get_settings", return_value=mock_settings):
            setup_logging()

        assert root_logger.level == logging.DEBUG
        assert len(root_logger.handlers) == 2
        assert isinstance(root_logger.handlers[1], logging.FileHandler)

        get_logger("drfsorter.test").info("client_added", client="fw-1")
        for handler in root_logger.handlers:
            handler.flush()

        assert '"client": "fw-1"' in log_file.read_text()

    def test_console_only(self, mock_settings, root_logger):
        """Test console-only handler setup."""
        with patch("drfsorter.logging_config.get_settings", return_value=mock_settings):
            setup_logging()

        assert len(root_logger.handlers) == 1
