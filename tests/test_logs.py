"""
Tests for logging setup.
"""

import sys
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

import logging
from unittest.mock import patch

from nearsky.config import Config
from nearsky.logs import DEFAULT_FORMAT, setup_logging


class TestSetupLogging:
    """Tests for setup_logging."""

    @patch("nearsky.logs.logging.basicConfig")
    def test_uses_config_level(self, mock_basic):
        config = Config()
        config.set("logging.level", "warning")

        setup_logging(config)

        _, kwargs = mock_basic.call_args
        assert kwargs["level"] == logging.WARNING
        assert kwargs["format"] == DEFAULT_FORMAT

    @patch("nearsky.logs.logging.basicConfig")
    def test_override_level(self, mock_basic):
        setup_logging(Config(), level="DEBUG")

        assert mock_basic.call_args[1]["level"] == logging.DEBUG

    @patch("nearsky.logs.logging.basicConfig")
    def test_unknown_level_falls_back_to_info(self, mock_basic):
        config = Config()
        config.set("logging.level", "chatty")

        setup_logging(config)

        assert mock_basic.call_args[1]["level"] == logging.INFO
