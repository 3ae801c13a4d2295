"""
Unit tests for settings and logging configuration.
"""

import io
import json

import structlog

from email_sorter.config import Settings
from email_sorter.logging_config import get_logger, setup_logging


class TestSettings:
    """Test environment-driven settings."""

    def test_defaults(self, monkeypatch):
        """Test defaults when nothing is set."""
        for name in ("LOG_LEVEL", "LOG_JSON", "RULES_FILE", "BATCH_WORKERS"):
            monkeypatch.delenv(name, raising=False)

        settings = Settings(_env_file=None)

        assert settings.log_level == "INFO"
        assert settings.log_json is False
        assert settings.rules_file is None
        assert settings.batch_workers == 1

    def test_environment_overrides(self, monkeypatch):
        """Test values are read from environment variables."""
        monkeypatch.setenv("LOG_LEVEL", "debug")
        monkeypatch.setenv("LOG_JSON", "true")
        monkeypatch.setenv("RULES_FILE", "/etc/email-sorter/rules.json")
        monkeypatch.setenv("BATCH_WORKERS", "4")

        settings = Settings(_env_file=None)

        assert settings.log_level == "debug"
        assert settings.log_json is True
        assert settings.rules_file == "/etc/email-sorter/rules.json"
        assert settings.batch_workers == 4

    def test_env_file(self, tmp_path, monkeypatch):
        """Test values are read from an env file."""
        monkeypatch.delenv("BATCH_WORKERS", raising=False)
        env_file = tmp_path / ".env"
        env_file.write_text("BATCH_WORKERS=3\nUNRELATED=ignored\n")

        settings = Settings(_env_file=str(env_file))

        assert settings.batch_workers == 3


class TestLogging:
    """Test structlog setup."""

    def test_json_output(self):
        """Test JSON renderer writes one object per event."""
        stream = io.StringIO()
        setup_logging(level="INFO", json_output=True, stream=stream)

        get_logger("test").info("rule_set_loaded", rules_count=3)

        event = json.loads(stream.getvalue().strip())
        assert event["event"] == "rule_set_loaded"
        assert event["rules_count"] == 3
        assert event["level"] == "info"
        assert "timestamp" in event

    def test_level_filtering(self):
        """Test events below the configured level are dropped."""
        stream = io.StringIO()
        setup_logging(level="WARNING", json_output=True, stream=stream)

        logger = structlog.get_logger("test")
        logger.info("not_shown")
        logger.warning("shown")

        output = stream.getvalue()
        assert "not_shown" not in output
        assert "shown" in output

    def test_console_output(self):
        """Test console renderer is used when JSON is off."""
        stream = io.StringIO()
        setup_logging(level="DEBUG", json_output=False, stream=stream)

        get_logger("test").debug("record_scored", record_id="rec-1")

        output = stream.getvalue()
        assert "record_scored" in output
        assert "rec-1" in output
