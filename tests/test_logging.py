"""Tests for jirabranch.utils.logging module."""

import importlib
import logging
import os
from pathlib import Path
from unittest.mock import patch

import pytest

import jirabranch.utils.logging as logging_module


@pytest.fixture(autouse=True)
def reset_logger():
    """Reload the module with the default environment after each test."""
    yield
    with patch.dict(os.environ, {}, clear=False):
        os.environ.pop("JIRABRANCH_LOG", None)
        os.environ.pop("JIRABRANCH_LOG_FILE", None)
        logging_module._logger = None
        importlib.reload(logging_module)
        logging.getLogger("jirabranch").handlers.clear()


class TestLogging:
    """Tests for logging functionality."""

    def test_log_disabled_by_default(self):
        """Logging is disabled when JIRABRANCH_LOG is not set."""
        with patch.dict(os.environ, {}, clear=True):
            logging_module._logger = None
            importlib.reload(logging_module)

            assert logging_module.LOG_ENABLED is False

    def test_log_enabled_with_env_var(self):
        """Logging is enabled when JIRABRANCH_LOG=true."""
        with patch.dict(os.environ, {"JIRABRANCH_LOG": "TRUE"}):
            logging_module._logger = None
            importlib.reload(logging_module)

            assert logging_module.LOG_ENABLED is True

    def test_log_file_default_path(self):
        """Default log file is in home directory."""
        with patch.dict(os.environ, {}, clear=True):
            importlib.reload(logging_module)

            assert logging_module.LOG_FILE == Path.home() / ".jirabranch.log"

    def test_log_file_custom_path(self, tmp_path):
        """Custom log file path from environment."""
        custom_path = tmp_path / "custom.log"
        with patch.dict(os.environ, {"JIRABRANCH_LOG_FILE": str(custom_path)}):
            importlib.reload(logging_module)

            assert logging_module.LOG_FILE == custom_path

    def test_setup_logging_returns_named_logger(self):
        """setup_logging returns the 'jirabranch' logger."""
        logging_module._logger = None
        logger = logging_module.setup_logging()

        assert logger.name == "jirabranch"

    def test_get_logger_returns_same_instance(self):
        """get_logger returns the same logger instance."""
        logging_module._logger = None

        assert logging_module.get_logger() is logging_module.get_logger()

    def test_disabled_logging_uses_null_handler(self):
        """With logging disabled nothing is written anywhere."""
        with patch.dict(os.environ, {"JIRABRANCH_LOG": "false"}):
            importlib.reload(logging_module)
            logging_module._logger = None
            logger = logging_module.setup_logging()

            assert any(isinstance(h, logging.NullHandler) for h in logger.handlers)

    def test_messages_written_when_enabled(self, tmp_path):
        """log_message and log_command write to the log file."""
        log_file = tmp_path / "logs" / "jirabranch.log"
        env = {"JIRABRANCH_LOG": "true", "JIRABRANCH_LOG_FILE": str(log_file)}
        with patch.dict(os.environ, env):
            importlib.reload(logging_module)
            logging_module._logger = None

            logging_module.log_message("hello from test")
            logging_module.log_command("git checkout -b x", 128)
            for handler in logging_module.get_logger().handlers:
                handler.flush()

            content = log_file.read_text()
            assert "hello from test" in content
            assert "COMMAND: git checkout -b x | EXIT_CODE: 128" in content

    def test_secrets_redacted_in_log_file(self, tmp_path):
        """Credentials are scrubbed by the logger, not by the caller."""
        log_file = tmp_path / "jirabranch.log"
        env = {"JIRABRANCH_LOG": "true", "JIRABRANCH_LOG_FILE": str(log_file)}
        with patch.dict(os.environ, env):
            importlib.reload(logging_module)
            logging_module._logger = None

            logging_module.register_secret("tok-abcdef-123456")
            logging_module.log_message('Configuration saved: JIRA_API_TOKEN="s3cr3t value"')
            logging_module.log_message("Token in passing: tok-abcdef-123456")
            logging_module.log_message("Configuration saved: BRANCH_PREFIX=fy25/01")
            for handler in logging_module.get_logger().handlers:
                handler.flush()

            content = log_file.read_text()
            assert "s3cr3t" not in content
            assert "tok-abcdef-123456" not in content
            assert "JIRA_API_TOKEN=<REDACTED>" in content
            assert "Token in passing: <REDACTED>" in content
            assert "BRANCH_PREFIX=fy25/01" in content


class TestSecretRedactingFilter:
    """Tests for SecretRedactingFilter."""

    @pytest.fixture
    def redactor(self):
        return logging_module.SecretRedactingFilter()

    @pytest.mark.parametrize(
        "text,expected",
        [
            ("JIRA_API_TOKEN=abc", "JIRA_API_TOKEN=<REDACTED>"),
            ("jira_api_token='a b'", "jira_api_token=<REDACTED>"),
            ('DB_PASSWORD="x \\" y" rest', "DB_PASSWORD=<REDACTED> rest"),
            ("JIRA_EMAIL=dev@example.com", "JIRA_EMAIL=dev@example.com"),
            ("no assignments here", "no assignments here"),
        ],
    )
    def test_sensitive_assignments(self, redactor, text, expected):
        assert redactor.redact(text) == expected

    def test_registered_values(self, redactor):
        redactor.add_secret("  abcd1234  ")

        assert redactor.redact("url?x=1 abcd1234 end") == "url?x=1 <REDACTED> end"

    def test_short_values_not_registered(self, redactor):
        redactor.add_secret("ab")

        assert redactor.redact("about") == "about"

    def test_filter_formats_args(self, redactor):
        record = logging.LogRecord("jirabranch", logging.INFO, __file__, 1, "%s=%s", ("SECRET", "v"), None)

        assert redactor.filter(record) is True
        assert record.getMessage() == "SECRET=<REDACTED>"
