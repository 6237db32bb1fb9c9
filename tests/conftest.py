"""Shared pytest fixtures for JIRABRANCH tests."""

from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from jirabranch.config.settings import Settings

CONFIG_ENV_KEYS = Settings.get_config_keys()


@pytest.fixture(autouse=True)
def clean_config_env(monkeypatch):
    """Keep the developer's own JIRA_* environment out of the tests."""
    for key in CONFIG_ENV_KEYS:
        monkeypatch.delenv(key, raising=False)


@pytest.fixture
def temp_config_file(tmp_path: Path) -> Path:
    """Create a temporary config file with sample values."""
    config_file = tmp_path / ".jirabranch-config"
    config_file.write_text(
        """# JIRABRANCH Configuration
JIRA_BASE_URL="https://company.atlassian.net/"
JIRA_EMAIL="dev@example.com"
JIRA_API_TOKEN="secret-token-1234"
BRANCH_PREFIX="fy24/03"
JIRA_TIMEOUT_SECONDS="15"
"""
    )
    return config_file


@pytest.fixture
def empty_config_file(tmp_path: Path) -> Path:
    """Create an empty config file."""
    config_file = tmp_path / ".jirabranch-config"
    config_file.write_text("")
    return config_file


@pytest.fixture
def jira_settings() -> Settings:
    """Settings with complete Jira credentials."""
    return Settings(
        jira_base_url="https://company.atlassian.net",
        jira_email="dev@example.com",
        jira_api_token="secret-token-1234",
    )


@pytest.fixture
def mock_subprocess():
    """Mock subprocess.run for git commands."""
    with patch("subprocess.run") as mock:
        mock.return_value = MagicMock(
            returncode=0,
            stdout="",
            stderr="",
        )
        yield mock
