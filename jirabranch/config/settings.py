"""Settings dataclass for JIRABRANCH configuration.

This module defines the Settings dataclass that holds all configuration
values and the mapping between config-file keys and attribute names.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from jirabranch.naming import DEFAULT_BRANCH_PREFIX

# Jira Cloud stores the sprint list in this custom field by default
DEFAULT_SPRINT_FIELD = "customfield_10020"

ON_EXISTS_CHOICES = ("prompt", "reuse", "abort")


@dataclass
class Settings:
    """Configuration settings for JIRABRANCH.

    All settings have sensible defaults and can be loaded from
    the configuration file (~/.jirabranch-config).

    Attributes:
        jira_base_url: Jira instance URL (e.g. https://company.atlassian.net)
        jira_email: Account email used for Basic authentication
        jira_api_token: Jira API token
        branch_prefix: "<fiscal-year>/<sprint>" fallback for branch names
        jira_sprint_field: Custom field id holding the ticket's sprints
        jira_timeout_seconds: HTTP timeout for Jira requests
        on_exists: What to do when the branch exists (prompt, reuse, abort)
    """

    # Jira settings
    jira_base_url: str = ""
    jira_email: str = ""
    jira_api_token: str = ""
    jira_sprint_field: str = DEFAULT_SPRINT_FIELD
    jira_timeout_seconds: int = 30

    # Branch settings
    branch_prefix: str = DEFAULT_BRANCH_PREFIX
    on_exists: str = "prompt"

    # Config key to attribute mapping
    _key_mapping: dict[str, str] = field(
        default_factory=lambda: {
            "JIRA_BASE_URL": "jira_base_url",
            "JIRA_EMAIL": "jira_email",
            "JIRA_API_TOKEN": "jira_api_token",
            "JIRA_SPRINT_FIELD": "jira_sprint_field",
            "JIRA_TIMEOUT_SECONDS": "jira_timeout_seconds",
            "BRANCH_PREFIX": "branch_prefix",
            "ON_EXISTS": "on_exists",
        },
        repr=False,
    )

    def get_attribute_for_key(self, key: str) -> str | None:
        """Get the attribute name for a config key."""
        return self._key_mapping.get(key)

    @classmethod
    def get_config_keys(cls) -> list[str]:
        """Get list of all valid configuration keys."""
        temp = cls()
        return list(temp._key_mapping.keys())


# Default configuration file path
CONFIG_FILE = Path.home() / ".jirabranch-config"


__all__ = [
    "Settings",
    "CONFIG_FILE",
    "DEFAULT_SPRINT_FIELD",
    "ON_EXISTS_CHOICES",
]
