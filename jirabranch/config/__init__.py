"""Configuration management for JIRABRANCH.

This package contains:
- settings: Settings dataclass with all configuration options
- manager: ConfigManager class for loading/saving configuration
"""

from jirabranch.config.manager import ConfigManager
from jirabranch.config.settings import (
    CONFIG_FILE,
    DEFAULT_SPRINT_FIELD,
    ON_EXISTS_CHOICES,
    Settings,
)

__all__ = [
    "Settings",
    "CONFIG_FILE",
    "DEFAULT_SPRINT_FIELD",
    "ON_EXISTS_CHOICES",
    "ConfigManager",
]
