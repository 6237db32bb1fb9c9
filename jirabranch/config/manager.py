"""Configuration loading and saving for JIRABRANCH.

Values cascade from four places, highest priority first:

    1. Environment variables
    2. Local .jirabranch (CWD upward, stopping at the repository root)
    3. Global ~/.jirabranch-config
    4. Built-in defaults

A repository can pin its own BRANCH_PREFIX or ON_EXISTS while the Jira
credentials stay in the user's global file. Only the global file is ever
written, and only by the interactive Jira setup.

Files hold KEY=VALUE or KEY="VALUE" lines. Nothing is evaluated.
"""

from __future__ import annotations

import os
import re
import tempfile
from dataclasses import fields
from pathlib import Path

from jirabranch.config.settings import CONFIG_FILE, Settings
from jirabranch.utils.console import console, print_field, print_header, print_info
from jirabranch.utils.env_utils import mask_value
from jirabranch.utils.logging import log_message, register_secret

_PATTERN_ASSIGNMENT = re.compile(r"^([A-Za-z_][A-Za-z0-9_]*)=(.*)$")
_PATTERN_KEY = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")
_PATTERN_QUOTED_ESCAPE = re.compile(r'\\(["\\])')

SOURCE_DEFAULT = "default"
SOURCE_GLOBAL = "global"
SOURCE_ENVIRONMENT = "environment"


def _quote(value: str) -> str:
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def _unquote(value: str) -> str:
    if len(value) >= 2 and value[0] == value[-1] == '"':
        return _PATTERN_QUOTED_ESCAPE.sub(r"\1", value[1:-1])
    if len(value) >= 2 and value[0] == value[-1] == "'":
        return value[1:-1]
    return value


def read_config_file(path: Path) -> dict[str, str]:
    """Parse a config file into a key/value dict.

    Comments, blank lines and lines that are not assignments are skipped.
    Double-quoted values are unescaped; single-quoted values are literal.
    A missing file reads as empty.
    """
    if not path.is_file():
        return {}

    values: dict[str, str] = {}
    for line in path.read_text().splitlines():
        match = _PATTERN_ASSIGNMENT.match(line.strip())
        if match:
            values[match.group(1)] = _unquote(match.group(2))
    return values


def _write_private(path: Path, lines: list[str]) -> None:
    """Replace path atomically with a file only the owner can read."""
    path.parent.mkdir(parents=True, exist_ok=True)

    # Same directory, so the final rename cannot cross filesystems
    fd, temp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}-")
    temp_path = Path(temp_name)
    try:
        with os.fdopen(fd, "w") as f:
            f.writelines(f"{line}\n" for line in lines)
        temp_path.chmod(0o600)
        temp_path.replace(path)
    except Exception:
        temp_path.unlink(missing_ok=True)
        raise


class ConfigManager:
    """Loads the effective Settings and remembers where each value came from.

    Attributes:
        settings: Effective settings after the last load()
        global_config_path: Path to the global config file
        local_config_path: Local .jirabranch found by the last load(), if any
    """

    LOCAL_CONFIG_NAME = ".jirabranch"

    def __init__(self, global_config_path: Path | None = None) -> None:
        self.global_config_path = global_config_path or CONFIG_FILE
        self.local_config_path: Path | None = None
        self.settings = Settings()
        self._sources: dict[str, str] = {}

    def load(self) -> Settings:
        """Rebuild settings from defaults and every configuration source.

        Returns:
            The new Settings instance (also stored on self.settings)
        """
        self.local_config_path = self._find_local_config()

        layers: list[tuple[str, dict[str, str]]] = [
            (SOURCE_GLOBAL, read_config_file(self.global_config_path)),
        ]
        if self.local_config_path is not None:
            layers.append(
                (f"local ({self.local_config_path})", read_config_file(self.local_config_path))
            )
        layers.append((SOURCE_ENVIRONMENT, self._environment_values()))

        self.settings = Settings()
        self._sources = {}
        for source, values in layers:
            for key, value in values.items():
                if self._apply(key, value):
                    self._sources[key] = source

        register_secret(self.settings.jira_api_token)
        log_message(
            f"Configuration loaded (global={self.global_config_path}, "
            f"local={self.local_config_path or 'none'}, keys={len(self._sources)})"
        )
        return self.settings

    def _find_local_config(self) -> Path | None:
        cwd = Path.cwd()
        for directory in (cwd, *cwd.parents):
            candidate = directory / self.LOCAL_CONFIG_NAME
            if candidate.is_file():
                return candidate
            if (directory / ".git").exists():
                return None
        return None

    @staticmethod
    def _environment_values() -> dict[str, str]:
        # Only known keys, so unrelated variables never leak in
        return {key: os.environ[key] for key in Settings.get_config_keys() if key in os.environ}

    def _apply(self, key: str, value: str) -> bool:
        """Set the attribute for key; False for unknown keys or unusable values."""
        attr = self.settings.get_attribute_for_key(key)
        if attr is None:
            return False

        field_type = next(f.type for f in fields(Settings) if f.name == attr)
        if field_type in (int, "int"):
            try:
                setattr(self.settings, attr, int(value))
            except ValueError:
                log_message(f"Ignoring non-integer value for {key}: {value!r}")
                return False
        else:
            setattr(self.settings, attr, value.strip())
        return True

    def save(self, key: str, value: str) -> str | None:
        """Write key to the global config file and reload.

        An existing assignment of key is replaced in place; comments and
        other lines are kept as they are.

        Returns:
            A warning when a higher-priority source still overrides the
            saved value, None otherwise.

        Raises:
            ValueError: If key is not a valid config key name
        """
        if not _PATTERN_KEY.fullmatch(key):
            raise ValueError(f"Invalid config key: {key}")

        path = self.global_config_path
        new_line = f"{key}={_quote(value)}"
        lines = path.read_text().splitlines() if path.is_file() else []

        replaced = False
        for index, line in enumerate(lines):
            match = _PATTERN_ASSIGNMENT.match(line.strip())
            if match and match.group(1) == key:
                lines[index] = new_line
                replaced = True
        if not replaced:
            lines.append(new_line)

        _write_private(path, lines)
        # The logger redacts sensitive keys
        log_message(f"Configuration saved to {path}: {new_line}")

        self.load()
        source = self.get_config_source(key)
        if source == SOURCE_ENVIRONMENT:
            return f"Warning: '{key}' saved to global config but is overridden by environment variable"
        if source.startswith("local"):
            return (
                f"Warning: '{key}' saved to global config but is overridden "
                f"by local config at {self.local_config_path}"
            )
        return None

    def get_config_source(self, key: str) -> str:
        """Where the effective value of key came from ("default" if unset)."""
        return self._sources.get(key, SOURCE_DEFAULT)

    def show(self) -> None:
        """Print the effective configuration with the API token masked."""
        s = self.settings
        print_header("Current Configuration")

        print_info(f"Global config: {self.global_config_path}")
        print_info(f"Local config:  {self.local_config_path or '(not found)'}")
        console.print()

        def field(label: str, key: str, value: object) -> None:
            print_field(label, value, note=self.get_config_source(key), indent=4)

        console.print("  [bold]Jira:[/bold]")
        field("Base URL", "JIRA_BASE_URL", s.jira_base_url or "(not set)")
        field("Email", "JIRA_EMAIL", s.jira_email or "(not set)")
        field("API Token", "JIRA_API_TOKEN", mask_value(s.jira_api_token) or "(not set)")
        field("Sprint Field", "JIRA_SPRINT_FIELD", s.jira_sprint_field)
        field("Timeout", "JIRA_TIMEOUT_SECONDS", f"{s.jira_timeout_seconds}s")
        console.print()

        console.print("  [bold]Branches:[/bold]")
        field("Branch Prefix", "BRANCH_PREFIX", s.branch_prefix)
        field("When Branch Exists", "ON_EXISTS", s.on_exists)
        console.print()


__all__ = [
    "ConfigManager",
    "read_config_file",
]
