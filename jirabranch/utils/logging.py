"""Opt-in file logging for JIRABRANCH.

Nothing is written unless JIRABRANCH_LOG is "true". Every record passes
through SecretRedactingFilter on the "jirabranch" logger before a handler
sees it, so credentials stay out of the log file no matter how a call
site phrases its message.

Environment Variables:
    JIRABRANCH_LOG: Set to "true" to enable logging (default: "false")
    JIRABRANCH_LOG_FILE: Path to log file (default: ~/.jirabranch.log)
"""

import logging
import os
import re
from pathlib import Path

from jirabranch.utils.env_utils import SENSITIVE_KEY_PATTERNS

LOGGER_NAME = "jirabranch"
REDACTED = "<REDACTED>"

LOG_ENABLED = os.environ.get("JIRABRANCH_LOG", "false").lower() == "true"
LOG_FILE = Path(os.environ.get("JIRABRANCH_LOG_FILE", str(Path.home() / ".jirabranch.log")))

# Shorter values would redact ordinary words
MIN_SECRET_LENGTH = 4

# NAME=value where NAME mentions a credential; the value may be quoted
_PATTERN_SENSITIVE_ASSIGNMENT = re.compile(
    r"\b(\w*(?:{})\w*)=(\"(?:\\.|[^\"\\])*\"|'[^']*'|\S+)".format("|".join(SENSITIVE_KEY_PATTERNS)),
    re.IGNORECASE,
)


class SecretRedactingFilter(logging.Filter):
    """Rewrites log records so credentials never reach a handler.

    Two things are redacted: the value of any NAME=value pair whose name
    looks sensitive, and every occurrence of a value registered through
    add_secret (the Jira API token once configuration is loaded).
    """

    def __init__(self) -> None:
        super().__init__()
        self._secrets: set[str] = set()

    def add_secret(self, value: str) -> None:
        value = value.strip()
        if len(value) >= MIN_SECRET_LENGTH:
            self._secrets.add(value)

    def redact(self, text: str) -> str:
        text = _PATTERN_SENSITIVE_ASSIGNMENT.sub(lambda m: f"{m.group(1)}={REDACTED}", text)
        # Longest first so a secret containing another is fully replaced
        for secret in sorted(self._secrets, key=len, reverse=True):
            text = text.replace(secret, REDACTED)
        return text

    def filter(self, record: logging.LogRecord) -> bool:
        record.msg = self.redact(record.getMessage())
        record.args = None
        return True


_redactor = SecretRedactingFilter()
_logger: logging.Logger | None = None


def _build_handler() -> logging.Handler:
    if not LOG_ENABLED:
        return logging.NullHandler()

    LOG_FILE.parent.mkdir(parents=True, exist_ok=True)
    handler = logging.FileHandler(LOG_FILE)
    handler.setFormatter(logging.Formatter("[%(asctime)s] %(message)s", datefmt="%Y-%m-%d %H:%M:%S"))
    return handler


def setup_logging() -> logging.Logger:
    """Configure the jirabranch logger once per process.

    Returns:
        The configured logger; later calls return the same instance
    """
    global _logger

    if _logger is not None:
        return _logger

    logger = logging.getLogger(LOGGER_NAME)
    logger.handlers.clear()
    logger.filters.clear()
    logger.addFilter(_redactor)
    logger.addHandler(_build_handler())
    if LOG_ENABLED:
        logger.setLevel(logging.INFO)

    _logger = logger
    return logger


def get_logger() -> logging.Logger:
    """Get the configured logger instance, creating it if necessary."""
    return _logger if _logger is not None else setup_logging()


def register_secret(value: str) -> None:
    """Redact value from every later log record."""
    _redactor.add_secret(value)


def log_message(message: str) -> None:
    """Log a message (written only when JIRABRANCH_LOG=true)."""
    get_logger().info(message)


def log_command(command: str, exit_code: int = 0) -> None:
    """Record a git invocation and its exit code."""
    get_logger().info(f"COMMAND: {command} | EXIT_CODE: {exit_code}")


__all__ = [
    "LOG_ENABLED",
    "LOG_FILE",
    "REDACTED",
    "SecretRedactingFilter",
    "setup_logging",
    "get_logger",
    "register_secret",
    "log_message",
    "log_command",
]
