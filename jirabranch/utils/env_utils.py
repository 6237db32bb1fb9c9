"""Helpers for handling sensitive configuration values.

Keys that look like credentials are redacted from the log file, and the
API token is masked when configuration is displayed.
"""

from __future__ import annotations

# Keys containing these substrings are considered sensitive and should not be logged
SENSITIVE_KEY_PATTERNS = ("TOKEN", "KEY", "SECRET", "PASSWORD", "CREDENTIAL")


def mask_value(value: str, visible: int = 4) -> str:
    """Mask a secret, keeping only its last few characters.

    Short values are fully masked so nothing useful leaks.
    """
    if not value:
        return ""
    if len(value) <= visible * 2:
        return "*" * len(value)
    return "*" * (len(value) - visible) + value[-visible:]


__all__ = [
    "SENSITIVE_KEY_PATTERNS",
    "mask_value",
]
