"""Utility modules for JIRABRANCH.

This package contains:
- console: Rich-based terminal output utilities
- env_utils: Sensitive configuration value helpers
- errors: Custom exceptions and exit codes
- logging: Logging configuration and secret redaction
"""

from jirabranch.utils.console import (
    console,
    print_error,
    print_field,
    print_header,
    print_info,
    print_step,
    print_success,
    print_warning,
)
from jirabranch.utils.env_utils import SENSITIVE_KEY_PATTERNS, mask_value
from jirabranch.utils.errors import (
    BranchAlreadyExistsError,
    BranchCreationError,
    ExitCode,
    GitOperationError,
    InvalidTicketFormatError,
    JiraBranchError,
    NotAGitRepositoryError,
    UserCancelledError,
)
from jirabranch.utils.logging import log_command, log_message, register_secret, setup_logging

__all__ = [
    # Console
    "console",
    "print_error",
    "print_success",
    "print_warning",
    "print_info",
    "print_header",
    "print_step",
    "print_field",
    # Env Utils
    "SENSITIVE_KEY_PATTERNS",
    "mask_value",
    # Errors
    "ExitCode",
    "JiraBranchError",
    "InvalidTicketFormatError",
    "UserCancelledError",
    "GitOperationError",
    "NotAGitRepositoryError",
    "BranchAlreadyExistsError",
    "BranchCreationError",
    # Logging
    "setup_logging",
    "log_message",
    "log_command",
    "register_secret",
]
