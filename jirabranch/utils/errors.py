"""Custom exceptions and exit codes for JIRABRANCH.

This module defines the exit codes and exception hierarchy used throughout
the application. Every failure the CLI can report maps to one exception
type, and every exception type carries the exit code the process ends with.
"""

from enum import IntEnum
from typing import ClassVar


class ExitCode(IntEnum):
    """Process exit codes.

    These codes are used for consistent error reporting and can be
    checked by calling scripts or CI systems.
    """

    SUCCESS = 0
    GENERAL_ERROR = 1
    TRACKER_NOT_CONFIGURED = 3
    USER_CANCELLED = 4
    GIT_ERROR = 5
    TICKET_NOT_FOUND = 6


class JiraBranchError(Exception):
    """Base exception for JIRABRANCH errors.

    All custom exceptions in this application should inherit from this class.
    Each exception type has an associated exit code for proper error reporting.
    """

    _default_exit_code: ClassVar[ExitCode] = ExitCode.GENERAL_ERROR

    def __init__(self, message: str, exit_code: ExitCode | None = None) -> None:
        """Initialize the exception."""
        super().__init__(message)
        self._exit_code = exit_code

    @property
    def exit_code(self) -> ExitCode:
        """Get the exit code for this exception."""
        if self._exit_code is not None:
            return self._exit_code
        return self.__class__._default_exit_code


class InvalidTicketFormatError(JiraBranchError):
    """Ticket reference does not match PROJECT-123.

    Raised before any network call is attempted. Interactive callers
    re-prompt instead of raising.
    """

    def __init__(self, ticket: str, exit_code: ExitCode | None = None) -> None:
        self.ticket = ticket
        super().__init__(
            f"Invalid Jira ticket format: '{ticket}'. Please use the format PROJECT-123.",
            exit_code,
        )


class UserCancelledError(JiraBranchError):
    """User cancelled the operation.

    Raised when:
    - User presses Ctrl+C
    - User dismisses a prompt
    - User declines a required confirmation
    """

    _default_exit_code: ClassVar[ExitCode] = ExitCode.USER_CANCELLED


class GitOperationError(JiraBranchError):
    """Git operation failed.

    Base class for every failure reported by the repository branch manager.
    """

    _default_exit_code: ClassVar[ExitCode] = ExitCode.GIT_ERROR


class NotAGitRepositoryError(GitOperationError):
    """Target directory is not inside a git work tree."""

    def __init__(self, path: str, exit_code: ExitCode | None = None) -> None:
        self.path = path
        super().__init__(f"{path} is not a Git repository", exit_code)


class BranchAlreadyExistsError(GitOperationError):
    """Branch exists and the caller did not choose to check it out.

    Recoverable: the caller may retry with the reuse policy.
    """

    def __init__(self, branch_name: str, exit_code: ExitCode | None = None) -> None:
        self.branch_name = branch_name
        super().__init__(f'Branch "{branch_name}" already exists', exit_code)


class BranchCreationError(GitOperationError):
    """A git checkout or branch creation command failed.

    Attributes:
        branch_name: Branch the command was operating on
        stderr: Output git wrote to stderr, if any
    """

    def __init__(
        self,
        branch_name: str,
        stderr: str = "",
        exit_code: ExitCode | None = None,
    ) -> None:
        self.branch_name = branch_name
        self.stderr = stderr
        detail = stderr.strip() or "unknown error"
        super().__init__(f"Failed to create branch: {detail}", exit_code)


__all__ = [
    "ExitCode",
    "JiraBranchError",
    "InvalidTicketFormatError",
    "UserCancelledError",
    "GitOperationError",
    "NotAGitRepositoryError",
    "BranchAlreadyExistsError",
    "BranchCreationError",
]
