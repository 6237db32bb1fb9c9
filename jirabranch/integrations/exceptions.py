"""Exceptions raised by the Jira client.

This module defines the tracker side of the error hierarchy:
- TrackerError: Base exception for all Jira failures
- JiraNotConfiguredError: Base URL, email or API token missing
- TicketNotFoundError: Jira answered 404 for the ticket
- JiraTransportError: Network, authentication or malformed-response failure
"""

from __future__ import annotations

from typing import ClassVar

from jirabranch.utils.errors import ExitCode, JiraBranchError


class TrackerError(JiraBranchError):
    """Base exception for Jira failures.

    Enables catch-all handling of anything the tracker client raises.
    """

    pass


class JiraNotConfiguredError(TrackerError):
    """Raised when Jira credentials are incomplete.

    Attributes:
        missing_keys: Config keys that are empty or absent
    """

    _default_exit_code: ClassVar[ExitCode] = ExitCode.TRACKER_NOT_CONFIGURED

    def __init__(
        self,
        missing_keys: set[str] | frozenset[str],
        message: str | None = None,
    ) -> None:
        self.missing_keys = frozenset(missing_keys)
        if message is None:
            message = (
                "Jira configuration is missing. Please set your Jira base URL, email, "
                f"and API token (missing: {', '.join(sorted(self.missing_keys))})."
            )
        super().__init__(message)


class TicketNotFoundError(TrackerError):
    """Raised when Jira reports that the ticket does not exist.

    Jira also answers 404 when the account cannot see the ticket, so the
    message points at both causes.

    Attributes:
        ticket_id: The ticket key that was requested
    """

    _default_exit_code: ClassVar[ExitCode] = ExitCode.TICKET_NOT_FOUND

    def __init__(self, ticket_id: str, message: str | None = None) -> None:
        self.ticket_id = ticket_id
        if message is None:
            message = (
                f"Ticket {ticket_id} not found. "
                "Please check the ticket ID and your Jira credentials."
            )
        super().__init__(message)


class JiraTransportError(TrackerError):
    """Raised for every other failure talking to Jira.

    Attributes:
        ticket_id: The ticket key that was requested
        status_code: HTTP status code, if a response was received
    """

    def __init__(
        self,
        ticket_id: str,
        error_details: str,
        status_code: int | None = None,
    ) -> None:
        self.ticket_id = ticket_id
        self.status_code = status_code
        super().__init__(f"Failed to fetch Jira issue {ticket_id}: {error_details}")


__all__ = [
    "TrackerError",
    "JiraNotConfiguredError",
    "TicketNotFoundError",
    "JiraTransportError",
]
