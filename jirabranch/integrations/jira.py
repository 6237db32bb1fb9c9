"""Jira REST API client.

Resolves a ticket key to the metadata needed to name a branch: the
summary and the name of the sprint the ticket belongs to.

API endpoint: GET {base_url}/rest/api/2/issue/{issueIdOrKey}, authenticated
with HTTP Basic auth (account email + API token). The client never retries;
callers decide what to do with a failure.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

import httpx

from jirabranch import JIRA_API_VERSION
from jirabranch.config.settings import DEFAULT_SPRINT_FIELD, Settings
from jirabranch.integrations.exceptions import (
    JiraNotConfiguredError,
    JiraTransportError,
    TicketNotFoundError,
)
from jirabranch.utils.logging import log_message

HTTP_NOT_FOUND = 404
HTTP_AUTH_FAILURES = frozenset({401, 403})

DEFAULT_TIMEOUT_SECONDS = 30.0

# Jira Server serializes sprints as "com.atlassian...Sprint@1a2b[id=1,name=Sprint 7,...]"
_PATTERN_LEGACY_SPRINT_NAME = re.compile(r"\bname=([^,\]]*)")
# Generic /browse/ URL - handles Atlassian Cloud and self-hosted instances
_PATTERN_BROWSE_URL = re.compile(r"^https?://[^/]+(?:/[^/]+)*/browse/(?P<ticket_id>[^/?#\s]+)")


@dataclass(frozen=True)
class JiraConfig:
    """Connection settings for the Jira client.

    Attributes:
        base_url: Jira instance URL without trailing slashes
        email: Account email for Basic auth
        api_token: API token for Basic auth
        sprint_field: Custom field id holding the sprint list
    """

    base_url: str
    email: str
    api_token: str
    sprint_field: str = DEFAULT_SPRINT_FIELD

    def __repr__(self) -> str:
        return (
            f"JiraConfig(base_url={self.base_url!r}, email={self.email!r}, "
            f"api_token='***', sprint_field={self.sprint_field!r})"
        )


@dataclass(frozen=True)
class TicketMetadata:
    """Ticket fields used for branch naming.

    Attributes:
        key: Ticket key as returned by Jira (e.g. "WAR-7974")
        summary: Ticket summary (may be empty)
        sprint_label: Name of the ticket's first sprint (empty if none)
        status: Workflow status name (empty if unavailable)
        issue_type: Issue type name (empty if unavailable)
    """

    key: str
    summary: str = ""
    sprint_label: str = ""
    status: str = ""
    issue_type: str = ""


def get_jira_config(settings: Settings) -> JiraConfig:
    """Build the client configuration from settings.

    Raises:
        JiraNotConfiguredError: If base URL, email or API token is blank
    """
    required = {
        "JIRA_BASE_URL": settings.jira_base_url,
        "JIRA_EMAIL": settings.jira_email,
        "JIRA_API_TOKEN": settings.jira_api_token,
    }
    missing = {key for key, value in required.items() if not value.strip()}
    if missing:
        raise JiraNotConfiguredError(missing)

    return JiraConfig(
        base_url=settings.jira_base_url.strip().rstrip("/"),
        email=settings.jira_email.strip(),
        api_token=settings.jira_api_token.strip(),
        sprint_field=settings.jira_sprint_field or DEFAULT_SPRINT_FIELD,
    )


def extract_ticket_key(input_str: str) -> str:
    """Pull the ticket key out of a Jira browse URL.

    Anything that is not a browse URL is returned stripped but otherwise
    unchanged; validation is left to the caller.
    """
    input_str = input_str.strip()
    match = _PATTERN_BROWSE_URL.match(input_str)
    if match:
        ticket_id = match.group("ticket_id")
        log_message(f"Parsed ticket from URL: {ticket_id}")
        return ticket_id
    return input_str


def _name_of(value: Any) -> str:
    """Return value["name"] when it is a string, else an empty string."""
    if isinstance(value, Mapping):
        name = value.get("name")
        if isinstance(name, str):
            return name
    return ""


def extract_sprint_label(fields: Mapping[str, Any], sprint_field: str = DEFAULT_SPRINT_FIELD) -> str:
    """Return the name of the first sprint listed on the ticket.

    Handles both the Jira Cloud shape (list of objects with "name") and the
    legacy Jira Server shape (list of serialized strings).
    """
    sprints = fields.get(sprint_field)
    if not isinstance(sprints, list) or not sprints:
        return ""

    first = sprints[0]
    if isinstance(first, str):
        match = _PATTERN_LEGACY_SPRINT_NAME.search(first)
        return match.group(1).strip() if match else ""
    return _name_of(first)


def parse_issue_response(
    data: Any,
    ticket_key: str,
    sprint_field: str = DEFAULT_SPRINT_FIELD,
) -> TicketMetadata:
    """Normalize a raw Jira issue payload into TicketMetadata.

    Raises:
        JiraTransportError: If the payload is not a JSON object
    """
    if not isinstance(data, Mapping):
        raise JiraTransportError(ticket_key, "malformed response (expected a JSON object)")

    fields = data.get("fields")
    if not isinstance(fields, Mapping):
        fields = {}

    summary = fields.get("summary")
    key = data.get("key")

    return TicketMetadata(
        key=key if isinstance(key, str) and key else ticket_key,
        summary=summary if isinstance(summary, str) else "",
        sprint_label=extract_sprint_label(fields, sprint_field),
        status=_name_of(fields.get("status")),
        issue_type=_name_of(fields.get("issuetype")),
    )


class JiraClient:
    """Fetches ticket metadata from the Jira REST API.

    HTTP Client Sharing:
        fetch_issue() accepts an optional shared httpx.AsyncClient; the
        timeout is then applied per request. Without one, a client is
        created for the single request.
    """

    def __init__(self, config: JiraConfig, timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS) -> None:
        self.config = config
        self.timeout_seconds = timeout_seconds

    def issue_url(self, ticket_key: str) -> str:
        """REST endpoint for a ticket."""
        return f"{self.config.base_url}/rest/api/{JIRA_API_VERSION}/issue/{ticket_key}"

    async def fetch_issue(
        self,
        ticket_key: str,
        http_client: httpx.AsyncClient | None = None,
    ) -> TicketMetadata:
        """Fetch a ticket's summary and sprint.

        Args:
            ticket_key: Jira issue key (e.g. "WAR-7974")
            http_client: Optional shared HTTP client

        Returns:
            TicketMetadata for the ticket

        Raises:
            TicketNotFoundError: If Jira answers 404
            JiraTransportError: For network errors, timeouts, authentication
                failures, other non-2xx answers and malformed bodies
        """
        url = self.issue_url(ticket_key)
        log_message(f"Fetching Jira issue {ticket_key} from {url}")

        try:
            response = await self._get(url, http_client)
        except httpx.TimeoutException as e:
            raise JiraTransportError(
                ticket_key, f"request timed out after {self.timeout_seconds}s"
            ) from e
        except httpx.HTTPError as e:
            raise JiraTransportError(ticket_key, str(e) or e.__class__.__name__) from e

        log_message(f"Jira responded {response.status_code} for {ticket_key}")

        if response.status_code == HTTP_NOT_FOUND:
            raise TicketNotFoundError(ticket_key)
        if response.status_code in HTTP_AUTH_FAILURES:
            raise JiraTransportError(
                ticket_key,
                f"authentication failed (HTTP {response.status_code}); "
                "check JIRA_EMAIL and JIRA_API_TOKEN",
                status_code=response.status_code,
            )
        if not response.is_success:
            raise JiraTransportError(
                ticket_key,
                f"Jira API error: {response.status_code} - {response.reason_phrase}",
                status_code=response.status_code,
            )

        try:
            data = response.json()
        except ValueError as e:
            raise JiraTransportError(
                ticket_key, "malformed response (invalid JSON)", status_code=response.status_code
            ) from e

        ticket = parse_issue_response(data, ticket_key, self.config.sprint_field)
        log_message(f"Extracted sprint name: {ticket.sprint_label or '(none)'}")
        return ticket

    async def _get(self, url: str, http_client: httpx.AsyncClient | None) -> httpx.Response:
        headers = {"Accept": "application/json"}
        auth = httpx.BasicAuth(self.config.email, self.config.api_token)
        timeout = httpx.Timeout(self.timeout_seconds)

        if http_client is not None:
            return await http_client.get(url, headers=headers, auth=auth, timeout=timeout)

        async with httpx.AsyncClient(timeout=timeout) as client:
            return await client.get(url, headers=headers, auth=auth)


__all__ = [
    "HTTP_NOT_FOUND",
    "DEFAULT_TIMEOUT_SECONDS",
    "JiraConfig",
    "TicketMetadata",
    "JiraClient",
    "get_jira_config",
    "extract_ticket_key",
    "extract_sprint_label",
    "parse_issue_response",
]
