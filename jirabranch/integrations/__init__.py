"""External integrations for JIRABRANCH.

This package contains:
- exceptions: Jira client error hierarchy
- git: Git repository and branch operations
- jira: Jira REST API client
"""

from jirabranch.integrations.exceptions import (
    JiraNotConfiguredError,
    JiraTransportError,
    TicketNotFoundError,
    TrackerError,
)
from jirabranch.integrations.git import (
    BranchOutcome,
    OnExistsPolicy,
    branch_exists,
    checkout_branch,
    create_branch,
    get_current_branch,
    init_repository,
    is_git_repo,
    switch_to_branch,
)
from jirabranch.integrations.jira import (
    JiraClient,
    JiraConfig,
    TicketMetadata,
    extract_ticket_key,
    get_jira_config,
)

__all__ = [
    # Exceptions
    "TrackerError",
    "JiraNotConfiguredError",
    "TicketNotFoundError",
    "JiraTransportError",
    # Git
    "OnExistsPolicy",
    "BranchOutcome",
    "is_git_repo",
    "get_current_branch",
    "branch_exists",
    "create_branch",
    "checkout_branch",
    "init_repository",
    "switch_to_branch",
    # Jira
    "JiraClient",
    "JiraConfig",
    "TicketMetadata",
    "get_jira_config",
    "extract_ticket_key",
]
