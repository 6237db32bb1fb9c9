"""Branch workflow orchestration for the CLI.

Glues the pieces together: validate the ticket key, make sure the
repository and Jira credentials are usable (offering to fix them), fetch
the ticket, derive the branch name and create or switch to the branch.
"""

from __future__ import annotations

import asyncio
from pathlib import Path

from rich.markup import escape

from jirabranch.config.manager import ConfigManager
from jirabranch.config.settings import ON_EXISTS_CHOICES
from jirabranch.integrations.exceptions import JiraNotConfiguredError
from jirabranch.integrations.git import (
    BranchOutcome,
    OnExistsPolicy,
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
from jirabranch.naming import create_branch_name, extract_sprint_info, is_valid_ticket_reference
from jirabranch.ui.prompts import prompt_confirm, prompt_input, prompt_ticket_reference
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
from jirabranch.utils.errors import InvalidTicketFormatError, NotAGitRepositoryError
from jirabranch.utils.logging import log_message


def _resolve_ticket_key(ticket: str | None) -> str:
    """Turn the TICKET argument (key or browse URL) into a validated key.

    Without an argument the user is prompted until a valid key is entered.

    Raises:
        InvalidTicketFormatError: If the argument is not a valid key
        UserCancelledError: If the prompt is cancelled
    """
    if not ticket:
        return prompt_ticket_reference()

    ticket_key = extract_ticket_key(ticket)
    if not is_valid_ticket_reference(ticket_key):
        raise InvalidTicketFormatError(ticket)
    return ticket_key


def _resolve_on_exists(cli_value: OnExistsPolicy | None, config: ConfigManager) -> OnExistsPolicy:
    """CLI flag wins; otherwise ON_EXISTS from config, defaulting to prompt."""
    if cli_value is not None:
        return cli_value

    configured = config.settings.on_exists.strip().lower()
    if configured not in ON_EXISTS_CHOICES:
        print_warning(
            f"Invalid ON_EXISTS value '{config.settings.on_exists}', using 'prompt'. "
            f"Valid options: {', '.join(ON_EXISTS_CHOICES)}"
        )
        return OnExistsPolicy.PROMPT
    return OnExistsPolicy(configured)


def _ensure_repository(repo_path: Path) -> None:
    """Make sure repo_path is a git repository, offering to initialize it.

    Raises:
        NotAGitRepositoryError: If it is not and the user declines
    """
    if is_git_repo(repo_path):
        return

    print_error(f"{repo_path} is not a Git repository.")
    if not prompt_confirm("Initialize a Git repository here?", default=False):
        raise NotAGitRepositoryError(str(repo_path))

    with console.status("Initializing Git repository...", spinner="dots"):
        init_repository(repo_path)
    print_success(f"Initialized Git repository in {repo_path}")


def _configure_jira(config: ConfigManager) -> None:
    """Ask for Jira credentials and save them to the global config."""
    print_header("Configure Jira")
    s = config.settings

    base_url = prompt_input(
        "Jira base URL (e.g., https://company.atlassian.net):",
        default=s.jira_base_url,
        validate=lambda v: v.startswith(("http://", "https://")) or "Enter an http(s) URL",
    )
    email = prompt_input(
        "Jira account email:",
        default=s.jira_email,
        validate=lambda v: bool(v.strip()) or "Email is required",
    )
    api_token = prompt_input(
        "Jira API token:",
        validate=lambda v: bool(v.strip()) or "API token is required",
        secret=True,
    )

    for key, value in (
        ("JIRA_BASE_URL", base_url.strip()),
        ("JIRA_EMAIL", email.strip()),
        ("JIRA_API_TOKEN", api_token.strip()),
    ):
        warning = config.save(key, value)
        if warning:
            print_warning(warning)

    print_success(f"Jira configuration saved to {config.global_config_path}")


def _ensure_jira_config(config: ConfigManager) -> JiraConfig:
    """Build the Jira client config, offering to configure it when incomplete.

    Raises:
        JiraNotConfiguredError: If credentials are missing and not supplied
    """
    try:
        return get_jira_config(config.settings)
    except JiraNotConfiguredError as e:
        print_error(str(e))
        if not prompt_confirm("Configure Jira now?", default=True):
            raise
        _configure_jira(config)
        return get_jira_config(config.settings)


def _fetch_ticket(jira_config: JiraConfig, ticket_key: str, timeout_seconds: float) -> TicketMetadata:
    """Fetch ticket metadata from Jira with a progress spinner."""
    client = JiraClient(jira_config, timeout_seconds=timeout_seconds)
    with console.status(f"Fetching Jira ticket {escape(ticket_key)}...", spinner="dots"):
        return asyncio.run(client.fetch_issue(ticket_key))


def _confirm_checkout(branch_name: str) -> bool:
    return prompt_confirm(
        f'Branch "{branch_name}" already exists. Would you like to check it out?',
        default=True,
    )


def _run_create_branch(
    ticket_key: str,
    config: ConfigManager,
    repo_path: Path,
    on_exists: OnExistsPolicy,
) -> str:
    """Fetch the ticket and create or switch to its branch.

    Returns:
        The branch name that is now checked out
    """
    _ensure_repository(repo_path)
    jira_config = _ensure_jira_config(config)

    print_step(f"Contacting Jira for {ticket_key}")
    ticket = _fetch_ticket(jira_config, ticket_key, config.settings.jira_timeout_seconds)

    print_step("Creating branch name")
    branch_name = create_branch_name(
        ticket.key,
        ticket.summary,
        ticket.sprint_label,
        config.settings.branch_prefix,
    )
    log_message(f"Branch name for {ticket.key}: {branch_name}")

    print_step("Creating Git branch")
    outcome = switch_to_branch(
        branch_name,
        repo_path,
        on_exists=on_exists,
        confirm=_confirm_checkout,
    )

    if outcome == BranchOutcome.CREATED:
        print_success(f"Successfully created and checked out branch: {branch_name}")
    elif outcome == BranchOutcome.CHECKED_OUT:
        print_success(f"Checked out existing branch: {branch_name}")
    else:
        print_info(f"Already on branch: {branch_name}")
    return branch_name


def _run_inspect(ticket_key: str, config: ConfigManager) -> str:
    """Show what Jira returns for a ticket and the branch it would produce.

    No git commands are run.

    Returns:
        The branch name that would be created
    """
    jira_config = _ensure_jira_config(config)
    ticket = _fetch_ticket(jira_config, ticket_key, config.settings.jira_timeout_seconds)

    branch_prefix = config.settings.branch_prefix
    sprint = extract_sprint_info(ticket.sprint_label, branch_prefix)
    branch_name = create_branch_name(ticket.key, ticket.summary, ticket.sprint_label, branch_prefix)

    print_header("Jira Ticket")
    print_field("Ticket", ticket.key)
    print_field("Summary", ticket.summary or "(empty)")
    print_field("Type", ticket.issue_type or "Not available")
    print_field("Status", ticket.status or "Not available")
    print_field("Sprint Name", ticket.sprint_label or "Not available")
    print_field("Extracted Fiscal Year", sprint.fiscal_year)
    print_field("Extracted Sprint Number", sprint.sprint_number)
    console.print()
    console.print(f"  Branch name would be: [highlight]{escape(branch_name)}[/highlight]")
    console.print()
    return branch_name
