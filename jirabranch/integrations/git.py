"""Git operations for JIRABRANCH.

This module wraps the git CLI for the few operations the tool needs:
repository detection, branch lookup, branch creation and checkout.
Every function takes the repository directory explicitly.

The decision of what to do when a branch already exists is an explicit
OnExistsPolicy supplied by the caller; any user prompt is passed in as a
callback. Nothing here prints; callers report the outcome.
"""

from __future__ import annotations

import subprocess
from collections.abc import Callable
from enum import Enum
from pathlib import Path

from jirabranch.utils.errors import (
    BranchAlreadyExistsError,
    BranchCreationError,
    GitOperationError,
    NotAGitRepositoryError,
)
from jirabranch.utils.logging import log_command, log_message


class OnExistsPolicy(Enum):
    """What to do when the target branch already exists."""

    REUSE = "reuse"  # Check out the existing branch
    ABORT = "abort"  # Fail with BranchAlreadyExistsError
    PROMPT = "prompt"  # Ask the caller-supplied confirm callback


class BranchOutcome(Enum):
    """Result of switch_to_branch."""

    CREATED = "created"
    CHECKED_OUT = "checked_out"
    ALREADY_ON = "already_on"


def is_git_repo(repo_path: Path) -> bool:
    """Check if repo_path is inside a git work tree.

    Returns:
        True if in a git repository
    """
    try:
        result = subprocess.run(
            ["git", "rev-parse", "--is-inside-work-tree"],
            cwd=repo_path,
            capture_output=True,
            text=True,
            check=True,
        )
        log_command("git rev-parse --is-inside-work-tree", result.returncode)
        return result.stdout.strip() == "true"
    except subprocess.CalledProcessError as e:
        log_command("git rev-parse --is-inside-work-tree", e.returncode)
        return False
    except OSError as e:
        # git missing from PATH or repo_path does not exist
        log_message(f"Could not run git in {repo_path}: {e}")
        return False


def get_current_branch(repo_path: Path) -> str:
    """Get current branch name.

    Returns:
        Current branch name (empty when HEAD is detached)

    Raises:
        subprocess.CalledProcessError: If git command fails
    """
    result = subprocess.run(
        ["git", "branch", "--show-current"],
        cwd=repo_path,
        capture_output=True,
        text=True,
        check=True,
    )
    log_command("git branch --show-current", result.returncode)
    return result.stdout.strip()


def branch_exists(branch_name: str, repo_path: Path) -> bool:
    """Check if a local branch exists.

    Args:
        branch_name: Name of the branch to check
        repo_path: Repository directory

    Returns:
        True if branch exists
    """
    result = subprocess.run(
        ["git", "show-ref", "--verify", "--quiet", f"refs/heads/{branch_name}"],
        cwd=repo_path,
        capture_output=True,
    )
    return result.returncode == 0


def create_branch(branch_name: str, repo_path: Path) -> None:
    """Create and checkout a new branch.

    Raises:
        BranchCreationError: If git refuses to create the branch
    """
    try:
        result = subprocess.run(
            ["git", "checkout", "-b", branch_name],
            cwd=repo_path,
            check=True,
            capture_output=True,
            text=True,
        )
    except subprocess.CalledProcessError as e:
        log_command(f"git checkout -b {branch_name}", e.returncode)
        raise BranchCreationError(branch_name, e.stderr or "") from e
    log_command(f"git checkout -b {branch_name}", result.returncode)


def checkout_branch(branch_name: str, repo_path: Path) -> None:
    """Switch to an existing branch.

    Raises:
        BranchCreationError: If the checkout fails (e.g. conflicting local changes)
    """
    try:
        result = subprocess.run(
            ["git", "checkout", branch_name],
            cwd=repo_path,
            check=True,
            capture_output=True,
            text=True,
        )
    except subprocess.CalledProcessError as e:
        log_command(f"git checkout {branch_name}", e.returncode)
        raise BranchCreationError(branch_name, e.stderr or "") from e
    log_command(f"git checkout {branch_name}", result.returncode)


def init_repository(repo_path: Path) -> None:
    """Initialize a git repository in repo_path.

    Raises:
        GitOperationError: If git init fails
    """
    try:
        result = subprocess.run(
            ["git", "init"],
            cwd=repo_path,
            check=True,
            capture_output=True,
            text=True,
        )
    except subprocess.CalledProcessError as e:
        log_command("git init", e.returncode)
        detail = (e.stderr or "").strip() or "unknown error"
        raise GitOperationError(f"Failed to initialize Git repository: {detail}") from e
    log_command("git init", result.returncode)


def switch_to_branch(
    branch_name: str,
    repo_path: Path,
    on_exists: OnExistsPolicy = OnExistsPolicy.ABORT,
    confirm: Callable[[str], bool] | None = None,
) -> BranchOutcome:
    """Create branch_name, or check it out if it exists and policy allows.

    Args:
        branch_name: Branch to create or switch to
        repo_path: Repository directory
        on_exists: Policy applied when the branch already exists
        confirm: Called with the branch name under OnExistsPolicy.PROMPT;
            returns True to check the existing branch out. Without a
            callback PROMPT behaves like ABORT.

    Returns:
        What was done

    Raises:
        NotAGitRepositoryError: If repo_path is not a git work tree
        BranchAlreadyExistsError: If the branch exists and was not reused
        BranchCreationError: If git fails to create or check out the branch
    """
    if not is_git_repo(repo_path):
        raise NotAGitRepositoryError(str(repo_path))

    if not branch_exists(branch_name, repo_path):
        create_branch(branch_name, repo_path)
        return BranchOutcome.CREATED

    try:
        current = get_current_branch(repo_path)
    except subprocess.CalledProcessError:
        current = ""
    if current == branch_name:
        log_message(f"Already on branch {branch_name}")
        return BranchOutcome.ALREADY_ON

    if on_exists == OnExistsPolicy.REUSE:
        reuse = True
    elif on_exists == OnExistsPolicy.PROMPT and confirm is not None:
        reuse = confirm(branch_name)
    else:
        reuse = False

    log_message(f"Branch {branch_name} exists (policy={on_exists.value}, reuse={reuse})")
    if not reuse:
        raise BranchAlreadyExistsError(branch_name)

    checkout_branch(branch_name, repo_path)
    return BranchOutcome.CHECKED_OUT


__all__ = [
    "OnExistsPolicy",
    "BranchOutcome",
    "is_git_repo",
    "get_current_branch",
    "branch_exists",
    "create_branch",
    "checkout_branch",
    "init_repository",
    "switch_to_branch",
]
