"""Branch name derivation from Jira ticket metadata.

This module defines:
- is_valid_ticket_reference: guard used before any Jira request is made
- slugify: bounded, branch-safe token from free text
- extract_sprint_info: fiscal year and sprint number from a sprint label
- create_branch_name: <fiscal-year>/<sprint>/<TICKET-KEY>/<summary-slug>

Everything here is pure. Configuration (the branch prefix) is passed in
explicitly by the caller and never looked up.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

# Fallbacks used when the configured branch prefix is missing a segment
DEFAULT_FISCAL_YEAR = "fy25"
DEFAULT_SPRINT_NUMBER = "00"

# Default value of the BRANCH_PREFIX setting
DEFAULT_BRANCH_PREFIX = f"{DEFAULT_FISCAL_YEAR}/great-merge"

MAX_SLUG_LENGTH = 100

# Pre-compiled regex patterns
_PATTERN_TICKET_REFERENCE = re.compile(r"[A-Z]+-[0-9]+")
# Word characters are ASCII only; non-ASCII letters are stripped
_PATTERN_NON_SLUG_CHARS = re.compile(r"[^A-Za-z0-9_\s-]")
_PATTERN_SEPARATOR_RUN = re.compile(r"[\s_-]+")
# ASCII word boundaries, like the slug's ASCII-only word characters
_PATTERN_YEAR = re.compile(r"\b(20[0-9]{2})\b", re.ASCII)
_PATTERN_SPRINT = re.compile(r"\bSprint\s+([0-9]+)\b", re.IGNORECASE | re.ASCII)
_PATTERN_DECIMAL = re.compile(r"[0-9]+")


@dataclass(frozen=True)
class SprintInfo:
    """Fiscal year and sprint number derived from a sprint label.

    Attributes:
        fiscal_year: "fy" plus two-digit year (e.g. "fy25"), or the configured default
        sprint_number: Zero-padded sprint number (e.g. "07"), or an opaque
            fallback token taken from the branch prefix (e.g. "great-merge")
    """

    fiscal_year: str
    sprint_number: str

    @property
    def is_numeric(self) -> bool:
        """True if sprint_number is a plain decimal number."""
        return _PATTERN_DECIMAL.fullmatch(self.sprint_number) is not None

    @property
    def sprint_segment(self) -> str:
        """Branch path segment for the sprint.

        Numeric sprint numbers become "sprint<NN>"; fallback tokens are
        used unchanged.
        """
        if self.is_numeric:
            return f"sprint{self.sprint_number}"
        return self.sprint_number


def is_valid_ticket_reference(text: str) -> bool:
    """Check that text is a Jira ticket key like WAR-7974.

    The match is case-sensitive and must cover the whole string; lowercase
    keys are rejected rather than normalized.

    Args:
        text: Candidate ticket reference

    Returns:
        True if text is uppercase letters, a hyphen, then digits
    """
    return _PATTERN_TICKET_REFERENCE.fullmatch(text) is not None


def slugify(text: str) -> str:
    """Convert free text to a kebab-case slug suitable for a branch name.

    Steps:
    1. Lowercase and trim surrounding whitespace
    2. Drop anything that is not an ASCII word character, whitespace or hyphen
    3. Collapse runs of whitespace, underscores and hyphens into one hyphen
    4. Strip leading/trailing hyphens
    5. Truncate to MAX_SLUG_LENGTH, which may cut a word in half

    Args:
        text: The text to slugify

    Returns:
        A slug of at most MAX_SLUG_LENGTH characters (possibly empty)
    """
    result = text.lower().strip()
    result = _PATTERN_NON_SLUG_CHARS.sub("", result)
    result = _PATTERN_SEPARATOR_RUN.sub("-", result)
    result = result.strip("-")
    # Ensure truncation didn't leave a trailing hyphen
    return result[:MAX_SLUG_LENGTH].rstrip("-")


def _split_branch_prefix(branch_prefix: str | None) -> tuple[str, str]:
    segments = (branch_prefix or "").split("/")
    fiscal_year = segments[0] or DEFAULT_FISCAL_YEAR
    sprint_number = segments[1] if len(segments) > 1 and segments[1] else DEFAULT_SPRINT_NUMBER
    return fiscal_year, sprint_number


def extract_sprint_info(sprint_label: str, branch_prefix: str | None = None) -> SprintInfo:
    """Extract fiscal year and sprint number from a sprint label.

    Sprint labels are free text such as "WAR 2025 - Q2 Sprint 7". The first
    year in the 2000s and the first "Sprint <N>" are used; anything the label
    does not provide falls back to the branch prefix.

    Args:
        sprint_label: Sprint name from Jira (may be empty)
        branch_prefix: Configured "<fiscal-year>/<sprint>" defaults. When
            absent, "fy25" and "00" are used.

    Returns:
        SprintInfo with the extracted or default values
    """
    fiscal_year, sprint_number = _split_branch_prefix(branch_prefix)

    if sprint_label:
        year_match = _PATTERN_YEAR.search(sprint_label)
        if year_match:
            fiscal_year = f"fy{year_match.group(1)[2:]}"

        sprint_match = _PATTERN_SPRINT.search(sprint_label)
        if sprint_match:
            # Padded as text; int() refuses very long digit runs
            digits = sprint_match.group(1).lstrip("0") or "0"
            sprint_number = digits.zfill(2)

    return SprintInfo(fiscal_year=fiscal_year, sprint_number=sprint_number)


def create_branch_name(
    ticket_key: str,
    summary: str,
    sprint_label: str | None = None,
    branch_prefix: str | None = None,
) -> str:
    """Compose the branch name for a ticket.

    Format: <fiscal-year>/<sprint-segment>/<TICKET-KEY>/<summary-slug>.
    When the summary produces an empty slug the last segment is left out,
    since git rejects branch names ending in "/".

    Never raises; the ticket key is expected to have been validated already
    and is uppercased regardless.

    Args:
        ticket_key: Jira ticket key (e.g. "WAR-7974")
        summary: Ticket summary
        sprint_label: Sprint name, if the ticket is in a sprint
        branch_prefix: Configured "<fiscal-year>/<sprint>" defaults

    Returns:
        The branch name
    """
    sprint = extract_sprint_info(sprint_label or "", branch_prefix)
    summary_slug = slugify(summary)

    segments = [sprint.fiscal_year, sprint.sprint_segment, ticket_key.upper()]
    if summary_slug:
        segments.append(summary_slug)
    return "/".join(segments)


__all__ = [
    "DEFAULT_BRANCH_PREFIX",
    "DEFAULT_FISCAL_YEAR",
    "DEFAULT_SPRINT_NUMBER",
    "MAX_SLUG_LENGTH",
    "SprintInfo",
    "is_valid_ticket_reference",
    "slugify",
    "extract_sprint_info",
    "create_branch_name",
]
