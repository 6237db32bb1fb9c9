"""JIRABRANCH - Create git branches named after Jira tickets.

This package provides a Python CLI application that fetches a Jira ticket,
derives a normalized branch name from its summary and sprint, and creates
or switches to that branch in a local repository.
"""

__version__ = "0.3.0"
SCRIPT_NAME = "JIRABRANCH"
JIRA_API_VERSION = "2"

__all__ = [
    "__version__",
    "SCRIPT_NAME",
    "JIRA_API_VERSION",
]
