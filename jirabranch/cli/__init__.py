"""Command-line interface for JIRABRANCH.

This package contains:
- app: Typer application and main command
- workflow: Branch workflow orchestration
"""

from jirabranch.cli.app import app, main

__all__ = [
    "app",
    "main",
]
